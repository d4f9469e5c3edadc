from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_payment_query_repo import IPaymentQueryRepo
from src.service.marketplace.domain.entity.payment_entity import Payment


class ListTransactionsUseCase:
    def __init__(self, *, payment_query_repo: IPaymentQueryRepo) -> None:
        self.payment_query_repo = payment_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        payment_query_repo: IPaymentQueryRepo = Depends(Provide[Container.payment_query_repo]),
    ) -> Self:
        return cls(payment_query_repo=payment_query_repo)

    @Logger.io
    async def list_transactions(self, *, customer_email: str) -> List[Payment]:
        return await self.payment_query_repo.list_by_customer(customer_email=customer_email)
