from typing import List

from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.marketplace.app.command.mark_user_as_fraud_use_case import MarkUserAsFraudUseCase
from src.service.marketplace.app.command.toggle_ticket_advertise_use_case import (
    ToggleTicketAdvertiseUseCase,
)
from src.service.marketplace.app.command.update_user_role_use_case import UpdateUserRoleUseCase
from src.service.marketplace.app.command.verify_ticket_use_case import VerifyTicketUseCase
from src.service.marketplace.app.query.ticket_catalog_use_case import TicketCatalogUseCase
from src.service.marketplace.app.query.user_query_use_case import UserQueryUseCase
from src.service.marketplace.domain.entity.user_entity import UserEntity
from src.service.marketplace.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.marketplace.driving_adapter.http_controller.schema.ticket_schema import (
    AdvertiseToggleResponse,
    TicketResponse,
    TicketVerifyRequest,
)
from src.service.marketplace.driving_adapter.http_controller.schema.user_schema import (
    FraudResponse,
    UpdateUserRoleRequest,
    UserResponse,
)


router = APIRouter()


@router.get('/tickets', response_model=List[TicketResponse])
@Logger.io
async def list_all_tickets(
    current_user: UserEntity = Depends(require_admin),
    use_case: TicketCatalogUseCase = Depends(TicketCatalogUseCase.depends),
) -> List[TicketResponse]:
    return [TicketResponse.model_validate(t) for t in await use_case.list_all()]


@router.patch('/tickets/advertise/{ticket_id}', response_model=AdvertiseToggleResponse)
@Logger.io
async def toggle_advertise(
    ticket_id: UtilsUUID7,
    current_user: UserEntity = Depends(require_admin),
    use_case: ToggleTicketAdvertiseUseCase = Depends(ToggleTicketAdvertiseUseCase.depends),
) -> AdvertiseToggleResponse:
    ticket = await use_case.toggle_advertise(ticket_id=ticket_id)
    return AdvertiseToggleResponse(message='Toggled advertise', is_advertised=ticket.is_advertised)


@router.patch('/tickets/{ticket_id}/verify', response_model=TicketResponse)
@Logger.io
async def verify_ticket(
    ticket_id: UtilsUUID7,
    request: TicketVerifyRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: VerifyTicketUseCase = Depends(VerifyTicketUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.verify_ticket(
        ticket_id=ticket_id, verification_status=request.verification_status
    )
    return TicketResponse.model_validate(ticket)


@router.get('/users', response_model=List[UserResponse])
@Logger.io
async def list_users(
    current_user: UserEntity = Depends(require_admin),
    use_case: UserQueryUseCase = Depends(UserQueryUseCase.depends),
) -> List[UserResponse]:
    return [UserResponse.model_validate(u) for u in await use_case.list_users()]


@router.patch('/users/{email}/role', response_model=UserResponse)
@Logger.io
async def update_user_role(
    email: str,
    request: UpdateUserRoleRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateUserRoleUseCase = Depends(UpdateUserRoleUseCase.depends),
) -> UserResponse:
    user = await use_case.update_role(email=email, role=request.role)
    return UserResponse.model_validate(user)


@router.patch('/users/{email}/fraud', response_model=FraudResponse)
@Logger.io
async def mark_user_as_fraud(
    email: str,
    current_user: UserEntity = Depends(require_admin),
    use_case: MarkUserAsFraudUseCase = Depends(MarkUserAsFraudUseCase.depends),
) -> FraudResponse:
    hidden_count = await use_case.mark_as_fraud(email=email)
    return FraudResponse(message='User marked as fraud', hidden_tickets=hidden_count)
