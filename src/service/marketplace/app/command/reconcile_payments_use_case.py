from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.service.marketplace.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.marketplace.app.interface.i_payment_query_repo import IPaymentQueryRepo


class ReconcilePaymentsUseCase:
    """
    Repair payments left without a confirmed booking

    Settlement writes booking, payment and inventory in one statement, so this
    sweep normally finds nothing. It covers rows written outside that path
    (manual fixes, imports). Pending bookings with a payment are confirmed with
    the same deduct-on-confirm statement; orphaned payments are only reported.
    """

    def __init__(
        self, *, payment_query_repo: IPaymentQueryRepo, booking_command_repo: IBookingCommandRepo
    ) -> None:
        self.payment_query_repo = payment_query_repo
        self.booking_command_repo = booking_command_repo

    @Logger.io
    async def reconcile(self) -> int:
        """Returns the number of bookings confirmed"""
        confirmed_count = 0
        for payment, booking in await self.payment_query_repo.find_unsettled():
            if booking is None:
                metrics.record_reconciliation(result='orphaned')
                Logger.base.error(
                    f'🧾 [RECONCILE] Payment {payment.id} ({payment.transaction_id}) '
                    f'references missing booking {payment.booking_id}'
                )
                continue

            confirmed = booking.confirm(
                transaction_id=payment.transaction_id, payment_method=payment.method
            )
            try:
                await self.booking_command_repo.confirm_and_deduct_atomically(booking=confirmed)
            except DomainError as e:
                # Settled concurrently between the scan and the update
                Logger.base.info(f'🧾 [RECONCILE] Skipped booking {booking.id}: {e.message}')
                continue

            confirmed_count += 1
            metrics.record_reconciliation(result='confirmed')
            Logger.base.warning(
                f'🧾 [RECONCILE] Confirmed booking {booking.id} for payment {payment.transaction_id}'
            )
        return confirmed_count
