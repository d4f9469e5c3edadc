from prometheus_client import Counter


class MarketplaceMetrics:
    """
    Marketplace business metrics

    Tracks the booking/inventory protocol outcomes exposed at /metrics
    """

    def __init__(self) -> None:
        self.bookings_created = Counter(
            'marketplace_bookings_created_total',
            'Booking creation attempts',
            ['result'],  # created/conflict/rejected
        )

        self.payments_recorded = Counter(
            'marketplace_payments_recorded_total',
            'Payment settlement attempts',
            ['result'],  # settled/already_paid/rejected
        )

        self.booking_cancellations = Counter(
            'marketplace_booking_cancellations_total',
            'Booking cancellations',
            ['inventory_restored'],
        )

        self.advertise_toggles = Counter(
            'marketplace_advertise_toggles_total',
            'Admin advertise toggles',
            ['result'],  # on/off/cap_reached
        )

        self.payments_reconciled = Counter(
            'marketplace_payments_reconciled_total',
            'Payments repaired by the reconciliation sweep',
            ['result'],  # confirmed/orphaned
        )

    # ========== Helper Methods ==========

    def record_booking_created(self, *, result: str) -> None:
        self.bookings_created.labels(result=result).inc()

    def record_payment(self, *, result: str) -> None:
        self.payments_recorded.labels(result=result).inc()

    def record_cancellation(self, *, inventory_restored: bool) -> None:
        self.booking_cancellations.labels(inventory_restored=str(inventory_restored).lower()).inc()

    def record_advertise_toggle(self, *, result: str) -> None:
        self.advertise_toggles.labels(result=result).inc()

    def record_reconciliation(self, *, result: str) -> None:
        self.payments_reconciled.labels(result=result).inc()


# Global metrics instance
metrics = MarketplaceMetrics()
