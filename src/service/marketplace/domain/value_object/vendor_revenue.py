import attrs


@attrs.define(frozen=True)
class VendorRevenue:
    total_revenue: int = 0
    total_tickets_sold: int = 0
    total_tickets_added: int = 0
