from src.service.marketplace.domain.value_object.vendor_revenue import VendorRevenue

__all__ = ['VendorRevenue']
