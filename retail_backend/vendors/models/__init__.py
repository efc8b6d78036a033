# vendors/models/__init__.py

from vendors.models.payout import VendorPayout
from vendors.models.vendor import Vendor
from vendors.models.vendor_invoice import VendorInvoice

__all__ = [
    "Vendor",
    "VendorInvoice",
    "VendorPayout",
]
