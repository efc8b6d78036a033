# vendors/services/exceptions.py

"""
VENDOR SERVICE ERRORS
"""


class VendorServiceError(Exception):
    """Base exception for vendor payout / billing failures."""


class VendorNotFoundError(VendorServiceError):
    pass


class VendorInvoiceNotFoundError(VendorServiceError):
    """Invoice missing, or it belongs to another vendor."""


class AlreadyTerminalError(VendorServiceError):
    """Transition attempted on a paid or void invoice."""


class VendorBillingError(VendorServiceError):
    """Fee not configured, or an invalid fee amount."""


class DuplicateVendorInvoiceError(VendorBillingError):
    """A non-void invoice already exists for this vendor and billing month."""
