# vendors/api/errors.py

"""
Domain error -> HTTP status mapping shared by the vendor views.
"""

from rest_framework import status
from rest_framework.response import Response

from accounting.services.exceptions import InvalidAmountError
from vendors.services.exceptions import (
    AlreadyTerminalError,
    DuplicateVendorInvoiceError,
    VendorBillingError,
    VendorInvoiceNotFoundError,
    VendorNotFoundError,
)

ERROR_STATUS = (
    (VendorNotFoundError, status.HTTP_404_NOT_FOUND),
    (VendorInvoiceNotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateVendorInvoiceError, status.HTTP_409_CONFLICT),
    (AlreadyTerminalError, status.HTTP_400_BAD_REQUEST),
    (VendorBillingError, status.HTTP_400_BAD_REQUEST),
    (InvalidAmountError, status.HTTP_400_BAD_REQUEST),
)

HANDLED_ERRORS = tuple(exc_type for exc_type, _ in ERROR_STATUS)


def error_response(exc: Exception) -> Response:
    for exc_type, http_status in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return Response({"detail": str(exc)}, status=http_status)
    return Response({"detail": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
