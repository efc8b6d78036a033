# sales/services/exceptions.py


class SalesServiceError(Exception):
    """Base exception for sales document failures."""


class EmptyDocumentError(SalesServiceError):
    pass


class UnknownProductError(SalesServiceError):
    pass


class OrderNotFoundError(SalesServiceError):
    pass


class OrderStateError(SalesServiceError):
    """Transition not allowed from the order's current status."""
