# accounting/services/exceptions.py

"""
ACCOUNTING SERVICE ERRORS

Centralized domain errors for accounting services.
"""


class AccountingServiceError(Exception):
    """Base exception for all accounting service failures."""


class AccountResolutionError(AccountingServiceError):
    """Raised when an expected account cannot be resolved."""


class AccountMissingError(AccountResolutionError):
    """Raised when a mandatory chart-of-accounts code is absent."""

    def __init__(self, code: str, purpose: str = ""):
        self.code = code
        self.purpose = purpose
        label = f" ({purpose})" if purpose else ""
        super().__init__(
            f"Account with code={code}{label} not found (or inactive). "
            "Run `manage.py seed_retail_chart` or add the account manually."
        )


class InvalidAmountError(AccountingServiceError, ValueError):
    """Raised on negative or non-finite money amounts and out-of-range rates."""


class InvariantViolationError(AccountingServiceError):
    """Raised when computed debits and credits disagree; nothing is written."""


class JournalEntryCreationError(AccountingServiceError):
    """Raised when a journal entry cannot be created."""


class IdempotencyError(AccountingServiceError):
    """Raised on duplicate or retried accounting events."""
