# PATH: accounting/services/account_resolver.py

"""
PATH: accounting/services/account_resolver.py

ACCOUNT RESOLVER (AUTHORITATIVE)

This module answers ONE question:
"Which account should be used for this purpose?"

Accounts are always resolved by their fixed code, never by name.

Two flavours:
- require_account(): mandatory accounts (AR, Sales Revenue). Missing -> AccountMissingError.
- resolve_account(): optional accounts (Tax Payable, Accounts Payable, Commission Revenue).
  Missing -> None, and the caller omits that line (a half-configured chart must
  not block sales).
"""

from __future__ import annotations

import logging

from accounting.models.account import Account
from accounting.services.exceptions import AccountMissingError

logger = logging.getLogger(__name__)

# ------------------------------------------------------------
# SEMANTIC CODES
# ------------------------------------------------------------

AR = "1200"
SALES_REVENUE = "4000"
TAX_PAYABLE = "2200"
ACCOUNTS_PAYABLE = "2000"
COMMISSION_REVENUE = "4200"

SEMANTIC_CODES = {
    "AR": AR,
    "SALES_REVENUE": SALES_REVENUE,
    "TAX_PAYABLE": TAX_PAYABLE,
    "ACCOUNTS_PAYABLE": ACCOUNTS_PAYABLE,
    "COMMISSION_REVENUE": COMMISSION_REVENUE,
}

# Codes the seed command must create before the first posting.
REQUIRED_CODES = (AR, SALES_REVENUE, TAX_PAYABLE, ACCOUNTS_PAYABLE, COMMISSION_REVENUE)


def resolve_account(code: str) -> Account | None:
    """
    Pure lookup of an active account by code. No side effects.
    """
    code = (code or "").strip()
    if not code:
        return None
    return Account.objects.filter(code=code, is_active=True).first()


def require_account(code: str, *, purpose: str = "") -> Account:
    account = resolve_account(code)
    if account is None:
        logger.error(
            "Mandatory account missing",
            extra={"account_code": code, "purpose": purpose},
        )
        raise AccountMissingError(code, purpose)
    return account


def _optional(code: str, purpose: str) -> Account | None:
    account = resolve_account(code)
    if account is None:
        logger.warning(
            "Optional account %s (%s) missing; its journal line will be omitted",
            code,
            purpose,
        )
    return account


# ------------------------------------------------------------
# PUBLIC RESOLVERS
# ------------------------------------------------------------


def get_accounts_receivable_account() -> Account:
    return require_account(AR, purpose="Accounts Receivable")


def get_sales_revenue_account() -> Account:
    return require_account(SALES_REVENUE, purpose="Sales Revenue")


def get_tax_payable_account() -> Account | None:
    return _optional(TAX_PAYABLE, "Tax Payable")


def get_accounts_payable_account() -> Account | None:
    return _optional(ACCOUNTS_PAYABLE, "Accounts Payable")


def get_commission_revenue_account() -> Account | None:
    return _optional(COMMISSION_REVENUE, "Commission Revenue")
