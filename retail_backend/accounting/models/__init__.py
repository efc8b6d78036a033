# accounting/models/__init__.py

"""
ACCOUNTING MODELS PACKAGE EXPORTS

Note:
- Keep this file *imports-only* (no business logic).
- Do NOT import services from models anywhere (models must stay pure).
"""

from accounting.models.account import Account
from accounting.models.accounting_entry import AccountingEntry
from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalEntryLine

__all__ = [
    "Account",
    "AccountingEntry",
    "JournalEntry",
    "JournalEntryLine",
]
