# accounting/api/views/__init__.py

"""
accounting.api.views package

- ViewSets are defined in accounting.api.view (singular).
- Do NOT import accounting.api.urls from here to avoid circular imports.
"""

from accounting.api.view import JournalEntryViewSet
from accounting.api.views.accounts import ChartAccountsView

__all__ = [
    "ChartAccountsView",
    "JournalEntryViewSet",
]
