# accounting/apps.py

"""
ACCOUNTING APP CONFIG

Double-entry ledger:
- Chart of accounts (resolved by code)
- Journal entries + lines (append-only, balanced)
- Audit mirror of vendor payouts
"""

from django.apps import AppConfig


class AccountingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "accounting"
    verbose_name = "Accounting"
