# vendors/apps.py

"""
VENDORS APP CONFIG

Marketplace vendors:
- Commission split + payouts
- Monthly fee billing (issuance, reminders, auto-disable)
"""

from django.apps import AppConfig


class VendorsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "vendors"
    verbose_name = "Vendors"
