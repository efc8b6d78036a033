# accounting/models/accounting_entry.py

"""
ACCOUNTING ENTRY (AUDIT MIRROR)

Append-only shadow of a business record, used by reporting.
Today the only type is "vendor_payout": one row per VendorPayout, written in the
same logical operation as the payout itself.

Rules:
- Never updated, never deleted
- Best-effort: a failed mirror write is logged by the caller, the payout stands
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models


class AccountingEntry(models.Model):
    TYPE_VENDOR_PAYOUT = "vendor_payout"

    TYPES = [
        (TYPE_VENDOR_PAYOUT, "Vendor payout"),
    ]

    entry_type = models.CharField(max_length=32, choices=TYPES)

    vendor = models.ForeignKey(
        "vendors.Vendor",
        on_delete=models.PROTECT,
        related_name="accounting_entries",
    )
    payout = models.OneToOneField(
        "vendors.VendorPayout",
        on_delete=models.PROTECT,
        related_name="accounting_entry",
        null=True,
        blank=True,
    )

    gross_sales = models.DecimalField(max_digits=14, decimal_places=2)
    commission_rate = models.DecimalField(max_digits=5, decimal_places=4)
    commission_amount = models.DecimalField(max_digits=14, decimal_places=2)
    payable_amount = models.DecimalField(max_digits=14, decimal_places=2)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "accounting_entries"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["entry_type", "created_at"], name="idx_acct_entry_type_created"),
            models.Index(fields=["vendor", "created_at"], name="idx_acct_entry_vendor_created"),
        ]
        verbose_name = "Accounting Entry"
        verbose_name_plural = "Accounting Entries"

    def __str__(self):
        return f"{self.entry_type} #{self.id} (vendor {self.vendor_id})"

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("AccountingEntry records are immutable once created")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("AccountingEntry records are immutable and cannot be deleted")
