# vendors/models/payout.py

"""
VENDOR PAYOUT

Snapshot of what the store owes a vendor at the moment it was generated:
gross paid sales, the commission kept and the net payable.

Immutable: corrections are new payouts, never edits.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models


class VendorPayout(models.Model):
    vendor = models.ForeignKey(
        "vendors.Vendor",
        on_delete=models.PROTECT,
        related_name="payouts",
    )

    gross_sales = models.DecimalField(max_digits=14, decimal_places=2)
    commission_rate = models.DecimalField(max_digits=5, decimal_places=4)
    commission_amount = models.DecimalField(max_digits=14, decimal_places=2)
    payable_amount = models.DecimalField(max_digits=14, decimal_places=2)

    # username of the staff member who generated it (blank for system runs)
    created_by = models.CharField(max_length=150, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    metadata = models.JSONField(null=True, blank=True)

    class Meta:
        db_table = "vendor_payouts"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["vendor", "created_at"], name="idx_payout_vendor_created"),
        ]

    def __str__(self):
        return f"Payout #{self.id} – {self.vendor_id} ({self.payable_amount})"

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("VendorPayout records are immutable once created")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("VendorPayout records are immutable and cannot be deleted")
