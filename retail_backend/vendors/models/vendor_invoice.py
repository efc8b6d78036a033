# vendors/models/vendor_invoice.py

"""
VENDOR FEE INVOICE

One monthly-fee invoice per vendor per billing month.

State:
- status: unpaid -> paid | void (paid and void are terminal)
- reminder_stage: 0 none, 1 reminder sent, 2 final reminder sent,
  3 vendor disabled, 99 terminal (paid or voided)

The (vendor, billing_month) unique constraint ignores void rows so a voided
month can be re-issued.
"""

from __future__ import annotations

from django.db import models
from django.db.models import Q


class VendorInvoice(models.Model):
    STATUS_UNPAID = "unpaid"
    STATUS_PAID = "paid"
    STATUS_VOID = "void"

    STATUSES = [
        (STATUS_UNPAID, "Unpaid"),
        (STATUS_PAID, "Paid"),
        (STATUS_VOID, "Void"),
    ]

    STAGE_NONE = 0
    STAGE_REMINDER = 1
    STAGE_FINAL_REMINDER = 2
    STAGE_DISABLED = 3
    STAGE_TERMINAL = 99

    vendor = models.ForeignKey(
        "vendors.Vendor",
        on_delete=models.PROTECT,
        related_name="fee_invoices",
    )

    invoice_number = models.CharField(max_length=50)
    billing_month = models.CharField(max_length=7, help_text="YYYY-MM")
    fee_amount = models.DecimalField(max_digits=12, decimal_places=2)

    status = models.CharField(max_length=10, choices=STATUSES, default=STATUS_UNPAID)

    issued_on = models.DateField()
    due_date = models.DateField()
    paid_at = models.DateField(null=True, blank=True)

    reminder_stage = models.PositiveSmallIntegerField(default=STAGE_NONE)
    metadata = models.JSONField(null=True, blank=True)

    void_reason = models.TextField(null=True, blank=True)
    voided_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "vendor_invoices"
        ordering = ["-issued_on", "-id"]
        indexes = [
            models.Index(fields=["status"], name="idx_vendor_invoice_status"),
            models.Index(fields=["vendor", "issued_on"], name="idx_vendor_invoice_issued"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["vendor", "billing_month"],
                condition=~Q(status="void"),
                name="uniq_vendor_invoice_per_month",
            ),
        ]

    def __str__(self):
        return f"{self.invoice_number} ({self.status})"

    @property
    def is_terminal(self) -> bool:
        return self.status in (self.STATUS_PAID, self.STATUS_VOID)
