# sales/models/invoice.py

from decimal import Decimal

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL


class Invoice(models.Model):
    """
    POS sales invoice (or quote).

    - Money fields are server-computed by the invoice service, never taken from the client
    - Only issued invoices are posted to the ledger (reference INV-<id>); quotes never are
    """

    DOC_INVOICE = "invoice"
    DOC_QUOTE = "quote"

    DOC_TYPES = [
        (DOC_INVOICE, "Invoice"),
        (DOC_QUOTE, "Quote"),
    ]

    STATUS_DRAFT = "draft"
    STATUS_ISSUED = "issued"

    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_ISSUED, "Issued"),
    ]

    invoice_no = models.CharField(
        max_length=64,
        unique=True,
        null=True,
        blank=True,
        help_text="System-generated invoice number",
    )

    customer_name = models.CharField(max_length=120, blank=True, default="")

    doc_type = models.CharField(max_length=10, choices=DOC_TYPES, default=DOC_INVOICE)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_DRAFT)

    gst_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Tax rate in percent (e.g. 8.00)",
    )

    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sales_invoices",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["doc_type", "status"], name="idx_invoice_doc_status"),
        ]

    def __str__(self):
        return self.invoice_no or f"Invoice #{self.pk}"
