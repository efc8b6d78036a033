# sales/services/invoice_service.py

"""
POS INVOICE SERVICE

SINGLE SOURCE OF TRUTH for:
- Invoice + InvoiceItem creation
- Totals calculation
- Ledger posting of issued invoices (same transaction; posting failure rolls
  the invoice back)
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from accounting.services.posting_rules import post_invoice_to_ledger
from sales.models import Invoice, InvoiceItem
from sales.services.pricing import compute_totals, resolve_lines

logger = logging.getLogger("sales")


def _invoice_number(invoice: Invoice) -> str:
    prefix = "QT" if invoice.doc_type == Invoice.DOC_QUOTE else "INV"
    return f"{prefix}-{timezone.localdate():%Y%m%d}-{invoice.pk:05d}"


@transaction.atomic
def issue_invoice(
    *,
    items,
    customer_name: str = "",
    gst_rate=0,
    doc_type: str = Invoice.DOC_INVOICE,
    user=None,
) -> Invoice:
    lines = resolve_lines(items)
    subtotal, tax_amount, total = compute_totals(lines, gst_rate)

    invoice = Invoice.objects.create(
        customer_name=(customer_name or "").strip(),
        doc_type=doc_type,
        status=Invoice.STATUS_DRAFT if doc_type == Invoice.DOC_QUOTE else Invoice.STATUS_ISSUED,
        gst_rate=gst_rate or 0,
        subtotal=subtotal,
        tax_amount=tax_amount,
        total=total,
        created_by=user if getattr(user, "is_authenticated", False) else None,
    )

    InvoiceItem.objects.bulk_create(
        [InvoiceItem(invoice=invoice, **line) for line in lines]
    )

    invoice.invoice_no = _invoice_number(invoice)
    invoice.save(update_fields=["invoice_no"])

    if invoice.status == Invoice.STATUS_ISSUED and settings.ACCOUNTING_POSTING_ENABLED:
        post_invoice_to_ledger(invoice)

    logger.info(
        "Invoice created",
        extra={"invoice_id": invoice.id, "invoice_no": invoice.invoice_no, "total": str(total)},
    )
    return invoice
