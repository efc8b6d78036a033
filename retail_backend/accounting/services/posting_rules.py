# accounting/services/posting_rules.py

"""
POSTING RULES: SALES DOCUMENTS (AUTHORITATIVE)

Defines HOW a sales invoice or a paid guest order maps to accounting intent.

RESPONSIBILITIES:
- Resolve semantic accounts
- Construct debit / credit PostingLines (including the vendor split)
- Delegate persistence to the journal entry service

THIS MODULE DOES NOT:
- Write rows itself
- Decide WHEN a document is posted (the sales services do that)

Accounting Effect (per document):
- Debit  Accounts Receivable      (total)
- Credit Sales Revenue            (subtotal)
- Credit Tax Payable              (tax_amount)

Per vendor with gross g on the document:
- Debit  Sales Revenue            (g)
- Credit Accounts Payable         (net payable of g)
- Credit Commission Revenue       (commission of g)
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from decimal import Decimal

from accounting.services.account_resolver import (
    get_accounts_payable_account,
    get_accounts_receivable_account,
    get_commission_revenue_account,
    get_sales_revenue_account,
    get_tax_payable_account,
)
from accounting.services.journal_entry_service import (
    PostingLine,
    create_journal_entry,
    money,
)
from vendors.services.commission import compute_split

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


def vendor_gross_by_vendor(items) -> "OrderedDict":
    """
    Aggregate price * quantity per vendor over document items.

    Items without a product, or whose product has no vendor, are house sales
    and are skipped. Returns {vendor: gross} in first-seen order.
    """
    totals: OrderedDict = OrderedDict()
    vendors = {}

    for item in items:
        product = getattr(item, "product", None)
        vendor = getattr(product, "vendor", None) if product is not None else None
        if vendor is None:
            continue

        line_total = money(item.price) * int(item.quantity or 0)
        vendors.setdefault(vendor.pk, vendor)
        totals[vendor.pk] = totals.get(vendor.pk, ZERO) + line_total

    return OrderedDict((vendors[pk], money(gross)) for pk, gross in totals.items())


def _split_lines(vendor, gross: Decimal, *, sales_account, ap_account, commission_account, label: str):
    if gross <= ZERO:
        return []
    if ap_account is None and commission_account is None:
        logger.warning(
            "Vendor split skipped: neither Accounts Payable nor Commission Revenue exists",
            extra={"vendor_id": vendor.pk, "document": label},
        )
        return []

    split = compute_split(gross, vendor.commission_rate)
    lines = []

    payable = split.net_payable if ap_account is not None else ZERO
    commission = split.commission_amount if commission_account is not None else ZERO
    reclassified = payable + commission

    if reclassified > ZERO:
        lines.append(
            PostingLine.debit(sales_account, reclassified, f"Vendor share reclass: {vendor.name}")
        )
    if payable > ZERO:
        lines.append(PostingLine.credit(ap_account, payable, f"Payable to vendor {vendor.name}"))
    if commission > ZERO:
        lines.append(
            PostingLine.credit(commission_account, commission, f"Commission from {vendor.name}")
        )
    return lines


def build_sales_postings(*, total, subtotal, tax_amount, items, label: str) -> list[PostingLine]:
    total = money(total)
    subtotal = money(subtotal)
    tax_amount = money(tax_amount)

    # Mandatory accounts first so a broken chart fails before anything else.
    ar_account = get_accounts_receivable_account()
    sales_account = get_sales_revenue_account()

    lines: list[PostingLine] = []

    if total > ZERO:
        lines.append(PostingLine.debit(ar_account, total, f"Receivable: {label}"))

    tax_account = get_tax_payable_account() if tax_amount > ZERO else None
    sales_credit = subtotal if tax_account is not None else subtotal + tax_amount

    if sales_credit > ZERO:
        lines.append(PostingLine.credit(sales_account, sales_credit, f"Sales: {label}"))
    if tax_account is not None:
        lines.append(PostingLine.credit(tax_account, tax_amount, f"Tax: {label}"))

    by_vendor = vendor_gross_by_vendor(items)
    if by_vendor:
        ap_account = get_accounts_payable_account()
        commission_account = get_commission_revenue_account()
        for vendor, gross in by_vendor.items():
            lines.extend(
                _split_lines(
                    vendor,
                    gross,
                    sales_account=sales_account,
                    ap_account=ap_account,
                    commission_account=commission_account,
                    label=label,
                )
            )

    return lines


def _post(*, lines, description: str, reference: str, entry_date=None):
    if not lines:
        logger.info("Nothing to post", extra={"reference": reference})
        return None

    entry = create_journal_entry(
        description=description,
        lines=lines,
        reference=reference,
        entry_date=entry_date,
    )
    logger.info(
        "Sales document posted",
        extra={
            "reference": reference,
            "journal_entry_id": entry.id,
            "total_debit": str(entry.total_debit),
        },
    )
    return entry


def post_invoice_to_ledger(invoice):
    """
    POST SALES INVOICE → LEDGER (reference INV-<id>).

    Returns the JournalEntry, or None for a zero-value invoice.
    """
    if invoice is None or invoice.pk is None:
        raise ValueError("A saved invoice is required")

    label = f"Invoice {invoice.invoice_no or invoice.pk}"
    items = invoice.items.select_related("product__vendor")

    lines = build_sales_postings(
        total=invoice.total,
        subtotal=invoice.subtotal,
        tax_amount=invoice.tax_amount,
        items=items,
        label=label,
    )
    return _post(
        lines=lines,
        description=f"Sales invoice {invoice.invoice_no or invoice.pk}",
        reference=f"INV-{invoice.pk}",
    )


def post_order_to_ledger(order):
    """
    POST GUEST ORDER → LEDGER (reference ORDER-<id>).
    """
    if order is None or order.pk is None:
        raise ValueError("A saved order is required")

    label = f"Order #{order.pk}"
    items = order.items.select_related("product__vendor")

    lines = build_sales_postings(
        total=order.total,
        subtotal=order.subtotal,
        tax_amount=order.tax_amount,
        items=items,
        label=label,
    )
    return _post(
        lines=lines,
        description=f"Guest order #{order.pk} ({order.customer_name})",
        reference=f"ORDER-{order.pk}",
    )
