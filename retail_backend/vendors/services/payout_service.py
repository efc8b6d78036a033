# vendors/services/payout_service.py

"""
======================================================
PATH: vendors/services/payout_service.py
======================================================
VENDOR PAYOUT ENGINE

generate_payout():
1. Aggregate gross paid sales for the vendor (order items of PAID orders only)
2. Split gross into commission + net payable
3. Persist the VendorPayout (authoritative)
4. Mirror it into AccountingEntry (best-effort, own savepoint)
5. Email the vendor after commit (best-effort)

Every call is a fresh snapshot over all paid orders; callers decide when to
generate and must not call twice for the same settlement.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import DatabaseError, transaction
from django.db.models import DecimalField, ExpressionWrapper, F, Sum
from django.db.models.functions import Coalesce

from accounting.models.accounting_entry import AccountingEntry
from sales.models.order import Order
from sales.models.order_item import OrderItem
from vendors.models.payout import VendorPayout
from vendors.models.vendor import Vendor
from vendors.services.commission import compute_split
from vendors.services.exceptions import VendorNotFoundError
from vendors.services.notifications import payout_email, send_after_commit

logger = logging.getLogger("payouts")


def _get_vendor(vendor_id) -> Vendor:
    try:
        return Vendor.objects.get(pk=vendor_id)
    except Vendor.DoesNotExist as exc:
        raise VendorNotFoundError(f"Vendor {vendor_id} not found") from exc


def gross_paid_sales(vendor: Vendor) -> Decimal:
    line_total = ExpressionWrapper(
        F("price") * F("quantity"),
        output_field=DecimalField(max_digits=14, decimal_places=2),
    )
    result = OrderItem.objects.filter(
        product__vendor=vendor,
        order__status=Order.STATUS_PAID,
    ).aggregate(
        gross=Coalesce(
            Sum(line_total),
            Decimal("0.00"),
            output_field=DecimalField(max_digits=14, decimal_places=2),
        )
    )
    return result["gross"]


def _write_mirror(vendor: Vendor, payout: VendorPayout) -> None:
    try:
        with transaction.atomic():
            AccountingEntry.objects.create(
                entry_type=AccountingEntry.TYPE_VENDOR_PAYOUT,
                vendor=vendor,
                payout=payout,
                gross_sales=payout.gross_sales,
                commission_rate=payout.commission_rate,
                commission_amount=payout.commission_amount,
                payable_amount=payout.payable_amount,
            )
    except DatabaseError:
        logger.exception(
            "Failed to create accounting entry for payout",
            extra={"vendor_id": vendor.id, "payout_id": payout.id},
        )


@transaction.atomic
def generate_payout(vendor_id, created_by=None, mailer=None) -> VendorPayout:
    vendor = _get_vendor(vendor_id)

    split = compute_split(gross_paid_sales(vendor), vendor.commission_rate)

    payout = VendorPayout.objects.create(
        vendor=vendor,
        gross_sales=split.gross_sales,
        commission_rate=split.commission_rate,
        commission_amount=split.commission_amount,
        payable_amount=split.net_payable,
        created_by=getattr(created_by, "username", created_by) or "",
    )

    _write_mirror(vendor, payout)

    logger.info(
        "Vendor payout generated",
        extra={
            "vendor_id": vendor.id,
            "payout_id": payout.id,
            "gross_sales": str(payout.gross_sales),
            "payable_amount": str(payout.payable_amount),
        },
    )

    if vendor.email:
        subject, html = payout_email(vendor, payout)
        send_after_commit(mailer, to=vendor.email, subject=subject, html=html)

    return payout


def list_payouts(vendor_id):
    return VendorPayout.objects.filter(vendor_id=vendor_id).order_by("-created_at", "-id")


def get_payout(vendor_id, payout_id) -> VendorPayout | None:
    return VendorPayout.objects.filter(vendor_id=vendor_id, pk=payout_id).first()
