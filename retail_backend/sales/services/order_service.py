# sales/services/order_service.py

"""
GUEST ORDER SERVICE

- create_order(): PENDING order with server-computed totals
- mark_order_paid(): PENDING -> PAID, posts ORDER-<id> to the ledger in the
  same transaction when posting is enabled
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from accounting.services.posting_rules import post_order_to_ledger
from sales.models import Order, OrderItem
from sales.services.exceptions import OrderNotFoundError, OrderStateError
from sales.services.pricing import compute_totals, resolve_lines

logger = logging.getLogger("sales")


@transaction.atomic
def create_order(*, items, customer_name: str = "", customer_email: str = "", gst_rate=0) -> Order:
    lines = resolve_lines(items, require_product=True)
    subtotal, tax_amount, total = compute_totals(lines, gst_rate)

    order = Order.objects.create(
        customer_name=(customer_name or "").strip(),
        customer_email=(customer_email or "").strip(),
        gst_rate=gst_rate or 0,
        subtotal=subtotal,
        tax_amount=tax_amount,
        total=total,
    )
    OrderItem.objects.bulk_create(
        [
            OrderItem(order=order, product=l["product"], quantity=l["quantity"], price=l["price"])
            for l in lines
        ]
    )
    return order


@transaction.atomic
def mark_order_paid(order_id, paid_at=None) -> Order:
    order = Order.objects.select_for_update().filter(pk=order_id).first()
    if order is None:
        raise OrderNotFoundError(f"Order {order_id} not found")

    if order.status == Order.STATUS_PAID:
        return order
    if order.status == Order.STATUS_CANCELLED:
        raise OrderStateError("Cannot mark a cancelled order as paid")

    order.status = Order.STATUS_PAID
    order.paid_at = paid_at or timezone.now()
    order.save(update_fields=["status", "paid_at"])

    if settings.ACCOUNTING_POSTING_ENABLED:
        post_order_to_ledger(order)

    logger.info("Order paid", extra={"order_id": order.id, "total": str(order.total)})
    return order
