# sales/services/pricing.py

"""
Server-side document totals (subtotal, tax, total) for invoices and orders.
Client-supplied totals are never trusted.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from products.models import Product
from sales.services.exceptions import EmptyDocumentError, SalesServiceError, UnknownProductError

TWOPLACES = Decimal("0.01")
HUNDRED = Decimal("100")


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def resolve_lines(items, *, require_product: bool = False) -> list[dict]:
    """
    Normalize raw line dicts into {product, description, quantity, price}.

    price falls back to the product's current price when omitted.
    """
    if not items:
        raise EmptyDocumentError("At least one line item is required")

    product_ids = {i.get("product_id") for i in items if i.get("product_id") is not None}
    products = Product.objects.select_related("vendor").in_bulk(product_ids)

    lines = []
    for raw in items:
        product_id = raw.get("product_id")
        product = products.get(product_id) if product_id is not None else None
        if product_id is not None and product is None:
            raise UnknownProductError(f"Product {product_id} not found")
        if require_product and product is None:
            raise UnknownProductError("Every order line needs a product")

        quantity = int(raw.get("quantity") or 0)
        if quantity <= 0:
            raise SalesServiceError("Quantity must be greater than zero")

        price = raw.get("price")
        if price is None:
            if product is None:
                raise SalesServiceError("Price is required for lines without a product")
            price = product.price

        try:
            price = _money(price)
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise SalesServiceError(f"Invalid price: {price!r}") from exc
        if price < 0:
            raise SalesServiceError("Price cannot be negative")

        lines.append(
            {
                "product": product,
                "description": (raw.get("description") or (product.name if product else "")).strip(),
                "quantity": quantity,
                "price": price,
            }
        )
    return lines


def compute_totals(lines, gst_rate) -> tuple[Decimal, Decimal, Decimal]:
    subtotal = _money(sum((l["price"] * l["quantity"] for l in lines), Decimal("0.00")))
    tax_amount = _money(subtotal * Decimal(str(gst_rate or 0)) / HUNDRED)
    return subtotal, tax_amount, subtotal + tax_amount
