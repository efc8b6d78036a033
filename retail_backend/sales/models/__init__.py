# sales/models/__init__.py

"""
SALES MODELS PACKAGE EXPORTS

Purpose:
- Central export surface for sales app models.
"""

from .invoice import Invoice
from .invoice_item import InvoiceItem
from .order import Order
from .order_item import OrderItem

__all__ = [
    "Invoice",
    "InvoiceItem",
    "Order",
    "OrderItem",
]
