# sales/models/invoice_item.py

from decimal import Decimal

from django.db import models

from products.models import Product


class InvoiceItem(models.Model):
    invoice = models.ForeignKey(
        "sales.Invoice",
        on_delete=models.CASCADE,
        related_name="items",
    )

    # Free-text lines (services, adjustments) carry no product
    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="invoice_items",
    )

    description = models.CharField(max_length=255, blank=True, default="")
    quantity = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        ordering = ["id"]

    @property
    def line_total(self) -> Decimal:
        return (self.price or Decimal("0.00")) * self.quantity

    def __str__(self):
        return f"{self.description or self.product} x {self.quantity}"
