# sales/models/order_item.py

from django.db import models

from products.models import Product


class OrderItem(models.Model):
    order = models.ForeignKey(
        "sales.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="order_items",
    )

    quantity = models.PositiveIntegerField()
    # Price snapshot at checkout time
    price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.product_id} x {self.quantity}"
