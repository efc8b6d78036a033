# vendors/models/vendor.py

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q


class Vendor(models.Model):
    """
    A marketplace vendor whose products are sold through the store.

    - commission_rate: share of gross sales kept by the store (0..1)
    - monthly_fee: flat fee billed on the 1st of each month (0 = not billed)
    - account_active: cleared by the billing pass when a fee invoice goes unpaid
    """

    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True, default="")

    commission_rate = models.DecimalField(
        max_digits=5,
        decimal_places=4,
        default=Decimal("0.1000"),
    )
    monthly_fee = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    billing_start_date = models.DateField(null=True, blank=True)
    last_invoice_date = models.DateField(null=True, blank=True)

    account_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "vendors"
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=Q(commission_rate__gte=Decimal("0"))
                & Q(commission_rate__lte=Decimal("1")),
                name="chk_vendor_commission_rate_range",
            ),
            models.CheckConstraint(
                condition=Q(monthly_fee__gte=Decimal("0.00")),
                name="chk_vendor_monthly_fee_nonnegative",
            ),
        ]

    def __str__(self):
        return self.name

    def clean(self):
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError({"name": "Vendor name is required"})
