from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Vendor",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("commission_rate", models.DecimalField(decimal_places=4, default=Decimal("0.1000"), max_digits=5)),
                ("monthly_fee", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("billing_start_date", models.DateField(blank=True, null=True)),
                ("last_invoice_date", models.DateField(blank=True, null=True)),
                ("account_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "vendors",
                "ordering": ["name"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("commission_rate__gte", Decimal("0")), ("commission_rate__lte", Decimal("1"))),
                        name="chk_vendor_commission_rate_range",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("monthly_fee__gte", Decimal("0.00"))),
                        name="chk_vendor_monthly_fee_nonnegative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="VendorPayout",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("gross_sales", models.DecimalField(decimal_places=2, max_digits=14)),
                ("commission_rate", models.DecimalField(decimal_places=4, max_digits=5)),
                ("commission_amount", models.DecimalField(decimal_places=2, max_digits=14)),
                ("payable_amount", models.DecimalField(decimal_places=2, max_digits=14)),
                ("created_by", models.CharField(blank=True, default="", max_length=150)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("metadata", models.JSONField(blank=True, null=True)),
                (
                    "vendor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payouts",
                        to="vendors.vendor",
                    ),
                ),
            ],
            options={
                "db_table": "vendor_payouts",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["vendor", "created_at"], name="idx_payout_vendor_created"),
                ],
            },
        ),
        migrations.CreateModel(
            name="VendorInvoice",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("invoice_number", models.CharField(max_length=50)),
                ("billing_month", models.CharField(help_text="YYYY-MM", max_length=7)),
                ("fee_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "status",
                    models.CharField(
                        choices=[("unpaid", "Unpaid"), ("paid", "Paid"), ("void", "Void")],
                        default="unpaid",
                        max_length=10,
                    ),
                ),
                ("issued_on", models.DateField()),
                ("due_date", models.DateField()),
                ("paid_at", models.DateField(blank=True, null=True)),
                ("reminder_stage", models.PositiveSmallIntegerField(default=0)),
                ("metadata", models.JSONField(blank=True, null=True)),
                ("void_reason", models.TextField(blank=True, null=True)),
                ("voided_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "vendor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="fee_invoices",
                        to="vendors.vendor",
                    ),
                ),
            ],
            options={
                "db_table": "vendor_invoices",
                "ordering": ["-issued_on", "-id"],
                "indexes": [
                    models.Index(fields=["status"], name="idx_vendor_invoice_status"),
                    models.Index(fields=["vendor", "issued_on"], name="idx_vendor_invoice_issued"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "void"), _negated=True),
                        fields=("vendor", "billing_month"),
                        name="uniq_vendor_invoice_per_month",
                    ),
                ],
            },
        ),
    ]
