from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("vendors", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Account",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=10, unique=True)),
                ("name", models.CharField(max_length=150)),
                (
                    "account_type",
                    models.CharField(
                        choices=[
                            ("ASSET", "Asset"),
                            ("LIABILITY", "Liability"),
                            ("EQUITY", "Equity"),
                            ("REVENUE", "Revenue"),
                            ("EXPENSE", "Expense"),
                        ],
                        max_length=20,
                    ),
                ),
                ("category", models.CharField(blank=True, default="", max_length=100)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Account",
                "verbose_name_plural": "Chart of Accounts",
                "db_table": "chart_of_accounts",
                "ordering": ["code"],
                "indexes": [
                    models.Index(fields=["account_type"], name="idx_account_type"),
                    models.Index(fields=["is_active"], name="idx_account_active"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("code", ""), _negated=True),
                        name="chk_account_code_not_blank",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("name", ""), _negated=True),
                        name="chk_account_name_not_blank",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "entry_date",
                    models.DateField(default=django.utils.timezone.localdate, help_text="Accounting effective date"),
                ),
                ("description", models.TextField(help_text="Narrative description of the journal entry")),
                (
                    "reference",
                    models.CharField(
                        blank=True,
                        help_text="External reference (INV-12, ORDER-7, REVERSAL:3, ...)",
                        max_length=100,
                        null=True,
                    ),
                ),
                ("total_debit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("total_credit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Draft"), ("posted", "Posted"), ("voided", "Voided")],
                        default="posted",
                        max_length=10,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, help_text="Timestamp when the journal entry was created"),
                ),
            ],
            options={
                "verbose_name": "Journal Entry",
                "verbose_name_plural": "Journal Entries",
                "db_table": "journal_entries",
                "ordering": ["-entry_date", "-created_at"],
                "indexes": [
                    models.Index(fields=["entry_date"], name="idx_journal_entry_date"),
                    models.Index(fields=["created_at"], name="idx_journal_created_at"),
                    models.Index(fields=["reference"], name="idx_journal_reference"),
                    models.Index(fields=["status"], name="idx_journal_status"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("reference__isnull", False), models.Q(("reference", ""), _negated=True)),
                        fields=("reference",),
                        name="uniq_journal_reference_not_blank",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("total_debit__gte", Decimal("0.00")), ("total_credit__gte", Decimal("0.00"))),
                        name="chk_journal_totals_nonnegative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalEntryLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("debit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("credit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="journal_lines",
                        to="accounting.account",
                    ),
                ),
                (
                    "journal_entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="lines",
                        to="accounting.journalentry",
                    ),
                ),
            ],
            options={
                "verbose_name": "Journal Entry Line",
                "verbose_name_plural": "Journal Entry Lines",
                "db_table": "journal_entry_lines",
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("debit__gt", Decimal("0.00")), ("credit", Decimal("0.00"))),
                            models.Q(("credit__gt", Decimal("0.00")), ("debit", Decimal("0.00"))),
                            _connector="OR",
                        ),
                        name="chk_journal_line_single_side",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="AccountingEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("entry_type", models.CharField(choices=[("vendor_payout", "Vendor payout")], max_length=32)),
                ("gross_sales", models.DecimalField(decimal_places=2, max_digits=14)),
                ("commission_rate", models.DecimalField(decimal_places=4, max_digits=5)),
                ("commission_amount", models.DecimalField(decimal_places=2, max_digits=14)),
                ("payable_amount", models.DecimalField(decimal_places=2, max_digits=14)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "payout",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="accounting_entry",
                        to="vendors.vendorpayout",
                    ),
                ),
                (
                    "vendor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="accounting_entries",
                        to="vendors.vendor",
                    ),
                ),
            ],
            options={
                "verbose_name": "Accounting Entry",
                "verbose_name_plural": "Accounting Entries",
                "db_table": "accounting_entries",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["entry_type", "created_at"], name="idx_acct_entry_type_created"),
                    models.Index(fields=["vendor", "created_at"], name="idx_acct_entry_vendor_created"),
                ],
            },
        ),
    ]
