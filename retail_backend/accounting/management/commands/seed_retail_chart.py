# accounting/management/commands/seed_retail_chart.py

from django.core.management.base import BaseCommand
from django.db import transaction

from accounting.models.account import Account
from accounting.services import account_resolver as codes

ACCOUNTS = [
    ("1000", "Cash", Account.ASSET, "Current Assets"),
    ("1010", "Bank", Account.ASSET, "Current Assets"),
    (codes.AR, "Accounts Receivable", Account.ASSET, "Current Assets"),
    ("1300", "Inventory", Account.ASSET, "Current Assets"),
    (codes.ACCOUNTS_PAYABLE, "Accounts Payable", Account.LIABILITY, "Current Liabilities"),
    (codes.TAX_PAYABLE, "Tax Payable", Account.LIABILITY, "Current Liabilities"),
    ("3000", "Owner's Equity", Account.EQUITY, "Equity"),
    (codes.SALES_REVENUE, "Sales Revenue", Account.REVENUE, "Operating Revenue"),
    (codes.COMMISSION_REVENUE, "Commission Revenue", Account.REVENUE, "Operating Revenue"),
    ("5000", "Cost of Goods Sold", Account.EXPENSE, "Cost of Sales"),
    ("6000", "Operating Expenses", Account.EXPENSE, "Operating Expenses"),
]


class Command(BaseCommand):
    help = "Seed the retail chart of accounts (idempotent)"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding retail chart of accounts...")

        created_count = 0
        updated_count = 0

        for code, name, account_type, category in ACCOUNTS:
            acc, acc_created = Account.objects.get_or_create(
                code=code,
                defaults={
                    "name": name,
                    "account_type": account_type,
                    "category": category,
                    "is_active": True,
                },
            )

            if acc_created:
                created_count += 1
                continue

            changed = []
            for field, value in (("name", name), ("account_type", account_type), ("is_active", True)):
                if getattr(acc, field) != value:
                    setattr(acc, field, value)
                    changed.append(field)

            if changed:
                acc.save(update_fields=changed + ["updated_at"])
                updated_count += 1

        missing = set(codes.REQUIRED_CODES) - set(
            Account.objects.filter(code__in=codes.REQUIRED_CODES).values_list("code", flat=True)
        )
        if missing:
            raise RuntimeError(f"Required accounts still missing: {sorted(missing)}")

        self.stdout.write(
            self.style.SUCCESS(
                f"✔ Retail chart seeded ({created_count} new accounts, {updated_count} updated)."
            )
        )
