# vendors/management/commands/process_vendor_billing.py

"""
Daily vendor billing driver. Schedule once a day (cron / platform scheduler):

    python manage.py process_vendor_billing
    python manage.py process_vendor_billing --date 2025-03-01
"""

from datetime import date

from django.core.management.base import BaseCommand, CommandError

from vendors.services.billing_service import process_daily_vendor_billing


class Command(BaseCommand):
    help = "Issue monthly vendor fee invoices and escalate unpaid ones"

    def add_arguments(self, parser):
        parser.add_argument(
            "--date",
            dest="run_date",
            help="Run as if today were YYYY-MM-DD (defaults to today)",
        )

    def handle(self, *args, **options):
        run_date = options.get("run_date")
        today = None
        if run_date:
            try:
                today = date.fromisoformat(run_date)
            except ValueError as exc:
                raise CommandError(f"Invalid --date {run_date!r}, expected YYYY-MM-DD") from exc

        result = process_daily_vendor_billing(today=today)

        self.stdout.write(
            self.style.SUCCESS(
                f"✔ Vendor billing for {result.today.isoformat()}: "
                f"{len(result.issued)} issued, "
                f"{len(result.reminders_sent)} reminders, "
                f"{len(result.final_reminders_sent)} final reminders, "
                f"{len(result.vendors_disabled)} vendors disabled"
            )
        )
        if result.issue_failures:
            self.stdout.write(
                self.style.WARNING(f"Issuance failed for vendors: {result.issue_failures}")
            )
