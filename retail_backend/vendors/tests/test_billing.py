# vendors/tests/test_billing.py

from datetime import date
from decimal import Decimal
from io import StringIO
from unittest import mock

from django.core import mail
from django.core.management import CommandError, call_command
from django.test import TestCase

from vendors.models import Vendor, VendorInvoice
from vendors.services.billing_service import (
    BillingRunResult,
    _escalate,
    generate_vendor_invoice,
    list_vendor_invoices,
    mark_invoice_paid,
    next_stage,
    process_daily_vendor_billing,
    reactivate_vendor_account,
    update_vendor_billing_settings,
    void_invoice,
)
from vendors.services.exceptions import (
    AlreadyTerminalError,
    DuplicateVendorInvoiceError,
    VendorBillingError,
    VendorInvoiceNotFoundError,
    VendorNotFoundError,
)

MARCH_1 = date(2025, 3, 1)


class BillingTestCase(TestCase):
    def setUp(self):
        self.vendor = Vendor.objects.create(
            name="Acme Crafts",
            email="acme@example.com",
            monthly_fee=Decimal("49.00"),
        )

    def _invoice(self):
        return VendorInvoice.objects.get(vendor=self.vendor)

    def _run(self, day):
        with self.captureOnCommitCallbacks(execute=True):
            return process_daily_vendor_billing(today=day)


class MonthlyIssuanceTests(BillingTestCase):
    def test_first_of_month_issues_one_invoice(self):
        result = self._run(MARCH_1)

        invoice = self._invoice()
        self.assertEqual(result.issued, [invoice.id])
        self.assertEqual(invoice.billing_month, "2025-03")
        self.assertEqual(invoice.fee_amount, Decimal("49.00"))
        self.assertEqual(invoice.status, VendorInvoice.STATUS_UNPAID)
        self.assertEqual(invoice.reminder_stage, VendorInvoice.STAGE_NONE)
        self.assertEqual(invoice.issued_on, MARCH_1)
        self.assertEqual(invoice.due_date, date(2025, 3, 6))
        self.assertTrue(invoice.invoice_number.startswith(f"VF-{self.vendor.id}-202503-"))

        self.vendor.refresh_from_db()
        self.assertEqual(self.vendor.last_invoice_date, MARCH_1)

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].subject, f"Vendor fee invoice {invoice.invoice_number}")

    def test_second_run_same_day_issues_nothing(self):
        self._run(MARCH_1)
        result = self._run(MARCH_1)

        self.assertEqual(result.issued, [])
        self.assertEqual(VendorInvoice.objects.filter(vendor=self.vendor).count(), 1)
        self.assertEqual(len(mail.outbox), 1)

    def test_no_issuance_on_other_days(self):
        result = self._run(date(2025, 3, 2))

        self.assertEqual(result.issued, [])
        self.assertFalse(VendorInvoice.objects.exists())

    def test_future_billing_start_is_skipped(self):
        self.vendor.billing_start_date = date(2025, 4, 15)
        self.vendor.save()

        self._run(MARCH_1)
        self.assertFalse(VendorInvoice.objects.exists())

        self._run(date(2025, 5, 1))
        self.assertEqual(self._invoice().billing_month, "2025-05")

    def test_vendor_without_fee_is_skipped(self):
        self.vendor.monthly_fee = Decimal("0.00")
        self.vendor.save()

        result = self._run(MARCH_1)

        self.assertEqual(result.issued, [])
        self.assertFalse(VendorInvoice.objects.exists())

    def test_next_month_issues_again(self):
        self._run(MARCH_1)
        self._run(date(2025, 4, 1))

        months = sorted(VendorInvoice.objects.values_list("billing_month", flat=True))
        self.assertEqual(months, ["2025-03", "2025-04"])


class EscalationTests(BillingTestCase):
    def setUp(self):
        super().setUp()
        self._run(MARCH_1)
        mail.outbox = []

    def test_ladder(self):
        self.assertIsNone(next_stage(1, 0))
        self.assertEqual(next_stage(2, 0), 1)
        self.assertEqual(next_stage(4, 1), 2)
        self.assertEqual(next_stage(5, 2), 3)
        self.assertEqual(next_stage(30, 0), 1)
        self.assertIsNone(next_stage(30, 3))

    def test_reminder_then_final_then_disable(self):
        invoice = self._invoice()

        self.assertEqual(self._run(date(2025, 3, 2)).reminders_sent, [])

        result = self._run(date(2025, 3, 3))
        self.assertEqual(result.reminders_sent, [invoice.id])
        self.assertEqual(self._invoice().reminder_stage, VendorInvoice.STAGE_REMINDER)
        self.assertTrue(mail.outbox[-1].subject.startswith("Reminder: Vendor fee invoice"))

        result = self._run(date(2025, 3, 5))
        self.assertEqual(result.final_reminders_sent, [invoice.id])
        self.assertEqual(self._invoice().reminder_stage, VendorInvoice.STAGE_FINAL_REMINDER)
        self.assertTrue(mail.outbox[-1].subject.startswith("Final reminder"))

        result = self._run(date(2025, 3, 6))
        self.assertEqual(result.vendors_disabled, [self.vendor.id])
        self.assertEqual(self._invoice().reminder_stage, VendorInvoice.STAGE_DISABLED)
        self.assertEqual(mail.outbox[-1].subject, "Vendor account disabled")

        self.vendor.refresh_from_db()
        self.assertFalse(self.vendor.account_active)
        self.assertEqual(len(mail.outbox), 3)

    def test_rerun_on_same_day_does_not_resend(self):
        self._run(date(2025, 3, 3))
        result = self._run(date(2025, 3, 3))

        self.assertEqual(result.reminders_sent, [])
        self.assertEqual(len(mail.outbox), 1)

    def test_only_one_stage_per_run(self):
        result = self._run(date(2025, 3, 20))

        self.assertEqual(result.reminders_sent, [self._invoice().id])
        self.assertEqual(result.vendors_disabled, [])
        self.assertEqual(self._invoice().reminder_stage, VendorInvoice.STAGE_REMINDER)

        self.vendor.refresh_from_db()
        self.assertTrue(self.vendor.account_active)

    def test_stale_escalation_is_not_applied_twice(self):
        stale = VendorInvoice.objects.select_related("vendor").get(vendor=self.vendor)
        self._run(date(2025, 3, 3))
        self.assertEqual(len(mail.outbox), 1)

        result = BillingRunResult(today=date(2025, 3, 3))
        with self.captureOnCommitCallbacks(execute=True):
            _escalate(stale, VendorInvoice.STAGE_REMINDER, result, None)

        self.assertEqual(result.reminders_sent, [])
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(self._invoice().reminder_stage, VendorInvoice.STAGE_REMINDER)

    def test_paid_invoice_is_never_escalated(self):
        mark_invoice_paid(self.vendor.id, self._invoice().id)

        result = self._run(date(2025, 3, 20))

        self.assertEqual(result.reminders_sent, [])
        self.assertEqual(self._invoice().reminder_stage, VendorInvoice.STAGE_TERMINAL)
        self.assertEqual(len(mail.outbox), 0)


class InvoiceTransitionTests(BillingTestCase):
    def setUp(self):
        super().setUp()
        self.invoice = generate_vendor_invoice(self.vendor.id, issue_date=MARCH_1)

    def test_mark_paid_is_terminal_and_reactivates_vendor(self):
        Vendor.objects.filter(pk=self.vendor.pk).update(account_active=False)

        invoice = mark_invoice_paid(self.vendor.id, self.invoice.id, paid_at=date(2025, 3, 4))

        self.assertEqual(invoice.status, VendorInvoice.STATUS_PAID)
        self.assertEqual(invoice.paid_at, date(2025, 3, 4))
        self.assertEqual(invoice.reminder_stage, VendorInvoice.STAGE_TERMINAL)
        self.vendor.refresh_from_db()
        self.assertTrue(self.vendor.account_active)

    def test_mark_paid_twice_is_a_no_op(self):
        first = mark_invoice_paid(self.vendor.id, self.invoice.id, paid_at=date(2025, 3, 4))
        second = mark_invoice_paid(self.vendor.id, self.invoice.id, paid_at=date(2025, 3, 9))

        self.assertEqual(second.paid_at, first.paid_at)

    def test_paid_and_void_are_exclusive(self):
        mark_invoice_paid(self.vendor.id, self.invoice.id)
        with self.assertRaises(AlreadyTerminalError):
            void_invoice(self.vendor.id, self.invoice.id, reason="oops")

        other = Vendor.objects.create(name="Other", monthly_fee=Decimal("10.00"))
        voided = generate_vendor_invoice(other.id, issue_date=MARCH_1)
        void_invoice(other.id, voided.id)
        with self.assertRaises(AlreadyTerminalError):
            mark_invoice_paid(other.id, voided.id)

    def test_invoice_of_another_vendor_is_not_found(self):
        other = Vendor.objects.create(name="Other")

        with self.assertRaises(VendorInvoiceNotFoundError):
            mark_invoice_paid(other.id, self.invoice.id)
        with self.assertRaises(VendorInvoiceNotFoundError):
            void_invoice(other.id, self.invoice.id)

    def test_void_stores_trimmed_reason(self):
        invoice = void_invoice(self.vendor.id, self.invoice.id, reason="  billed in error  ")

        self.assertEqual(invoice.status, VendorInvoice.STATUS_VOID)
        self.assertEqual(invoice.void_reason, "billed in error")
        self.assertIsNotNone(invoice.voided_at)
        self.assertEqual(invoice.reminder_stage, VendorInvoice.STAGE_TERMINAL)

    def test_blank_void_reason_is_stored_as_null(self):
        invoice = void_invoice(self.vendor.id, self.invoice.id, reason="   ")
        self.assertIsNone(invoice.void_reason)

    def test_void_twice_returns_the_invoice_unchanged(self):
        first = void_invoice(self.vendor.id, self.invoice.id, reason="first")
        second = void_invoice(self.vendor.id, self.invoice.id, reason="second")

        self.assertEqual(second.void_reason, "first")
        self.assertEqual(second.voided_at, first.voided_at)


class ManualIssuanceTests(BillingTestCase):
    def test_duplicate_month_is_rejected(self):
        generate_vendor_invoice(self.vendor.id, issue_date=MARCH_1)

        with self.assertRaises(DuplicateVendorInvoiceError):
            generate_vendor_invoice(self.vendor.id, issue_date=date(2025, 3, 15))

    def test_unique_constraint_guards_concurrent_issuance(self):
        generate_vendor_invoice(self.vendor.id, issue_date=MARCH_1)

        with mock.patch(
            "vendors.services.billing_service._month_already_invoiced", return_value=False
        ):
            with self.assertRaises(DuplicateVendorInvoiceError):
                generate_vendor_invoice(self.vendor.id, issue_date=date(2025, 3, 2))

        self.assertEqual(VendorInvoice.objects.filter(vendor=self.vendor).count(), 1)

    def test_voided_month_can_be_reissued(self):
        first = generate_vendor_invoice(self.vendor.id, issue_date=MARCH_1)
        void_invoice(self.vendor.id, first.id, reason="wrong amount")

        second = generate_vendor_invoice(
            self.vendor.id, amount="39.00", issue_date=date(2025, 3, 2), metadata={"note": "fixed"}
        )

        self.assertEqual(second.fee_amount, Decimal("39.00"))
        self.assertEqual(second.metadata, {"note": "fixed"})
        self.assertEqual(VendorInvoice.objects.filter(billing_month="2025-03").count(), 2)

    def test_missing_fee_is_rejected(self):
        vendor = Vendor.objects.create(name="Free")

        with self.assertRaises(VendorBillingError):
            generate_vendor_invoice(vendor.id, issue_date=MARCH_1)
        with self.assertRaises(VendorBillingError):
            generate_vendor_invoice(self.vendor.id, amount="0", issue_date=MARCH_1)
        with self.assertRaises(VendorBillingError):
            generate_vendor_invoice(self.vendor.id, amount=Decimal("0.004"), issue_date=MARCH_1)

        self.assertFalse(VendorInvoice.objects.exists())

    def test_unknown_vendor(self):
        with self.assertRaises(VendorNotFoundError):
            generate_vendor_invoice(999999)

    def test_list_is_newest_first_and_limited(self):
        generate_vendor_invoice(self.vendor.id, issue_date=MARCH_1)
        generate_vendor_invoice(self.vendor.id, issue_date=date(2025, 4, 1))

        rows = list(list_vendor_invoices(self.vendor.id))
        self.assertEqual([r.billing_month for r in rows], ["2025-04", "2025-03"])
        self.assertEqual(len(list_vendor_invoices(self.vendor.id, limit=1)), 1)


class VendorAccountTests(BillingTestCase):
    def test_reactivate_sets_flag_and_optional_start_date(self):
        Vendor.objects.filter(pk=self.vendor.pk).update(account_active=False)

        vendor = reactivate_vendor_account(self.vendor.id, billing_start_date=date(2025, 6, 1))

        self.assertTrue(vendor.account_active)
        self.assertEqual(vendor.billing_start_date, date(2025, 6, 1))

    def test_billing_settings_update(self):
        vendor = update_vendor_billing_settings(self.vendor.id, monthly_fee="59.5")
        self.assertEqual(vendor.monthly_fee, Decimal("59.50"))

        vendor = update_vendor_billing_settings(self.vendor.id, monthly_fee="10.005")
        self.assertEqual(vendor.monthly_fee, Decimal("10.01"))

        vendor = update_vendor_billing_settings(self.vendor.id, monthly_fee=0)
        self.assertEqual(vendor.monthly_fee, Decimal("0.00"))

        with self.assertRaises(VendorBillingError):
            update_vendor_billing_settings(self.vendor.id, monthly_fee="-1")


class ProcessVendorBillingCommandTests(BillingTestCase):
    def test_command_runs_for_given_date(self):
        out = StringIO()
        with self.captureOnCommitCallbacks(execute=True):
            call_command("process_vendor_billing", "--date", "2025-03-01", stdout=out)

        self.assertIn("1 issued", out.getvalue())
        self.assertEqual(self._invoice().billing_month, "2025-03")

    def test_command_rejects_bad_date(self):
        with self.assertRaises(CommandError):
            call_command("process_vendor_billing", "--date", "01/03/2025", stdout=StringIO())
