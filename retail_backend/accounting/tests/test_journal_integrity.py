# accounting/tests/test_journal_integrity.py

from __future__ import annotations

from decimal import Decimal
from io import StringIO
from unittest import mock

from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.test import TestCase

from accounting.models.account import Account
from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalEntryLine
from accounting.services.exceptions import (
    IdempotencyError,
    InvalidAmountError,
    InvariantViolationError,
    JournalEntryCreationError,
)
from accounting.services.journal_entry_service import (
    PostingLine,
    create_journal_entry,
    reverse_journal_entry,
)


class JournalIntegrityTests(TestCase):
    """
    GUARANTEES:
    - Debits == credits before anything is written
    - Header + lines are atomic
    - References are unique (no double-posting)
    - Entries and lines are append-only
    """

    def setUp(self):
        call_command("seed_retail_chart", stdout=StringIO())
        self.cash = Account.objects.get(code="1000")
        self.sales = Account.objects.get(code="4000")
        self.tax = Account.objects.get(code="2200")

    def _balanced_lines(self):
        return [
            PostingLine.debit(self.cash, "108.00"),
            PostingLine.credit(self.sales, "100.00"),
            PostingLine.credit(self.tax, "8.00"),
        ]

    def test_balanced_entry_is_created_with_computed_totals(self):
        entry = create_journal_entry(
            description="Cash sale",
            lines=self._balanced_lines(),
            reference="TEST-1",
        )

        entry.refresh_from_db()
        self.assertEqual(entry.status, JournalEntry.STATUS_POSTED)
        self.assertEqual(entry.total_debit, Decimal("108.00"))
        self.assertEqual(entry.total_credit, Decimal("108.00"))
        self.assertTrue(entry.is_balanced)

        lines = list(entry.lines.all())
        self.assertEqual(len(lines), 3)
        self.assertEqual(sum(l.debit for l in lines), sum(l.credit for l in lines))
        for line in lines:
            self.assertTrue((line.debit > 0) != (line.credit > 0))

    def test_unbalanced_entry_is_rejected_before_write(self):
        lines = [
            PostingLine.debit(self.cash, "100.00"),
            PostingLine.credit(self.sales, "99.00"),
        ]

        with self.assertRaises(InvariantViolationError):
            create_journal_entry(description="Broken", lines=lines)

        self.assertEqual(JournalEntry.objects.count(), 0)
        self.assertEqual(JournalEntryLine.objects.count(), 0)

    def test_duplicate_reference_is_rejected(self):
        create_journal_entry(description="First", lines=self._balanced_lines(), reference="INV-9")

        with self.assertRaises(IdempotencyError):
            create_journal_entry(description="Again", lines=self._balanced_lines(), reference="INV-9")

        self.assertEqual(JournalEntry.objects.filter(reference="INV-9").count(), 1)

    def test_duplicate_reference_past_precheck_hits_database_constraint(self):
        create_journal_entry(description="First", lines=self._balanced_lines(), reference="INV-9")

        with mock.patch(
            "accounting.services.journal_entry_service._reference_taken",
            side_effect=[False, True],
        ):
            with self.assertRaises(IdempotencyError):
                create_journal_entry(
                    description="Concurrent", lines=self._balanced_lines(), reference="INV-9"
                )

        self.assertEqual(JournalEntry.objects.filter(reference="INV-9").count(), 1)
        self.assertEqual(JournalEntryLine.objects.count(), 3)

    def test_non_positive_amounts_are_rejected(self):
        with self.assertRaises(InvalidAmountError):
            create_journal_entry(
                description="Zero",
                lines=[PostingLine.debit(self.cash, "0"), PostingLine.credit(self.sales, "0")],
            )

        with self.assertRaises(InvalidAmountError):
            PostingLine.debit(self.cash, "not-a-number")

    def test_empty_entry_is_rejected(self):
        with self.assertRaises(JournalEntryCreationError):
            create_journal_entry(description="Nothing", lines=[])

    def test_entries_and_lines_are_immutable(self):
        entry = create_journal_entry(description="Sale", lines=self._balanced_lines())

        entry.description = "Edited"
        with self.assertRaises(ValidationError):
            entry.save()
        with self.assertRaises(ValidationError):
            entry.delete()

        line = entry.lines.first()
        line.debit = Decimal("1.00")
        with self.assertRaises(ValidationError):
            line.save()
        with self.assertRaises(ValidationError):
            line.delete()

    def test_reversal_mirrors_the_original_and_leaves_it_untouched(self):
        original = create_journal_entry(
            description="Sale", lines=self._balanced_lines(), reference="INV-1"
        )

        reversal = reverse_journal_entry(journal_entry=original, reason=" customer returned goods ")

        self.assertEqual(reversal.reference, f"REVERSAL:{original.id}")
        self.assertIn("customer returned goods", reversal.description)
        self.assertEqual(reversal.total_debit, original.total_debit)

        by_account = {l.account.code: (l.debit, l.credit) for l in reversal.lines.select_related("account")}
        self.assertEqual(by_account["1000"], (Decimal("0.00"), Decimal("108.00")))
        self.assertEqual(by_account["4000"], (Decimal("100.00"), Decimal("0.00")))
        self.assertEqual(by_account["2200"], (Decimal("8.00"), Decimal("0.00")))

        original.refresh_from_db()
        self.assertEqual(original.status, JournalEntry.STATUS_POSTED)
        self.assertEqual(original.lines.count(), 3)

        with self.assertRaises(IdempotencyError):
            reverse_journal_entry(journal_entry=original)


class SeedRetailChartTests(TestCase):
    def test_seed_is_idempotent_and_creates_required_codes(self):
        call_command("seed_retail_chart", stdout=StringIO())
        first_count = Account.objects.count()

        Account.objects.filter(code="4200").update(is_active=False)
        call_command("seed_retail_chart", stdout=StringIO())

        self.assertEqual(Account.objects.count(), first_count)
        for code in ("1200", "4000", "2200", "2000", "4200"):
            self.assertTrue(Account.objects.filter(code=code, is_active=True).exists(), code)
