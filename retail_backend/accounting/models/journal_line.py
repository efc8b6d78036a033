# accounting/models/journal_line.py

"""
======================================================
PATH: accounting/models/journal_line.py
======================================================
JOURNAL ENTRY LINE MODEL

Atomic debit or credit posting to a single account.

Guarantees:
- Immutable once created (no updates, no deletes)
- Exactly one of debit / credit is non-zero (DB check constraint)
- Services never build rows by hand: they build PostingLine values
  (account + side + amount) and materialize them through from_posting()
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from accounting.models.account import Account
from accounting.models.journal import JournalEntry

ZERO = Decimal("0.00")


class JournalEntryLine(models.Model):
    journal_entry = models.ForeignKey(
        JournalEntry,
        on_delete=models.PROTECT,
        related_name="lines",
    )

    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="journal_lines",
    )

    description = models.CharField(max_length=255, blank=True, default="")

    debit = models.DecimalField(max_digits=14, decimal_places=2, default=ZERO)
    credit = models.DecimalField(max_digits=14, decimal_places=2, default=ZERO)

    class Meta:
        db_table = "journal_entry_lines"
        verbose_name = "Journal Entry Line"
        verbose_name_plural = "Journal Entry Lines"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=(Q(debit__gt=ZERO) & Q(credit=ZERO))
                | (Q(credit__gt=ZERO) & Q(debit=ZERO)),
                name="chk_journal_line_single_side",
            ),
        ]

    def __str__(self):
        side = "DEBIT" if self.debit > ZERO else "CREDIT"
        return f"{side} {self.amount} → {self.account}"

    @classmethod
    def from_posting(cls, *, journal_entry: JournalEntry, line) -> "JournalEntryLine":
        """Materialize a PostingLine into the two-column storage shape."""
        is_debit = line.side == line.DEBIT
        return cls(
            journal_entry=journal_entry,
            account=line.account,
            description=(line.description or "")[:255],
            debit=line.amount if is_debit else ZERO,
            credit=ZERO if is_debit else line.amount,
        )

    @property
    def amount(self) -> Decimal:
        return self.debit if self.debit > ZERO else self.credit

    def clean(self):
        debit = self.debit or ZERO
        credit = self.credit or ZERO

        if debit < ZERO or credit < ZERO:
            raise ValidationError("Debit and credit cannot be negative")
        if (debit > ZERO) == (credit > ZERO):
            raise ValidationError("A line must carry exactly one of debit or credit")

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("JournalEntryLine records are immutable and cannot be modified")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("JournalEntryLine records are immutable and cannot be deleted")
