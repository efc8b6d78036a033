# accounting/models/journal.py

"""
======================================================
PATH: accounting/models/journal.py
======================================================
JOURNAL ENTRY MODEL

Represents a single accounting transaction (journal header).

Guarantees:
- Immutable once created (no updates, no deletes); corrections are reversing entries
- Idempotency via reference uniqueness (when reference is provided)
- total_debit / total_credit are the sums of the lines actually written
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils import timezone


class JournalEntry(models.Model):
    STATUS_DRAFT = "draft"
    STATUS_POSTED = "posted"
    STATUS_VOIDED = "voided"

    STATUSES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_POSTED, "Posted"),
        (STATUS_VOIDED, "Voided"),
    ]

    entry_date = models.DateField(
        default=timezone.localdate,
        help_text="Accounting effective date",
    )

    description = models.TextField(help_text="Narrative description of the journal entry")

    reference = models.CharField(
        max_length=100,
        blank=True,
        null=True,
        help_text="External reference (INV-12, ORDER-7, REVERSAL:3, ...)",
    )

    total_debit = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    total_credit = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    status = models.CharField(max_length=10, choices=STATUSES, default=STATUS_POSTED)

    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="Timestamp when the journal entry was created",
    )

    class Meta:
        db_table = "journal_entries"
        ordering = ["-entry_date", "-created_at"]
        indexes = [
            models.Index(fields=["entry_date"], name="idx_journal_entry_date"),
            models.Index(fields=["created_at"], name="idx_journal_created_at"),
            models.Index(fields=["reference"], name="idx_journal_reference"),
            models.Index(fields=["status"], name="idx_journal_status"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["reference"],
                condition=Q(reference__isnull=False) & ~Q(reference=""),
                name="uniq_journal_reference_not_blank",
            ),
            models.CheckConstraint(
                condition=Q(total_debit__gte=Decimal("0.00"))
                & Q(total_credit__gte=Decimal("0.00")),
                name="chk_journal_totals_nonnegative",
            ),
        ]
        verbose_name = "Journal Entry"
        verbose_name_plural = "Journal Entries"

    def __str__(self):
        return f"JournalEntry #{self.id} – {self.entry_date}"

    @property
    def is_balanced(self) -> bool:
        return self.total_debit == self.total_credit

    def clean(self):
        if self.reference is not None:
            ref = str(self.reference).strip()
            self.reference = ref or None

        self.description = (self.description or "").strip()
        if not self.description:
            raise ValidationError("Journal entry description is required")

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("JournalEntry records are immutable once created")

        # reference uniqueness is left to the database constraint
        self.full_clean(validate_constraints=False)
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("JournalEntry records are immutable and cannot be deleted")
