# accounting/services/journal_entry_service.py

"""
======================================================
PATH: accounting/services/journal_entry_service.py
======================================================
JOURNAL ENTRY SERVICE (ACCOUNTING ENGINE)

This module is the ONLY place allowed to:
- Create JournalEntry
- Create JournalEntryLine
- Enforce debit == credit (before anything touches the database)
- Guarantee atomicity (header + all lines, or nothing)
- Enforce idempotency via reference (prevents double-posting)

Everything else (sales invoices, guest orders, reversals) must pass through here.
A failed posting is never retried automatically.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.db import IntegrityError, transaction
from django.utils import timezone

from accounting.models.account import Account
from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalEntryLine
from accounting.services.exceptions import (
    IdempotencyError,
    InvalidAmountError,
    InvariantViolationError,
    JournalEntryCreationError,
)

TWOPLACES = Decimal("0.01")
BALANCE_TOLERANCE = Decimal("0.0001")


def money(value) -> Decimal:
    if value is None or value == "":
        return Decimal("0.00")

    if isinstance(value, Decimal):
        amt = value
    else:
        try:
            amt = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise InvalidAmountError(f"Invalid money value: {value!r}") from exc

    if not amt.is_finite():
        raise InvalidAmountError(f"Invalid money value: {value!r}")

    return amt.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PostingLine:
    """
    One side of a journal entry: an account, a side and a positive amount.
    """

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"

    account: Account
    side: str
    amount: Decimal
    description: str = ""

    @classmethod
    def debit(cls, account: Account, amount, description: str = "") -> "PostingLine":
        return cls(account=account, side=cls.DEBIT, amount=money(amount), description=description)

    @classmethod
    def credit(cls, account: Account, amount, description: str = "") -> "PostingLine":
        return cls(account=account, side=cls.CREDIT, amount=money(amount), description=description)


def sum_sides(lines: list[PostingLine]) -> tuple[Decimal, Decimal]:
    total_debit = sum((l.amount for l in lines if l.side == PostingLine.DEBIT), Decimal("0.00"))
    total_credit = sum((l.amount for l in lines if l.side == PostingLine.CREDIT), Decimal("0.00"))
    return total_debit, total_credit


def assert_balanced(lines: list[PostingLine]) -> tuple[Decimal, Decimal]:
    total_debit, total_credit = sum_sides(lines)
    if abs(total_debit - total_credit) > BALANCE_TOLERANCE:
        raise InvariantViolationError(
            f"Journal entry not balanced: debits={total_debit} credits={total_credit}"
        )
    return total_debit, total_credit


def _validate_line(line) -> PostingLine:
    if not isinstance(line, PostingLine):
        raise JournalEntryCreationError("Each line must be a PostingLine")

    if line.account is None:
        raise JournalEntryCreationError("Posting line missing account")

    if not getattr(line.account, "is_active", True):
        raise JournalEntryCreationError(
            f"Account {getattr(line.account, 'code', 'UNKNOWN')} is inactive"
        )

    if line.side not in (PostingLine.DEBIT, PostingLine.CREDIT):
        raise JournalEntryCreationError(f"Invalid posting side: {line.side!r}")

    amount = money(line.amount)
    if amount <= Decimal("0.00"):
        raise InvalidAmountError(f"Posting amount must be > 0 (got {amount})")

    if amount != line.amount:
        return PostingLine(
            account=line.account, side=line.side, amount=amount, description=line.description
        )
    return line


def _reference_taken(reference: str) -> bool:
    return JournalEntry.objects.filter(reference=reference).exists()


@transaction.atomic
def create_journal_entry(
    *,
    description: str,
    lines: list,
    reference: str | None = None,
    entry_date: date | None = None,
) -> JournalEntry:
    if not lines:
        raise JournalEntryCreationError("Journal entry must contain at least one line")

    description = (description or "").strip()
    if not description:
        raise JournalEntryCreationError("Journal entry description is required")

    reference = (reference or "").strip() or None

    normalized = [_validate_line(line) for line in lines]

    # Totals always come from the lines actually written.
    total_debit, total_credit = assert_balanced(normalized)

    if reference and _reference_taken(reference):
        raise IdempotencyError(f"Journal entry already exists for reference {reference}")

    try:
        with transaction.atomic():
            journal_entry = JournalEntry.objects.create(
                description=description,
                reference=reference,
                entry_date=entry_date or timezone.localdate(),
                total_debit=total_debit,
                total_credit=total_credit,
                status=JournalEntry.STATUS_POSTED,
            )
    except IntegrityError as exc:
        # lost a race with a concurrent post of the same reference
        if reference and _reference_taken(reference):
            raise IdempotencyError(
                f"Journal entry already exists for reference {reference}"
            ) from exc
        raise JournalEntryCreationError(f"Failed to create journal entry: {exc}") from exc

    JournalEntryLine.objects.bulk_create(
        [JournalEntryLine.from_posting(journal_entry=journal_entry, line=line) for line in normalized]
    )
    return journal_entry


@transaction.atomic
def reverse_journal_entry(
    *,
    journal_entry: JournalEntry,
    reason: str = "",
    entry_date: date | None = None,
) -> JournalEntry:
    """
    Post the mirror image of an existing entry. The original row is left untouched.
    """
    lines = list(journal_entry.lines.select_related("account"))
    if not lines:
        raise JournalEntryCreationError(f"Journal entry {journal_entry.id} has no lines to reverse")

    reversed_lines = [
        PostingLine.credit(l.account, l.debit, f"Reversal: {l.description}".strip())
        if l.debit > 0
        else PostingLine.debit(l.account, l.credit, f"Reversal: {l.description}".strip())
        for l in lines
    ]

    narration = f"Reversal of journal entry #{journal_entry.id}"
    if (reason or "").strip():
        narration = f"{narration}: {reason.strip()}"

    return create_journal_entry(
        description=narration,
        lines=reversed_lines,
        reference=f"REVERSAL:{journal_entry.id}",
        entry_date=entry_date,
    )
