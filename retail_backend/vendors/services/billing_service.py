# vendors/services/billing_service.py

"""
======================================================
PATH: vendors/services/billing_service.py
======================================================
VENDOR BILLING STATE MACHINE

Monthly fee invoices for vendors:

    unpaid(0) -> unpaid(1, reminder) -> unpaid(2, final reminder) -> unpaid(3, vendor disabled)
    unpaid(*) -> paid(99)   terminal, any time
    unpaid(*) -> void(99)   terminal, only if not paid

Driven once a day by process_daily_vendor_billing() (management command or
the admin route). The run:
- issues fee invoices on the 1st of the month
- escalates every unpaid invoice by at most ONE stage per run

Concurrency:
- issuance locks the vendor row and relies on the (vendor, billing_month)
  unique constraint as the final guard
- escalation is a conditional UPDATE (reminder_stage < next), so two
  overlapping runs can never both send the same reminder
- emails leave only after commit
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from vendors.models.vendor import Vendor
from vendors.models.vendor_invoice import VendorInvoice
from vendors.services.exceptions import (
    AlreadyTerminalError,
    DuplicateVendorInvoiceError,
    VendorBillingError,
    VendorInvoiceNotFoundError,
    VendorNotFoundError,
    VendorServiceError,
)
from vendors.services.notifications import (
    account_disabled_email,
    fee_invoice_email,
    reminder_email,
    send_after_commit,
)

logger = logging.getLogger("vendor_billing")

TWOPLACES = Decimal("0.01")

# (minimum days since issue, stage reached)
ESCALATION_LADDER = (
    (2, VendorInvoice.STAGE_REMINDER),
    (4, VendorInvoice.STAGE_FINAL_REMINDER),
    (5, VendorInvoice.STAGE_DISABLED),
)


@dataclass
class BillingRunResult:
    today: date
    issued: list = field(default_factory=list)
    issue_failures: list = field(default_factory=list)
    reminders_sent: list = field(default_factory=list)
    final_reminders_sent: list = field(default_factory=list)
    vendors_disabled: list = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "date": self.today.isoformat(),
            "issued": self.issued,
            "issue_failures": self.issue_failures,
            "reminders_sent": self.reminders_sent,
            "final_reminders_sent": self.final_reminders_sent,
            "vendors_disabled": self.vendors_disabled,
        }


# ------------------------------------------------------------
# HELPERS
# ------------------------------------------------------------


def month_key(day: date) -> str:
    return day.strftime("%Y-%m")


def build_invoice_number(vendor_id, issue_date: date) -> str:
    prefix = getattr(settings, "VENDOR_BILLING_INVOICE_PREFIX", "VF")
    return f"{prefix}-{vendor_id}-{issue_date.strftime('%Y%m')}-{random.randint(100, 999)}"


def _due_days() -> int:
    return int(getattr(settings, "VENDOR_INVOICE_DUE_DAYS", 5))


def _fee(value) -> Decimal:
    try:
        fee = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise VendorBillingError(f"Invalid fee amount: {value!r}") from exc

    if not fee.is_finite():
        raise VendorBillingError(f"Invalid fee amount: {value!r}")

    fee = fee.quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    if fee <= 0:
        raise VendorBillingError("Vendor monthly fee is not configured")
    return fee


def _get_vendor(vendor_id, *, lock: bool = False) -> Vendor:
    qs = Vendor.objects.select_for_update() if lock else Vendor.objects.all()
    try:
        return qs.get(pk=vendor_id)
    except Vendor.DoesNotExist as exc:
        raise VendorNotFoundError(f"Vendor {vendor_id} not found") from exc


def _get_invoice_for_update(vendor_id, invoice_id) -> VendorInvoice:
    invoice = (
        VendorInvoice.objects.select_for_update()
        .filter(pk=invoice_id, vendor_id=vendor_id)
        .first()
    )
    if invoice is None:
        raise VendorInvoiceNotFoundError(f"Invoice {invoice_id} not found for vendor {vendor_id}")
    return invoice


def _month_already_invoiced(vendor: Vendor, billing_month: str) -> bool:
    return (
        VendorInvoice.objects.filter(vendor=vendor, billing_month=billing_month)
        .exclude(status=VendorInvoice.STATUS_VOID)
        .exists()
    )


def next_stage(days_since: int, current_stage: int) -> int | None:
    """
    First rung of the ladder the invoice is due for, or None.

    Only one rung is climbed per run, even when the invoice is overdue enough
    for several.
    """
    for min_days, stage in ESCALATION_LADDER:
        if days_since >= min_days and current_stage < stage:
            return stage
    return None


# ------------------------------------------------------------
# ISSUANCE
# ------------------------------------------------------------


@transaction.atomic
def generate_vendor_invoice(
    vendor_id,
    amount=None,
    issue_date: date | None = None,
    metadata=None,
    mailer=None,
) -> VendorInvoice:
    vendor = _get_vendor(vendor_id, lock=True)
    fee = _fee(vendor.monthly_fee if amount is None else amount)

    issue_date = issue_date or timezone.localdate()
    billing_month = month_key(issue_date)

    if _month_already_invoiced(vendor, billing_month):
        raise DuplicateVendorInvoiceError(
            f"Vendor {vendor.id} already has an invoice for {billing_month}"
        )

    try:
        with transaction.atomic():
            invoice = VendorInvoice.objects.create(
                vendor=vendor,
                invoice_number=build_invoice_number(vendor.id, issue_date),
                billing_month=billing_month,
                fee_amount=fee,
                status=VendorInvoice.STATUS_UNPAID,
                issued_on=issue_date,
                due_date=issue_date + timedelta(days=_due_days()),
                reminder_stage=VendorInvoice.STAGE_NONE,
                metadata=metadata,
            )
    except IntegrityError as exc:
        raise DuplicateVendorInvoiceError(
            f"Vendor {vendor.id} already has an invoice for {billing_month}"
        ) from exc

    vendor.last_invoice_date = issue_date
    vendor.save(update_fields=["last_invoice_date", "updated_at"])

    logger.info(
        "Vendor fee invoice issued",
        extra={
            "vendor_id": vendor.id,
            "invoice_id": invoice.id,
            "invoice_number": invoice.invoice_number,
            "fee_amount": str(fee),
        },
    )

    if vendor.email:
        subject, html = fee_invoice_email(vendor, invoice)
        send_after_commit(mailer, to=vendor.email, subject=subject, html=html)

    return invoice


def _billable_vendors(today: date):
    return Vendor.objects.filter(monthly_fee__gt=0).filter(
        Q(billing_start_date__isnull=True) | Q(billing_start_date__lte=today)
    )


def _issue_monthly_invoices(today: date, result: BillingRunResult, mailer) -> None:
    current_month = month_key(today)

    for vendor in _billable_vendors(today):
        if vendor.last_invoice_date and month_key(vendor.last_invoice_date) == current_month:
            continue

        try:
            invoice = generate_vendor_invoice(vendor.id, issue_date=today, mailer=mailer)
        except DuplicateVendorInvoiceError:
            logger.info(
                "Vendor already invoiced this month",
                extra={"vendor_id": vendor.id, "billing_month": current_month},
            )
            continue
        except (VendorServiceError, DatabaseError) as exc:
            logger.warning(
                "Failed generating vendor invoice",
                extra={"vendor_id": vendor.id, "error": str(exc)},
            )
            result.issue_failures.append(vendor.id)
            continue

        result.issued.append(invoice.id)


# ------------------------------------------------------------
# ESCALATION
# ------------------------------------------------------------


def _escalate(invoice: VendorInvoice, stage: int, result: BillingRunResult, mailer) -> None:
    vendor = invoice.vendor

    with transaction.atomic():
        claimed = VendorInvoice.objects.filter(
            pk=invoice.pk,
            status=VendorInvoice.STATUS_UNPAID,
            reminder_stage__lt=stage,
        ).update(reminder_stage=stage)

        if not claimed:
            # Another run got there first, or the invoice was settled meanwhile.
            return

        if stage == VendorInvoice.STAGE_DISABLED:
            Vendor.objects.filter(pk=vendor.pk).update(
                account_active=False, updated_at=timezone.now()
            )
            subject, html = account_disabled_email(vendor, invoice)
        else:
            subject, html = reminder_email(vendor, invoice, stage)

        if vendor.email:
            send_after_commit(mailer, to=vendor.email, subject=subject, html=html)

    if stage == VendorInvoice.STAGE_REMINDER:
        result.reminders_sent.append(invoice.id)
    elif stage == VendorInvoice.STAGE_FINAL_REMINDER:
        result.final_reminders_sent.append(invoice.id)
    else:
        result.vendors_disabled.append(vendor.id)
        logger.warning(
            "Vendor disabled for unpaid fee invoice",
            extra={"vendor_id": vendor.id, "invoice_id": invoice.id},
        )


def _escalate_unpaid(today: date, result: BillingRunResult, mailer) -> None:
    unpaid = VendorInvoice.objects.filter(status=VendorInvoice.STATUS_UNPAID).select_related(
        "vendor"
    )

    for invoice in unpaid:
        days_since = (today - invoice.issued_on).days
        stage = next_stage(days_since, invoice.reminder_stage)
        if stage is None:
            continue

        try:
            _escalate(invoice, stage, result, mailer)
        except DatabaseError:
            logger.exception(
                "Failed escalating vendor invoice",
                extra={"vendor_id": invoice.vendor_id, "invoice_id": invoice.id},
            )


def process_daily_vendor_billing(today: date | None = None, mailer=None) -> BillingRunResult:
    today = today or timezone.localdate()
    result = BillingRunResult(today=today)

    if today.day == 1:
        _issue_monthly_invoices(today, result, mailer)

    _escalate_unpaid(today, result, mailer)

    logger.info("Vendor billing run finished", extra=result.as_dict())
    return result


# ------------------------------------------------------------
# ADMIN TRANSITIONS
# ------------------------------------------------------------


def list_vendor_invoices(vendor_id, limit: int = 50):
    return VendorInvoice.objects.filter(vendor_id=vendor_id).order_by("-issued_on", "-id")[:limit]


@transaction.atomic
def mark_invoice_paid(vendor_id, invoice_id, paid_at: date | None = None) -> VendorInvoice:
    invoice = _get_invoice_for_update(vendor_id, invoice_id)

    if invoice.status == VendorInvoice.STATUS_VOID:
        raise AlreadyTerminalError("Cannot mark a void invoice as paid")
    if invoice.status == VendorInvoice.STATUS_PAID:
        return invoice

    invoice.status = VendorInvoice.STATUS_PAID
    invoice.paid_at = paid_at or timezone.localdate()
    invoice.reminder_stage = VendorInvoice.STAGE_TERMINAL
    invoice.save(update_fields=["status", "paid_at", "reminder_stage"])

    Vendor.objects.filter(pk=vendor_id).update(account_active=True, updated_at=timezone.now())

    outstanding = (
        VendorInvoice.objects.filter(vendor_id=vendor_id, status=VendorInvoice.STATUS_UNPAID)
        .exclude(pk=invoice.pk)
        .count()
    )
    if outstanding:
        logger.warning(
            "Vendor reactivated with unpaid fee invoices outstanding",
            extra={"vendor_id": vendor_id, "invoice_id": invoice.id, "outstanding": outstanding},
        )

    logger.info("Vendor fee invoice paid", extra={"vendor_id": vendor_id, "invoice_id": invoice.id})
    return invoice


@transaction.atomic
def void_invoice(vendor_id, invoice_id, reason: str | None = None) -> VendorInvoice:
    invoice = _get_invoice_for_update(vendor_id, invoice_id)

    if invoice.status == VendorInvoice.STATUS_PAID:
        raise AlreadyTerminalError("Cannot void a paid invoice")
    if invoice.status == VendorInvoice.STATUS_VOID:
        return invoice

    invoice.status = VendorInvoice.STATUS_VOID
    invoice.void_reason = (str(reason).strip() if reason is not None else "") or None
    invoice.voided_at = timezone.now()
    invoice.reminder_stage = VendorInvoice.STAGE_TERMINAL
    invoice.save(update_fields=["status", "void_reason", "voided_at", "reminder_stage"])

    logger.info("Vendor fee invoice voided", extra={"vendor_id": vendor_id, "invoice_id": invoice.id})
    return invoice


@transaction.atomic
def reactivate_vendor_account(vendor_id, billing_start_date: date | None = None) -> Vendor:
    vendor = _get_vendor(vendor_id, lock=True)

    vendor.account_active = True
    update_fields = ["account_active", "updated_at"]
    if billing_start_date is not None:
        vendor.billing_start_date = billing_start_date
        update_fields.append("billing_start_date")

    vendor.save(update_fields=update_fields)
    logger.info("Vendor account reactivated", extra={"vendor_id": vendor.id})
    return vendor


@transaction.atomic
def update_vendor_billing_settings(
    vendor_id,
    monthly_fee=None,
    billing_start_date: date | None = None,
) -> Vendor:
    vendor = _get_vendor(vendor_id, lock=True)

    update_fields = []
    if monthly_fee is not None:
        try:
            fee = Decimal(str(monthly_fee))
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise VendorBillingError(f"Invalid monthly fee: {monthly_fee!r}") from exc
        if not fee.is_finite():
            raise VendorBillingError(f"Invalid monthly fee: {monthly_fee!r}")
        fee = fee.quantize(TWOPLACES, rounding=ROUND_HALF_UP)
        if fee < 0:
            raise VendorBillingError("Monthly fee cannot be negative")
        vendor.monthly_fee = fee
        update_fields.append("monthly_fee")

    if billing_start_date is not None:
        vendor.billing_start_date = billing_start_date
        update_fields.append("billing_start_date")

    if update_fields:
        vendor.save(update_fields=update_fields + ["updated_at"])

    return vendor
