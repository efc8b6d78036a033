# vendors/services/notifications.py

"""
VENDOR NOTIFICATIONS (EMAIL)

Best-effort delivery: a failed email is logged and never raised, so it can
never undo a payout or a billing transition. Callers schedule sends with
send_after_commit() so nothing leaves before the financial write is durable.

Transport comes from EMAIL_URL (console backend when unset).
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.db import transaction
from django.utils.html import escape, strip_tags

logger = logging.getLogger(__name__)


class EmailSender:
    """Default sender over Django's mail framework. Inject a stub in tests."""

    def send(self, to: str, subject: str, html: str, text: str | None = None) -> bool:
        if not to:
            return False

        reply_to = getattr(settings, "MAIL_REPLY_TO", "") or None
        message = EmailMultiAlternatives(
            subject=subject,
            body=text or strip_tags(html),
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[to],
            reply_to=[reply_to] if reply_to else None,
        )
        message.attach_alternative(html, "text/html")

        try:
            message.send()
        except Exception:
            logger.exception("Vendor email failed", extra={"to": to, "subject": subject})
            return False
        return True


def send_after_commit(mailer, *, to: str, subject: str, html: str) -> None:
    """Queue an email for after the current transaction commits (immediately if none)."""
    if not to:
        return

    mailer = mailer or EmailSender()

    def _send():
        try:
            mailer.send(to, subject, html)
        except Exception:
            logger.exception("Vendor email failed", extra={"to": to, "subject": subject})

    transaction.on_commit(_send)


# ------------------------------------------------------------
# MESSAGE BODIES
# ------------------------------------------------------------


def _greeting(vendor) -> str:
    return f"<p>Hello {escape(vendor.name or '')},</p>"


def _invoice_facts(invoice) -> str:
    return (
        "<ul>"
        f"<li><strong>Invoice #:</strong> {escape(invoice.invoice_number)}</li>"
        f"<li><strong>Amount:</strong> {invoice.fee_amount}</li>"
        f"<li><strong>Due date:</strong> {invoice.due_date.isoformat()}</li>"
        "</ul>"
    )


def payout_email(vendor, payout) -> tuple[str, str]:
    subject = f"Payout invoice #{payout.id}"
    html = (
        _greeting(vendor)
        + f"<p>We have generated a payout invoice (ID: {payout.id}).</p>"
        + "<ul>"
        + f"<li>Gross sales: {payout.gross_sales}</li>"
        + f"<li>Commission rate: {Decimal(payout.commission_rate).normalize()}</li>"
        + f"<li>Commission amount: {payout.commission_amount}</li>"
        + f"<li>Payable amount: {payout.payable_amount}</li>"
        + "</ul>"
        + "<p>If you have questions, reply to this email.</p>"
    )
    return subject, html


def fee_invoice_email(vendor, invoice) -> tuple[str, str]:
    subject = f"Vendor fee invoice {invoice.invoice_number}"
    html = (
        _greeting(vendor)
        + "<p>This is your monthly vendor fee invoice.</p>"
        + _invoice_facts(invoice)
        + "<p>Please pay within five days to keep your dashboard active.</p>"
    )
    return subject, html


def reminder_email(vendor, invoice, stage: int) -> tuple[str, str]:
    if stage >= 2:
        subject = f"Final reminder: vendor fee invoice {invoice.invoice_number}"
        intro = "This is the final reminder before your vendor dashboard is disabled."
    else:
        subject = f"Reminder: Vendor fee invoice {invoice.invoice_number}"
        intro = "This is a reminder to pay your monthly vendor fee."

    html = _greeting(vendor) + f"<p>{intro}</p>" + _invoice_facts(invoice)
    return subject, html


def account_disabled_email(vendor, invoice) -> tuple[str, str]:
    html = _greeting(vendor) + (
        "<p>Your vendor account has been temporarily disabled due to unpaid fees. "
        f"Please contact support after settling invoice {escape(invoice.invoice_number)}.</p>"
    )
    return "Vendor account disabled", html
