# vendors/services/commission.py

"""
VENDOR COMMISSION CALCULATOR

Pure arithmetic, no I/O:

    commission_amount = round2(gross * rate)
    net_payable       = round2(gross - commission_amount)

so commission_amount + net_payable == gross to the cent.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.conf import settings

from accounting.services.exceptions import InvalidAmountError

TWOPLACES = Decimal("0.01")
FOURPLACES = Decimal("0.0001")


@dataclass(frozen=True)
class CommissionSplit:
    gross_sales: Decimal
    commission_rate: Decimal
    commission_amount: Decimal
    net_payable: Decimal


def _decimal(value, label: str) -> Decimal:
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidAmountError(f"Invalid {label}: {value!r}") from exc

    if not amount.is_finite():
        raise InvalidAmountError(f"Invalid {label}: {value!r}")
    return amount


def default_commission_rate() -> Decimal:
    return Decimal(str(getattr(settings, "VENDOR_DEFAULT_COMMISSION_RATE", "0.10")))


def compute_split(gross_sales, commission_rate=None) -> CommissionSplit:
    gross = _decimal(gross_sales, "gross sales")
    if gross < 0:
        raise InvalidAmountError(f"Gross sales cannot be negative (got {gross})")

    rate = default_commission_rate() if commission_rate is None else _decimal(
        commission_rate, "commission rate"
    )
    if rate < 0 or rate > 1:
        raise InvalidAmountError(f"Commission rate must be between 0 and 1 (got {rate})")

    gross = gross.quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    commission = (gross * rate).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    net = (gross - commission).quantize(TWOPLACES, rounding=ROUND_HALF_UP)

    return CommissionSplit(
        gross_sales=gross,
        commission_rate=rate.quantize(FOURPLACES, rounding=ROUND_HALF_UP),
        commission_amount=commission,
        net_payable=net,
    )
