# vendors/tests/test_commission.py

from decimal import Decimal

from django.test import SimpleTestCase, override_settings

from accounting.services.exceptions import InvalidAmountError
from vendors.services.commission import compute_split


class CommissionSplitTests(SimpleTestCase):
    def test_basic_split(self):
        split = compute_split(Decimal("100.00"), Decimal("0.10"))

        self.assertEqual(split.gross_sales, Decimal("100.00"))
        self.assertEqual(split.commission_amount, Decimal("10.00"))
        self.assertEqual(split.net_payable, Decimal("90.00"))

    def test_parts_always_add_back_to_gross(self):
        for gross, rate in (("33.33", "0.15"), ("0.01", "0.5"), ("19.99", "0.0725"), ("1000", "1")):
            split = compute_split(gross, rate)
            self.assertEqual(split.commission_amount + split.net_payable, split.gross_sales)

    def test_half_up_rounding(self):
        split = compute_split("33.33", "0.15")

        self.assertEqual(split.commission_amount, Decimal("5.00"))
        self.assertEqual(split.net_payable, Decimal("28.33"))

    def test_missing_rate_uses_default(self):
        split = compute_split("50.00")

        self.assertEqual(split.commission_rate, Decimal("0.1000"))
        self.assertEqual(split.commission_amount, Decimal("5.00"))

    @override_settings(VENDOR_DEFAULT_COMMISSION_RATE=Decimal("0.20"))
    def test_default_rate_comes_from_settings(self):
        self.assertEqual(compute_split("50.00").commission_amount, Decimal("10.00"))

    def test_zero_gross_is_allowed(self):
        split = compute_split(0, "0.10")

        self.assertEqual(split.commission_amount, Decimal("0.00"))
        self.assertEqual(split.net_payable, Decimal("0.00"))

    def test_invalid_inputs_raise(self):
        for gross, rate in (
            ("-1", "0.10"),
            ("NaN", "0.10"),
            ("Infinity", "0.10"),
            ("abc", "0.10"),
            ("10", "-0.01"),
            ("10", "1.01"),
        ):
            with self.subTest(gross=gross, rate=rate):
                with self.assertRaises(InvalidAmountError):
                    compute_split(gross, rate)
