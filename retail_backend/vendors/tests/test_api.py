# vendors/tests/test_api.py

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from products.models import Product
from sales.models import Order, OrderItem
from vendors.models import Vendor, VendorInvoice, VendorPayout
from vendors.services.billing_service import generate_vendor_invoice

User = get_user_model()


class VendorApiTests(TestCase):
    """
    GUARANTEES:
    - Admin-only surface
    - Domain errors map to 400 / 404 / 409
    - Payout and invoice payloads expose the stored snapshot
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_superuser(
            username="admin", email="admin@example.com", password="pass"
        )
        self.staff = User.objects.create_user(username="clerk", password="pass")
        self.client.force_authenticate(user=self.admin)

        self.vendor = Vendor.objects.create(
            name="Acme Crafts", monthly_fee=Decimal("49.00"), commission_rate=Decimal("0.10")
        )
        product = Product.objects.create(
            sku="V-1", name="Mug", price=Decimal("25.00"), vendor=self.vendor
        )
        order = Order.objects.create(status=Order.STATUS_PAID)
        OrderItem.objects.create(order=order, product=product, quantity=4, price=Decimal("25.00"))

    # --------------------------------------------------
    # Payouts
    # --------------------------------------------------

    def test_generate_payout(self):
        url = reverse("vendor-payout-generate", args=[self.vendor.id])

        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data["gross_sales"]), Decimal("100.00"))
        self.assertEqual(Decimal(response.data["payable_amount"]), Decimal("90.00"))
        self.assertEqual(response.data["created_by"], "admin")

    def test_generate_payout_for_unknown_vendor(self):
        response = self.client.post(reverse("vendor-payout-generate", args=[999999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(VendorPayout.objects.exists())

    def test_list_and_fetch_payouts(self):
        self.client.post(reverse("vendor-payout-generate", args=[self.vendor.id]))
        payout = VendorPayout.objects.get()

        response = self.client.get(reverse("vendor-payout-list", args=[self.vendor.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p["id"] for p in response.data["payouts"]], [payout.id])

        response = self.client.get(
            reverse("vendor-payout-detail", args=[self.vendor.id, payout.id])
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], payout.id)

        other = Vendor.objects.create(name="Other")
        response = self.client.get(reverse("vendor-payout-detail", args=[other.id, payout.id]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.get(reverse("vendor-payout-list", args=[999999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    # --------------------------------------------------
    # Fee invoices
    # --------------------------------------------------

    def test_create_invoice_and_duplicate_conflict(self):
        url = reverse("vendor-invoice-list", args=[self.vendor.id])

        response = self.client.post(url, {"issue_date": "2025-03-01"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["billing_month"], "2025-03")
        self.assertEqual(response.data["status"], VendorInvoice.STATUS_UNPAID)

        response = self.client.post(url, {"issue_date": "2025-03-20"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["invoices"]), 1)

    def test_create_invoice_rejects_bad_amount(self):
        url = reverse("vendor-invoice-list", args=[self.vendor.id])

        response = self.client.post(url, {"amount": "0"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        free = Vendor.objects.create(name="Free")
        response = self.client.post(reverse("vendor-invoice-list", args=[free.id]), {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_mark_paid_and_void_transitions(self):
        invoice = generate_vendor_invoice(self.vendor.id, issue_date=date(2025, 3, 1))

        response = self.client.post(
            reverse("vendor-invoice-mark-paid", args=[self.vendor.id, invoice.id]),
            {"paid_at": "2025-03-03"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], VendorInvoice.STATUS_PAID)
        self.assertEqual(response.data["reminder_stage"], VendorInvoice.STAGE_TERMINAL)

        response = self.client.post(
            reverse("vendor-invoice-void", args=[self.vendor.id, invoice.id]),
            {"reason": "late"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post(
            reverse("vendor-invoice-mark-paid", args=[self.vendor.id, 999999]), {}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_void_invoice(self):
        invoice = generate_vendor_invoice(self.vendor.id, issue_date=date(2025, 3, 1))

        response = self.client.post(
            reverse("vendor-invoice-void", args=[self.vendor.id, invoice.id]),
            {"reason": "  duplicate  "},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], VendorInvoice.STATUS_VOID)
        self.assertEqual(response.data["void_reason"], "duplicate")

    # --------------------------------------------------
    # Vendor account + billing run
    # --------------------------------------------------

    def test_reactivate_and_billing_settings(self):
        Vendor.objects.filter(pk=self.vendor.pk).update(account_active=False)

        response = self.client.post(
            reverse("vendor-reactivate", args=[self.vendor.id]),
            {"billing_start_date": "2025-06-01"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["account_active"])
        self.assertEqual(response.data["billing_start_date"], "2025-06-01")

        response = self.client.patch(
            reverse("vendor-billing-settings", args=[self.vendor.id]),
            {"monthly_fee": "75.00"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Decimal(response.data["monthly_fee"]), Decimal("75.00"))

        response = self.client.patch(
            reverse("vendor-billing-settings", args=[self.vendor.id]),
            {"monthly_fee": "-5"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post(reverse("vendor-reactivate", args=[999999]), {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_billing_run(self):
        response = self.client.post(
            reverse("vendor-billing-run"), {"date": "2025-03-01"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["date"], "2025-03-01")
        self.assertEqual(len(response.data["issued"]), 1)
        self.assertEqual(VendorInvoice.objects.filter(vendor=self.vendor).count(), 1)

    # --------------------------------------------------
    # Access
    # --------------------------------------------------

    def test_non_admin_and_anonymous_are_denied(self):
        url = reverse("vendor-payout-generate", args=[self.vendor.id])

        self.client.force_authenticate(user=self.staff)
        self.assertEqual(self.client.post(url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=None)
        self.assertIn(
            self.client.post(url).status_code,
            (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN),
        )
        self.assertFalse(VendorPayout.objects.exists())
