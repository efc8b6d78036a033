# sales/tests/test_sales_posting.py

from decimal import Decimal
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from accounting.models.account import Account
from accounting.models.journal import JournalEntry
from accounting.services.exceptions import AccountMissingError
from products.models import Product
from sales.models import Invoice, Order
from sales.services.exceptions import EmptyDocumentError, OrderStateError, UnknownProductError
from sales.services.invoice_service import issue_invoice
from sales.services.order_service import create_order, mark_order_paid
from vendors.models import Vendor

User = get_user_model()


@override_settings(ACCOUNTING_POSTING_ENABLED=True)
class InvoicePostingTests(TestCase):
    """
    GUARANTEES:
    - Issued invoices are posted in the same transaction
    - A posting failure leaves no invoice behind
    - Quotes never touch the ledger
    """

    def setUp(self):
        call_command("seed_retail_chart", stdout=StringIO())
        vendor = Vendor.objects.create(name="Acme Crafts", commission_rate=Decimal("0.10"))
        self.vendor_product = Product.objects.create(
            sku="V-1", name="Vendor Mug", price=Decimal("30.00"), vendor=vendor
        )
        self.house_product = Product.objects.create(
            sku="H-1", name="House Tea", price=Decimal("40.00")
        )

    def _items(self):
        return [
            {"product_id": self.vendor_product.id, "quantity": 2},
            {"product_id": self.house_product.id, "quantity": 1},
        ]

    def test_issued_invoice_is_posted(self):
        invoice = issue_invoice(items=self._items(), gst_rate=Decimal("8.00"))

        self.assertEqual(invoice.status, Invoice.STATUS_ISSUED)
        self.assertEqual(invoice.subtotal, Decimal("100.00"))
        self.assertEqual(invoice.tax_amount, Decimal("8.00"))
        self.assertEqual(invoice.total, Decimal("108.00"))
        self.assertTrue(invoice.invoice_no.startswith("INV-"))

        entry = JournalEntry.objects.get(reference=f"INV-{invoice.id}")
        self.assertEqual(entry.total_debit, entry.total_credit)
        self.assertEqual(entry.total_debit, Decimal("168.00"))

    def test_missing_chart_rolls_invoice_back(self):
        Account.objects.filter(code="1200").update(is_active=False)

        with self.assertRaises(AccountMissingError):
            issue_invoice(items=self._items(), gst_rate=Decimal("8.00"))

        self.assertFalse(Invoice.objects.exists())
        self.assertFalse(JournalEntry.objects.exists())

    def test_quote_is_not_posted(self):
        quote = issue_invoice(items=self._items(), doc_type=Invoice.DOC_QUOTE)

        self.assertEqual(quote.status, Invoice.STATUS_DRAFT)
        self.assertTrue(quote.invoice_no.startswith("QT-"))
        self.assertFalse(JournalEntry.objects.exists())

    def test_free_text_line_without_product(self):
        invoice = issue_invoice(
            items=[{"description": "Gift wrap", "quantity": 1, "price": "2.50"}]
        )

        self.assertEqual(invoice.total, Decimal("2.50"))
        self.assertTrue(JournalEntry.objects.filter(reference=f"INV-{invoice.id}").exists())

    def test_bad_lines_are_rejected(self):
        with self.assertRaises(EmptyDocumentError):
            issue_invoice(items=[])
        with self.assertRaises(UnknownProductError):
            issue_invoice(items=[{"product_id": 999999, "quantity": 1}])

        self.assertFalse(Invoice.objects.exists())

    @override_settings(ACCOUNTING_POSTING_ENABLED=False)
    def test_posting_disabled_skips_ledger(self):
        issue_invoice(items=self._items())

        self.assertEqual(Invoice.objects.count(), 1)
        self.assertFalse(JournalEntry.objects.exists())


@override_settings(ACCOUNTING_POSTING_ENABLED=True)
class OrderPaymentTests(TestCase):
    def setUp(self):
        call_command("seed_retail_chart", stdout=StringIO())
        vendor = Vendor.objects.create(name="Acme Crafts")
        self.product = Product.objects.create(
            sku="V-1", name="Vendor Mug", price=Decimal("25.00"), vendor=vendor
        )

    def test_mark_paid_posts_once(self):
        order = create_order(
            items=[{"product_id": self.product.id, "quantity": 2}],
            customer_email=" guest@example.com ",
        )
        self.assertEqual(order.status, Order.STATUS_PENDING)
        self.assertEqual(order.customer_email, "guest@example.com")
        self.assertFalse(JournalEntry.objects.exists())

        order = mark_order_paid(order.id)
        self.assertEqual(order.status, Order.STATUS_PAID)
        self.assertIsNotNone(order.paid_at)
        self.assertTrue(JournalEntry.objects.filter(reference=f"ORDER-{order.id}").exists())

        mark_order_paid(order.id)
        self.assertEqual(JournalEntry.objects.count(), 1)

    def test_order_lines_need_products(self):
        with self.assertRaises(UnknownProductError):
            create_order(items=[{"description": "Loose item", "quantity": 1, "price": "1.00"}])

    def test_cancelled_order_cannot_be_paid(self):
        order = Order.objects.create(status=Order.STATUS_CANCELLED)

        with self.assertRaises(OrderStateError):
            mark_order_paid(order.id)

        self.assertFalse(JournalEntry.objects.exists())


@override_settings(ACCOUNTING_POSTING_ENABLED=True)
class SalesApiTests(TestCase):
    def setUp(self):
        call_command("seed_retail_chart", stdout=StringIO())
        self.client = APIClient()
        self.user = User.objects.create_user(username="cashier", password="pass")
        self.client.force_authenticate(user=self.user)
        self.product = Product.objects.create(sku="H-1", name="House Tea", price=Decimal("40.00"))

    def test_create_and_list_invoices(self):
        response = self.client.post(
            reverse("sales-invoices"),
            {"customer_name": "Walk-in", "gst_rate": "5.00", "items": [{"product_id": self.product.id, "quantity": 1}]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data["total"]), Decimal("42.00"))
        invoice = Invoice.objects.get()
        self.assertEqual(invoice.created_by, self.user)
        self.assertTrue(JournalEntry.objects.filter(reference=f"INV-{invoice.id}").exists())

        response = self.client.get(reverse("sales-invoices"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)

    def test_unknown_product_is_a_bad_request(self):
        response = self.client.post(
            reverse("sales-invoices"),
            {"items": [{"product_id": 999999, "quantity": 1}]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_order_flow(self):
        response = self.client.post(
            reverse("sales-orders"),
            {"items": [{"product_id": self.product.id, "quantity": 2}]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        order_id = response.data["id"]

        response = self.client.post(reverse("sales-order-mark-paid", args=[order_id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], Order.STATUS_PAID)

        response = self.client.post(reverse("sales-order-mark-paid", args=[999999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_anonymous_is_rejected(self):
        self.client.force_authenticate(user=None)

        response = self.client.get(reverse("sales-invoices"))
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))
