# vendors/api/urls.py

from django.urls import path

from vendors.api.views import (
    BillingRunView,
    BillingSettingsView,
    GeneratePayoutView,
    MarkInvoicePaidView,
    PayoutDetailView,
    PayoutListView,
    ReactivateVendorView,
    VendorInvoiceListCreateView,
    VoidInvoiceView,
)

urlpatterns = [
    # Billing driver (explicit, non-<id> route first)
    path("billing/run/", BillingRunView.as_view(), name="vendor-billing-run"),
    # Payouts
    path(
        "<int:vendor_id>/payouts/generate/",
        GeneratePayoutView.as_view(),
        name="vendor-payout-generate",
    ),
    path("<int:vendor_id>/payouts/", PayoutListView.as_view(), name="vendor-payout-list"),
    path(
        "<int:vendor_id>/payouts/<int:payout_id>/",
        PayoutDetailView.as_view(),
        name="vendor-payout-detail",
    ),
    # Fee invoices
    path(
        "<int:vendor_id>/invoices/",
        VendorInvoiceListCreateView.as_view(),
        name="vendor-invoice-list",
    ),
    path(
        "<int:vendor_id>/invoices/<int:invoice_id>/mark-paid/",
        MarkInvoicePaidView.as_view(),
        name="vendor-invoice-mark-paid",
    ),
    path(
        "<int:vendor_id>/invoices/<int:invoice_id>/void/",
        VoidInvoiceView.as_view(),
        name="vendor-invoice-void",
    ),
    # Vendor account
    path("<int:vendor_id>/reactivate/", ReactivateVendorView.as_view(), name="vendor-reactivate"),
    path(
        "<int:vendor_id>/billing-settings/",
        BillingSettingsView.as_view(),
        name="vendor-billing-settings",
    ),
]
