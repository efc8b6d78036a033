# sales/api/urls.py

"""
SALES API URLS

    /api/sales/invoices/
    /api/sales/orders/
    /api/sales/orders/<id>/mark-paid/
"""

from django.urls import path

from sales.api.views import InvoiceListCreateView, OrderCreateView, OrderMarkPaidView

urlpatterns = [
    path("invoices/", InvoiceListCreateView.as_view(), name="sales-invoices"),
    path("orders/", OrderCreateView.as_view(), name="sales-orders"),
    path("orders/<int:order_id>/mark-paid/", OrderMarkPaidView.as_view(), name="sales-order-mark-paid"),
]
