# sales/api/views.py

"""
POS / ORDER ENDPOINTS

    GET  /api/sales/invoices/
    POST /api/sales/invoices/
    POST /api/sales/orders/
    POST /api/sales/orders/<id>/mark-paid/

Issued invoices and paid orders are posted to the ledger inside the same
transaction (when ACCOUNTING_POSTING_ENABLED); a posting failure rolls the
document back and surfaces here.
"""

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounting.services.exceptions import AccountingServiceError
from sales.api.serializers import (
    InvoiceCreateSerializer,
    InvoiceSerializer,
    OrderCreateSerializer,
    OrderSerializer,
)
from sales.models import Invoice
from sales.services.exceptions import OrderNotFoundError, SalesServiceError
from sales.services.invoice_service import issue_invoice
from sales.services.order_service import create_order, mark_order_paid

logger = logging.getLogger("sales")


def _posting_failed(exc: AccountingServiceError, **context) -> Response:
    logger.error("Ledger posting failed", extra={"error": str(exc), **context})
    return Response({"detail": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class InvoiceListCreateView(GenericAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = InvoiceSerializer
    queryset = Invoice.objects.prefetch_related("items").order_by("-created_at")

    @extend_schema(tags=["sales"], responses=InvoiceSerializer(many=True))
    def get(self, request):
        page = self.paginate_queryset(self.get_queryset())
        data = InvoiceSerializer(page, many=True).data
        return self.get_paginated_response(data)

    @extend_schema(tags=["sales"], request=InvoiceCreateSerializer, responses={201: InvoiceSerializer})
    def post(self, request):
        serializer = InvoiceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            invoice = issue_invoice(
                items=data["items"],
                customer_name=data.get("customer_name", ""),
                gst_rate=data.get("gst_rate"),
                doc_type=data.get("doc_type"),
                user=request.user,
            )
        except SalesServiceError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except AccountingServiceError as exc:
            return _posting_failed(exc)

        return Response(InvoiceSerializer(invoice).data, status=status.HTTP_201_CREATED)


class OrderCreateView(GenericAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer

    @extend_schema(tags=["sales"], request=OrderCreateSerializer, responses={201: OrderSerializer})
    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            order = create_order(
                items=data["items"],
                customer_name=data.get("customer_name", ""),
                customer_email=data.get("customer_email", ""),
                gst_rate=data.get("gst_rate"),
            )
        except SalesServiceError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderMarkPaidView(GenericAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer

    @extend_schema(tags=["sales"], request=None, responses=OrderSerializer)
    def post(self, request, order_id: int):
        try:
            order = mark_order_paid(order_id)
        except OrderNotFoundError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except SalesServiceError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except AccountingServiceError as exc:
            return _posting_failed(exc, order_id=order_id)

        return Response(OrderSerializer(order).data)
