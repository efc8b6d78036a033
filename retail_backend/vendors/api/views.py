# vendors/api/views.py

"""
======================================================
PATH: vendors/api/views.py
======================================================
VENDOR PAYOUT + BILLING API (ADMIN ONLY)

Payouts:
    POST /api/vendors/<id>/payouts/generate/
    GET  /api/vendors/<id>/payouts/
    GET  /api/vendors/<id>/payouts/<payout_id>/

Billing:
    GET   /api/vendors/<id>/invoices/
    POST  /api/vendors/<id>/invoices/
    POST  /api/vendors/<id>/invoices/<invoice_id>/mark-paid/
    POST  /api/vendors/<id>/invoices/<invoice_id>/void/
    POST  /api/vendors/<id>/reactivate/
    PATCH /api/vendors/<id>/billing-settings/
    POST  /api/vendors/billing/run/

Views only translate HTTP <-> service calls; all rules live in vendors.services.
"""

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from vendors.api.errors import HANDLED_ERRORS, error_response
from vendors.api.serializers import (
    BillingRunResultSerializer,
    BillingRunSerializer,
    BillingSettingsSerializer,
    MarkInvoicePaidSerializer,
    ReactivateVendorSerializer,
    VendorInvoiceCreateSerializer,
    VendorInvoiceSerializer,
    VendorPayoutSerializer,
    VendorSerializer,
    VoidInvoiceSerializer,
)
from vendors.models import Vendor
from vendors.services import billing_service, payout_service

logger = logging.getLogger("vendors")


class VendorAdminView(GenericAPIView):
    permission_classes = [IsAdminUser]
    pagination_class = None

    def vendor_missing(self, vendor_id):
        if Vendor.objects.filter(pk=vendor_id).exists():
            return None
        return Response({"detail": "Vendor not found"}, status=status.HTTP_404_NOT_FOUND)


# ======================================================
# PAYOUTS
# ======================================================


class GeneratePayoutView(VendorAdminView):
    serializer_class = VendorPayoutSerializer

    @extend_schema(tags=["vendor-payouts"], request=None, responses={201: VendorPayoutSerializer})
    def post(self, request, vendor_id: int):
        try:
            payout = payout_service.generate_payout(vendor_id, created_by=request.user)
        except HANDLED_ERRORS as exc:
            return error_response(exc)
        except Exception as exc:
            logger.exception("Payout generation failed", extra={"vendor_id": vendor_id})
            return Response({"detail": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(VendorPayoutSerializer(payout).data, status=status.HTTP_201_CREATED)


class PayoutListView(VendorAdminView):
    serializer_class = VendorPayoutSerializer

    @extend_schema(tags=["vendor-payouts"], responses=VendorPayoutSerializer(many=True))
    def get(self, request, vendor_id: int):
        missing = self.vendor_missing(vendor_id)
        if missing:
            return missing

        rows = payout_service.list_payouts(vendor_id)
        return Response({"payouts": VendorPayoutSerializer(rows, many=True).data})


class PayoutDetailView(VendorAdminView):
    serializer_class = VendorPayoutSerializer

    @extend_schema(tags=["vendor-payouts"], responses=VendorPayoutSerializer)
    def get(self, request, vendor_id: int, payout_id: int):
        payout = payout_service.get_payout(vendor_id, payout_id)
        if payout is None:
            return Response({"detail": "Payout not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(VendorPayoutSerializer(payout).data)


# ======================================================
# FEE INVOICES
# ======================================================


class VendorInvoiceListCreateView(VendorAdminView):
    serializer_class = VendorInvoiceSerializer

    @extend_schema(tags=["vendor-billing"], responses=VendorInvoiceSerializer(many=True))
    def get(self, request, vendor_id: int):
        missing = self.vendor_missing(vendor_id)
        if missing:
            return missing

        try:
            limit = min(max(int(request.query_params.get("limit", 50)), 1), 500)
        except (TypeError, ValueError):
            limit = 50

        rows = billing_service.list_vendor_invoices(vendor_id, limit=limit)
        return Response({"invoices": VendorInvoiceSerializer(rows, many=True).data})

    @extend_schema(
        tags=["vendor-billing"],
        request=VendorInvoiceCreateSerializer,
        responses={201: VendorInvoiceSerializer},
    )
    def post(self, request, vendor_id: int):
        serializer = VendorInvoiceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            invoice = billing_service.generate_vendor_invoice(
                vendor_id,
                amount=data.get("amount"),
                issue_date=data.get("issue_date"),
                metadata=data.get("metadata"),
            )
        except HANDLED_ERRORS as exc:
            return error_response(exc)

        return Response(VendorInvoiceSerializer(invoice).data, status=status.HTTP_201_CREATED)


class MarkInvoicePaidView(VendorAdminView):
    serializer_class = MarkInvoicePaidSerializer

    @extend_schema(
        tags=["vendor-billing"],
        request=MarkInvoicePaidSerializer,
        responses=VendorInvoiceSerializer,
    )
    def post(self, request, vendor_id: int, invoice_id: int):
        serializer = MarkInvoicePaidSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            invoice = billing_service.mark_invoice_paid(
                vendor_id, invoice_id, paid_at=serializer.validated_data.get("paid_at")
            )
        except HANDLED_ERRORS as exc:
            return error_response(exc)

        return Response(VendorInvoiceSerializer(invoice).data)


class VoidInvoiceView(VendorAdminView):
    serializer_class = VoidInvoiceSerializer

    @extend_schema(
        tags=["vendor-billing"],
        request=VoidInvoiceSerializer,
        responses=VendorInvoiceSerializer,
    )
    def post(self, request, vendor_id: int, invoice_id: int):
        serializer = VoidInvoiceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            invoice = billing_service.void_invoice(
                vendor_id, invoice_id, reason=serializer.validated_data.get("reason")
            )
        except HANDLED_ERRORS as exc:
            return error_response(exc)

        return Response(VendorInvoiceSerializer(invoice).data)


# ======================================================
# VENDOR ACCOUNT
# ======================================================


class ReactivateVendorView(VendorAdminView):
    serializer_class = ReactivateVendorSerializer

    @extend_schema(
        tags=["vendor-billing"],
        request=ReactivateVendorSerializer,
        responses=VendorSerializer,
    )
    def post(self, request, vendor_id: int):
        serializer = ReactivateVendorSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            vendor = billing_service.reactivate_vendor_account(
                vendor_id,
                billing_start_date=serializer.validated_data.get("billing_start_date"),
            )
        except HANDLED_ERRORS as exc:
            return error_response(exc)

        return Response(VendorSerializer(vendor).data)


class BillingSettingsView(VendorAdminView):
    serializer_class = BillingSettingsSerializer

    @extend_schema(
        tags=["vendor-billing"],
        request=BillingSettingsSerializer,
        responses=VendorSerializer,
    )
    def patch(self, request, vendor_id: int):
        serializer = BillingSettingsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            vendor = billing_service.update_vendor_billing_settings(
                vendor_id,
                monthly_fee=data.get("monthly_fee"),
                billing_start_date=data.get("billing_start_date"),
            )
        except HANDLED_ERRORS as exc:
            return error_response(exc)

        return Response(VendorSerializer(vendor).data)


class BillingRunView(VendorAdminView):
    serializer_class = BillingRunSerializer

    @extend_schema(
        tags=["vendor-billing"],
        request=BillingRunSerializer,
        responses=BillingRunResultSerializer,
    )
    def post(self, request):
        serializer = BillingRunSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = billing_service.process_daily_vendor_billing(
            today=serializer.validated_data.get("date")
        )
        return Response(BillingRunResultSerializer(result.as_dict()).data)
