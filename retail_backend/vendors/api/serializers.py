# vendors/api/serializers.py

from decimal import Decimal

from rest_framework import serializers

from vendors.models import Vendor, VendorInvoice, VendorPayout


# ======================================================
# READ SERIALIZERS
# ======================================================


class VendorSerializer(serializers.ModelSerializer):
    class Meta:
        model = Vendor
        fields = (
            "id",
            "name",
            "email",
            "commission_rate",
            "monthly_fee",
            "billing_start_date",
            "last_invoice_date",
            "account_active",
        )
        read_only_fields = fields


class VendorPayoutSerializer(serializers.ModelSerializer):
    class Meta:
        model = VendorPayout
        fields = (
            "id",
            "vendor",
            "gross_sales",
            "commission_rate",
            "commission_amount",
            "payable_amount",
            "created_by",
            "created_at",
            "metadata",
        )
        read_only_fields = fields


class VendorInvoiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = VendorInvoice
        fields = (
            "id",
            "vendor",
            "invoice_number",
            "billing_month",
            "fee_amount",
            "status",
            "issued_on",
            "due_date",
            "paid_at",
            "reminder_stage",
            "metadata",
            "void_reason",
            "voided_at",
        )
        read_only_fields = fields


# ======================================================
# COMMAND SERIALIZERS (what the client may send)
# ======================================================


class VendorInvoiceCreateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        required=False,
        min_value=Decimal("0.01"),
        help_text="Defaults to the vendor's monthly fee",
    )
    issue_date = serializers.DateField(required=False)
    metadata = serializers.JSONField(required=False)


class MarkInvoicePaidSerializer(serializers.Serializer):
    paid_at = serializers.DateField(required=False)


class VoidInvoiceSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=500)


class ReactivateVendorSerializer(serializers.Serializer):
    billing_start_date = serializers.DateField(required=False, allow_null=True)


class BillingSettingsSerializer(serializers.Serializer):
    monthly_fee = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        required=False,
        min_value=Decimal("0.00"),
    )
    billing_start_date = serializers.DateField(required=False)


class BillingRunSerializer(serializers.Serializer):
    date = serializers.DateField(required=False)


class BillingRunResultSerializer(serializers.Serializer):
    date = serializers.DateField()
    issued = serializers.ListField(child=serializers.IntegerField())
    issue_failures = serializers.ListField(child=serializers.IntegerField())
    reminders_sent = serializers.ListField(child=serializers.IntegerField())
    final_reminders_sent = serializers.ListField(child=serializers.IntegerField())
    vendors_disabled = serializers.ListField(child=serializers.IntegerField())
