# sales/api/serializers.py

from decimal import Decimal

from rest_framework import serializers

from sales.models import Invoice, InvoiceItem, Order, OrderItem


# ======================================================
# INPUT
# ======================================================


class DocumentLineInputSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    quantity = serializers.IntegerField(min_value=1)
    price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        required=False,
        min_value=Decimal("0.00"),
        help_text="Defaults to the product's current price",
    )


class InvoiceCreateSerializer(serializers.Serializer):
    customer_name = serializers.CharField(required=False, allow_blank=True, default="")
    doc_type = serializers.ChoiceField(choices=Invoice.DOC_TYPES, default=Invoice.DOC_INVOICE)
    gst_rate = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal("0.00"), default=Decimal("0.00")
    )
    items = DocumentLineInputSerializer(many=True, allow_empty=False)


class OrderLineInputSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)


class OrderCreateSerializer(serializers.Serializer):
    customer_name = serializers.CharField(required=False, allow_blank=True, default="")
    customer_email = serializers.EmailField(required=False, allow_blank=True, default="")
    gst_rate = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal("0.00"), default=Decimal("0.00")
    )
    items = OrderLineInputSerializer(many=True, allow_empty=False)


# ======================================================
# OUTPUT
# ======================================================


class InvoiceItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = InvoiceItem
        fields = ("id", "product", "description", "quantity", "price")
        read_only_fields = fields


class InvoiceSerializer(serializers.ModelSerializer):
    items = InvoiceItemSerializer(many=True, read_only=True)

    class Meta:
        model = Invoice
        fields = (
            "id",
            "invoice_no",
            "customer_name",
            "doc_type",
            "status",
            "gst_rate",
            "subtotal",
            "tax_amount",
            "total",
            "created_at",
            "items",
        )
        read_only_fields = fields


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = ("id", "product", "quantity", "price")
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = (
            "id",
            "customer_name",
            "customer_email",
            "status",
            "gst_rate",
            "subtotal",
            "tax_amount",
            "total",
            "paid_at",
            "created_at",
            "items",
        )
        read_only_fields = fields
