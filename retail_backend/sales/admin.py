# sales/admin.py

from django.contrib import admin

from sales.models import Invoice, InvoiceItem, Order, OrderItem


# ======================================================
# INVOICE ADMIN
# ======================================================


class InvoiceItemInline(admin.TabularInline):
    model = InvoiceItem
    extra = 0
    readonly_fields = ("product", "description", "quantity", "price")


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ("invoice_no", "doc_type", "status", "customer_name", "total", "created_at")
    readonly_fields = ("invoice_no", "subtotal", "tax_amount", "total", "created_at")
    search_fields = ("invoice_no", "customer_name")
    list_filter = ("doc_type", "status", "created_at")
    inlines = [InvoiceItemInline]


# ======================================================
# ORDER ADMIN
# ======================================================


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("product", "quantity", "price")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "customer_name", "status", "total", "paid_at", "created_at")
    readonly_fields = ("subtotal", "tax_amount", "total", "paid_at", "created_at")
    search_fields = ("customer_name", "customer_email")
    list_filter = ("status",)
    inlines = [OrderItemInline]
