# vendors/admin.py

from django.contrib import admin

from vendors.models import Vendor, VendorInvoice, VendorPayout


@admin.register(Vendor)
class VendorAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "commission_rate", "monthly_fee", "account_active", "last_invoice_date")
    list_filter = ("account_active",)
    search_fields = ("name", "email")
    readonly_fields = ("last_invoice_date", "created_at", "updated_at")


@admin.register(VendorInvoice)
class VendorInvoiceAdmin(admin.ModelAdmin):
    """State changes go through the billing service, never the admin form."""

    list_display = ("invoice_number", "vendor", "billing_month", "fee_amount", "status", "reminder_stage", "due_date")
    list_filter = ("status", "reminder_stage", "billing_month")
    search_fields = ("invoice_number", "vendor__name")
    readonly_fields = [f.name for f in VendorInvoice._meta.fields]

    def has_add_permission(self, request):
        return False


@admin.register(VendorPayout)
class VendorPayoutAdmin(admin.ModelAdmin):
    list_display = ("id", "vendor", "gross_sales", "commission_amount", "payable_amount", "created_by", "created_at")
    search_fields = ("vendor__name",)
    readonly_fields = [f.name for f in VendorPayout._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
