# products/admin.py

from django.contrib import admin

from products.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("sku", "name", "price", "vendor", "is_active")
    list_filter = ("is_active", "vendor")
    search_fields = ("sku", "name")
    list_select_related = ("vendor",)
