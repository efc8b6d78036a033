# accounting/admin.py

from django.contrib import admin

from accounting.models.account import Account
from accounting.models.accounting_entry import AccountingEntry
from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalEntryLine

# ============================================================
# ACCOUNT
# ============================================================


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "account_type", "category", "is_active")
    list_filter = ("account_type", "is_active")
    search_fields = ("code", "name")
    ordering = ("code",)
    readonly_fields = ("created_at", "updated_at")

    fieldsets = (
        ("Account Identity", {"fields": ("code", "name", "account_type", "category")}),
        ("Status", {"fields": ("is_active",)}),
        ("System Fields", {"fields": ("created_at", "updated_at")}),
    )


# ============================================================
# JOURNAL ENTRY (READ-ONLY)
# ============================================================


class JournalEntryLineInline(admin.TabularInline):
    model = JournalEntryLine
    extra = 0
    can_delete = False
    fields = ("account", "description", "debit", "credit")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


class ReadOnlyAdmin(admin.ModelAdmin):
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(JournalEntry)
class JournalEntryAdmin(ReadOnlyAdmin):
    list_display = ("id", "entry_date", "reference", "description", "total_debit", "total_credit", "status")
    list_filter = ("status", "entry_date")
    search_fields = ("reference", "description")
    inlines = [JournalEntryLineInline]


@admin.register(AccountingEntry)
class AccountingEntryAdmin(ReadOnlyAdmin):
    list_display = ("id", "entry_type", "vendor", "payout", "gross_sales", "payable_amount", "created_at")
    list_filter = ("entry_type",)
