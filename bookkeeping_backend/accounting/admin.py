# accounting/admin.py

from django.contrib import admin

from accounting.models.account import Account
from accounting.models.expense import ExpenseTransaction
from accounting.models.journal import JournalEntry, JournalLine

# ============================================================
# ACCOUNT
# ============================================================


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "name",
        "account_type",
        "parent",
        "is_cash_equivalent",
        "is_active",
    )
    list_filter = ("account_type", "is_active", "is_cash_equivalent")
    search_fields = ("code", "name")
    ordering = ("code",)
    readonly_fields = ("created_at", "updated_at")

    fieldsets = (
        (
            "Account Identity",
            {
                "fields": ("code", "name", "account_type", "parent"),
            },
        ),
        (
            "Status",
            {
                "fields": ("is_active", "is_cash_equivalent"),
            },
        ),
        (
            "System Fields",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )

    def get_readonly_fields(self, request, obj=None):
        # account_type cannot change once the account exists
        if obj is not None:
            return self.readonly_fields + ("account_type",)
        return self.readonly_fields

    def has_delete_permission(self, request, obj=None):
        return False


# ============================================================
# JOURNAL ENTRY (READ-ONLY)
# ============================================================


class JournalLineInline(admin.TabularInline):
    model = JournalLine
    extra = 0
    fields = ("account", "debit_amount", "credit_amount", "description")
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(JournalEntry)
class JournalEntryAdmin(admin.ModelAdmin):
    list_display = (
        "entry_number",
        "date",
        "transaction_type",
        "status",
        "description",
        "reference",
        "created_at",
    )
    list_filter = ("status", "transaction_type", "date")
    search_fields = ("entry_number", "description", "reference")
    ordering = ("-date", "-entry_number")
    inlines = [JournalLineInline]

    readonly_fields = (
        "entry_number",
        "date",
        "description",
        "reference",
        "transaction_type",
        "status",
        "cash_flow_category",
        "reverses",
        "created_by",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# ============================================================
# EXPENSES (READ-ONLY)
# ============================================================


@admin.register(ExpenseTransaction)
class ExpenseTransactionAdmin(admin.ModelAdmin):
    list_display = ("id", "date", "description", "account", "total_amount", "status")
    list_filter = ("status", "date")
    search_fields = ("description", "reference")
    ordering = ("-date",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
