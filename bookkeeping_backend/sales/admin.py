# sales/admin.py

from django.contrib import admin

from sales.models import SalesLineItem, SalesTransaction


# ======================================================
# SALES TRANSACTION ADMIN (READ-ONLY)
# ======================================================


class SalesLineItemInline(admin.TabularInline):
    model = SalesLineItem
    extra = 0
    fields = ("product", "quantity", "unit_price", "line_total")
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(SalesTransaction)
class SalesTransactionAdmin(admin.ModelAdmin):
    list_display = (
        "invoice_number",
        "date",
        "customer",
        "subtotal",
        "tax_amount",
        "total_amount",
        "status",
    )
    list_filter = ("status", "date")
    search_fields = ("invoice_number", "customer__name")
    ordering = ("-date", "-invoice_number")
    inlines = [SalesLineItemInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
