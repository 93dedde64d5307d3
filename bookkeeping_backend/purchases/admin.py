# purchases/admin.py

from django.contrib import admin

from purchases.models import PurchaseLineItem, PurchaseTransaction


class PurchaseLineItemInline(admin.TabularInline):
    model = PurchaseLineItem
    extra = 0
    fields = ("product", "quantity", "unit_cost", "line_total")
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(PurchaseTransaction)
class PurchaseTransactionAdmin(admin.ModelAdmin):
    list_display = ("invoice_number", "supplier", "date", "total_amount", "status")
    list_filter = ("status", "date")
    search_fields = ("invoice_number", "supplier__name")
    ordering = ("-date",)
    inlines = [PurchaseLineItemInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
