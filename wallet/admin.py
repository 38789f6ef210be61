# Django Imports
from django.contrib import admin

# 3rd-party Imports
from unfold.admin import ModelAdmin
from import_export.admin import ExportMixin
from import_export import resources

# Local Imports
from .models import DailyBonus, Transaction

# --- Resources for django-import-export ---

class TransactionResource(resources.ModelResource):
    class Meta:
        model = Transaction
        fields = ("id", "user__username", "type", "amount", "description", "tournament__title", "created_at")
        export_order = fields


class DailyBonusResource(resources.ModelResource):
    class Meta:
        model = DailyBonus
        fields = ("id", "user__username", "day", "dil_amount", "cash_amount", "claimed_at")


# --- ModelAdmins ---
# The ledger is append-only; rows are exported, never edited here.

class ReadOnlyAdminMixin:
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Transaction)
class TransactionAdmin(ReadOnlyAdminMixin, ExportMixin, ModelAdmin):
    resource_class = TransactionResource
    list_display = ("id", "user", "type", "amount", "tournament", "created_at")
    list_filter = ("type", "created_at")
    search_fields = ("user__username", "description")
    date_hierarchy = "created_at"


@admin.register(DailyBonus)
class DailyBonusAdmin(ReadOnlyAdminMixin, ExportMixin, ModelAdmin):
    resource_class = DailyBonusResource
    list_display = ("user", "day", "dil_amount", "cash_amount", "claimed_at")
    list_filter = ("day",)
    search_fields = ("user__username",)
