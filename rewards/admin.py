# Django Imports
from django.contrib import admin

# 3rd-party Imports
from unfold.admin import ModelAdmin
from import_export.admin import ExportMixin, ImportExportModelAdmin
from import_export import resources

# Local Imports
from .models import SpinHistory, SpinWheelReward


# --- Resources for django-import-export ---

class SpinWheelRewardResource(resources.ModelResource):
    class Meta:
        model = SpinWheelReward
        fields = ("id", "kind", "value", "probability", "dil_cost", "label", "is_active")


class SpinHistoryResource(resources.ModelResource):
    class Meta:
        model = SpinHistory
        fields = ("id", "user__username", "reward_kind", "reward_value", "dil_spent", "roll", "created_at")


# --- ModelAdmins ---

@admin.register(SpinWheelReward)
class SpinWheelRewardAdmin(ImportExportModelAdmin, ModelAdmin):
    resource_class = SpinWheelRewardResource
    list_display = ("id", "label", "kind", "value", "probability", "dil_cost", "is_active")
    list_filter = ("kind", "is_active")
    list_editable = ("is_active",)
    search_fields = ("label",)
    ordering = ("id",)


@admin.register(SpinHistory)
class SpinHistoryAdmin(ExportMixin, ModelAdmin):
    resource_class = SpinHistoryResource
    list_display = ("user", "reward_kind", "reward_value", "dil_spent", "created_at")
    list_filter = ("reward_kind",)
    search_fields = ("user__username",)
    readonly_fields = ("user", "reward", "reward_kind", "reward_value", "dil_spent", "roll", "created_at")

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
