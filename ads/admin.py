# Django Imports
from django.contrib import admin

# 3rd-party Imports
from unfold.admin import ModelAdmin
from import_export.admin import ImportExportModelAdmin
from import_export import resources

# Local Imports
from .models import Advertisement
from .services import set_ads_active


class AdvertisementResource(resources.ModelResource):
    class Meta:
        model = Advertisement
        fields = (
            "id",
            "title",
            "type",
            "position",
            "is_active",
            "start_date",
            "end_date",
            "impressions",
            "clicks",
        )
        export_order = fields


@admin.register(Advertisement)
class AdvertisementAdmin(ImportExportModelAdmin, ModelAdmin):
    resource_class = AdvertisementResource
    list_display = ("title", "type", "position", "is_active", "start_date", "end_date", "impressions", "clicks")
    list_filter = ("type", "position", "is_active")
    search_fields = ("title", "description")
    readonly_fields = ("impressions", "clicks", "created_at")
    actions = ["activate_ads", "deactivate_ads"]

    @admin.action(description="Activate selected ads")
    def activate_ads(self, request, queryset):
        updated_count = set_ads_active(queryset, True)
        self.message_user(request, f"{updated_count} ads were activated.", "success")

    @admin.action(description="Deactivate selected ads")
    def deactivate_ads(self, request, queryset):
        updated_count = set_ads_active(queryset, False)
        self.message_user(request, f"{updated_count} ads were deactivated.", "success")
