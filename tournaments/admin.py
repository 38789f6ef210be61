# Django Imports
from django.contrib import admin

# 3rd-party Imports
from unfold.admin import ModelAdmin, TabularInline
from import_export.admin import ExportMixin
from import_export import resources

# Local Imports
from .models import Registration, Tournament


# --- Resources for django-import-export ---

class TournamentResource(resources.ModelResource):
    class Meta:
        model = Tournament
        fields = (
            "id",
            "title",
            "game",
            "game_mode",
            "map",
            "prize_pool",
            "entry_fee",
            "first_prize",
            "second_prize",
            "third_prize",
            "max_players",
            "current_players",
            "status",
            "start_time",
            "end_time",
        )
        export_order = fields


class RegistrationResource(resources.ModelResource):
    class Meta:
        model = Registration
        fields = ("id", "user__username", "tournament__title", "position", "kills", "earnings", "settled_at")
        export_order = fields


# --- Inlines ---

class RegistrationInline(TabularInline):
    model = Registration
    extra = 0
    can_delete = False
    fields = ("user", "position", "kills", "earnings", "settled_at")
    readonly_fields = fields
    classes = ["collapse"]

    def has_add_permission(self, request, obj=None):
        return False


# --- ModelAdmins ---

@admin.register(Tournament)
class TournamentAdmin(ExportMixin, ModelAdmin):
    resource_class = TournamentResource
    list_display = (
        "title",
        "game",
        "game_mode",
        "status",
        "entry_fee",
        "prize_pool",
        "current_players",
        "max_players",
        "start_time",
    )
    list_filter = ("game", "game_mode", "status")
    search_fields = ("title", "map")
    # Player counts move through joins; status through the status endpoint so
    # cancellations refund entry fees. Export only: imports would bypass both.
    readonly_fields = ("current_players", "status", "created_at")
    inlines = [RegistrationInline]

    fieldsets = (
        ("Basic Info", {"fields": ("title", "game", "game_mode", "map"), "classes": ("tab",)}),
        (
            "Prizes",
            {
                "fields": ("prize_pool", "entry_fee", "first_prize", "second_prize", "third_prize"),
                "classes": ("tab",),
            },
        ),
        (
            "Schedule",
            {
                "fields": ("start_time", "end_time", "status", "max_players", "current_players", "created_at"),
                "classes": ("tab",),
            },
        ),
    )


@admin.register(Registration)
class RegistrationAdmin(ExportMixin, ModelAdmin):
    resource_class = RegistrationResource
    list_display = ("user", "tournament", "position", "kills", "earnings", "registered_at", "settled_at")
    list_filter = ("tournament__game", "tournament__status")
    search_fields = ("user__username", "tournament__title")
    readonly_fields = ("user", "tournament", "position", "kills", "earnings", "registered_at", "settled_at")

    def has_add_permission(self, request):
        return False
