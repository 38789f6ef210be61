# Django Imports
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

# 3rd-party Imports
from unfold.admin import ModelAdmin
from import_export import resources
from import_export.admin import ExportMixin

# Local Imports
from .models import User


class UserResource(resources.ModelResource):
    class Meta:
        model = User
        fields = (
            "id",
            "username",
            "email",
            "role",
            "balance",
            "total_earnings",
            "tournaments_won",
            "games_played",
            "dil_balance",
            "total_dil_earned",
            "medals",
            "is_active",
            "date_joined",
        )


@admin.register(User)
class UserAdmin(ExportMixin, BaseUserAdmin, ModelAdmin):
    resource_class = UserResource
    list_display = (
        "username",
        "email",
        "role",
        "balance",
        "dil_balance",
        "total_earnings",
        "is_active",
    )
    search_fields = ("username", "email")
    list_filter = ("role", "is_staff", "is_active")
    # Balances move only through the ledger service.
    readonly_fields = (
        "balance",
        "total_earnings",
        "tournaments_won",
        "games_played",
        "dil_balance",
        "total_dil_earned",
        "medals",
        "last_login",
        "date_joined",
    )

    fieldsets = (
        (None, {"fields": ("username", "password")}),
        ("Profile", {"fields": ("email", "avatar", "role"), "classes": ("tab",)}),
        (
            "Wallet",
            {
                "fields": (
                    "balance",
                    "total_earnings",
                    "dil_balance",
                    "total_dil_earned",
                ),
                "classes": ("tab",),
            },
        ),
        (
            "Stats",
            {"fields": ("tournaments_won", "games_played", "medals"), "classes": ("tab",)},
        ),
        (
            "Permissions",
            {"fields": ("is_active", "is_staff", "is_superuser", "groups"), "classes": ("tab",)},
        ),
        ("Important dates", {"fields": ("last_login", "date_joined"), "classes": ("tab",)}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("username", "email", "password1", "password2")}),
    )

    actions = ["ban_users", "unban_users"]

    @admin.action(description="Ban selected users")
    def ban_users(self, request, queryset):
        updated_count = queryset.update(is_active=False)
        self.message_user(request, f"{updated_count} users were banned.", "success")

    @admin.action(description="Unban selected users")
    def unban_users(self, request, queryset):
        updated_count = queryset.update(is_active=True)
        self.message_user(request, f"{updated_count} users were unbanned.", "success")
