from django.apps import AppConfig


class ManagementDashboardConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "management_dashboard"
