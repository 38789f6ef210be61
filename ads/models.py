from django.db import models


class Advertisement(models.Model):
    class AdType(models.TextChoices):
        BANNER = "banner", "Banner"
        POPUP = "popup", "Popup"
        NATIVE = "native", "Native"
        VIDEO = "video", "Video"

    class Position(models.TextChoices):
        HOME_TOP = "home_top", "Home Top"
        HOME_BOTTOM = "home_bottom", "Home Bottom"
        TOURNAMENTS = "tournaments", "Tournaments"
        WALLET = "wallet", "Wallet"
        PROFILE = "profile", "Profile"

    title = models.CharField(max_length=200)
    description = models.TextField()
    image_url = models.URLField(blank=True)
    target_url = models.URLField(blank=True)
    type = models.CharField(max_length=10, choices=AdType.choices, default=AdType.BANNER)
    position = models.CharField(
        max_length=20, choices=Position.choices, default=Position.HOME_TOP, db_index=True
    )
    is_active = models.BooleanField(default=True)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField(null=True, blank=True)
    impressions = models.PositiveIntegerField(default=0)
    clicks = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.title
