from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Advertisement",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField()),
                ("image_url", models.URLField(blank=True)),
                ("target_url", models.URLField(blank=True)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("banner", "Banner"),
                            ("popup", "Popup"),
                            ("native", "Native"),
                            ("video", "Video"),
                        ],
                        default="banner",
                        max_length=10,
                    ),
                ),
                (
                    "position",
                    models.CharField(
                        choices=[
                            ("home_top", "Home Top"),
                            ("home_bottom", "Home Bottom"),
                            ("tournaments", "Tournaments"),
                            ("wallet", "Wallet"),
                            ("profile", "Profile"),
                        ],
                        db_index=True,
                        default="home_top",
                        max_length=20,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("start_date", models.DateTimeField()),
                ("end_date", models.DateTimeField(blank=True, null=True)),
                ("impressions", models.PositiveIntegerField(default=0)),
                ("clicks", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
