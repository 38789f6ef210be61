import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Tournament",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                (
                    "game",
                    models.CharField(
                        choices=[("PUBG", "PUBG"), ("FREE_FIRE", "Free Fire")], db_index=True, max_length=20
                    ),
                ),
                (
                    "game_mode",
                    models.CharField(
                        choices=[("solo", "Solo"), ("duo", "Duo"), ("squad", "Squad")], max_length=10
                    ),
                ),
                ("map", models.CharField(max_length=100)),
                ("prize_pool", models.DecimalField(decimal_places=2, max_digits=12)),
                ("entry_fee", models.DecimalField(decimal_places=2, max_digits=12)),
                ("first_prize", models.DecimalField(decimal_places=2, max_digits=12)),
                ("second_prize", models.DecimalField(decimal_places=2, max_digits=12)),
                ("third_prize", models.DecimalField(decimal_places=2, max_digits=12)),
                ("max_players", models.PositiveIntegerField()),
                ("current_players", models.PositiveIntegerField(default=0)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("upcoming", "Upcoming"),
                            ("live", "Live"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        db_index=True,
                        default="upcoming",
                        max_length=20,
                    ),
                ),
                ("start_time", models.DateTimeField(db_index=True)),
                ("end_time", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("current_players__lte", models.F("max_players"))),
                        name="tournament_players_within_capacity",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("entry_fee__gte", 0)), name="tournament_entry_fee_non_negative"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Registration",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveIntegerField(blank=True, null=True)),
                ("kills", models.PositiveIntegerField(default=0)),
                ("earnings", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("registered_at", models.DateTimeField(auto_now_add=True)),
                ("settled_at", models.DateTimeField(blank=True, null=True)),
                (
                    "tournament",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="registrations",
                        to="tournaments.tournament",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="registrations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["registered_at", "id"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user", "tournament"), name="unique_registration_per_tournament"
                    )
                ],
            },
        ),
    ]
