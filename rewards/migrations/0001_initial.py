import django.core.validators
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
            name="SpinWheelReward",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "kind",
                    models.CharField(
                        choices=[("cash", "Cash"), ("dil", "DIL"), ("medal", "Medal")], max_length=10
                    ),
                ),
                ("value", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "probability",
                    models.DecimalField(
                        decimal_places=5,
                        help_text="Chance of this slice, as a fraction between 0 and 1.",
                        max_digits=6,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.00001")),
                            django.core.validators.MaxValueValidator(Decimal("1")),
                        ],
                    ),
                ),
                ("dil_cost", models.PositiveIntegerField(default=10)),
                ("label", models.CharField(blank=True, max_length=100)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("probability__gt", 0), ("probability__lte", 1)),
                        name="spin_reward_probability_fraction",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("value__gt", 0)), name="spin_reward_value_positive"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="SpinHistory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "reward_kind",
                    models.CharField(
                        choices=[("cash", "Cash"), ("dil", "DIL"), ("medal", "Medal")], max_length=10
                    ),
                ),
                ("reward_value", models.DecimalField(decimal_places=2, max_digits=12)),
                ("dil_spent", models.PositiveIntegerField()),
                ("roll", models.CharField(blank=True, max_length=32)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "reward",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="spins",
                        to="rewards.spinwheelreward",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="spins",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "spin history",
                "ordering": ["-id"],
            },
        ),
    ]
