from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q


class RewardKind(models.TextChoices):
    CASH = "cash", "Cash"
    DIL = "dil", "DIL"
    MEDAL = "medal", "Medal"


class SpinWheelReward(models.Model):
    """
    One slice of the spin wheel. Slices are drawn in primary-key order, so the
    table's insertion order is the order probabilities accumulate in.
    """

    kind = models.CharField(max_length=10, choices=RewardKind.choices)
    value = models.DecimalField(max_digits=12, decimal_places=2)
    probability = models.DecimalField(
        max_digits=6,
        decimal_places=5,
        validators=[MinValueValidator(Decimal("0.00001")), MaxValueValidator(Decimal("1"))],
        help_text="Chance of this slice, as a fraction between 0 and 1.",
    )
    dil_cost = models.PositiveIntegerField(default=10)
    label = models.CharField(max_length=100, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(probability__gt=0) & Q(probability__lte=1),
                name="spin_reward_probability_fraction",
            ),
            models.CheckConstraint(condition=Q(value__gt=0), name="spin_reward_value_positive"),
        ]

    def clean(self):
        super().clean()
        if self.kind in (RewardKind.DIL, RewardKind.MEDAL) and self.value is not None:
            if self.value != self.value.to_integral_value():
                raise ValidationError("DIL and medal rewards must be whole numbers.")

    def __str__(self):
        return self.label or f"{self.value} {self.get_kind_display()}"


class SpinHistory(models.Model):
    user = models.ForeignKey(
        "users.User", on_delete=models.PROTECT, related_name="spins"
    )
    reward = models.ForeignKey(
        SpinWheelReward,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="spins",
    )
    reward_kind = models.CharField(max_length=10, choices=RewardKind.choices)
    reward_value = models.DecimalField(max_digits=12, decimal_places=2)
    dil_spent = models.PositiveIntegerField()
    # The uniform draw that picked the reward, kept for audits.
    roll = models.CharField(max_length=32, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-id"]
        verbose_name_plural = "spin history"

    def __str__(self):
        return f"{self.user} won {self.reward_value} {self.reward_kind}"
