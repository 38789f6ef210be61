from decimal import Decimal

from django.contrib.auth.models import AbstractUser, UserManager as BaseUserManager
from django.db import models
from django.db.models import Q


class UserManager(BaseUserManager):
    def create_superuser(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault("role", User.Role.ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    """
    Player account and the aggregate root for cash balance, DIL points and
    medals. Balances are only ever changed by wallet.services.LedgerService.
    """

    class Role(models.TextChoices):
        USER = "user", "User"
        ADMIN = "admin", "Admin"

    email = models.EmailField(unique=True)
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.USER)
    balance = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total_earnings = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    tournaments_won = models.PositiveIntegerField(default=0)
    games_played = models.PositiveIntegerField(default=0)
    dil_balance = models.PositiveIntegerField(default=0)
    total_dil_earned = models.PositiveIntegerField(default=0)
    medals = models.PositiveIntegerField(default=0)
    avatar = models.URLField(blank=True, null=True)

    objects = UserManager()

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=Q(balance__gte=0), name="user_balance_non_negative"
            ),
        ]

    def __str__(self):
        return self.username

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN or self.is_staff

    def save(self, *args, **kwargs):
        if self.role == self.Role.ADMIN:
            self.is_staff = True
        super().save(*args, **kwargs)
