from decimal import Decimal

from django.db import models


class Transaction(models.Model):
    """
    Append-only cash ledger entry. ``amount`` is signed: credits are positive,
    debits negative, so a user's balance equals the sum of their rows. The
    auto-increment key doubles as the per-user commit order.
    """

    class TransactionType(models.TextChoices):
        DEPOSIT = "deposit", "Deposit"
        WITHDRAW = "withdraw", "Withdraw"
        ENTRY_FEE = "entry_fee", "Entry Fee"
        PRIZE_MONEY = "prize_money", "Prize Money"
        BONUS = "bonus", "Bonus"
        SPIN_REWARD = "spin_reward", "Spin Reward"
        REFUND = "refund", "Refund"

    user = models.ForeignKey(
        "users.User", on_delete=models.PROTECT, related_name="transactions"
    )
    type = models.CharField(max_length=20, choices=TransactionType.choices, db_index=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    description = models.CharField(max_length=255)
    tournament = models.ForeignKey(
        "tournaments.Tournament",
        on_delete=models.PROTECT,
        related_name="transactions",
        null=True,
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        indexes = [models.Index(fields=["user", "id"], name="transaction_user_order_idx")]

    def __str__(self):
        return f"{self.user.username} - {self.type} - {self.amount}"


class DailyBonus(models.Model):
    user = models.ForeignKey(
        "users.User", on_delete=models.PROTECT, related_name="daily_bonuses"
    )
    day = models.DateField()
    dil_amount = models.PositiveIntegerField(default=0)
    cash_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    claimed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-day"]
        verbose_name_plural = "daily bonuses"
        constraints = [
            models.UniqueConstraint(fields=["user", "day"], name="unique_daily_bonus_per_day"),
        ]

    def __str__(self):
        return f"Daily bonus for {self.user.username} on {self.day}"
