from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q

from .managers import TournamentManager


class Tournament(models.Model):
    class Game(models.TextChoices):
        PUBG = "PUBG", "PUBG"
        FREE_FIRE = "FREE_FIRE", "Free Fire"

    class GameMode(models.TextChoices):
        SOLO = "solo", "Solo"
        DUO = "duo", "Duo"
        SQUAD = "squad", "Squad"

    class Status(models.TextChoices):
        UPCOMING = "upcoming", "Upcoming"
        LIVE = "live", "Live"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"

    title = models.CharField(max_length=200)
    game = models.CharField(max_length=20, choices=Game.choices, db_index=True)
    game_mode = models.CharField(max_length=10, choices=GameMode.choices)
    map = models.CharField(max_length=100)
    prize_pool = models.DecimalField(max_digits=12, decimal_places=2)
    entry_fee = models.DecimalField(max_digits=12, decimal_places=2)
    first_prize = models.DecimalField(max_digits=12, decimal_places=2)
    second_prize = models.DecimalField(max_digits=12, decimal_places=2)
    third_prize = models.DecimalField(max_digits=12, decimal_places=2)
    max_players = models.PositiveIntegerField()
    current_players = models.PositiveIntegerField(default=0)
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.UPCOMING, db_index=True
    )
    start_time = models.DateTimeField(db_index=True)
    end_time = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TournamentManager()

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(current_players__lte=F("max_players")),
                name="tournament_players_within_capacity",
            ),
            models.CheckConstraint(
                condition=Q(entry_fee__gte=0), name="tournament_entry_fee_non_negative"
            ),
        ]

    def clean(self):
        super().clean()
        if self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValidationError("End time must be after start time.")
        if self.max_players is not None and self.max_players < 1:
            raise ValidationError("A tournament needs room for at least one player.")
        prizes = [self.first_prize, self.second_prize, self.third_prize]
        if any(prize is not None and prize < 0 for prize in prizes):
            raise ValidationError("Prizes cannot be negative.")
        if self.prize_pool is not None and all(prize is not None for prize in prizes):
            if sum(prizes) > self.prize_pool:
                raise ValidationError("Placement prizes cannot exceed the prize pool.")

    def __str__(self):
        return self.title

    @property
    def spots_left(self):
        return max(self.max_players - self.current_players, 0)

    @property
    def is_full(self):
        return self.current_players >= self.max_players

    @property
    def is_closed(self):
        return self.status in (self.Status.COMPLETED, self.Status.CANCELLED)

    def prize_for_position(self, position) -> Decimal:
        """Prize for a final placing; only the top three places pay."""
        prizes = {1: self.first_prize, 2: self.second_prize, 3: self.third_prize}
        return prizes.get(position) or Decimal("0.00")


class Registration(models.Model):
    user = models.ForeignKey(
        "users.User", on_delete=models.PROTECT, related_name="registrations"
    )
    tournament = models.ForeignKey(
        Tournament, on_delete=models.PROTECT, related_name="registrations"
    )
    position = models.PositiveIntegerField(null=True, blank=True)
    kills = models.PositiveIntegerField(default=0)
    earnings = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    registered_at = models.DateTimeField(auto_now_add=True)
    settled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["registered_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "tournament"], name="unique_registration_per_tournament"
            ),
        ]

    def __str__(self):
        return f"{self.user} in {self.tournament}"

    @property
    def is_settled(self):
        return self.settled_at is not None
