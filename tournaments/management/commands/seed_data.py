import datetime
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from rewards.models import RewardKind, SpinWheelReward
from tournaments.models import Tournament
from tournaments.services import create_tournament
from users.models import User
from wallet.services import LedgerService

SAMPLE_PLAYERS = [
    # username, email, opening deposit, lifetime earnings, wins, games played
    ("ProGamer2023", "progamer@example.com", "2850.00", "45620.00", 12, 45),
    ("FireKing", "fireking@example.com", "1250.00", "22340.00", 8, 32),
    ("BattleQueen", "battlequeen@example.com", "3400.00", "67890.00", 15, 38),
]

SAMPLE_TOURNAMENTS = [
    {
        "title": "PUBG Mobile Clash",
        "game": Tournament.Game.PUBG,
        "game_mode": Tournament.GameMode.SQUAD,
        "map": "Erangel",
        "prize_pool": "10000.00",
        "entry_fee": "50.00",
        "first_prize": "5000.00",
        "second_prize": "3000.00",
        "third_prize": "2000.00",
        "max_players": 100,
        "status": Tournament.Status.LIVE,
        "starts_in": datetime.timedelta(hours=-2),
    },
    {
        "title": "PUBG Pro Championship",
        "game": Tournament.Game.PUBG,
        "game_mode": Tournament.GameMode.SQUAD,
        "map": "Sanhok",
        "prize_pool": "50000.00",
        "entry_fee": "200.00",
        "first_prize": "25000.00",
        "second_prize": "15000.00",
        "third_prize": "10000.00",
        "max_players": 100,
        "status": Tournament.Status.UPCOMING,
        "starts_in": datetime.timedelta(hours=2, minutes=30),
    },
    {
        "title": "Free Fire Battle Royale",
        "game": Tournament.Game.FREE_FIRE,
        "game_mode": Tournament.GameMode.SOLO,
        "map": "Bermuda",
        "prize_pool": "25000.00",
        "entry_fee": "100.00",
        "first_prize": "12500.00",
        "second_prize": "7500.00",
        "third_prize": "5000.00",
        "max_players": 50,
        "status": Tournament.Status.LIVE,
        "starts_in": datetime.timedelta(hours=-1),
    },
    {
        "title": "Weekend Warriors PUBG",
        "game": Tournament.Game.PUBG,
        "game_mode": Tournament.GameMode.DUO,
        "map": "Miramar",
        "prize_pool": "5000.00",
        "entry_fee": "25.00",
        "first_prize": "2500.00",
        "second_prize": "1500.00",
        "third_prize": "1000.00",
        "max_players": 80,
        "status": Tournament.Status.UPCOMING,
        "starts_in": datetime.timedelta(days=1),
    },
]

# (player, tournament title)
SAMPLE_REGISTRATIONS = [
    ("ProGamer2023", "PUBG Mobile Clash"),
    ("FireKing", "PUBG Mobile Clash"),
    ("BattleQueen", "PUBG Pro Championship"),
]

DEFAULT_SPIN_REWARDS = [
    (RewardKind.DIL, "5", "0.30000", "5 DIL"),
    (RewardKind.CASH, "10.00", "0.30000", "₹10 Cash"),
    (RewardKind.DIL, "20", "0.15000", "20 DIL"),
    (RewardKind.CASH, "50.00", "0.15000", "₹50 Cash"),
    (RewardKind.MEDAL, "1", "0.09000", "Gold Medal"),
    (RewardKind.CASH, "500.00", "0.01000", "₹500 Jackpot"),
]


class Command(BaseCommand):
    help = "Seeds the database with the sample admin, players, tournaments and spin wheel rewards."

    def add_arguments(self, parser):
        parser.add_argument(
            "--admin-password",
            default="admin123",
            help="Password for the seeded admin account.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if User.objects.filter(username="admin").exists():
            self.stdout.write(self.style.WARNING("Sample data already exists, skipping."))
            return

        ledger = LedgerService()
        User.objects.create_superuser(
            "admin", email="admin@gamewin.com", password=options["admin_password"]
        )

        players = self.seed_players(ledger)
        tournaments = self.seed_tournaments()
        self.seed_registrations(ledger, players, tournaments)
        self.seed_spin_rewards()

        self.stdout.write(self.style.SUCCESS("Database seeding complete."))

    def seed_players(self, ledger):
        players = {}
        for username, email, deposit, earnings, wins, played in SAMPLE_PLAYERS:
            user = User.objects.create_user(
                username=username,
                email=email,
                password="password123",
                total_earnings=Decimal(earnings),
                tournaments_won=wins,
                games_played=played,
            )
            # Balances start from a deposit so the ledger sums to the balance.
            ledger.add_funds(user.pk, deposit)
            players[username] = user
        self.stdout.write(self.style.SUCCESS(f"Created {len(players)} players."))
        return players

    def seed_tournaments(self):
        now = timezone.now()
        tournaments = {}
        for data in SAMPLE_TOURNAMENTS:
            data = dict(data)
            starts_in = data.pop("starts_in")
            money_fields = ("prize_pool", "entry_fee", "first_prize", "second_prize", "third_prize")
            for field in money_fields:
                data[field] = Decimal(data[field])
            tournament = create_tournament(start_time=now + starts_in, **data)
            tournaments[tournament.title] = tournament
        self.stdout.write(self.style.SUCCESS(f"Created {len(tournaments)} tournaments."))
        return tournaments

    def seed_registrations(self, ledger, players, tournaments):
        for username, title in SAMPLE_REGISTRATIONS:
            ledger.charge_entry_fee(players[username].pk, tournaments[title].pk)
        self.stdout.write(self.style.SUCCESS(f"Created {len(SAMPLE_REGISTRATIONS)} registrations."))

    def seed_spin_rewards(self):
        if SpinWheelReward.objects.exists():
            return
        for kind, value, probability, label in DEFAULT_SPIN_REWARDS:
            SpinWheelReward.objects.create(
                kind=kind,
                value=Decimal(value),
                probability=Decimal(probability),
                label=label,
            )
        self.stdout.write(self.style.SUCCESS(f"Created {len(DEFAULT_SPIN_REWARDS)} spin wheel rewards."))
