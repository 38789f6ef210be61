from datetime import timedelta
from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from django.urls import NoReverseMatch, reverse
from django.utils import timezone
from import_export.admin import ImportMixin
from rest_framework import status
from rest_framework.test import APITestCase

from rewards.models import SpinWheelReward
from users.models import User
from wallet.models import Transaction
from wallet.services import LedgerService

from .admin import RegistrationAdmin, TournamentAdmin
from .models import Registration, Tournament


def make_tournament(**kwargs):
    defaults = {
        "title": "Free Fire Battle Royale",
        "game": Tournament.Game.FREE_FIRE,
        "game_mode": Tournament.GameMode.SOLO,
        "map": "Bermuda",
        "prize_pool": Decimal("25000.00"),
        "entry_fee": Decimal("100.00"),
        "first_prize": Decimal("12500.00"),
        "second_prize": Decimal("7500.00"),
        "third_prize": Decimal("5000.00"),
        "max_players": 50,
        "start_time": timezone.now() + timedelta(hours=1),
    }
    defaults.update(kwargs)
    return Tournament.objects.create(**defaults)


class TournamentModelTests(TestCase):
    def test_closed_statuses(self):
        tournament = make_tournament(status=Tournament.Status.CANCELLED)
        self.assertTrue(tournament.is_closed)
        tournament.status = Tournament.Status.LIVE
        self.assertFalse(tournament.is_closed)

    def test_str(self):
        self.assertEqual(str(make_tournament()), "Free Fire Battle Royale")


class TournamentViewSetAPITest(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username="squadleader", email="squad@example.com", password="password"
        )
        LedgerService().add_funds(self.user.pk, "150.00")
        self.tournament = make_tournament()

    def test_anonymous_can_browse(self):
        response = self.client.get(reverse("tournament-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)
        self.assertFalse(response.data["results"][0]["is_registered"])

    def test_join_charges_entry_fee(self):
        self.client.force_authenticate(user=self.user)
        url = reverse("tournament-join", kwargs={"pk": self.tournament.pk})
        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        self.user.refresh_from_db()
        self.tournament.refresh_from_db()
        self.assertEqual(self.user.balance, Decimal("50.00"))
        self.assertEqual(self.tournament.current_players, 1)
        fee = Transaction.objects.get(type=Transaction.TransactionType.ENTRY_FEE)
        self.assertEqual(fee.amount, Decimal("-100.00"))
        self.assertEqual(fee.tournament_id, self.tournament.pk)

    def test_join_without_funds(self):
        poor = User.objects.create_user(username="broke", email="broke@example.com")
        self.client.force_authenticate(user=poor)
        url = reverse("tournament-join", kwargs={"pk": self.tournament.pk})
        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "insufficient_balance")
        self.assertFalse(Registration.objects.exists())

    def test_join_closed_tournament(self):
        self.tournament.status = Tournament.Status.COMPLETED
        self.tournament.save()
        self.client.force_authenticate(user=self.user)
        url = reverse("tournament-join", kwargs={"pk": self.tournament.pk})
        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "registration_closed")


class SeedDataCommandTests(TestCase):
    def test_seeds_once(self):
        call_command("seed_data", stdout=StringIO())
        call_command("seed_data", stdout=StringIO())

        self.assertEqual(Tournament.objects.count(), 4)
        self.assertEqual(Registration.objects.count(), 3)
        self.assertEqual(SpinWheelReward.objects.count(), 6)
        self.assertTrue(User.objects.get(username="admin").is_staff)

        player = User.objects.get(username="ProGamer2023")
        ledger_total = sum(tx.amount for tx in player.transactions.all())
        self.assertEqual(player.balance, ledger_total)
        self.assertEqual(player.balance, Decimal("2800.00"))


class TournamentAdminTests(TestCase):
    def test_tournaments_and_registrations_are_export_only(self):
        self.assertFalse(issubclass(TournamentAdmin, ImportMixin))
        self.assertFalse(issubclass(RegistrationAdmin, ImportMixin))
        with self.assertRaises(NoReverseMatch):
            reverse("admin:tournaments_registration_import")
        with self.assertRaises(NoReverseMatch):
            reverse("admin:tournaments_tournament_import")
        self.assertTrue(reverse("admin:tournaments_registration_export"))
