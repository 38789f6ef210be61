from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework import status

from tournaments.models import Registration, Tournament
from wallet.models import Transaction


@pytest.mark.django_db
class TestTournamentListAPI:
    def test_list_is_public_and_filterable(self, api_client, tournament_factory):
        tournament_factory(title="Later", start_time=timezone.now() + timedelta(days=2))
        tournament_factory(title="Sooner", start_time=timezone.now() + timedelta(hours=1))
        tournament_factory(title="Running", status=Tournament.Status.LIVE)
        tournament_factory(title="Fire", game=Tournament.Game.FREE_FIRE, status=Tournament.Status.LIVE)

        upcoming = api_client.get("/api/tournaments/tournaments/", {"status": "upcoming"})
        live_pubg = api_client.get(
            "/api/tournaments/tournaments/", {"status": "live", "game": "PUBG"}
        )

        assert upcoming.status_code == status.HTTP_200_OK
        assert [row["title"] for row in upcoming.data["results"]] == ["Sooner", "Later"]
        assert [row["title"] for row in live_pubg.data["results"]] == ["Running"]

    def test_detail_shows_registration_flag(self, api_client, funded_user_factory, tournament_factory, ledger):
        user = funded_user_factory(balance="100.00")
        tournament = tournament_factory()
        ledger.charge_entry_fee(user.pk, tournament.pk)
        api_client.force_authenticate(user=user)

        response = api_client.get(f"/api/tournaments/tournaments/{tournament.pk}/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["is_registered"] is True
        assert response.data["current_players"] == 1
        assert response.data["spots_left"] == 99

    def test_unknown_tournament(self, api_client):
        response = api_client.get("/api/tournaments/tournaments/999999/")

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestJoinAPI:
    def test_join_and_duplicate_join(self, api_client, funded_user_factory, tournament_factory):
        user = funded_user_factory(balance="100.00")
        tournament = tournament_factory(entry_fee=Decimal("50.00"), max_players=1)
        api_client.force_authenticate(user=user)
        url = f"/api/tournaments/tournaments/{tournament.pk}/join/"

        first = api_client.post(url)
        second = api_client.post(url)

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_400_BAD_REQUEST
        assert second.data["code"] == "already_registered"
        user.refresh_from_db()
        assert user.balance == Decimal("50.00")

    def test_full_tournament(self, api_client, funded_user_factory, tournament_factory, ledger):
        tournament = tournament_factory(max_players=1)
        ledger.charge_entry_fee(funded_user_factory(balance="100.00").pk, tournament.pk)
        late = funded_user_factory(balance="100.00")
        api_client.force_authenticate(user=late)

        response = api_client.post(f"/api/tournaments/tournaments/{tournament.pk}/join/")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["code"] == "tournament_full"

    def test_join_unknown_tournament(self, authenticated_client):
        response = authenticated_client.post("/api/tournaments/tournaments/999999/join/")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["code"] == "not_found"

    def test_join_requires_login(self, api_client, tournament_factory):
        tournament = tournament_factory()

        response = api_client.post(f"/api/tournaments/tournaments/{tournament.pk}/join/")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestAdminTournamentAPI:
    def test_create_requires_admin(self, authenticated_client):
        response = authenticated_client.post("/api/tournaments/tournaments/", {}, format="json")

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_creates_tournament(self, authenticated_admin_client):
        payload = {
            "title": "PUBG Pro Championship",
            "game": "PUBG",
            "game_mode": "squad",
            "map": "Sanhok",
            "prize_pool": "50000.00",
            "entry_fee": "200.00",
            "first_prize": "25000.00",
            "second_prize": "15000.00",
            "third_prize": "10000.00",
            "max_players": 100,
            "start_time": (timezone.now() + timedelta(hours=3)).isoformat(),
        }

        response = authenticated_admin_client.post("/api/tournaments/tournaments/", payload, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["status"] == "upcoming"
        assert Tournament.objects.filter(title="PUBG Pro Championship").exists()

    def test_admin_create_rejects_overspent_pool(self, authenticated_admin_client):
        payload = {
            "title": "Overspent",
            "game": "PUBG",
            "game_mode": "solo",
            "map": "Erangel",
            "prize_pool": "100.00",
            "entry_fee": "10.00",
            "first_prize": "100.00",
            "second_prize": "50.00",
            "third_prize": "0.00",
            "max_players": 10,
            "start_time": timezone.now().isoformat(),
        }

        response = authenticated_admin_client.post("/api/tournaments/tournaments/", payload, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_submit_results_once(self, api_client, admin_user, funded_user_factory, tournament_factory, ledger):
        tournament = tournament_factory(status=Tournament.Status.LIVE)
        player = funded_user_factory(balance="100.00")
        ledger.charge_entry_fee(player.pk, tournament.pk)
        api_client.force_authenticate(user=admin_user)
        url = f"/api/tournaments/tournaments/{tournament.pk}/results/"
        payload = {"user_id": player.pk, "position": 1, "kills": 12}

        first = api_client.post(url, payload, format="json")
        second = api_client.post(url, payload, format="json")

        assert first.status_code == status.HTTP_200_OK
        assert first.data["earnings"] == "5000.00"
        assert first.data["is_settled"] is True
        assert second.status_code == status.HTTP_409_CONFLICT
        player.refresh_from_db()
        assert player.balance == Decimal("5050.00")
        assert Transaction.objects.filter(type="prize_money").count() == 1

    def test_results_for_unregistered_player(self, authenticated_admin_client, user_factory, tournament_factory):
        tournament = tournament_factory(status=Tournament.Status.LIVE)

        response = authenticated_admin_client.post(
            f"/api/tournaments/tournaments/{tournament.pk}/results/",
            {"user_id": user_factory().pk, "position": 1, "kills": 0},
            format="json",
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_player_cannot_submit_results(self, authenticated_client, tournament_factory):
        tournament = tournament_factory()

        response = authenticated_client.post(
            f"/api/tournaments/tournaments/{tournament.pk}/results/",
            {"user_id": 1, "position": 1, "kills": 0},
            format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_cancel_refunds(self, api_client, admin_user, funded_user_factory, tournament_factory, ledger):
        tournament = tournament_factory(entry_fee=Decimal("30.00"))
        player = funded_user_factory(balance="100.00")
        ledger.charge_entry_fee(player.pk, tournament.pk)
        api_client.force_authenticate(user=admin_user)

        response = api_client.post(
            f"/api/tournaments/tournaments/{tournament.pk}/status/", {"status": "cancelled"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["status"] == "cancelled"
        player.refresh_from_db()
        assert player.balance == Decimal("100.00")

    def test_invalid_transition(self, authenticated_admin_client, tournament_factory):
        tournament = tournament_factory(status=Tournament.Status.CANCELLED)

        response = authenticated_admin_client.post(
            f"/api/tournaments/tournaments/{tournament.pk}/status/", {"status": "live"}, format="json"
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "retryable" not in response.data

    def test_registrations_listing(self, authenticated_admin_client, funded_user_factory, tournament_factory, ledger):
        tournament = tournament_factory()
        ledger.charge_entry_fee(funded_user_factory(balance="100.00").pk, tournament.pk)

        response = authenticated_admin_client.get(
            f"/api/tournaments/tournaments/{tournament.pk}/registrations/"
        )

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert Registration.objects.count() == 1
