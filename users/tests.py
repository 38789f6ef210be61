from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from .models import User
from .services import get_top_earners, parse_leaderboard_limit, set_user_active


class UserViewSetAPITest(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username="player", email="player@example.com", password="password"
        )
        self.admin = User.objects.create_user(
            username="boss", email="boss@example.com", password="password", role=User.Role.ADMIN
        )

    def test_admin_role_implies_staff(self):
        self.assertTrue(self.admin.is_staff)
        self.assertTrue(self.admin.is_admin)
        self.assertFalse(self.user.is_admin)

    def test_own_profile_shows_wallet(self):
        self.client.force_authenticate(user=self.user)
        url = reverse("user-detail", kwargs={"pk": self.user.pk})
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["balance"], "0.00")

    def test_profiles_require_login(self):
        url = reverse("user-detail", kwargs={"pk": self.user.pk})
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_banned_user_is_hidden(self):
        set_user_active(self.user.pk, False)
        self.client.force_authenticate(user=self.admin)
        url = reverse("user-detail", kwargs={"pk": self.user.pk})
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_leaderboard_is_public(self):
        response = self.client.get(reverse("user-leaderboard"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row["username"] for row in response.data], ["player"])


class LeaderboardServiceTest(APITestCase):
    def test_limit_parsing(self):
        self.assertEqual(parse_leaderboard_limit(None), 10)
        self.assertEqual(parse_leaderboard_limit("abc"), 10)
        self.assertEqual(parse_leaderboard_limit("0"), 1)
        self.assertEqual(parse_leaderboard_limit("5000"), 100)

    def test_excludes_banned_and_staff(self):
        User.objects.create_user(
            username="ace", email="ace@example.com", total_earnings=Decimal("10.00")
        )
        User.objects.create_user(
            username="gone", email="gone@example.com", is_active=False, total_earnings=Decimal("99.00")
        )
        User.objects.create_user(
            username="staff", email="staff@example.com", is_staff=True, total_earnings=Decimal("500.00")
        )
        self.assertEqual([user.username for user in get_top_earners()], ["ace"])
