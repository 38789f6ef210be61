from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from .models import RewardKind, SpinHistory, SpinWheelReward

User = get_user_model()


class SpinWheelRewardModelTests(TestCase):
    def test_medal_value_must_be_whole(self):
        reward = SpinWheelReward(kind=RewardKind.MEDAL, value=Decimal("1.50"), probability=Decimal("0.1"))
        with self.assertRaises(ValidationError):
            reward.full_clean()

    def test_str_prefers_label(self):
        reward = SpinWheelReward(kind=RewardKind.CASH, value=Decimal("5.00"), label="Jackpot")
        self.assertEqual(str(reward), "Jackpot")


class SpinAPITests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username="spinner", email="spinner@example.com", password="password", dil_balance=25
        )
        SpinWheelReward.objects.create(kind=RewardKind.MEDAL, value=Decimal("1"), probability=Decimal("1"))
        self.client.force_authenticate(user=self.user)

    def test_spin_awards_medal(self):
        response = self.client.post(reverse("spin-wheel-spin"), {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.user.refresh_from_db()
        self.assertEqual(self.user.medals, 1)
        self.assertEqual(self.user.dil_balance, 15)
        self.assertFalse(self.user.transactions.exists())

    def test_custom_cost(self):
        response = self.client.post(reverse("spin-wheel-spin"), {"dil_cost": 20}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(SpinHistory.objects.get().dil_spent, 20)

    def test_history_lists_own_spins(self):
        self.client.post(reverse("spin-wheel-spin"), {}, format="json")
        response = self.client.get(reverse("spin-wheel-history"))
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["reward_kind"], "medal")
