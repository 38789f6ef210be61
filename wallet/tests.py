from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import SimpleTestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from .models import Transaction
from .serializers import AmountSerializer
from .services import LedgerService

User = get_user_model()


class AmountSerializerTests(SimpleTestCase):
    def test_amount_valid(self):
        serializer = AmountSerializer(data={"amount": "1234.50"})
        self.assertTrue(serializer.is_valid(), serializer.errors)

    def test_amount_too_many_decimals(self):
        serializer = AmountSerializer(data={"amount": "10.005"})
        self.assertFalse(serializer.is_valid())
        self.assertIn("amount", serializer.errors)


class WalletAPITests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username="wallet_user", email="wallet@example.com", password="password"
        )
        self.client.force_authenticate(user=self.user)

    def test_deposit_then_withdraw(self):
        response = self.client.post(reverse("add-money"), {"amount": "250.00"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.post(reverse("withdraw"), {"amount": "100.00"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["balance"], "150.00")

        amounts = list(self.user.transactions.values_list("amount", flat=True))
        self.assertEqual(amounts, [Decimal("250.00"), Decimal("-100.00")])

    def test_withdraw_below_minimum(self):
        LedgerService().add_funds(self.user.pk, "500.00")
        response = self.client.post(reverse("withdraw"), {"amount": "50.00"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid_amount")
        self.assertEqual(Transaction.objects.count(), 1)

    def test_transactions_filter_by_type(self):
        service = LedgerService()
        service.add_funds(self.user.pk, "300.00")
        service.withdraw(self.user.pk, "100.00")
        response = self.client.get(reverse("transaction-list"), {"type": "deposit"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["amount"], "300.00")
