from rest_framework import serializers

from users.serializers import UserSerializer

from .models import DailyBonus, Transaction


class TransactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Transaction
        fields = (
            "id",
            "type",
            "amount",
            "description",
            "tournament",
            "created_at",
        )
        read_only_fields = fields


class AmountSerializer(serializers.Serializer):
    """
    Shape check for money input. Positivity and the withdrawal minimum are
    enforced by the ledger so every caller gets the same rules.
    """

    amount = serializers.DecimalField(max_digits=12, decimal_places=2)


class WalletBalanceSerializer(UserSerializer):
    class Meta(UserSerializer.Meta):
        fields = ("id", "username", "balance", "total_earnings", "dil_balance", "total_dil_earned")
        read_only_fields = fields


class DailyBonusSerializer(serializers.ModelSerializer):
    class Meta:
        model = DailyBonus
        fields = ("id", "day", "dil_amount", "cash_amount", "claimed_at")
        read_only_fields = fields
