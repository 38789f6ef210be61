from decimal import Decimal

from rest_framework import serializers

from .models import SpinHistory, SpinWheelReward


class SpinWheelRewardSerializer(serializers.ModelSerializer):
    class Meta:
        model = SpinWheelReward
        fields = ("id", "kind", "value", "probability", "dil_cost", "label")
        read_only_fields = fields


class AdminSpinWheelRewardSerializer(serializers.ModelSerializer):
    class Meta:
        model = SpinWheelReward
        fields = ("id", "kind", "value", "probability", "dil_cost", "label", "is_active", "created_at")
        read_only_fields = ("id", "created_at")
        extra_kwargs = {"value": {"min_value": Decimal("0.01")}}

    def validate(self, attrs):
        kind = attrs.get("kind", getattr(self.instance, "kind", None))
        value = attrs.get("value", getattr(self.instance, "value", None))
        if kind in ("dil", "medal") and value is not None and value != value.to_integral_value():
            raise serializers.ValidationError({"value": "DIL and medal rewards must be whole numbers."})
        return attrs


class SpinRequestSerializer(serializers.Serializer):
    dil_cost = serializers.IntegerField(min_value=1, required=False)


class SpinHistorySerializer(serializers.ModelSerializer):
    reward = SpinWheelRewardSerializer(read_only=True)

    class Meta:
        model = SpinHistory
        fields = ("id", "reward", "reward_kind", "reward_value", "dil_spent", "roll", "created_at")
        read_only_fields = fields
