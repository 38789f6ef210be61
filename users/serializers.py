from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from .models import User


class UserReadOnlySerializer(serializers.ModelSerializer):
    """Serializer for public User profiles (read-only)."""

    class Meta:
        model = User
        fields = (
            "id",
            "username",
            "avatar",
            "total_earnings",
            "tournaments_won",
            "games_played",
            "medals",
        )
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """Serializer for the User model (full view for owner). Never exposes the password hash."""

    class Meta:
        model = User
        fields = (
            "id",
            "username",
            "email",
            "role",
            "avatar",
            "balance",
            "total_earnings",
            "tournaments_won",
            "games_played",
            "dil_balance",
            "total_dil_earned",
            "medals",
            "is_active",
            "date_joined",
            "last_login",
        )
        read_only_fields = (
            "id",
            "username",
            "email",
            "role",
            "balance",
            "total_earnings",
            "tournaments_won",
            "games_played",
            "dil_balance",
            "total_dil_earned",
            "medals",
            "is_active",
            "date_joined",
            "last_login",
        )


class UserCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating a new User."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(write_only=True, style={"input_type": "password"})

    class Meta:
        model = User
        fields = ("username", "email", "password", "avatar")

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value.lower()

    def validate(self, attrs):
        candidate = User(username=attrs.get("username"), email=attrs.get("email"))
        validate_password(attrs["password"], user=candidate)
        return attrs

    def create(self, validated_data):
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)


class UserStatusSerializer(serializers.Serializer):
    is_active = serializers.BooleanField()


class LeaderboardEntrySerializer(serializers.ModelSerializer):
    weekly_earnings = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = User
        fields = (
            "id",
            "username",
            "avatar",
            "total_earnings",
            "weekly_earnings",
            "tournaments_won",
            "games_played",
        )
        read_only_fields = fields
