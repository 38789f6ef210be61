from rest_framework import serializers

from users.serializers import UserReadOnlySerializer

from .models import Registration, Tournament


class TournamentListSerializer(serializers.ModelSerializer):
    """Compact tournament card used in listings."""

    spots_left = serializers.IntegerField(read_only=True)
    is_registered = serializers.BooleanField(read_only=True, default=False)

    class Meta:
        model = Tournament
        fields = (
            "id",
            "title",
            "game",
            "game_mode",
            "map",
            "prize_pool",
            "entry_fee",
            "max_players",
            "current_players",
            "spots_left",
            "status",
            "start_time",
            "is_registered",
        )
        read_only_fields = fields


class TournamentReadOnlySerializer(serializers.ModelSerializer):
    spots_left = serializers.IntegerField(read_only=True)
    is_registered = serializers.BooleanField(read_only=True, default=False)

    class Meta:
        model = Tournament
        fields = (
            "id",
            "title",
            "game",
            "game_mode",
            "map",
            "prize_pool",
            "entry_fee",
            "first_prize",
            "second_prize",
            "third_prize",
            "max_players",
            "current_players",
            "spots_left",
            "status",
            "start_time",
            "end_time",
            "created_at",
            "is_registered",
        )
        read_only_fields = fields


class TournamentCreateUpdateSerializer(serializers.ModelSerializer):
    """
    Admin input for a new tournament. Player counts and status are managed by
    the join flow and the status endpoint, never set directly.
    """

    class Meta:
        model = Tournament
        fields = (
            "title",
            "game",
            "game_mode",
            "map",
            "prize_pool",
            "entry_fee",
            "first_prize",
            "second_prize",
            "third_prize",
            "max_players",
            "start_time",
            "end_time",
        )
        extra_kwargs = {
            "entry_fee": {"min_value": 0},
            "prize_pool": {"min_value": 0},
            "first_prize": {"min_value": 0},
            "second_prize": {"min_value": 0},
            "third_prize": {"min_value": 0},
            "max_players": {"min_value": 1},
        }


class RegistrationSerializer(serializers.ModelSerializer):
    user = UserReadOnlySerializer(read_only=True)
    is_settled = serializers.BooleanField(read_only=True)

    class Meta:
        model = Registration
        fields = (
            "id",
            "user",
            "tournament",
            "position",
            "kills",
            "earnings",
            "registered_at",
            "settled_at",
            "is_settled",
        )
        read_only_fields = fields


class RegistrationWithTournamentSerializer(serializers.ModelSerializer):
    """A user's registration together with the tournament it belongs to."""

    tournament = TournamentListSerializer(read_only=True)
    is_settled = serializers.BooleanField(read_only=True)

    class Meta:
        model = Registration
        fields = (
            "id",
            "tournament",
            "position",
            "kills",
            "earnings",
            "registered_at",
            "settled_at",
            "is_settled",
        )
        read_only_fields = fields


class SettleResultSerializer(serializers.Serializer):
    user_id = serializers.IntegerField(min_value=1)
    position = serializers.IntegerField(min_value=1, allow_null=True, default=None)
    kills = serializers.IntegerField(min_value=0, default=0)


class TournamentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Tournament.Status.choices)
