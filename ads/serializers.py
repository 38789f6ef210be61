from rest_framework import serializers

from .models import Advertisement


class AdvertisementSerializer(serializers.ModelSerializer):
    """Public view of a live ad."""

    class Meta:
        model = Advertisement
        fields = ("id", "title", "description", "image_url", "target_url", "type", "position")
        read_only_fields = fields


class AdminAdvertisementSerializer(serializers.ModelSerializer):
    class Meta:
        model = Advertisement
        fields = (
            "id",
            "title",
            "description",
            "image_url",
            "target_url",
            "type",
            "position",
            "is_active",
            "start_date",
            "end_date",
            "impressions",
            "clicks",
            "created_at",
        )
        read_only_fields = ("id", "impressions", "clicks", "created_at")

    def validate(self, attrs):
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start and end and end <= start:
            raise serializers.ValidationError({"end_date": "End date must be after start date."})
        return attrs
