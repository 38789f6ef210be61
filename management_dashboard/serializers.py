from rest_framework import serializers


class AnalyticsSerializer(serializers.Serializer):
    total_users = serializers.IntegerField()
    active_users = serializers.IntegerField()
    banned_users = serializers.IntegerField()
    total_tournaments = serializers.IntegerField()
    tournaments_by_status = serializers.DictField(child=serializers.IntegerField())
    active_ads = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_prizes_paid = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_deposits = serializers.DecimalField(max_digits=14, decimal_places=2)
