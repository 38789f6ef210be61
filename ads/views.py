from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from common.throttles import MediumThrottle, RelaxedThrottle
from users.permissions import IsAdminUser

from .models import Advertisement
from .serializers import AdminAdvertisementSerializer, AdvertisementSerializer
from .services import get_live_ads, record_click, record_impressions


class AdvertisementViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Live ads for a page slot. Listing an ad counts as an impression; the
    click action counts a click and returns the ad's target.
    """

    serializer_class = AdvertisementSerializer
    permission_classes = [AllowAny]
    throttle_classes = [RelaxedThrottle]
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        return get_live_ads(self.request.query_params.get("position"))

    def list(self, request, *args, **kwargs):
        ads = list(self.get_queryset())
        record_impressions([ad.pk for ad in ads])
        return Response(self.get_serializer(ads, many=True).data)

    @action(detail=True, methods=["post"])
    def click(self, request, pk=None):
        ad = record_click(pk)
        return Response({"id": ad.pk, "target_url": ad.target_url, "clicks": ad.clicks})


class AdminAdvertisementViewSet(viewsets.ModelViewSet):
    queryset = Advertisement.objects.all()
    serializer_class = AdminAdvertisementSerializer
    permission_classes = [IsAdminUser]
    throttle_classes = [MediumThrottle]
    filterset_fields = ["is_active", "position", "type"]
