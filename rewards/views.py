from rest_framework import generics, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from common.throttles import MediumThrottle, RelaxedThrottle, StrictThrottle
from users.permissions import IsAdminUser
from wallet.services import LedgerService

from .models import SpinHistory, SpinWheelReward
from .serializers import (AdminSpinWheelRewardSerializer,
                          SpinHistorySerializer, SpinRequestSerializer,
                          SpinWheelRewardSerializer)


class SpinWheelRewardListView(generics.ListAPIView):
    """The rewards currently on the wheel, in draw order."""

    queryset = SpinWheelReward.objects.filter(is_active=True).order_by("id")
    serializer_class = SpinWheelRewardSerializer
    permission_classes = [IsAuthenticated]
    throttle_classes = [RelaxedThrottle]


class SpinAPIView(generics.GenericAPIView):
    serializer_class = SpinRequestSerializer
    permission_classes = [IsAuthenticated]
    throttle_classes = [StrictThrottle]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        spin = LedgerService().spin_wheel(
            request.user.pk, serializer.validated_data.get("dil_cost")
        )
        return Response(SpinHistorySerializer(spin).data, status=status.HTTP_201_CREATED)


class SpinHistoryListView(generics.ListAPIView):
    serializer_class = SpinHistorySerializer
    permission_classes = [IsAuthenticated]
    throttle_classes = [MediumThrottle]

    def get_queryset(self):
        return SpinHistory.objects.filter(user=self.request.user).select_related("reward")


class AdminSpinWheelRewardViewSet(viewsets.ModelViewSet):
    queryset = SpinWheelReward.objects.all().order_by("id")
    serializer_class = AdminSpinWheelRewardSerializer
    permission_classes = [IsAdminUser]
    throttle_classes = [MediumThrottle]
    filterset_fields = ["kind", "is_active"]
