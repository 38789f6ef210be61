from rest_framework import generics, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from common.throttles import MediumThrottle, StrictThrottle, VeryStrictThrottle
from users.serializers import UserSerializer

from .models import Transaction
from .serializers import (AmountSerializer, DailyBonusSerializer,
                          TransactionSerializer, WalletBalanceSerializer)
from .services import LedgerService


class TransactionViewSet(viewsets.ReadOnlyModelViewSet):
    """The caller's own ledger, newest entry first."""

    serializer_class = TransactionSerializer
    permission_classes = [IsAuthenticated]
    throttle_classes = [MediumThrottle]
    filterset_fields = ["type"]

    def get_queryset(self):
        return Transaction.objects.filter(user=self.request.user).order_by("-id")


class WalletBalanceAPIView(generics.RetrieveAPIView):
    serializer_class = WalletBalanceSerializer
    permission_classes = [IsAuthenticated]
    throttle_classes = [MediumThrottle]

    def get_object(self):
        return self.request.user


class AddMoneyAPIView(generics.GenericAPIView):
    serializer_class = AmountSerializer
    permission_classes = [IsAuthenticated]
    throttle_classes = [StrictThrottle]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = LedgerService().add_funds(request.user.pk, serializer.validated_data["amount"])
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)


class WithdrawAPIView(generics.GenericAPIView):
    serializer_class = AmountSerializer
    permission_classes = [IsAuthenticated]
    throttle_classes = [VeryStrictThrottle]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = LedgerService().withdraw(request.user.pk, serializer.validated_data["amount"])
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)


class DailyBonusAPIView(generics.GenericAPIView):
    serializer_class = DailyBonusSerializer
    permission_classes = [IsAuthenticated]
    throttle_classes = [StrictThrottle]

    def post(self, request, *args, **kwargs):
        bonus = LedgerService().claim_daily_bonus(request.user.pk)
        return Response(self.get_serializer(bonus).data, status=status.HTTP_201_CREATED)
