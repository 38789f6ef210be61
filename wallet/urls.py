from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (
    AddMoneyAPIView,
    DailyBonusAPIView,
    TransactionViewSet,
    WalletBalanceAPIView,
    WithdrawAPIView,
)

router = DefaultRouter()
router.register(r"transactions", TransactionViewSet, basename="transaction")

urlpatterns = [
    path("", include(router.urls)),
    path("balance/", WalletBalanceAPIView.as_view(), name="wallet-balance"),
    path("add-money/", AddMoneyAPIView.as_view(), name="add-money"),
    path("withdraw/", WithdrawAPIView.as_view(), name="withdraw"),
    path("daily-bonus/", DailyBonusAPIView.as_view(), name="daily-bonus"),
]
