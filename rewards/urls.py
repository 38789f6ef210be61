from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (AdminSpinWheelRewardViewSet, SpinAPIView,
                    SpinHistoryListView, SpinWheelRewardListView)

router = DefaultRouter()
router.register(r"admin/spin-rewards", AdminSpinWheelRewardViewSet, basename="admin-spin-reward")

urlpatterns = [
    path("", include(router.urls)),
    path("spin-wheel/rewards/", SpinWheelRewardListView.as_view(), name="spin-wheel-rewards"),
    path("spin-wheel/spin/", SpinAPIView.as_view(), name="spin-wheel-spin"),
    path("spin-wheel/history/", SpinHistoryListView.as_view(), name="spin-wheel-history"),
]
