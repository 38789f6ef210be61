from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import AdminAdvertisementViewSet, AdvertisementViewSet

router = DefaultRouter()
router.register(r"advertisements", AdvertisementViewSet, basename="advertisement")
router.register(
    r"admin/advertisements", AdminAdvertisementViewSet, basename="admin-advertisement"
)

urlpatterns = [
    path("", include(router.urls)),
]
