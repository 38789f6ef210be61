from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import AdminUserViewSet, SignupAPIView, UserViewSet

router = SimpleRouter()
router.register(r"admin/users", AdminUserViewSet, basename="admin-user")
router.register(r"", UserViewSet, basename="user")

urlpatterns = [
    path("signup/", SignupAPIView.as_view(), name="signup"),
    path("", include(router.urls)),
]
