from rest_framework import generics, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from common.throttles import (
    VeryStrictThrottle,
    StrictThrottle,
    MediumThrottle,
    RelaxedThrottle,
)
from tournaments.services import get_user_registrations
from tournaments.serializers import RegistrationWithTournamentSerializer

from .models import User
from .permissions import IsAdminUser
from .serializers import (LeaderboardEntrySerializer, UserCreateSerializer,
                          UserReadOnlySerializer, UserSerializer,
                          UserStatusSerializer)
from .services import get_top_earners, set_user_active


class SignupAPIView(generics.CreateAPIView):
    serializer_class = UserCreateSerializer
    permission_classes = [AllowAny]
    throttle_classes = [VeryStrictThrottle]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class UserViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Public player profiles, the caller's own profile, and the leaderboard.
    """

    queryset = User.objects.filter(is_active=True)
    lookup_value_regex = r"\d+"
    serializer_class = UserReadOnlySerializer
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.action == "leaderboard":
            return [AllowAny()]
        return super().get_permissions()

    def get_throttles(self):
        if self.action in ["leaderboard", "list", "retrieve"]:
            self.throttle_classes = [RelaxedThrottle]
        else:
            self.throttle_classes = [MediumThrottle]
        return super().get_throttles()

    def get_serializer_class(self):
        if self.action == "retrieve" and self.request.user.is_authenticated:
            if str(self.kwargs.get("pk")) == str(self.request.user.pk):
                return UserSerializer  # The user is viewing their own profile
        return UserReadOnlySerializer

    @action(detail=False, methods=["get"])
    def me(self, request):
        return Response(UserSerializer(request.user).data)

    @action(detail=True, methods=["get"])
    def registrations(self, request, pk=None):
        user = self.get_object()
        registrations = get_user_registrations(user)
        serializer = RegistrationWithTournamentSerializer(registrations, many=True)
        return Response(serializer.data)

    @action(detail=False, methods=["get"])
    def leaderboard(self, request):
        top_earners = get_top_earners(request.query_params.get("limit"))
        return Response(LeaderboardEntrySerializer(top_earners, many=True).data)


class AdminUserViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Admin view of every account, including banned ones, with ban/unban.
    """

    queryset = User.objects.all().order_by("id")
    serializer_class = UserSerializer
    permission_classes = [IsAdminUser]
    throttle_classes = [StrictThrottle]
    filterset_fields = ["is_active", "role"]

    @action(detail=True, methods=["patch"], url_path="status")
    def set_status(self, request, pk=None):
        serializer = UserStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = set_user_active(pk, serializer.validated_data["is_active"])
        return Response(UserSerializer(user).data)
