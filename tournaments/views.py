from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from common.throttles import MediumThrottle, RelaxedThrottle, StrictThrottle
from users.permissions import IsAdminUser
from wallet.services import LedgerService

from .filters import TournamentFilter
from .models import Registration, Tournament
from .serializers import (RegistrationSerializer,
                          TournamentCreateUpdateSerializer,
                          TournamentListSerializer,
                          TournamentReadOnlySerializer,
                          TournamentStatusSerializer, SettleResultSerializer)
from .services import (change_tournament_status, create_tournament,
                       settle_tournament_result)


class StandardResultsSetPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100


class TournamentViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    """
    Tournament listings, joining, and the admin result and status endpoints.
    """

    lookup_value_regex = r"\d+"
    filter_backends = [DjangoFilterBackend]
    filterset_class = TournamentFilter
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        return Tournament.objects.with_details(self.request.user)

    def get_serializer_class(self):
        if self.action == "list":
            return TournamentListSerializer
        if self.action == "create":
            return TournamentCreateUpdateSerializer
        return TournamentReadOnlySerializer

    def get_permissions(self):
        if self.action in ["list", "retrieve"]:
            return [AllowAny()]
        if self.action in ["create", "results", "set_status", "registrations"]:
            return [IsAdminUser()]
        return [IsAuthenticated()]

    def get_throttles(self):
        if self.action == "join":
            self.throttle_classes = [StrictThrottle]
        elif self.action in ["list", "retrieve"]:
            self.throttle_classes = [RelaxedThrottle]
        else:
            self.throttle_classes = [MediumThrottle]
        return super().get_throttles()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tournament = create_tournament(**serializer.validated_data)
        return Response(
            TournamentReadOnlySerializer(tournament).data, status=status.HTTP_201_CREATED
        )

    @action(detail=True, methods=["post"])
    def join(self, request, pk=None):
        """
        Join a tournament, paying its entry fee from the wallet.
        """
        registration = LedgerService().charge_entry_fee(request.user.pk, pk)
        return Response(
            RegistrationSerializer(registration).data, status=status.HTTP_201_CREATED
        )

    @action(detail=True, methods=["post"])
    def results(self, request, pk=None):
        """
        Submit one player's final placing and kills. Each registration can be
        settled once.
        """
        serializer = SettleResultSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        registration = settle_tournament_result(
            tournament_id=pk,
            user_id=serializer.validated_data["user_id"],
            position=serializer.validated_data["position"],
            kills=serializer.validated_data["kills"],
        )
        return Response(RegistrationSerializer(registration).data)

    @action(detail=True, methods=["post"], url_path="status")
    def set_status(self, request, pk=None):
        serializer = TournamentStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tournament = change_tournament_status(pk, serializer.validated_data["status"])
        return Response(TournamentReadOnlySerializer(tournament).data)

    @action(detail=True, methods=["get"])
    def registrations(self, request, pk=None):
        tournament = self.get_object()
        queryset = Registration.objects.filter(tournament=tournament).select_related("user")
        return Response(RegistrationSerializer(queryset, many=True).data)
