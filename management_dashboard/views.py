from drf_spectacular.utils import extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from common.throttles import MediumThrottle
from users.permissions import IsAdminUser

from .serializers import AnalyticsSerializer
from .services import get_platform_analytics


@extend_schema(responses=AnalyticsSerializer)
class AnalyticsAPIView(APIView):
    """
    Platform totals for administrators: users, tournaments, ads and money
    flowing through the ledger.
    """

    permission_classes = [IsAdminUser]
    throttle_classes = [MediumThrottle]

    def get(self, request):
        return Response(AnalyticsSerializer(get_platform_analytics()).data)
