import logging
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.db.models import DecimalField, Q, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from common.exceptions import UserNotFound

from .models import User

logger = logging.getLogger(__name__)


def set_user_active(user_id, is_active: bool) -> User:
    """
    Bans (``is_active=False``) or unbans a user. Accounts are never deleted,
    so the ledger history of a banned player stays intact.
    """
    updated = User.objects.filter(pk=user_id).update(is_active=is_active)
    if not updated:
        raise UserNotFound()
    logger.info("User %s is_active set to %s", user_id, is_active)
    return User.objects.get(pk=user_id)


def parse_leaderboard_limit(raw_limit) -> int:
    if raw_limit in (None, ""):
        return settings.LEADERBOARD_DEFAULT_LIMIT
    try:
        limit = int(raw_limit)
    except (TypeError, ValueError):
        return settings.LEADERBOARD_DEFAULT_LIMIT
    return max(1, min(limit, settings.LEADERBOARD_MAX_LIMIT))


def get_top_earners(limit=None):
    """
    Active players ordered by lifetime earnings, annotated with the prize money
    they collected over the last seven days.
    """
    limit = parse_leaderboard_limit(limit)
    week_ago = timezone.now() - timedelta(days=7)
    weekly_prizes = Q(
        transactions__type="prize_money",
        transactions__created_at__gte=week_ago,
    )
    return (
        User.objects.filter(is_active=True, is_staff=False)
        .annotate(
            weekly_earnings=Coalesce(
                Sum("transactions__amount", filter=weekly_prizes),
                Value(Decimal("0.00")),
                output_field=DecimalField(max_digits=12, decimal_places=2),
            )
        )
        .order_by("-total_earnings", "id")[:limit]
    )
