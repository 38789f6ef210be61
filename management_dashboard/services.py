from decimal import Decimal

from django.db.models import Count, Sum

from ads.services import get_live_ads
from tournaments.models import Tournament
from users.models import User
from wallet.models import Transaction


def _ledger_total(type):
    return (
        Transaction.objects.filter(type=type).aggregate(total=Sum("amount"))["total"]
        or Decimal("0.00")
    )


def get_platform_analytics():
    """Headline numbers for the admin dashboard."""
    users = User.objects.filter(is_staff=False)
    tournaments_by_status = {choice: 0 for choice in Tournament.Status.values}
    for row in Tournament.objects.values("status").annotate(count=Count("id")).order_by():
        tournaments_by_status[row["status"]] = row["count"]

    # Entry fees are stored as debits, so revenue is their negated sum.
    total_revenue = Decimal("0.00") - _ledger_total(Transaction.TransactionType.ENTRY_FEE)

    return {
        "total_users": users.count(),
        "active_users": users.filter(is_active=True).count(),
        "banned_users": users.filter(is_active=False).count(),
        "total_tournaments": sum(tournaments_by_status.values()),
        "tournaments_by_status": tournaments_by_status,
        "active_ads": get_live_ads().count(),
        "total_revenue": total_revenue,
        "total_prizes_paid": _ledger_total(Transaction.TransactionType.PRIZE_MONEY),
        "total_deposits": _ledger_total(Transaction.TransactionType.DEPOSIT),
    }
