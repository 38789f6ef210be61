import logging

from django.db.models import F, Q
from django.utils import timezone

from common.exceptions import NotFound

from .models import Advertisement

logger = logging.getLogger(__name__)


class AdvertisementNotFound(NotFound):
    default_message = "Advertisement not found."


def get_live_ads(position=None, now=None):
    """Active ads whose campaign window contains ``now``."""
    now = now or timezone.now()
    queryset = Advertisement.objects.filter(is_active=True, start_date__lte=now).filter(
        Q(end_date__isnull=True) | Q(end_date__gte=now)
    )
    if position:
        queryset = queryset.filter(position=position)
    return queryset


def record_impressions(ad_ids):
    if ad_ids:
        Advertisement.objects.filter(pk__in=ad_ids).update(impressions=F("impressions") + 1)


def record_click(ad_id) -> Advertisement:
    updated = get_live_ads().filter(pk=ad_id).update(clicks=F("clicks") + 1)
    if not updated:
        raise AdvertisementNotFound()
    logger.info("Recorded click on advertisement %s", ad_id)
    return Advertisement.objects.get(pk=ad_id)


def set_ads_active(queryset, is_active: bool) -> int:
    return queryset.update(is_active=is_active)
