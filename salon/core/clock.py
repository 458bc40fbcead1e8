from datetime import datetime
from zoneinfo import ZoneInfo

from salon.core.config import settings


def business_now() -> datetime:
    """Naive wall-clock time in the salon's timezone, matching how appointments are stored."""
    return datetime.now(ZoneInfo(settings.BUSINESS_TIMEZONE)).replace(tzinfo=None)


def to_business_time(moment: datetime) -> datetime:
    """Naive salon wall-clock for ``moment``. Aware values are converted first; naive ones are taken as-is."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(ZoneInfo(settings.BUSINESS_TIMEZONE))
    return moment.replace(tzinfo=None)
