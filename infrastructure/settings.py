import logging
import os
from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

# Configuration (override through environment variables in deployment)
TAX_RATE = Decimal(os.getenv("CLUB_TAX_RATE", "0.13"))
CLUB_TIMEZONE = os.getenv("CLUB_TIMEZONE", "America/El_Salvador")
CURRENCY = os.getenv("CLUB_CURRENCY", "USD")
MAX_STAY_NIGHTS = int(os.getenv("CLUB_MAX_STAY_NIGHTS", "7"))
UPCOMING_HOLIDAYS_LIMIT = int(os.getenv("CLUB_UPCOMING_HOLIDAYS_LIMIT", "10"))
MAX_PRICING_RANGE_DAYS = int(os.getenv("CLUB_MAX_PRICING_RANGE_DAYS", "366"))
LOG_LEVEL = os.getenv("CLUB_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def club_timezone() -> ZoneInfo:
    return ZoneInfo(CLUB_TIMEZONE)


def local_now() -> datetime:
    """Current time on the club's calendar; 'tomorrow' is computed from this"""
    return datetime.now(club_timezone())


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
