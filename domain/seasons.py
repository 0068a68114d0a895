"""Season classification

A date is priced as a holiday when the registry carries an active override for
it; otherwise Friday through Sunday is high season and Monday through Thursday
is low season.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Dict

from pydantic import BaseModel

from domain.enums import SeasonType, Weekday
from domain.repositories import HolidayRegistry

logger = logging.getLogger(__name__)

HIGH_SEASON_DAYS = frozenset({Weekday.FRIDAY, Weekday.SATURDAY, Weekday.SUNDAY})


class SeasonInfo(BaseModel):
    season_type: SeasonType
    name: str
    description: str
    multiplier: Decimal

    class Config:
        frozen = True


SEASON_INFO: Dict[SeasonType, SeasonInfo] = {
    SeasonType.LOW: SeasonInfo(
        season_type=SeasonType.LOW,
        name="Low Season",
        description="Monday to Thursday - regular prices",
        multiplier=Decimal("1.0"),
    ),
    SeasonType.HIGH: SeasonInfo(
        season_type=SeasonType.HIGH,
        name="High Season",
        description="Friday to Sunday - weekend prices",
        multiplier=Decimal("1.8"),
    ),
    SeasonType.HOLIDAY: SeasonInfo(
        season_type=SeasonType.HOLIDAY,
        name="Holidays",
        description="National holidays and special dates",
        multiplier=Decimal("2.2"),
    ),
}


def is_weekend(day: date) -> bool:
    """Friday, Saturday or Sunday, regardless of holidays"""
    return Weekday(day.weekday()) in HIGH_SEASON_DAYS


def classify_by_weekday(day: date) -> SeasonType:
    return SeasonType.HIGH if is_weekend(day) else SeasonType.LOW


def classify_date(day: date, registry: HolidayRegistry) -> SeasonType:
    """Season bucket for one calendar date"""
    holiday = registry.find_by_date(day)
    if holiday is not None and holiday.is_active:
        logger.debug("%s classified by holiday override %r", day, holiday.name)
        return holiday.season_type
    return classify_by_weekday(day)


def get_season_info(season_type: SeasonType) -> SeasonInfo:
    return SEASON_INFO[season_type]
