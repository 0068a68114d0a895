"""Stay pricing

Every night in [check_in, check_out) is billed at the rate of its season; the
check-out day is a half-day departure and is never billed. Money is handled as
Decimal throughout and tax is rounded once, to the cent, on the stay subtotal.
"""
import logging
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterator, List, Union

from pydantic import BaseModel

from domain.enums import SeasonType
from domain.exceptions import InvalidDateRangeError
from domain.repositories import HolidayRegistry
from domain.seasons import classify_by_weekday
from domain.value_objects import RateTable, NightPrice, StayPriceResult, DateValidation

logger = logging.getLogger(__name__)

DEFAULT_TAX_RATE = Decimal("0.13")  # El Salvador IVA
MAX_STAY_NIGHTS = 7
CENT = Decimal("0.01")

Number = Union[Decimal, int, str, float]


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def iter_nights(check_in: date, check_out: date) -> Iterator[date]:
    """Yield every billed night of a stay"""
    current = check_in
    while current < check_out:
        yield current
        current += timedelta(days=1)


def calculate_stay_price(
    check_in: date,
    check_out: date,
    rates: RateTable,
    registry: HolidayRegistry,
    tax_rate: Number = DEFAULT_TAX_RATE,
) -> StayPriceResult:
    """Price a stay night by night.

    Holidays for the whole stay are fetched with a single range lookup and
    take precedence over the weekday split.

    Raises:
        InvalidDateRangeError: check_out is not after check_in.
    """
    if check_out <= check_in:
        raise InvalidDateRangeError(
            f"Check-out ({check_out}) must be after check-in ({check_in})"
        )
    tax_rate = to_decimal(tax_rate)

    holidays = {
        h.date: h
        for h in registry.find_by_date_range(check_in, check_out - timedelta(days=1))
        if h.is_active
    }

    nights_by_type: Dict[SeasonType, int] = {season: 0 for season in SeasonType}
    subtotal_by_type: Dict[SeasonType, Decimal] = {season: Decimal("0") for season in SeasonType}
    breakdown: List[NightPrice] = []

    for night in iter_nights(check_in, check_out):
        holiday = holidays.get(night)
        season = holiday.season_type if holiday else classify_by_weekday(night)
        price = rates.rate_for(season)

        nights_by_type[season] += 1
        subtotal_by_type[season] += price
        breakdown.append(NightPrice(
            date=night,
            season_type=season,
            price=price,
            is_holiday=holiday is not None,
            holiday_name=holiday.name if holiday else None,
        ))

    total_before_tax = sum(subtotal_by_type.values(), Decimal("0"))
    tax = quantize_money(total_before_tax * tax_rate)
    result = StayPriceResult(
        total_nights=len(breakdown),
        nights_by_type=nights_by_type,
        subtotal_by_type=subtotal_by_type,
        total_before_tax=total_before_tax,
        tax_rate=tax_rate,
        tax=tax,
        total_price=total_before_tax + tax,
        breakdown=tuple(breakdown),
    )
    logger.debug(
        "Priced %s -> %s: %d nights, total %s",
        check_in, check_out, result.total_nights, result.total_price,
    )
    return result


def validate_reservation_dates(
    check_in: date,
    check_out: date,
    today: date,
    max_nights: int = MAX_STAY_NIGHTS,
) -> DateValidation:
    """Basic date sanity; the first failing rule is reported"""
    errors = reservation_date_errors(check_in, check_out, today, max_nights)
    if errors:
        return DateValidation(valid=False, error=errors[0])
    return DateValidation(valid=True)


def reservation_date_errors(
    check_in: date,
    check_out: date,
    today: date,
    max_nights: int = MAX_STAY_NIGHTS,
) -> List[str]:
    errors = []
    if check_in < get_minimum_date(today):
        errors.append("Check-in date must be at least tomorrow")
    if check_out <= check_in:
        errors.append("Check-out date must be after the check-in date")
    elif (check_out - check_in).days > max_nights:
        errors.append(f"Stay cannot exceed {max_nights} consecutive nights")
    return errors


def get_minimum_date(today: date) -> date:
    """Earliest selectable check-in"""
    return today + timedelta(days=1)


def get_next_available_check_out(check_in: date) -> date:
    return check_in + timedelta(days=1)


def format_price(amount: Number, currency: str = "USD") -> str:
    """Whole-unit display price, e.g. '$1,250'"""
    rounded = to_decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    symbol = "$" if currency == "USD" else f"{currency} "
    return f"{symbol}{rounded:,}"


class SeasonStatistics(BaseModel):
    nights: int
    revenue: Decimal
    average_price: Decimal


class PricingStatistics(BaseModel):
    season_breakdown: Dict[SeasonType, SeasonStatistics]
    total_revenue: Decimal
    total_nights: int
    average_price_per_night: Decimal


def _average(total: Decimal, count: int) -> Decimal:
    if count == 0:
        return Decimal("0.00")
    return quantize_money(total / count)


def calculate_pricing_statistics(result: StayPriceResult) -> PricingStatistics:
    """Per-season revenue summary of a priced period (pre-tax)"""
    breakdown = {
        season: SeasonStatistics(
            nights=result.nights_by_type[season],
            revenue=result.subtotal_by_type[season],
            average_price=_average(result.subtotal_by_type[season], result.nights_by_type[season]),
        )
        for season in SeasonType
    }
    return PricingStatistics(
        season_breakdown=breakdown,
        total_revenue=result.total_before_tax,
        total_nights=result.total_nights,
        average_price_per_night=_average(result.total_before_tax, result.total_nights),
    )

