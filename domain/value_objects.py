"""Domain Value Objects"""
from pydantic import BaseModel, Field, validator
from datetime import date, time
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from domain.enums import SeasonType, ModificationOutcome, MemberType


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Half-open [start, end) overlap; back-to-back stays do not overlap"""
    return start_a < end_b and end_a > start_b


class RateTable(BaseModel):
    """Per-night price of one accommodation for each season"""
    low: Decimal = Field(ge=0)
    high: Decimal = Field(ge=0)
    holiday: Decimal = Field(ge=0)

    @validator('low', 'high', 'holiday', pre=True)
    def reject_binary_floats(cls, v):
        # floats carry binary rounding error into every nightly sum
        if isinstance(v, float):
            raise ValueError('Rates must be given as int, str or Decimal, not float')
        return v

    def rate_for(self, season_type: SeasonType) -> Decimal:
        return getattr(self, season_type.value)

    class Config:
        frozen = True


class NightPrice(BaseModel):
    """One billed night of a stay"""
    date: date
    season_type: SeasonType
    price: Decimal
    is_holiday: bool = False
    holiday_name: Optional[str] = None

    class Config:
        frozen = True


class StayPriceResult(BaseModel):
    """Priced stay. Recomputed whenever dates or rates change, never mutated."""
    total_nights: int
    nights_by_type: Dict[SeasonType, int]
    subtotal_by_type: Dict[SeasonType, Decimal]
    total_before_tax: Decimal
    tax_rate: Decimal
    tax: Decimal
    total_price: Decimal
    breakdown: Tuple[NightPrice, ...] = ()

    class Config:
        frozen = True


class DateValidation(BaseModel):
    valid: bool
    error: Optional[str] = None

    class Config:
        frozen = True


class ValidationResult(BaseModel):
    """Accumulated outcome of a validation; valid is derived from errors"""
    errors: List[str] = []
    warnings: List[str] = []

    @property
    def valid(self) -> bool:
        return not self.errors

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def merge(self, other: "ValidationResult") -> None:
        """Fold another result's errors and warnings into this one"""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    @classmethod
    def failure(cls, message: str) -> "ValidationResult":
        return cls(errors=[message])


class ModificationValidationResult(ValidationResult):
    """Modification result; outcome keeps manager approval apart from valid"""
    outcome: ModificationOutcome = ModificationOutcome.APPROVED

    @classmethod
    def failure(cls, message: str) -> "ModificationValidationResult":
        return cls(errors=[message], outcome=ModificationOutcome.REJECTED)


class PaymentInfo(BaseModel):
    payment_required: bool
    time_limit_hours: int
    exempt_reason: Optional[str] = None

    class Config:
        frozen = True


class CheckInOutTimes(BaseModel):
    check_in: time
    check_out: time

    class Config:
        frozen = True


class BusinessRulesSummary(BaseModel):
    """Human-readable digest of the rules that apply to one member type"""
    member_type: MemberType
    max_nights: int
    allowed_days: List[str]
    payment_time_limit_hours: int
    check_in_time: time
    check_out_time: time
    special_rules: List[str] = []
