"""API Schemas - Request and Response DTOs"""
from pydantic import BaseModel, Field
from datetime import date, time
from decimal import Decimal
from uuid import UUID
from typing import Dict, List, Optional

from domain.enums import (
    SeasonType, MemberType, AccommodationType, ModificationOutcome, ReservationStatus, PaymentStatus,
)


# ============================================================================
# PRICING SCHEMAS
# ============================================================================

class RateTableRequest(BaseModel):
    """Per-night rates DTO"""
    low: Decimal = Field(ge=0)
    high: Decimal = Field(ge=0)
    holiday: Decimal = Field(ge=0)


class CalculatePriceRequest(BaseModel):
    """Stay price request DTO: explicit rates or a stored accommodation"""
    check_in: date
    check_out: date
    accommodation_id: Optional[str] = None
    rates: Optional[RateTableRequest] = None
    tax_rate: Optional[Decimal] = Field(None, ge=0, le=1)


class NightPriceResponse(BaseModel):
    date: date
    season_type: SeasonType
    price: Decimal
    is_holiday: bool
    holiday_name: Optional[str] = None


class StayPriceResponse(BaseModel):
    """Stay price response DTO"""
    total_nights: int
    nights_by_type: Dict[SeasonType, int]
    subtotal_by_type: Dict[SeasonType, Decimal]
    total_before_tax: Decimal
    tax_rate: Decimal
    tax: Decimal
    total_price: Decimal
    breakdown: List[NightPriceResponse]
    formatted_total: str


class RateTableResponse(BaseModel):
    accommodation_id: str
    low: Decimal
    high: Decimal
    holiday: Decimal


class SeasonInfoResponse(BaseModel):
    season_type: SeasonType
    name: str
    description: str
    multiplier: Decimal


class DayTypeResponse(BaseModel):
    date: date
    season_type: SeasonType
    season_name: str


class SeasonStatisticsResponse(BaseModel):
    nights: int
    revenue: Decimal
    average_price: Decimal


class PricingStatisticsResponse(BaseModel):
    accommodation_id: str
    season_breakdown: Dict[SeasonType, SeasonStatisticsResponse]
    total_revenue: Decimal
    total_nights: int
    average_price_per_night: Decimal


class CheckAvailabilityRequest(BaseModel):
    accommodation_id: str
    check_in: date
    check_out: date


class AvailabilityResponse(BaseModel):
    accommodation_id: str
    check_in: date
    check_out: date
    available: bool


# ============================================================================
# HOLIDAY SCHEMAS
# ============================================================================

class CreateHolidayRequest(BaseModel):
    """Create holiday request DTO"""
    date: date
    name: str = Field(min_length=1)
    description: Optional[str] = None
    season_type: SeasonType = SeasonType.HOLIDAY
    is_active: bool = True


class UpdateHolidayRequest(BaseModel):
    """Update holiday request DTO"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    season_type: Optional[SeasonType] = None
    is_active: Optional[bool] = None


class HolidayResponse(BaseModel):
    """Holiday response DTO"""
    holiday_id: UUID
    date: date
    name: str
    description: Optional[str] = None
    season_type: SeasonType
    is_active: bool
    year: int


# ============================================================================
# BUSINESS RULE SCHEMAS
# ============================================================================

class BusinessRuleResponse(BaseModel):
    member_type: MemberType
    max_consecutive_days: int
    max_reservations_per_member: int
    check_in_time: time
    check_out_time: time
    payment_time_limit_hours: int
    modification_notice_hours: int
    allowed_days_of_week: List[str]
    weekend_advance_notice_days: Optional[int] = None
    max_reservations_per_month: Optional[int] = None
    max_days_per_reservation: Optional[int] = None
    location_caps: Optional[Dict[AccommodationType, int]] = None


class BusinessRulesSummaryResponse(BaseModel):
    member_type: MemberType
    max_nights: int
    allowed_days: List[str]
    payment_time_limit_hours: int
    check_in_time: time
    check_out_time: time
    special_rules: List[str]


class CheckInOutResponse(BaseModel):
    check_in: time
    check_out: time


# ============================================================================
# VALIDATION SCHEMAS
# ============================================================================

class ValidateDatesRequest(BaseModel):
    check_in: date
    check_out: date


class DateValidationResponse(BaseModel):
    valid: bool
    error: Optional[str] = None
    minimum_check_in: date
    earliest_check_out: date


class ValidateReservationRequest(BaseModel):
    """New reservation validation request DTO"""
    user_id: str
    user_type: Optional[MemberType] = None
    accommodation_id: str
    accommodation_type: AccommodationType
    check_in: date
    check_out: date
    skip_business_rules: bool = False


class ValidateModificationRequest(BaseModel):
    """Reservation modification validation request DTO

    General Manager approval is not accepted from clients; an emergency
    modification stays pending until a back-office caller re-validates it
    through the service with approval set.
    """
    new_check_in: Optional[date] = None
    new_check_out: Optional[date] = None
    is_emergency: bool = False
    emergency_proof: bool = False


class ValidateCancellationRequest(BaseModel):
    reason: Optional[str] = None


class ValidateKeyHandoverRequest(BaseModel):
    recipient_id: str
    has_authorization_letter: bool = False


class ValidateTransferRequest(BaseModel):
    from_user_id: str
    to_user_id: str
    reservation_id: Optional[str] = None


class ValidationResponse(BaseModel):
    """Validation result response DTO"""
    valid: bool
    errors: List[str] = []
    warnings: List[str] = []


class ModificationValidationResponse(ValidationResponse):
    outcome: ModificationOutcome


# ============================================================================
# PAYMENT SCHEMAS
# ============================================================================

class PaymentInfoRequest(BaseModel):
    user_id: str
    check_in: date
    total_price: Decimal = Field(ge=0)


class PaymentInfoResponse(BaseModel):
    payment_required: bool
    time_limit_hours: int
    exempt_reason: Optional[str] = None


# ============================================================================
# SNAPSHOT SCHEMAS
# ============================================================================

class RegisterMemberRequest(BaseModel):
    """Member snapshot DTO"""
    user_id: str = Field(min_length=1)
    member_type: MemberType
    name: str = Field(min_length=1)
    email: Optional[str] = None
    is_active: bool = True


class MemberResponse(RegisterMemberRequest):
    pass


class RegisterReservationRequest(BaseModel):
    """Reservation snapshot DTO"""
    reservation_id: str = Field(min_length=1)
    user_id: str
    accommodation_id: str
    check_in: date
    check_out: date
    status: ReservationStatus = ReservationStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING


class ReservationSnapshotResponse(BaseModel):
    reservation_id: str
    user_id: str
    user_type: MemberType
    accommodation_id: str
    accommodation_type: AccommodationType
    check_in: date
    check_out: date
    status: ReservationStatus
    payment_status: PaymentStatus
