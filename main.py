from fastapi import FastAPI, HTTPException, Depends, Query, Response
from uuid import UUID
from datetime import date, datetime
from typing import Callable, List, Optional

from api.schemas import (
    # Pricing
    CalculatePriceRequest, StayPriceResponse, RateTableResponse, SeasonInfoResponse,
    DayTypeResponse, PricingStatisticsResponse, CheckAvailabilityRequest, AvailabilityResponse,
    # Holidays
    CreateHolidayRequest, UpdateHolidayRequest, HolidayResponse,
    # Business rules
    BusinessRuleResponse, BusinessRulesSummaryResponse, CheckInOutResponse,
    # Validation
    ValidateDatesRequest, DateValidationResponse, ValidateReservationRequest,
    ValidateModificationRequest, ValidateCancellationRequest, ValidateKeyHandoverRequest,
    ValidateTransferRequest, ValidationResponse, ModificationValidationResponse,
    # Payments
    PaymentInfoRequest, PaymentInfoResponse,
    # Snapshots
    RegisterMemberRequest, MemberResponse, RegisterReservationRequest, ReservationSnapshotResponse,
)

from application.services import (
    HolidayService, PricingService, SnapshotService, ReservationValidationService,
)
from infrastructure.repositories.in_memory_repositories import (
    InMemoryHolidayRepository, InMemoryAccommodationRepository,
    InMemoryMemberRepository, InMemoryReservationRepository,
)
from infrastructure import settings
from infrastructure.seed_data import default_holidays, default_accommodations, default_members
from domain.business_rules import DirectorBusinessRule, rules_for
from domain.entities import Member, ReservationRequest
from domain.enums import SeasonType, MemberType, AccommodationType, ReservationStatus
from domain.exceptions import MemberNotFoundError, AccommodationNotFoundError
from domain.pricing import format_price, get_minimum_date, get_next_available_check_out
from domain.seasons import SEASON_INFO, get_season_info
from domain.validation import ValidationOptions
from domain.value_objects import RateTable, ValidationResult

settings.configure_logging()

app = FastAPI(
    title="Club Reservation Pricing API",
    description="Seasonal pricing and member business rules for club accommodation reservations",
    version="1.0.0"
)

# Initialize repositories
holiday_repo = InMemoryHolidayRepository(default_holidays())
accommodation_repo = InMemoryAccommodationRepository(default_accommodations())
member_repo = InMemoryMemberRepository(default_members())
reservation_repo = InMemoryReservationRepository()

# Dependency injection
def get_clock() -> Callable[[], datetime]:
    return settings.local_now

def get_holiday_service() -> HolidayService:
    return HolidayService(holiday_repo)

def get_pricing_service(
    holiday_service: HolidayService = Depends(get_holiday_service)
) -> PricingService:
    return PricingService(
        accommodation_repo, holiday_service, settings.TAX_RATE,
        max_range_days=settings.MAX_PRICING_RANGE_DAYS
    )

def get_snapshot_service() -> SnapshotService:
    return SnapshotService(member_repo, reservation_repo, accommodation_repo)

def get_validation_service(
    holiday_service: HolidayService = Depends(get_holiday_service),
    clock: Callable[[], datetime] = Depends(get_clock)
) -> ReservationValidationService:
    return ReservationValidationService(
        reservation_repo, member_repo, holiday_service,
        clock=clock, max_stay_nights=settings.MAX_STAY_NIGHTS
    )

# ============================================================================
# HEALTH & ENUM REFERENCE ENDPOINTS
# ============================================================================

@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

@app.get("/api/enums/season-type", tags=["Enum Reference"])
async def get_season_types():
    """Get all SeasonType enum values"""
    return {
        "values": [item.value for item in SeasonType],
        "description": "Season values: low (Monday-Thursday), high (Friday-Sunday), holiday"
    }

@app.get("/api/enums/member-type", tags=["Enum Reference"])
async def get_member_types():
    """Get all MemberType enum values"""
    return {
        "values": [item.value for item in MemberType],
        "description": "Member type values: member, widow, special_visitor, transient_visitor, youth_visitor, board_director"
    }

@app.get("/api/enums/accommodation-type", tags=["Enum Reference"])
async def get_accommodation_types():
    """Get all AccommodationType enum values"""
    return {
        "values": [item.value for item in AccommodationType],
        "description": "Accommodation type values: corinto_casas, el_sunzal_casas, apartamentos, suites"
    }

@app.get("/api/enums/reservation-status", tags=["Enum Reference"])
async def get_reservation_statuses():
    """Get all ReservationStatus enum values"""
    return {
        "values": [item.value for item in ReservationStatus],
        "description": "Reservation status values: pending, confirmed, cancelled, completed"
    }

# ============================================================================
# PRICING ENDPOINTS
# ============================================================================

@app.get("/api/pricing/seasons", response_model=List[SeasonInfoResponse], tags=["Pricing"])
async def get_seasons():
    """Get season names, descriptions and reference multipliers"""
    return [SeasonInfoResponse(**info.model_dump()) for info in SEASON_INFO.values()]

@app.get("/api/pricing/day-type/{day}", response_model=DayTypeResponse, tags=["Pricing"])
async def get_day_type(
    day: date,
    service: PricingService = Depends(get_pricing_service)
):
    """Classify a single date"""
    season_type = await service.get_day_type(day)
    return DayTypeResponse(
        date=day,
        season_type=season_type,
        season_name=get_season_info(season_type).name
    )

@app.post("/api/pricing/calculate", response_model=StayPriceResponse, tags=["Pricing"])
async def calculate_price(
    request: CalculatePriceRequest,
    service: PricingService = Depends(get_pricing_service)
):
    """Price a stay for explicit rates or for a stored accommodation"""
    try:
        if request.rates is not None:
            result = await service.calculate_price_for_rates(
                check_in=request.check_in,
                check_out=request.check_out,
                rates=RateTable(**request.rates.model_dump()),
                tax_rate=request.tax_rate
            )
        elif request.accommodation_id:
            result = await service.calculate_reservation_price(
                accommodation_id=request.accommodation_id,
                check_in=request.check_in,
                check_out=request.check_out,
                tax_rate=request.tax_rate
            )
            if not result:
                raise HTTPException(status_code=404, detail="Accommodation not found")
        else:
            raise HTTPException(status_code=400, detail="Either rates or accommodation_id is required")
        return StayPriceResponse(
            **result.model_dump(),
            formatted_total=format_price(result.total_price, settings.CURRENCY)
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@app.get("/api/pricing/rates/{accommodation_id}", response_model=RateTableResponse, tags=["Pricing"])
async def get_rates(
    accommodation_id: str,
    service: PricingService = Depends(get_pricing_service)
):
    """Get the rate table of an accommodation"""
    rates = await service.get_accommodation_rates(accommodation_id)
    if not rates:
        raise HTTPException(status_code=404, detail="Accommodation not found")
    return RateTableResponse(accommodation_id=accommodation_id, **rates.model_dump())

@app.get("/api/pricing/statistics/{accommodation_id}", response_model=PricingStatisticsResponse, tags=["Pricing"])
async def get_pricing_statistics(
    accommodation_id: str,
    start_date: date,
    end_date: date,
    service: PricingService = Depends(get_pricing_service)
):
    """Per-season revenue of an accommodation over a period"""
    try:
        statistics = await service.get_pricing_statistics(accommodation_id, start_date, end_date)
        if not statistics:
            raise HTTPException(status_code=404, detail="Accommodation not found")
        return PricingStatisticsResponse(accommodation_id=accommodation_id, **statistics.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@app.post("/api/pricing/check-availability", response_model=AvailabilityResponse, tags=["Pricing"])
async def check_availability(
    request: CheckAvailabilityRequest,
    service: ReservationValidationService = Depends(get_validation_service)
):
    """Whether no active reservation holds the accommodation on the requested nights"""
    if request.check_out <= request.check_in:
        raise HTTPException(status_code=400, detail="Check-out must be after check-in")
    available = await service.check_availability(
        request.accommodation_id, request.check_in, request.check_out
    )
    return AvailabilityResponse(**request.model_dump(), available=available)

# ============================================================================
# HOLIDAY ENDPOINTS
# ============================================================================

@app.get("/api/holidays", response_model=List[HolidayResponse], tags=["Holidays"])
async def get_holidays(
    year: Optional[int] = None,
    service: HolidayService = Depends(get_holiday_service)
):
    """Get holidays, optionally only the active ones of a year"""
    holidays = await service.get_holidays(year)
    return [_holiday_to_response(h) for h in holidays]

@app.post("/api/holidays", response_model=HolidayResponse, status_code=201, tags=["Holidays"])
async def create_holiday(
    request: CreateHolidayRequest,
    service: HolidayService = Depends(get_holiday_service)
):
    """Register a holiday or special date"""
    try:
        holiday = await service.create_holiday(
            day=request.date,
            name=request.name,
            description=request.description,
            season_type=request.season_type,
            is_active=request.is_active
        )
        return _holiday_to_response(holiday)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@app.get("/api/holidays/upcoming", response_model=List[HolidayResponse], tags=["Holidays"])
async def get_upcoming_holidays(
    limit: int = Query(settings.UPCOMING_HOLIDAYS_LIMIT, ge=1),
    service: HolidayService = Depends(get_holiday_service),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    """Get the next active holidays from today"""
    holidays = await service.get_upcoming_holidays(clock().date(), limit)
    return [_holiday_to_response(h) for h in holidays]

@app.get("/api/holidays/{holiday_id}", response_model=HolidayResponse, tags=["Holidays"])
async def get_holiday(
    holiday_id: UUID,
    service: HolidayService = Depends(get_holiday_service)
):
    """Get holiday by ID"""
    holiday = await service.get_holiday(holiday_id)
    if not holiday:
        raise HTTPException(status_code=404, detail="Holiday not found")
    return _holiday_to_response(holiday)

@app.put("/api/holidays/{holiday_id}", response_model=HolidayResponse, tags=["Holidays"])
async def update_holiday(
    holiday_id: UUID,
    request: UpdateHolidayRequest,
    service: HolidayService = Depends(get_holiday_service)
):
    """Update holiday details"""
    try:
        holiday = await service.update_holiday(
            holiday_id=holiday_id,
            name=request.name,
            description=request.description,
            season_type=request.season_type,
            is_active=request.is_active
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not holiday:
        raise HTTPException(status_code=404, detail="Holiday not found")
    return _holiday_to_response(holiday)

@app.delete("/api/holidays/{holiday_id}", status_code=204, tags=["Holidays"])
async def delete_holiday(
    holiday_id: UUID,
    service: HolidayService = Depends(get_holiday_service)
):
    """Delete holiday"""
    if not await service.delete_holiday(holiday_id):
        raise HTTPException(status_code=404, detail="Holiday not found")
    return Response(status_code=204)

# ============================================================================
# BUSINESS RULE ENDPOINTS
# ============================================================================

@app.get("/api/business-rules/{member_type}", response_model=BusinessRuleResponse, tags=["Business Rules"])
async def get_business_rules(member_type: str):
    """Get the business rule of a member type"""
    try:
        rule = rules_for(member_type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    response = BusinessRuleResponse(
        member_type=MemberType(member_type),
        max_consecutive_days=rule.max_consecutive_days,
        max_reservations_per_member=rule.max_reservations_per_member,
        check_in_time=rule.check_in_time,
        check_out_time=rule.check_out_time,
        payment_time_limit_hours=rule.payment_time_limit_hours,
        modification_notice_hours=rule.modification_notice_hours,
        allowed_days_of_week=[day.name.capitalize() for day in sorted(rule.allowed_days_of_week)],
        weekend_advance_notice_days=rule.weekend_advance_notice_days
    )
    if isinstance(rule, DirectorBusinessRule):
        response.max_reservations_per_month = rule.max_reservations_per_month
        response.max_days_per_reservation = rule.max_days_per_reservation
        response.location_caps = dict(rule.location_caps)
    return response

# ============================================================================
# MEMBER ENDPOINTS
# ============================================================================

@app.post("/api/members", response_model=MemberResponse, status_code=201, tags=["Members"])
async def register_member(
    request: RegisterMemberRequest,
    service: SnapshotService = Depends(get_snapshot_service)
):
    """Register or replace a member snapshot"""
    member = await service.register_member(Member(**request.model_dump()))
    return MemberResponse(**member.model_dump())

@app.get("/api/members/{user_id}", response_model=MemberResponse, tags=["Members"])
async def get_member(
    user_id: str,
    service: SnapshotService = Depends(get_snapshot_service)
):
    """Get member by ID"""
    member = await service.get_member(user_id)
    if not member:
        raise HTTPException(status_code=404, detail="User not found")
    return MemberResponse(**member.model_dump())

@app.get("/api/members/{user_id}/reservations", response_model=List[ReservationSnapshotResponse], tags=["Members"])
async def get_member_reservations(
    user_id: str,
    service: SnapshotService = Depends(get_snapshot_service)
):
    """Get all reservations held by a member"""
    reservations = await service.get_user_reservations(user_id)
    return [ReservationSnapshotResponse(**r.model_dump()) for r in reservations]

@app.get("/api/members/{user_id}/business-rules", response_model=BusinessRulesSummaryResponse, tags=["Members"])
async def get_member_business_rules(
    user_id: str,
    service: ReservationValidationService = Depends(get_validation_service)
):
    """Get the summary of the rules that apply to a member"""
    try:
        summary = await service.get_user_business_rules_summary(user_id)
        return BusinessRulesSummaryResponse(**summary.model_dump())
    except MemberNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")

@app.get("/api/members/{user_id}/check-in-out", response_model=CheckInOutResponse, tags=["Members"])
async def get_member_check_in_out(
    user_id: str,
    accommodation_type: Optional[AccommodationType] = None,
    service: ReservationValidationService = Depends(get_validation_service)
):
    """Get check-in and check-out times for a member"""
    try:
        times = await service.get_check_in_out_info(user_id, accommodation_type)
        return CheckInOutResponse(**times.model_dump())
    except MemberNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")

# ============================================================================
# RESERVATION ENDPOINTS
# ============================================================================

@app.post("/api/reservations", response_model=ReservationSnapshotResponse, status_code=201, tags=["Reservations"])
async def register_reservation(
    request: RegisterReservationRequest,
    service: SnapshotService = Depends(get_snapshot_service)
):
    """Record an existing reservation so validations take it into account"""
    try:
        reservation = await service.register_reservation(
            reservation_id=request.reservation_id,
            user_id=request.user_id,
            accommodation_id=request.accommodation_id,
            check_in=request.check_in,
            check_out=request.check_out,
            status=request.status,
            payment_status=request.payment_status
        )
        return ReservationSnapshotResponse(**reservation.model_dump())
    except (MemberNotFoundError, AccommodationNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@app.get("/api/reservations/{reservation_id}", response_model=ReservationSnapshotResponse, tags=["Reservations"])
async def get_reservation(
    reservation_id: str,
    service: SnapshotService = Depends(get_snapshot_service)
):
    """Get reservation by ID"""
    reservation = await service.get_reservation(reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return ReservationSnapshotResponse(**reservation.model_dump())

@app.get("/api/accommodations/{accommodation_id}/reservations", response_model=List[ReservationSnapshotResponse], tags=["Reservations"])
async def get_accommodation_reservations(
    accommodation_id: str,
    service: SnapshotService = Depends(get_snapshot_service)
):
    """Get all reservations of an accommodation"""
    reservations = await service.get_accommodation_reservations(accommodation_id)
    return [ReservationSnapshotResponse(**r.model_dump()) for r in reservations]

@app.post("/api/reservations/validate-dates", response_model=DateValidationResponse, tags=["Reservation Validation"])
async def validate_dates(
    request: ValidateDatesRequest,
    service: ReservationValidationService = Depends(get_validation_service),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    """Basic date sanity for a proposed stay"""
    result = service.validate_reservation_dates(request.check_in, request.check_out)
    return DateValidationResponse(
        valid=result.valid,
        error=result.error,
        minimum_check_in=get_minimum_date(clock().date()),
        earliest_check_out=get_next_available_check_out(request.check_in)
    )

@app.post("/api/reservations/validate", response_model=ValidationResponse, tags=["Reservation Validation"])
async def validate_reservation(
    request: ValidateReservationRequest,
    service: ReservationValidationService = Depends(get_validation_service)
):
    """Validate a proposed reservation against the holder's business rules"""
    try:
        result = await service.validate_new_reservation(
            ReservationRequest(
                user_id=request.user_id,
                user_type=request.user_type,
                accommodation_id=request.accommodation_id,
                accommodation_type=request.accommodation_type,
                check_in=request.check_in,
                check_out=request.check_out
            ),
            ValidationOptions(skip_business_rules=request.skip_business_rules)
        )
        return _validation_to_response(result)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@app.post("/api/reservations/validate-transfer", response_model=ValidationResponse, tags=["Reservation Validation"])
async def validate_transfer(
    request: ValidateTransferRequest,
    service: ReservationValidationService = Depends(get_validation_service)
):
    """Reservations can never change holder"""
    result = await service.validate_transfer(
        request.from_user_id, request.to_user_id, request.reservation_id
    )
    return _validation_to_response(result)

@app.post("/api/reservations/{reservation_id}/validate-modification", response_model=ModificationValidationResponse, tags=["Reservation Validation"])
async def validate_modification(
    reservation_id: str,
    request: ValidateModificationRequest,
    service: ReservationValidationService = Depends(get_validation_service)
):
    """Validate rescheduling an existing reservation"""
    result = await service.validate_reservation_modification(
        reservation_id,
        new_check_in=request.new_check_in,
        new_check_out=request.new_check_out,
        options=ValidationOptions(
            is_emergency=request.is_emergency,
            emergency_proof=request.emergency_proof
        )
    )
    return ModificationValidationResponse(
        valid=result.valid,
        errors=result.errors,
        warnings=result.warnings,
        outcome=result.outcome
    )

@app.post("/api/reservations/{reservation_id}/validate-cancellation", response_model=ValidationResponse, tags=["Reservation Validation"])
async def validate_cancellation(
    reservation_id: str,
    request: ValidateCancellationRequest,
    service: ReservationValidationService = Depends(get_validation_service)
):
    """Validate cancelling an existing reservation"""
    result = await service.validate_reservation_cancellation(reservation_id, request.reason)
    return _validation_to_response(result)

@app.post("/api/reservations/{reservation_id}/validate-key-handover", response_model=ValidationResponse, tags=["Reservation Validation"])
async def validate_key_handover(
    reservation_id: str,
    request: ValidateKeyHandoverRequest,
    service: ReservationValidationService = Depends(get_validation_service)
):
    """Validate handing the keys of a reservation to someone"""
    result = await service.validate_key_handover(
        reservation_id, request.recipient_id, request.has_authorization_letter
    )
    return _validation_to_response(result)

# ============================================================================
# PAYMENT ENDPOINTS
# ============================================================================

@app.post("/api/payments/info", response_model=PaymentInfoResponse, tags=["Payments"])
async def get_payment_info(
    request: PaymentInfoRequest,
    service: ReservationValidationService = Depends(get_validation_service)
):
    """Payment terms of a stay for a member"""
    try:
        info = await service.calculate_payment_info(
            request.user_id, request.check_in, request.total_price
        )
        return PaymentInfoResponse(**info.model_dump())
    except MemberNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def _holiday_to_response(holiday) -> HolidayResponse:
    """Convert HolidayRecord entity to HolidayResponse"""
    return HolidayResponse(
        holiday_id=holiday.holiday_id,
        date=holiday.date,
        name=holiday.name,
        description=holiday.description,
        season_type=holiday.season_type,
        is_active=holiday.is_active,
        year=holiday.year
    )

def _validation_to_response(result: ValidationResult) -> ValidationResponse:
    """Convert ValidationResult to ValidationResponse"""
    return ValidationResponse(
        valid=result.valid,
        errors=result.errors,
        warnings=result.warnings
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
