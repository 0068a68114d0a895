"""Application Services - load snapshots from repositories and run the rules engine"""
import logging
from uuid import UUID
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, List, Optional

from domain.repositories import (
    HolidayRepository, AccommodationRepository, MemberRepository, ReservationRepository,
)
from domain.entities import HolidayRecord, Member, ReservationRequest, ReservationSnapshot
from domain.enums import SeasonType, AccommodationType, ReservationStatus, PaymentStatus
from domain.exceptions import InvalidDateRangeError, MemberNotFoundError, AccommodationNotFoundError
from domain.pricing import (
    DEFAULT_TAX_RATE, MAX_STAY_NIGHTS, Number, PricingStatistics,
    calculate_stay_price, calculate_pricing_statistics, validate_reservation_dates,
)
from domain.seasons import classify_date
from domain.validation import ReservationValidator, ValidationOptions
from domain.value_objects import (
    RateTable, StayPriceResult, DateValidation, ValidationResult,
    ModificationValidationResult, PaymentInfo, CheckInOutTimes, BusinessRulesSummary,
)
from infrastructure.holiday_registry import InMemoryHolidayRegistry
from infrastructure import settings

logger = logging.getLogger(__name__)


class HolidayService:
    """Service for holiday calendar use cases"""

    def __init__(self, repository: HolidayRepository):
        self.repository = repository

    async def create_holiday(
        self,
        day: date,
        name: str,
        description: Optional[str] = None,
        season_type: SeasonType = SeasonType.HOLIDAY,
        is_active: bool = True
    ) -> HolidayRecord:
        """Register a date with a season override"""
        existing = await self.repository.find_by_date(day)
        if existing and is_active:
            raise ValueError(f"An active holiday already exists on {day}: {existing.name}")

        holiday = HolidayRecord(
            date=day,
            name=name,
            description=description,
            season_type=season_type,
            is_active=is_active
        )
        logger.info("Holiday %r created for %s (%s)", name, day, season_type.value)
        return await self.repository.save(holiday)

    async def update_holiday(
        self,
        holiday_id: UUID,
        name: Optional[str] = None,
        description: Optional[str] = None,
        season_type: Optional[SeasonType] = None,
        is_active: Optional[bool] = None
    ) -> Optional[HolidayRecord]:
        """Update holiday details"""
        holiday = await self.repository.find_by_id(holiday_id)
        if not holiday:
            return None

        changes = {
            key: value for key, value in (
                ("name", name),
                ("description", description),
                ("season_type", season_type),
                ("is_active", is_active),
            ) if value is not None
        }
        updated = holiday.model_copy(update=changes)
        if updated.is_active:
            existing = await self.repository.find_by_date(updated.date)
            if existing and existing.holiday_id != updated.holiday_id:
                raise ValueError(f"An active holiday already exists on {updated.date}: {existing.name}")
        logger.info("Holiday %s updated: %s", holiday_id, sorted(changes))
        return await self.repository.update(updated)

    async def delete_holiday(self, holiday_id: UUID) -> bool:
        deleted = await self.repository.delete(holiday_id)
        if deleted:
            logger.info("Holiday %s deleted", holiday_id)
        return deleted

    async def get_holiday(self, holiday_id: UUID) -> Optional[HolidayRecord]:
        return await self.repository.find_by_id(holiday_id)

    async def get_holidays(self, year: Optional[int] = None) -> List[HolidayRecord]:
        """Active holidays of a year, or every holiday when no year is given"""
        if year is None:
            return await self.repository.find_all()
        return await self.repository.find_by_year(year)

    async def get_upcoming_holidays(self, today: date, limit: int = 10) -> List[HolidayRecord]:
        holidays = await self.repository.find_all()
        upcoming = [h for h in holidays if h.is_active and h.date >= today]
        return upcoming[:limit]

    async def load_registry(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> InMemoryHolidayRegistry:
        """Snapshot of active holidays for the synchronous rules engine"""
        if start_date is None or end_date is None:
            holidays = await self.repository.find_all()
        else:
            holidays = await self.repository.find_by_date_range(start_date, end_date)
        return InMemoryHolidayRegistry(holidays)


class PricingService:
    """Service for stay pricing use cases"""

    def __init__(
        self,
        accommodation_repo: AccommodationRepository,
        holiday_service: HolidayService,
        tax_rate: Number = DEFAULT_TAX_RATE,
        max_range_days: int = settings.MAX_PRICING_RANGE_DAYS
    ):
        self.accommodation_repo = accommodation_repo
        self.holiday_service = holiday_service
        self.tax_rate = tax_rate
        self.max_range_days = max_range_days

    async def get_day_type(self, day: date) -> SeasonType:
        registry = await self.holiday_service.load_registry(day, day)
        return classify_date(day, registry)

    async def get_accommodation_rates(self, accommodation_id: str) -> Optional[RateTable]:
        accommodation = await self.accommodation_repo.find_by_id(accommodation_id)
        if not accommodation:
            logger.warning("No accommodation found with id %s", accommodation_id)
            return None
        return accommodation.rates

    async def calculate_price_for_rates(
        self,
        check_in: date,
        check_out: date,
        rates: RateTable,
        tax_rate: Optional[Number] = None
    ) -> StayPriceResult:
        """Price a stay for explicit rates"""
        if check_out <= check_in:
            raise InvalidDateRangeError("Check-out must be after check-in")
        if (check_out - check_in).days > self.max_range_days:
            raise InvalidDateRangeError(f"Date range may not exceed {self.max_range_days} days")
        registry = await self.holiday_service.load_registry(check_in, check_out)
        return calculate_stay_price(
            check_in, check_out, rates, registry,
            self.tax_rate if tax_rate is None else tax_rate
        )

    async def calculate_reservation_price(
        self,
        accommodation_id: str,
        check_in: date,
        check_out: date,
        tax_rate: Optional[Number] = None
    ) -> Optional[StayPriceResult]:
        """Price a stay at a stored accommodation; None when it does not exist"""
        rates = await self.get_accommodation_rates(accommodation_id)
        if rates is None:
            return None
        return await self.calculate_price_for_rates(check_in, check_out, rates, tax_rate)

    async def get_pricing_statistics(
        self,
        accommodation_id: str,
        start_date: date,
        end_date: date
    ) -> Optional[PricingStatistics]:
        result = await self.calculate_reservation_price(accommodation_id, start_date, end_date)
        if result is None:
            return None
        return calculate_pricing_statistics(result)


class SnapshotService:
    """Service that records the member and reservation snapshots the validator reads"""

    def __init__(
        self,
        member_repo: MemberRepository,
        reservation_repo: ReservationRepository,
        accommodation_repo: AccommodationRepository
    ):
        self.member_repo = member_repo
        self.reservation_repo = reservation_repo
        self.accommodation_repo = accommodation_repo

    async def register_member(self, member: Member) -> Member:
        logger.info("Member %s registered as %s", member.user_id, member.member_type.value)
        return await self.member_repo.save(member)

    async def get_member(self, user_id: str) -> Optional[Member]:
        return await self.member_repo.find_by_id(user_id)

    async def register_reservation(
        self,
        reservation_id: str,
        user_id: str,
        accommodation_id: str,
        check_in: date,
        check_out: date,
        status: ReservationStatus = ReservationStatus.PENDING,
        payment_status: PaymentStatus = PaymentStatus.PENDING
    ) -> ReservationSnapshot:
        """Record a reservation; holder type and accommodation type come from the repositories"""
        if check_out <= check_in:
            raise InvalidDateRangeError("Check-out must be after check-in")

        member = await self.member_repo.find_by_id(user_id)
        if not member:
            raise MemberNotFoundError(f"User {user_id} not found")
        accommodation = await self.accommodation_repo.find_by_id(accommodation_id)
        if not accommodation:
            raise AccommodationNotFoundError(f"Accommodation {accommodation_id} not found")

        reservation = ReservationSnapshot(
            reservation_id=reservation_id,
            user_id=user_id,
            user_type=member.member_type,
            accommodation_id=accommodation_id,
            accommodation_type=accommodation.accommodation_type,
            check_in=check_in,
            check_out=check_out,
            status=status,
            payment_status=payment_status
        )
        logger.info(
            "Reservation %s recorded for %s at %s (%s -> %s, %s)",
            reservation_id, user_id, accommodation_id, check_in, check_out, status.value
        )
        return await self.reservation_repo.save(reservation)

    async def get_reservation(self, reservation_id: str) -> Optional[ReservationSnapshot]:
        return await self.reservation_repo.find_by_id(reservation_id)

    async def get_user_reservations(self, user_id: str) -> List[ReservationSnapshot]:
        return await self.reservation_repo.find_by_user_id(user_id)

    async def get_accommodation_reservations(self, accommodation_id: str) -> List[ReservationSnapshot]:
        return await self.reservation_repo.find_by_accommodation_id(accommodation_id)


class ReservationValidationService:
    """Service that feeds repository snapshots to the ReservationValidator"""

    def __init__(
        self,
        reservation_repo: ReservationRepository,
        member_repo: MemberRepository,
        holiday_service: HolidayService,
        clock: Optional[Callable[[], datetime]] = None,
        max_stay_nights: int = MAX_STAY_NIGHTS
    ):
        self.reservation_repo = reservation_repo
        self.member_repo = member_repo
        self.holiday_service = holiday_service
        self.clock = clock or settings.local_now
        self.max_stay_nights = max_stay_nights

    async def _validator(self) -> ReservationValidator:
        """Fresh validator over a consistent snapshot of every collaborator"""
        return ReservationValidator(
            reservations=await self.reservation_repo.find_all(),
            members=await self.member_repo.find_all(),
            holiday_registry=await self.holiday_service.load_registry(),
            clock=self.clock,
            max_stay_nights=self.max_stay_nights
        )

    def validate_reservation_dates(self, check_in: date, check_out: date) -> DateValidation:
        return validate_reservation_dates(
            check_in, check_out, self.clock().date(), self.max_stay_nights
        )

    async def validate_new_reservation(
        self,
        request: ReservationRequest,
        options: Optional[ValidationOptions] = None
    ) -> ValidationResult:
        validator = await self._validator()
        return validator.validate_new_reservation(request, options)

    async def validate_reservation_modification(
        self,
        reservation_id: str,
        new_check_in: Optional[date] = None,
        new_check_out: Optional[date] = None,
        options: Optional[ValidationOptions] = None
    ) -> ModificationValidationResult:
        validator = await self._validator()
        return validator.validate_reservation_modification(
            reservation_id, new_check_in, new_check_out, options
        )

    async def validate_reservation_cancellation(
        self,
        reservation_id: str,
        reason: Optional[str] = None
    ) -> ValidationResult:
        validator = await self._validator()
        return validator.validate_reservation_cancellation(reservation_id, reason)

    async def validate_key_handover(
        self,
        reservation_id: str,
        recipient_id: str,
        has_authorization_letter: bool = False
    ) -> ValidationResult:
        validator = await self._validator()
        return validator.validate_key_handover(reservation_id, recipient_id, has_authorization_letter)

    async def validate_transfer(
        self,
        from_user_id: str,
        to_user_id: str,
        reservation_id: Optional[str] = None
    ) -> ValidationResult:
        validator = await self._validator()
        return validator.validate_transfer(from_user_id, to_user_id, reservation_id)

    async def calculate_payment_info(
        self,
        user_id: str,
        check_in: date,
        total_price: Decimal
    ) -> PaymentInfo:
        validator = await self._validator()
        return validator.calculate_payment_info(user_id, check_in, total_price)

    async def check_availability(self, accommodation_id: str, check_in: date, check_out: date) -> bool:
        validator = await self._validator()
        return validator.check_availability(accommodation_id, check_in, check_out)

    async def get_check_in_out_info(
        self,
        user_id: str,
        accommodation_type: Optional[AccommodationType] = None
    ) -> CheckInOutTimes:
        validator = await self._validator()
        return validator.get_check_in_out_info(user_id, accommodation_type)

    async def get_user_business_rules_summary(self, user_id: str) -> BusinessRulesSummary:
        validator = await self._validator()
        return validator.get_user_business_rules_summary(user_id)
