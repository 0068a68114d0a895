"""Reservation Validator

Deterministic validation pipeline over externally supplied snapshots. Business
rule violations accumulate in a ValidationResult; only unrecoverable
preconditions (unknown or inactive user, ineligible holder) return early.
Programmer errors (unknown member type, user type disagreeing with the member
snapshot, missing user for payment terms) raise.

The validator does not make check-then-act atomic: whoever commits a validated
reservation must serialize writes per accommodation against the same snapshot.
"""
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Iterable, List, Optional, Sequence

from pydantic import BaseModel

from domain.business_rules import (
    BusinessRule, DirectorBusinessRule, rules_for, get_check_in_out_times, summarize_rules,
)
from domain.entities import Member, ReservationRequest, ReservationSnapshot
from domain.enums import (
    AccommodationType, MemberType, ModificationOutcome, ReservationStatus, SeasonType, Weekday,
)
from domain.exceptions import MemberNotFoundError
from domain.pricing import MAX_STAY_NIGHTS, reservation_date_errors
from domain.repositories import HolidayRegistry
from domain.seasons import is_weekend
from domain.value_objects import (
    ValidationResult, ModificationValidationResult, PaymentInfo, CheckInOutTimes,
    BusinessRulesSummary,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

NOT_TRANSFERABLE = "Reservations are not transferable between members under any circumstances"

ACCOMMODATION_LABELS = {
    AccommodationType.CORINTO_CASAS: "Corinto houses",
    AccommodationType.EL_SUNZAL_CASAS: "El Sunzal houses",
    AccommodationType.APARTAMENTOS: "apartments",
    AccommodationType.SUITES: "suites",
}


class ValidationOptions(BaseModel):
    skip_business_rules: bool = False
    is_emergency: bool = False
    emergency_proof: bool = False
    # second phase of an emergency modification
    manager_approved: bool = False


class ReservationValidator:
    """Validates reservation actions against member-type business rules

    The clock is required and must be aware in the club timezone; notice hours
    and the earliest check-in date are computed from it.
    """

    def __init__(
        self,
        reservations: Iterable[ReservationSnapshot],
        members: Iterable[Member],
        holiday_registry: HolidayRegistry,
        clock: Clock,
        max_stay_nights: int = MAX_STAY_NIGHTS,
    ):
        self._reservations: List[ReservationSnapshot] = list(reservations)
        self._members = {member.user_id: member for member in members}
        self._holidays = holiday_registry
        self._clock = clock
        self._max_stay_nights = max_stay_nights

    # ==================== NEW RESERVATIONS ====================
    def validate_new_reservation(
        self,
        request: ReservationRequest,
        options: Optional[ValidationOptions] = None,
    ) -> ValidationResult:
        """Run the full pipeline for a proposed reservation"""
        return self._validate_new(request, options or ValidationOptions(), self._reservations)

    def _validate_new(
        self,
        request: ReservationRequest,
        options: ValidationOptions,
        reservations: Sequence[ReservationSnapshot],
    ) -> ValidationResult:
        member = self._members.get(request.user_id)
        if member is None:
            return ValidationResult.failure("User not found")
        if not member.is_active:
            return ValidationResult.failure("User is inactive")
        if request.user_type is not None and request.user_type != member.member_type:
            raise ValueError(
                f"Request user type {request.user_type.value} does not match "
                f"member {member.user_id} ({member.member_type.value})"
            )

        ownership = self.validate_ownership(member.member_type)
        if not ownership.valid:
            return ownership

        rule = rules_for(member.member_type)
        today = self._clock().date()
        active = [r for r in reservations if r.is_active()]
        own_active = [r for r in active if r.user_id == member.user_id]

        result = ValidationResult()
        max_nights = min(self._max_stay_nights, rule.max_consecutive_days)
        for error in reservation_date_errors(request.check_in, request.check_out, today, max_nights):
            result.add_error(error)

        result.merge(self._check_availability(request, active))
        result.merge(self._check_user_limits(request, member, rule, own_active, today))

        if not options.skip_business_rules:
            result.merge(self._check_allowed_day(request, rule, today))
            if isinstance(rule, DirectorBusinessRule):
                result.merge(self._check_director_caps(request, rule, active))

        if any(r.overlaps(request.check_in, request.check_out) for r in own_active):
            result.add_error("You already have a reservation that overlaps these dates")

        if not result.valid:
            logger.info(
                "Reservation request by %s for %s (%s -> %s) rejected with %d error(s)",
                member.user_id, request.accommodation_id,
                request.check_in, request.check_out, len(result.errors),
            )
        return result

    @staticmethod
    def validate_ownership(member_type: MemberType) -> ValidationResult:
        """Whether a member type may be the holder of a reservation"""
        if member_type == MemberType.YOUTH_VISITOR:
            return ValidationResult.failure(
                "Youth visitors cannot make reservations; only the holding member "
                "(mother or father) may book"
            )
        return ValidationResult()

    def _check_availability(
        self,
        request: ReservationRequest,
        active: Sequence[ReservationSnapshot],
    ) -> ValidationResult:
        result = ValidationResult()
        conflict = next(
            (
                r for r in active
                if r.accommodation_id == request.accommodation_id
                and r.overlaps(request.check_in, request.check_out)
            ),
            None,
        )
        if conflict is not None:
            result.add_error(
                f"Accommodation {request.accommodation_id} is not available on the selected dates"
            )
        return result

    def _check_user_limits(
        self,
        request: ReservationRequest,
        member: Member,
        rule: BusinessRule,
        own_active: Sequence[ReservationSnapshot],
        today: date,
    ) -> ValidationResult:
        result = ValidationResult()

        if member.member_type == MemberType.MEMBER and is_weekend(request.check_in):
            upcoming_weekends = [
                r for r in own_active if is_weekend(r.check_in) and r.check_in >= today
            ]
            if len(upcoming_weekends) >= rule.max_reservations_per_member:
                result.add_error("Members may reserve only one house or apartment per weekend")

        if isinstance(rule, DirectorBusinessRule):
            same_month = [
                r for r in own_active
                if (r.check_in.year, r.check_in.month)
                == (request.check_in.year, request.check_in.month)
            ]
            if len(same_month) >= rule.max_reservations_per_month:
                result.add_error(
                    f"Board directors may make at most {rule.max_reservations_per_month} "
                    "reservations per month (one per property)"
                )
            same_type = [
                r for r in same_month if r.accommodation_type == request.accommodation_type
            ]
            if len(same_type) >= rule.max_per_accommodation_type_per_month:
                label = ACCOMMODATION_LABELS[request.accommodation_type]
                result.add_error(f"You already have a reservation in {label} this month")

        return result

    def _check_allowed_day(
        self,
        request: ReservationRequest,
        rule: BusinessRule,
        today: date,
    ) -> ValidationResult:
        result = ValidationResult()
        weekday = Weekday(request.check_in.weekday())
        if rule.allows_check_in_on(weekday):
            return result

        notice_days = rule.weekend_advance_notice_days
        if not notice_days:
            result.add_error(f"Check-in is not allowed on {weekday.name.capitalize()}")
        elif (request.check_in - today).days < notice_days:
            result.add_error(
                f"Weekend reservations require at least {notice_days} days advance notice"
            )
        else:
            result.add_warning("Weekend reservation authorized by sufficient advance notice")
        return result

    def _check_director_caps(
        self,
        request: ReservationRequest,
        rule: DirectorBusinessRule,
        active: Sequence[ReservationSnapshot],
    ) -> ValidationResult:
        result = ValidationResult()
        if request.nights > rule.max_days_per_reservation:
            result.add_error(
                f"Board directors may reserve at most {rule.max_days_per_reservation} "
                "nights per reservation"
            )

        cap = rule.location_caps.get(request.accommodation_type)
        if cap is not None:
            concurrent = [
                r for r in active
                if r.user_type == MemberType.BOARD_DIRECTOR
                and r.status == ReservationStatus.CONFIRMED
                and r.accommodation_type == request.accommodation_type
                and r.overlaps(request.check_in, request.check_out)
            ]
            if len(concurrent) >= cap:
                label = ACCOMMODATION_LABELS[request.accommodation_type]
                result.add_error(f"Only {cap} board director may stay in {label} at a time")
        return result

    # ==================== EXISTING RESERVATIONS ====================
    def validate_reservation_modification(
        self,
        reservation_id: str,
        new_check_in: Optional[date] = None,
        new_check_out: Optional[date] = None,
        options: Optional[ValidationOptions] = None,
    ) -> ModificationValidationResult:
        """Notice period check plus, when dates change, the full new-reservation pipeline"""
        options = options or ValidationOptions()
        reservation = self._find_reservation(reservation_id)
        if reservation is None:
            return ModificationValidationResult.failure("Reservation not found")
        member = self._members.get(reservation.user_id)
        if member is None:
            return ModificationValidationResult.failure("User not found")
        if reservation.status in (ReservationStatus.CANCELLED, ReservationStatus.COMPLETED):
            return ModificationValidationResult.failure(
                "Cancelled or completed reservations cannot be modified"
            )

        rule = rules_for(member.member_type)
        result = ModificationValidationResult()
        rejected = False

        if self._hours_until_check_in(reservation.check_in, rule) < rule.modification_notice_hours:
            if options.is_emergency and options.emergency_proof:
                result.add_warning(
                    "Emergency modification (illness, bereavement or verified emergency) "
                    "requires General Manager approval"
                )
                if not options.manager_approved:
                    result.add_error("Modification is pending General Manager approval")
                    result.outcome = ModificationOutcome.PENDING_MANAGER_APPROVAL
            else:
                result.add_error(
                    f"At least {rule.modification_notice_hours} hours notice is required to reschedule"
                )
                rejected = True

        if new_check_in is not None or new_check_out is not None:
            request = ReservationRequest(
                user_id=reservation.user_id,
                user_type=member.member_type,
                accommodation_id=reservation.accommodation_id,
                accommodation_type=reservation.accommodation_type,
                check_in=new_check_in or reservation.check_in,
                check_out=new_check_out or reservation.check_out,
            )
            others = [r for r in self._reservations if r.reservation_id != reservation.reservation_id]
            dates_result = self._validate_new(request, options, others)
            result.merge(dates_result)
            rejected = rejected or not dates_result.valid

        if rejected:
            result.outcome = ModificationOutcome.REJECTED
        return result

    def validate_reservation_cancellation(
        self,
        reservation_id: str,
        reason: Optional[str] = None,
    ) -> ValidationResult:
        reservation = self._find_reservation(reservation_id)
        if reservation is None:
            return ValidationResult.failure("Reservation not found")
        member = self._members.get(reservation.user_id)
        if member is None:
            return ValidationResult.failure("User not found")
        if reservation.status == ReservationStatus.COMPLETED:
            return ValidationResult.failure("Completed reservations cannot be cancelled")
        if reservation.status == ReservationStatus.CANCELLED:
            return ValidationResult.failure("Reservation is already cancelled")

        result = ValidationResult()
        rule = rules_for(member.member_type)
        if isinstance(rule, DirectorBusinessRule):
            hours = self._hours_until_check_in(reservation.check_in, rule)
            if hours < rule.cancellation_notice_hours:
                result.add_warning(
                    f"Board directors must give at least {rule.cancellation_notice_hours} "
                    "hours notice of cancellations"
                )
        logger.debug("Cancellation of %s validated (reason: %s)", reservation_id, reason)
        return result

    def validate_key_handover(
        self,
        reservation_id: str,
        recipient_id: str,
        has_authorization_letter: bool = False,
    ) -> ValidationResult:
        reservation = self._find_reservation(reservation_id)
        if reservation is None:
            return ValidationResult.failure("Reservation not found")

        result = ValidationResult()
        if recipient_id == reservation.user_id:
            return result
        if not has_authorization_letter:
            result.add_error(
                "Keys are only handed to the holding member. Anyone else (spouse, mother "
                "or children) needs a written authorization from the member"
            )
        else:
            result.add_warning("Written authorization required for key handover to a family member")
        return result

    def validate_transfer(
        self,
        from_user_id: str,
        to_user_id: str,
        reservation_id: Optional[str] = None,
    ) -> ValidationResult:
        """Always invalid: reservations cannot change holder"""
        return ValidationResult.failure(NOT_TRANSFERABLE)

    # ==================== PAYMENT & INFO ====================
    def calculate_payment_info(
        self,
        user_id: str,
        check_in: date,
        total_price: Decimal,
    ) -> PaymentInfo:
        """Payment terms for a stay.

        Board directors are exempt except when check-in falls on an active
        holiday-season date; everyone else pays within the rule's time limit.

        Raises:
            MemberNotFoundError: user_id is not in the member snapshot.
        """
        member = self._require_member(user_id)
        time_limit = rules_for(member.member_type).payment_time_limit_hours

        if member.member_type != MemberType.BOARD_DIRECTOR:
            return PaymentInfo(payment_required=True, time_limit_hours=time_limit)

        holiday = self._holidays.find_by_date(check_in)
        if holiday is not None and holiday.is_active and holiday.season_type == SeasonType.HOLIDAY:
            return PaymentInfo(
                payment_required=True,
                time_limit_hours=time_limit,
                exempt_reason="Board directors pay on holidays and special seasons",
            )
        logger.debug("Director %s exempt from paying %s for %s", user_id, total_price, check_in)
        return PaymentInfo(
            payment_required=False,
            time_limit_hours=time_limit,
            exempt_reason="Exempt from payment on regular dates",
        )

    def check_availability(self, accommodation_id: str, check_in: date, check_out: date) -> bool:
        return not any(
            r.is_active()
            and r.accommodation_id == accommodation_id
            and r.overlaps(check_in, check_out)
            for r in self._reservations
        )

    def get_check_in_out_info(
        self,
        user_id: str,
        accommodation_type: Optional[AccommodationType] = None,
    ) -> CheckInOutTimes:
        member = self._require_member(user_id)
        return get_check_in_out_times(member.member_type, accommodation_type)

    def get_user_business_rules_summary(self, user_id: str) -> BusinessRulesSummary:
        member = self._require_member(user_id)
        return summarize_rules(member.member_type)

    # ==================== HELPERS ====================
    def _find_reservation(self, reservation_id: str) -> Optional[ReservationSnapshot]:
        return next((r for r in self._reservations if r.reservation_id == reservation_id), None)

    def _require_member(self, user_id: str) -> Member:
        member = self._members.get(user_id)
        if member is None:
            raise MemberNotFoundError(f"User {user_id} not found")
        return member

    def _hours_until_check_in(self, check_in: date, rule: BusinessRule) -> float:
        """Hours from now until the rule's check-in time on the check-in date"""
        now = self._clock()
        check_in_at = datetime.combine(check_in, rule.check_in_time, tzinfo=now.tzinfo)
        return (check_in_at - now).total_seconds() / 3600
