"""Business rules per member type

Static configuration: one rule per MemberType, looked up with rules_for().
There is no fallback rule: an unknown member type raises.
"""
from datetime import time
from typing import Dict, FrozenSet, Optional, Union

from pydantic import BaseModel

from domain.enums import MemberType, AccommodationType, Weekday, WEEKDAYS, ALL_DAYS
from domain.exceptions import UnknownMemberTypeError
from domain.value_objects import CheckInOutTimes, BusinessRulesSummary

STANDARD_CHECK_IN = time(15, 0)
STANDARD_CHECK_OUT = time(12, 0)
SUITE_CHECK_IN = time(14, 0)
SUITE_CHECK_OUT = time(13, 0)


class BusinessRule(BaseModel):
    """Reservation terms for one member type"""
    max_consecutive_days: int
    max_reservations_per_member: int
    check_in_time: time = STANDARD_CHECK_IN
    check_out_time: time = STANDARD_CHECK_OUT
    payment_time_limit_hours: int = 72
    modification_notice_hours: int = 72
    allowed_days_of_week: FrozenSet[Weekday]
    # days of notice that unlock check-in on a day outside allowed_days_of_week
    weekend_advance_notice_days: Optional[int] = None

    class Config:
        frozen = True

    def allows_check_in_on(self, weekday: Weekday) -> bool:
        return weekday in self.allowed_days_of_week


class DirectorBusinessRule(BusinessRule):
    """Board director terms: monthly caps, payment exemption and location caps"""
    max_reservations_per_month: int
    max_days_per_reservation: int
    max_per_accommodation_type_per_month: int = 1
    free_reservation_exceptions: FrozenSet[str] = frozenset()
    location_caps: Dict[AccommodationType, int] = {}
    cancellation_notice_hours: int = 72


BUSINESS_RULES: Dict[MemberType, BusinessRule] = {
    MemberType.MEMBER: BusinessRule(
        max_consecutive_days=7,
        max_reservations_per_member=1,  # one house or apartment per weekend
        allowed_days_of_week=ALL_DAYS,
    ),
    MemberType.WIDOW: BusinessRule(
        max_consecutive_days=7,
        max_reservations_per_member=1,
        allowed_days_of_week=WEEKDAYS,
        weekend_advance_notice_days=3,
    ),
    MemberType.SPECIAL_VISITOR: BusinessRule(
        max_consecutive_days=7,
        max_reservations_per_member=1,
        allowed_days_of_week=WEEKDAYS,
        weekend_advance_notice_days=3,
    ),
    MemberType.TRANSIENT_VISITOR: BusinessRule(
        max_consecutive_days=7,
        max_reservations_per_member=1,
        allowed_days_of_week=WEEKDAYS,
        weekend_advance_notice_days=3,
    ),
    MemberType.YOUTH_VISITOR: BusinessRule(
        max_consecutive_days=7,
        max_reservations_per_member=0,  # the parent member books for them
        allowed_days_of_week=WEEKDAYS,
    ),
    MemberType.BOARD_DIRECTOR: DirectorBusinessRule(
        max_consecutive_days=3,
        max_reservations_per_member=3,
        max_reservations_per_month=3,  # one per property category
        max_days_per_reservation=3,
        allowed_days_of_week=ALL_DAYS,
        free_reservation_exceptions=frozenset({"holiday", "vacation"}),
        location_caps={
            AccommodationType.CORINTO_CASAS: 1,
            AccommodationType.EL_SUNZAL_CASAS: 1,
            AccommodationType.APARTAMENTOS: 1,
        },
    ),
}


def rules_for(member_type: Union[MemberType, str]) -> BusinessRule:
    """Business rule of a member type.

    Raises:
        UnknownMemberTypeError: the value is not a known member type.
    """
    try:
        return BUSINESS_RULES[MemberType(member_type)]
    except (ValueError, KeyError):
        raise UnknownMemberTypeError(member_type) from None


def get_payment_time_limit(member_type: Union[MemberType, str]) -> int:
    return rules_for(member_type).payment_time_limit_hours


def get_check_in_out_times(
    member_type: Union[MemberType, str],
    accommodation_type: Optional[AccommodationType] = None,
) -> CheckInOutTimes:
    """Suites keep their own schedule regardless of member type"""
    if accommodation_type == AccommodationType.SUITES:
        return CheckInOutTimes(check_in=SUITE_CHECK_IN, check_out=SUITE_CHECK_OUT)
    rule = rules_for(member_type)
    return CheckInOutTimes(check_in=rule.check_in_time, check_out=rule.check_out_time)


def _describe_days(days: FrozenSet[Weekday]) -> str:
    if days == ALL_DAYS:
        return "Every day"
    if days == WEEKDAYS:
        return "Monday to Friday"
    return ", ".join(day.name.capitalize() for day in sorted(days))


def summarize_rules(member_type: Union[MemberType, str]) -> BusinessRulesSummary:
    rule = rules_for(member_type)
    member_type = MemberType(member_type)

    allowed = _describe_days(rule.allowed_days_of_week)
    special_rules = []
    if rule.weekend_advance_notice_days:
        allowed += f" (weekends with {rule.weekend_advance_notice_days} days advance notice)"
        special_rules.append(
            "Weekday reservations only; weekends require at least "
            f"{rule.weekend_advance_notice_days} days advance notice"
        )
    if member_type == MemberType.YOUTH_VISITOR:
        special_rules.append("Cannot hold reservations; only the parent member may book")
    if isinstance(rule, DirectorBusinessRule):
        special_rules.append(
            f"At most {rule.max_days_per_reservation} nights per reservation and "
            f"{rule.max_reservations_per_month} reservations per month"
        )
        special_rules.append("Exempt from payment except on holidays and vacation periods")
    special_rules.append("Reservations are not transferable")
    special_rules.append(f"At most {rule.max_consecutive_days} consecutive nights")

    return BusinessRulesSummary(
        member_type=member_type,
        max_nights=rule.max_consecutive_days,
        allowed_days=[allowed],
        payment_time_limit_hours=rule.payment_time_limit_hours,
        check_in_time=rule.check_in_time,
        check_out_time=rule.check_out_time,
        special_rules=special_rules,
    )
