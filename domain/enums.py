"""Domain Enums"""
from enum import Enum, IntEnum


class SeasonType(str, Enum):
    LOW = "low"
    HIGH = "high"
    HOLIDAY = "holiday"


class Weekday(IntEnum):
    """Matches date.weekday()"""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class MemberType(str, Enum):
    MEMBER = "member"
    WIDOW = "widow"
    SPECIAL_VISITOR = "special_visitor"
    TRANSIENT_VISITOR = "transient_visitor"
    YOUTH_VISITOR = "youth_visitor"
    BOARD_DIRECTOR = "board_director"


class AccommodationType(str, Enum):
    CORINTO_CASAS = "corinto_casas"
    EL_SUNZAL_CASAS = "el_sunzal_casas"
    APARTAMENTOS = "apartamentos"
    SUITES = "suites"


class ReservationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"
    EXEMPT = "exempt"


class ModificationOutcome(str, Enum):
    APPROVED = "approved"
    PENDING_MANAGER_APPROVAL = "pending_manager_approval"
    REJECTED = "rejected"


ACTIVE_RESERVATION_STATUSES = frozenset({ReservationStatus.PENDING, ReservationStatus.CONFIRMED})

WEEKDAYS = frozenset({
    Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY
})

ALL_DAYS = frozenset(Weekday)
