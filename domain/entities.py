"""Domain Entities - read-only snapshots handed to the rules engine"""
from pydantic import BaseModel, Field
from uuid import UUID, uuid4
from datetime import date
from typing import Optional

from domain.enums import (
    SeasonType, MemberType, AccommodationType, ReservationStatus, PaymentStatus,
    ACTIVE_RESERVATION_STATUSES,
)
from domain.value_objects import RateTable, ranges_overlap


class HolidayRecord(BaseModel):
    """Calendar date with a forced season override"""

    holiday_id: UUID = Field(default_factory=uuid4)
    date: date
    name: str
    description: Optional[str] = None
    season_type: SeasonType = SeasonType.HOLIDAY
    is_active: bool = True

    class Config:
        from_attributes = True

    @property
    def year(self) -> int:
        return self.date.year


class Member(BaseModel):
    """User snapshot"""

    user_id: str
    member_type: MemberType
    name: str
    email: Optional[str] = None
    is_active: bool = True

    class Config:
        from_attributes = True


class Accommodation(BaseModel):
    """Bookable unit and its seasonal rates"""

    accommodation_id: str
    name: str
    accommodation_type: AccommodationType
    rates: RateTable
    is_active: bool = True

    class Config:
        from_attributes = True


class ReservationRequest(BaseModel):
    """Proposed reservation submitted for validation"""

    user_id: str
    user_type: Optional[MemberType] = None
    accommodation_id: str
    accommodation_type: AccommodationType
    check_in: date
    check_out: date

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days


class ReservationSnapshot(BaseModel):
    """Existing reservation as supplied by persistence"""

    reservation_id: str
    user_id: str
    user_type: MemberType
    accommodation_id: str
    accommodation_type: AccommodationType
    check_in: date
    check_out: date
    status: ReservationStatus = ReservationStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING

    class Config:
        from_attributes = True

    def is_active(self) -> bool:
        """Pending and confirmed reservations hold their nights"""
        return self.status in ACTIVE_RESERVATION_STATUSES

    def overlaps(self, check_in: date, check_out: date) -> bool:
        return ranges_overlap(check_in, check_out, self.check_in, self.check_out)
