"""In-Memory Repository Implementations"""
from typing import Optional, List, Dict, Iterable
from uuid import UUID
from datetime import date

from domain.repositories import (
    HolidayRepository, AccommodationRepository, MemberRepository, ReservationRepository,
)
from domain.entities import HolidayRecord, Accommodation, Member, ReservationSnapshot


class InMemoryHolidayRepository(HolidayRepository):
    """In-memory implementation of HolidayRepository"""

    def __init__(self, holidays: Iterable[HolidayRecord] = ()):
        self._storage: Dict[UUID, HolidayRecord] = {h.holiday_id: h for h in holidays}

    async def save(self, holiday: HolidayRecord) -> HolidayRecord:
        """Save holiday to memory"""
        self._storage[holiday.holiday_id] = holiday
        return holiday

    async def find_by_id(self, holiday_id: UUID) -> Optional[HolidayRecord]:
        """Find holiday by ID"""
        return self._storage.get(holiday_id)

    async def find_by_date(self, day: date) -> Optional[HolidayRecord]:
        """Find the active holiday on a date"""
        for holiday in self._storage.values():
            if holiday.date == day and holiday.is_active:
                return holiday
        return None

    async def find_by_date_range(self, start_date: date, end_date: date) -> List[HolidayRecord]:
        """Find active holidays in an inclusive date range"""
        return sorted(
            (h for h in self._storage.values() if h.is_active and start_date <= h.date <= end_date),
            key=lambda h: h.date,
        )

    async def find_by_year(self, year: int) -> List[HolidayRecord]:
        """Find active holidays of a year"""
        return sorted(
            (h for h in self._storage.values() if h.is_active and h.year == year),
            key=lambda h: h.date,
        )

    async def find_all(self) -> List[HolidayRecord]:
        """Find all holidays"""
        return sorted(self._storage.values(), key=lambda h: h.date)

    async def update(self, holiday: HolidayRecord) -> HolidayRecord:
        """Update holiday"""
        if holiday.holiday_id in self._storage:
            self._storage[holiday.holiday_id] = holiday
            return holiday
        raise ValueError("Holiday not found")

    async def delete(self, holiday_id: UUID) -> bool:
        """Delete holiday"""
        if holiday_id in self._storage:
            del self._storage[holiday_id]
            return True
        return False


class InMemoryAccommodationRepository(AccommodationRepository):
    """In-memory implementation of AccommodationRepository"""

    def __init__(self, accommodations: Iterable[Accommodation] = ()):
        self._storage: Dict[str, Accommodation] = {a.accommodation_id: a for a in accommodations}

    async def save(self, accommodation: Accommodation) -> Accommodation:
        self._storage[accommodation.accommodation_id] = accommodation
        return accommodation

    async def find_by_id(self, accommodation_id: str) -> Optional[Accommodation]:
        return self._storage.get(accommodation_id)

    async def find_all(self) -> List[Accommodation]:
        return list(self._storage.values())


class InMemoryMemberRepository(MemberRepository):
    """In-memory implementation of MemberRepository"""

    def __init__(self, members: Iterable[Member] = ()):
        self._storage: Dict[str, Member] = {m.user_id: m for m in members}

    async def save(self, member: Member) -> Member:
        self._storage[member.user_id] = member
        return member

    async def find_by_id(self, user_id: str) -> Optional[Member]:
        return self._storage.get(user_id)

    async def find_all(self) -> List[Member]:
        return list(self._storage.values())


class InMemoryReservationRepository(ReservationRepository):
    """In-memory implementation of ReservationRepository"""

    def __init__(self, reservations: Iterable[ReservationSnapshot] = ()):
        self._storage: Dict[str, ReservationSnapshot] = {r.reservation_id: r for r in reservations}

    async def save(self, reservation: ReservationSnapshot) -> ReservationSnapshot:
        """Save reservation to memory"""
        self._storage[reservation.reservation_id] = reservation
        return reservation

    async def find_by_id(self, reservation_id: str) -> Optional[ReservationSnapshot]:
        """Find reservation by ID"""
        return self._storage.get(reservation_id)

    async def find_by_user_id(self, user_id: str) -> List[ReservationSnapshot]:
        """Find reservations held by a user"""
        return [r for r in self._storage.values() if r.user_id == user_id]

    async def find_by_accommodation_id(self, accommodation_id: str) -> List[ReservationSnapshot]:
        """Find reservations for an accommodation"""
        return [r for r in self._storage.values() if r.accommodation_id == accommodation_id]

    async def find_all(self) -> List[ReservationSnapshot]:
        """Find all reservations"""
        return list(self._storage.values())
