"""Domain Repository Interfaces"""
from abc import ABC, abstractmethod
from typing import Optional, List
from uuid import UUID
from datetime import date

from domain.entities import HolidayRecord, Accommodation, Member, ReservationSnapshot


class HolidayRegistry(ABC):
    """Synchronous lookup used by the season classifier and price calculator"""

    @abstractmethod
    def find_by_date(self, day: date) -> Optional[HolidayRecord]:
        """Active holiday on the given date, if any"""
        pass

    @abstractmethod
    def find_by_date_range(self, start_date: date, end_date: date) -> List[HolidayRecord]:
        """Active holidays between start_date and end_date, both inclusive"""
        pass


class HolidayRepository(ABC):
    """Repository interface for persisted holidays"""

    @abstractmethod
    async def save(self, holiday: HolidayRecord) -> HolidayRecord:
        """Save holiday"""
        pass

    @abstractmethod
    async def find_by_id(self, holiday_id: UUID) -> Optional[HolidayRecord]:
        """Find holiday by ID"""
        pass

    @abstractmethod
    async def find_by_date(self, day: date) -> Optional[HolidayRecord]:
        """Find the active holiday on a date"""
        pass

    @abstractmethod
    async def find_by_date_range(self, start_date: date, end_date: date) -> List[HolidayRecord]:
        """Find active holidays in an inclusive date range"""
        pass

    @abstractmethod
    async def find_by_year(self, year: int) -> List[HolidayRecord]:
        """Find active holidays of a year"""
        pass

    @abstractmethod
    async def find_all(self) -> List[HolidayRecord]:
        """Find all holidays, active or not"""
        pass

    @abstractmethod
    async def update(self, holiday: HolidayRecord) -> HolidayRecord:
        """Update holiday"""
        pass

    @abstractmethod
    async def delete(self, holiday_id: UUID) -> bool:
        """Delete holiday"""
        pass


class AccommodationRepository(ABC):
    """Repository interface for accommodations and their rates"""

    @abstractmethod
    async def save(self, accommodation: Accommodation) -> Accommodation:
        pass

    @abstractmethod
    async def find_by_id(self, accommodation_id: str) -> Optional[Accommodation]:
        pass

    @abstractmethod
    async def find_all(self) -> List[Accommodation]:
        pass


class MemberRepository(ABC):
    """Repository interface for the member snapshot"""

    @abstractmethod
    async def save(self, member: Member) -> Member:
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[Member]:
        pass

    @abstractmethod
    async def find_all(self) -> List[Member]:
        pass


class ReservationRepository(ABC):
    """Repository interface for the reservation snapshot"""

    @abstractmethod
    async def save(self, reservation: ReservationSnapshot) -> ReservationSnapshot:
        """Save reservation"""
        pass

    @abstractmethod
    async def find_by_id(self, reservation_id: str) -> Optional[ReservationSnapshot]:
        """Find reservation by ID"""
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> List[ReservationSnapshot]:
        """Find reservations held by a user"""
        pass

    @abstractmethod
    async def find_by_accommodation_id(self, accommodation_id: str) -> List[ReservationSnapshot]:
        """Find reservations for an accommodation"""
        pass

    @abstractmethod
    async def find_all(self) -> List[ReservationSnapshot]:
        """Find all reservations"""
        pass
