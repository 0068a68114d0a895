"""In-memory Holiday Registry"""
from datetime import date
from typing import Dict, Iterable, List, Optional

from domain.entities import HolidayRecord
from domain.repositories import HolidayRegistry


class InMemoryHolidayRegistry(HolidayRegistry):
    """Immutable snapshot of holiday records keyed by date.

    Inactive records are dropped on load, so lookups only ever see holidays
    that participate in classification.
    """

    def __init__(self, holidays: Iterable[HolidayRecord] = ()):
        self._by_date: Dict[date, HolidayRecord] = {
            holiday.date: holiday for holiday in holidays if holiday.is_active
        }

    def find_by_date(self, day: date) -> Optional[HolidayRecord]:
        return self._by_date.get(day)

    def find_by_date_range(self, start_date: date, end_date: date) -> List[HolidayRecord]:
        return sorted(
            (h for d, h in self._by_date.items() if start_date <= d <= end_date),
            key=lambda h: h.date,
        )

    def __len__(self) -> int:
        return len(self._by_date)
