"""Reference data loaded into the in-memory repositories at startup"""
from datetime import date
from typing import List

from domain.entities import HolidayRecord, Accommodation, Member
from domain.enums import AccommodationType, MemberType
from domain.value_objects import RateTable

# El Salvador national holidays and club special dates
HOLIDAY_CALENDAR = [
    (date(2025, 1, 1), "New Year's Day"),
    (date(2025, 3, 28), "Holy Thursday"),
    (date(2025, 3, 29), "Good Friday"),
    (date(2025, 3, 30), "Holy Saturday"),
    (date(2025, 5, 1), "Labour Day"),
    (date(2025, 5, 10), "Mother's Day"),
    (date(2025, 6, 17), "Father's Day"),
    (date(2025, 8, 6), "Feast of the Divine Saviour of the World"),
    (date(2025, 9, 15), "Independence Day"),
    (date(2025, 11, 2), "All Souls' Day"),
    (date(2025, 12, 25), "Christmas Day"),
    (date(2026, 1, 1), "New Year's Day"),
    (date(2026, 4, 17), "Holy Thursday"),
    (date(2026, 4, 18), "Good Friday"),
    (date(2026, 4, 19), "Holy Saturday"),
    (date(2026, 5, 1), "Labour Day"),
    (date(2026, 5, 10), "Mother's Day"),
    (date(2026, 6, 17), "Father's Day"),
    (date(2026, 8, 6), "Feast of the Divine Saviour of the World"),
    (date(2026, 9, 15), "Independence Day"),
    (date(2026, 11, 2), "All Souls' Day"),
    (date(2026, 12, 25), "Christmas Day"),
]

# (id, name, type, low, high, holiday)
ACCOMMODATION_CATALOG = [
    ("1A", "El Sunzal Apartment 1A", AccommodationType.APARTAMENTOS, 110, 230, 280),
    ("1B", "El Sunzal Apartment 1B", AccommodationType.APARTAMENTOS, 95, 210, 250),
    ("2A", "El Sunzal Apartment 2A", AccommodationType.APARTAMENTOS, 120, 250, 300),
    ("2B", "El Sunzal Apartment 2B", AccommodationType.APARTAMENTOS, 115, 240, 290),
    ("3A", "El Sunzal Apartment 3A", AccommodationType.APARTAMENTOS, 140, 280, 350),
    ("3B", "El Sunzal Apartment 3B", AccommodationType.APARTAMENTOS, 135, 270, 340),
    ("casa1", "El Sunzal House 1", AccommodationType.EL_SUNZAL_CASAS, 200, 350, 400),
    ("casa2", "El Sunzal House 2", AccommodationType.EL_SUNZAL_CASAS, 280, 420, 480),
    ("casa3", "El Sunzal House 3", AccommodationType.EL_SUNZAL_CASAS, 240, 380, 450),
    ("suite1", "El Sunzal Suite 1", AccommodationType.SUITES, 300, 450, 500),
    ("suite2", "El Sunzal Suite 2", AccommodationType.SUITES, 500, 750, 850),
    ("suite3", "El Sunzal Suite 3", AccommodationType.SUITES, 800, 1200, 1500),
    ("corinto1A", "Corinto Apartment 1A", AccommodationType.APARTAMENTOS, 100, 210, 260),
    ("corinto1B", "Corinto Apartment 1B", AccommodationType.APARTAMENTOS, 85, 190, 230),
    ("corinto2A", "Corinto Apartment 2A", AccommodationType.APARTAMENTOS, 110, 230, 280),
    ("corinto2B", "Corinto Apartment 2B", AccommodationType.APARTAMENTOS, 105, 220, 270),
    ("corinto3A", "Corinto Apartment 3A", AccommodationType.APARTAMENTOS, 130, 260, 320),
    ("corinto3B", "Corinto Apartment 3B", AccommodationType.APARTAMENTOS, 125, 250, 310),
    ("corinto-casa-1", "Corinto House 1", AccommodationType.CORINTO_CASAS, 280, 380, 420),
    ("corinto-casa-2", "Corinto House 2", AccommodationType.CORINTO_CASAS, 350, 450, 500),
    ("corinto-casa-3", "Corinto House 3", AccommodationType.CORINTO_CASAS, 220, 320, 370),
    ("corinto-casa-4", "Corinto House 4", AccommodationType.CORINTO_CASAS, 260, 360, 410),
    ("corinto-casa-5", "Corinto House 5", AccommodationType.CORINTO_CASAS, 300, 400, 450),
    ("corinto-casa-6", "Corinto House 6", AccommodationType.CORINTO_CASAS, 320, 420, 480),
]


def default_holidays() -> List[HolidayRecord]:
    return [HolidayRecord(date=day, name=name) for day, name in HOLIDAY_CALENDAR]


def default_accommodations() -> List[Accommodation]:
    return [
        Accommodation(
            accommodation_id=accommodation_id,
            name=name,
            accommodation_type=accommodation_type,
            rates=RateTable(low=low, high=high, holiday=holiday),
        )
        for accommodation_id, name, accommodation_type, low, high, holiday in ACCOMMODATION_CATALOG
    ]


# Development user directory: (user_id, name, email, member type)
MEMBER_DIRECTORY = [
    ("member-001", "Carlos Martinez", "carlos.martinez@example.com", MemberType.MEMBER),
    ("widow-001", "Rosa Hernandez", "rosa.hernandez@example.com", MemberType.WIDOW),
    ("special-001", "Ana Lopez", "ana.lopez@example.com", MemberType.SPECIAL_VISITOR),
    ("transient-001", "Luis Ramirez", "luis.ramirez@example.com", MemberType.TRANSIENT_VISITOR),
    ("youth-001", "Sofia Martinez", "sofia.martinez@example.com", MemberType.YOUTH_VISITOR),
    ("director-001", "Jorge Castillo", "jorge.castillo@example.com", MemberType.BOARD_DIRECTOR),
]


def default_members() -> List[Member]:
    return [
        Member(user_id=user_id, name=name, email=email, member_type=member_type)
        for user_id, name, email, member_type in MEMBER_DIRECTORY
    ]
