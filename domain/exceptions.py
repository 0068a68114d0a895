"""Domain Exceptions

Raised only for programmer errors (bad input at the call site). Business-rule
violations are never raised; they are reported through ValidationResult.
"""


class InvalidDateRangeError(ValueError):
    """Check-out is not after check-in, or a date is malformed"""


class UnknownMemberTypeError(ValueError):
    """No business rule exists for the given member type"""

    def __init__(self, member_type):
        self.member_type = member_type
        super().__init__(f"Unknown member type: {member_type!r}")


class MemberNotFoundError(LookupError):
    """User id is absent from the member snapshot"""


class AccommodationNotFoundError(LookupError):
    """Accommodation id is absent from the accommodation repository"""
