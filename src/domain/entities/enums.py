"""
Cinema Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum

from src.domain.errors import InvalidUserRoleError


class UserRole(str, Enum):
    """Account role, fixed at registration"""

    manager = "manager"
    customer = "customer"

    @classmethod
    def from_value(cls, value: str) -> "UserRole":
        try:
            return cls(value)
        except ValueError:
            raise InvalidUserRoleError(f"Invalid user role: {value}") from None

    def is_manager(self) -> bool:
        return self is UserRole.manager


class MovieSessionTimeslot(str, Enum):
    """Seven fixed 2-hour exhibition windows between 10:00 and 00:00"""

    morning = "10:00-12:00"
    noon = "12:00-14:00"
    afternoon = "14:00-16:00"
    evening = "16:00-18:00"
    evening_prime = "18:00-20:00"
    night = "20:00-22:00"
    late_night = "22:00-00:00"


class TicketUsageFilter(str, Enum):
    """Ticket history filter"""

    all = "all"
    used = "used"
    unused = "unused"
