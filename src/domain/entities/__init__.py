"""
Cinema Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import MovieSessionTimeslot, TicketUsageFilter, UserRole

# Export all entities
from .user import User
from .movie import Movie
from .movie_session import MovieSession
from .ticket import Ticket
from .user_session import UserSession
from .refresh_token import RefreshToken

__all__ = [
    # Enums
    "MovieSessionTimeslot",
    "TicketUsageFilter",
    "UserRole",
    # Entities
    "User",
    "Movie",
    "MovieSession",
    "Ticket",
    "UserSession",
    "RefreshToken",
]
