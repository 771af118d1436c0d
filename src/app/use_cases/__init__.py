"""
Use Cases

Application services organized into domain folders:
- auth/: Registration, login, token refresh, logout
- movies/: Movies and movie sessions
- tickets/: Ticket purchase and usage
- users/: User management

Import from subdirectories for better organization.
"""

from .auth import AuthService
from .movies import MovieService
from .tickets import TicketService
from .users import UserService

__all__ = [
    "AuthService",
    "MovieService",
    "TicketService",
    "UserService",
]
