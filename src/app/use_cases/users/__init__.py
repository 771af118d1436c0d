"""
User Management Use Cases

All user-related business logic.
"""

from .user_service import UserService
from .dtos import UserDetailResponse, UserResponse

__all__ = [
    # Services
    "UserService",
    # DTOs - Responses
    "UserResponse",
    "UserDetailResponse",
]
