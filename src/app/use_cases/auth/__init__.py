"""
Authentication Use Cases

All authentication-related business logic.
"""

from .auth_service import AuthService
from .dtos import AuthResponse, AuthUserInfo, RegisterCommand

__all__ = [
    # Services
    "AuthService",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "AuthResponse",
    # DTOs - Nested Models
    "AuthUserInfo",
]
