"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime

from src.app.use_cases.common import CamelModel


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(CamelModel):
    """Register command - validated registration intent"""

    username: str
    password: str
    role: str
    age: int


# ============================================================================
# Response DTOs
# ============================================================================


class AuthUserInfo(CamelModel):
    """Public user fields in authentication responses"""

    id: str
    username: str
    role: str
    age: int


class AuthResponse(CamelModel):
    """Response for register, login and refresh"""

    access_token: str
    refresh_token: str
    expires_at: datetime
    user: AuthUserInfo
