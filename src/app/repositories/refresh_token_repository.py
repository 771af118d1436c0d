from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import RefreshToken


class IRefreshTokenRepository(ABC):
    """Refresh token repository interface - application layer"""

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        """Get stored refresh token by its value"""
        pass

    @abstractmethod
    async def get_by_user_id(
        self, user_id: UUID, include_revoked: bool = False
    ) -> List[RefreshToken]:
        """Get refresh tokens of a user, active ones only unless include_revoked"""
        pass

    @abstractmethod
    async def create(self, refresh_token: RefreshToken) -> RefreshToken:
        """Store a newly issued refresh token"""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: UUID, revoked_at: datetime) -> int:
        """Revoke all active refresh tokens of a user. Returns count."""
        pass
