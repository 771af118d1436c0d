from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import UserSession


class IUserSessionRepository(ABC):
    """User session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[UserSession]:
        """Get user session by ID"""
        pass

    @abstractmethod
    async def get_by_user_id(
        self, user_id: UUID, include_revoked: bool = False
    ) -> List[UserSession]:
        """Get sessions of a user, active ones only unless include_revoked"""
        pass

    @abstractmethod
    async def create(self, session: UserSession) -> UserSession:
        """Create a new user session"""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: UUID, revoked_at: datetime) -> int:
        """Revoke all active sessions of a user. Returns count."""
        pass
