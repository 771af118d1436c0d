from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_session_repository import IUserSessionRepository
from src.domain.entities import UserSession


class UserSessionRepository(IUserSessionRepository):
    """User session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: UUID) -> Optional[UserSession]:
        """Get user session by ID"""
        stmt = select(UserSession).where(UserSession.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_user_id(
        self, user_id: UUID, include_revoked: bool = False
    ) -> List[UserSession]:
        """Get sessions of a user"""
        stmt = select(UserSession).where(UserSession.user_id == user_id)
        if not include_revoked:
            stmt = stmt.where(UserSession.is_revoked == False)  # noqa: E712
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, session_obj: UserSession) -> UserSession:
        """Create a new user session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def revoke_all_by_user_id(self, user_id: UUID, revoked_at: datetime) -> int:
        """Revoke all active sessions for a user"""
        stmt = (
            update(UserSession)
            .where(UserSession.user_id == user_id, UserSession.is_revoked == False)  # noqa: E712
            .values(is_revoked=True, revoked_at=revoked_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
