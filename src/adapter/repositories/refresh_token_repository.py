from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.refresh_token_repository import IRefreshTokenRepository
from src.domain.entities import RefreshToken


class RefreshTokenRepository(IRefreshTokenRepository):
    """Refresh token repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        """
        Get stored refresh token by value.

        Revoked/expired tokens are returned too; the caller decides validity.
        """
        stmt = select(RefreshToken).where(RefreshToken.token == token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_user_id(
        self, user_id: UUID, include_revoked: bool = False
    ) -> List[RefreshToken]:
        """Get refresh tokens of a user"""
        stmt = select(RefreshToken).where(RefreshToken.user_id == user_id)
        if not include_revoked:
            stmt = stmt.where(RefreshToken.is_revoked == False)  # noqa: E712
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, refresh_token: RefreshToken) -> RefreshToken:
        """Store a refresh token"""
        self.session.add(refresh_token)
        await self.session.flush()
        await self.session.refresh(refresh_token)
        return refresh_token

    async def revoke_all_by_user_id(self, user_id: UUID, revoked_at: datetime) -> int:
        """Revoke all active refresh tokens for a user"""
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.user_id == user_id, RefreshToken.is_revoked == False)  # noqa: E712
            .values(is_revoked=True, revoked_at=revoked_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
