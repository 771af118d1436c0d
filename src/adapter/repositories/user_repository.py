from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.base import save_and_refresh
from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        stmt = select(User).where(User.username == username)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_all(self) -> List[User]:
        """Get all users, oldest first"""
        stmt = select(User).order_by(User.created_at)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, user: User) -> User:
        """Create a new user"""
        return await save_and_refresh(
            self.session, user, f"Username {user.username} already exists"
        )

    async def delete(self, user_id: UUID) -> None:
        """Delete user (tickets, sessions, tokens cascade in the database)"""
        await self.session.execute(delete(User).where(User.id == user_id))
        await self.session.flush()
