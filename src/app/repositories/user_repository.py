from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        pass

    @abstractmethod
    async def list_all(self) -> List[User]:
        """Get all users, oldest first"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises DuplicateEntryError on username clash."""
        pass

    @abstractmethod
    async def delete(self, user_id: UUID) -> None:
        """Delete user; tickets, sessions and tokens go with it (FK cascade)"""
        pass
