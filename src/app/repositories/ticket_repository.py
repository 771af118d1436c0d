from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Ticket


class ITicketRepository(ABC):
    """Ticket repository interface - application layer"""

    @abstractmethod
    async def list_all(self) -> List[Ticket]:
        """Get all tickets"""
        pass

    @abstractmethod
    async def get_by_id(self, ticket_id: UUID) -> Optional[Ticket]:
        """Get ticket by ID"""
        pass

    @abstractmethod
    async def get_by_user(self, user_id: UUID) -> List[Ticket]:
        """Get all tickets of a user"""
        pass

    @abstractmethod
    async def get_used_by_user(self, user_id: UUID) -> List[Ticket]:
        """Get used tickets of a user"""
        pass

    @abstractmethod
    async def get_unused_by_user(self, user_id: UUID) -> List[Ticket]:
        """Get unused tickets of a user"""
        pass

    @abstractmethod
    async def get_by_user_and_session(
        self, user_id: UUID, session_id: UUID
    ) -> Optional[Ticket]:
        """Get the ticket a user holds for a session, if any"""
        pass

    @abstractmethod
    async def create(self, ticket: Ticket) -> Ticket:
        """Create a new ticket. Raises DuplicateEntryError on (user, session) clash."""
        pass

    @abstractmethod
    async def update(self, ticket: Ticket) -> Ticket:
        """Update existing ticket"""
        pass

    @abstractmethod
    async def delete(self, ticket_id: UUID) -> None:
        """Delete ticket"""
        pass
