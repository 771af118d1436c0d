from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.base import save_and_refresh
from src.app.repositories.ticket_repository import ITicketRepository
from src.domain.entities import Ticket


class TicketRepository(ITicketRepository):
    """Ticket repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> List[Ticket]:
        """Get all tickets, newest purchase first"""
        stmt = select(Ticket).order_by(Ticket.purchased_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_id(self, ticket_id: UUID) -> Optional[Ticket]:
        """Get ticket by ID"""
        stmt = select(Ticket).where(Ticket.id == ticket_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_user(self, user_id: UUID) -> List[Ticket]:
        """Get all tickets of a user"""
        stmt = (
            select(Ticket)
            .where(Ticket.user_id == user_id)
            .order_by(Ticket.purchased_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_used_by_user(self, user_id: UUID) -> List[Ticket]:
        """Get used tickets of a user"""
        stmt = (
            select(Ticket)
            .where(Ticket.user_id == user_id, Ticket.is_used == True)  # noqa: E712
            .order_by(Ticket.purchased_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_unused_by_user(self, user_id: UUID) -> List[Ticket]:
        """Get unused tickets of a user"""
        stmt = (
            select(Ticket)
            .where(Ticket.user_id == user_id, Ticket.is_used == False)  # noqa: E712
            .order_by(Ticket.purchased_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_user_and_session(
        self, user_id: UUID, session_id: UUID
    ) -> Optional[Ticket]:
        """Get the ticket a user holds for a session"""
        stmt = select(Ticket).where(
            Ticket.user_id == user_id, Ticket.session_id == session_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, ticket: Ticket) -> Ticket:
        """Create a new ticket"""
        return await save_and_refresh(
            self.session,
            ticket,
            f"User {ticket.user_id} has already purchased a ticket "
            f"for session {ticket.session_id}",
        )

    async def update(self, ticket: Ticket) -> Ticket:
        """Update existing ticket"""
        self.session.add(ticket)
        await self.session.flush()
        await self.session.refresh(ticket)
        return ticket

    async def delete(self, ticket_id: UUID) -> None:
        """Delete ticket"""
        await self.session.execute(delete(Ticket).where(Ticket.id == ticket_id))
        await self.session.flush()
