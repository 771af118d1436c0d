"""
Ticket Service

Purchase, use and deletion of tickets plus ticket history queries.
"""

import logging
from typing import List
from uuid import UUID

from src.app.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import Ticket, TicketUsageFilter
from src.domain.errors import DuplicateEntryError, TicketAlreadyUsedError
from .dtos import TicketResponse

logger = logging.getLogger(__name__)


class TicketService:
    """
    Ticket lifecycle: Purchased (is_used=False) -> Used (is_used=True, terminal).

    Business Rules:
    - A user holds at most one ticket per movie session
    - Purchasing checks the user, then the session, then the existing ticket
    - Using a used ticket is a conflict
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def get_tickets(self) -> Result[List[TicketResponse]]:
        async with self.uow:
            tickets = await self.uow.tickets.list_all()
            return Return.ok([TicketResponse.from_entity(t) for t in tickets])

    async def buy_ticket(self, user_id: UUID, session_id: UUID) -> Result[TicketResponse]:
        """
        Buy a ticket for a movie session.

        Returns:
            Result[TicketResponse] or Error(USER_NOT_FOUND |
            MOVIE_SESSION_NOT_FOUND | TICKET_ALREADY_PURCHASED)
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(
                    Error("USER_NOT_FOUND", f"User with ID {user_id} not found")
                )

            movie_session = await self.uow.movie_sessions.get_by_id(session_id)
            if movie_session is None:
                return Return.err(
                    Error(
                        "MOVIE_SESSION_NOT_FOUND",
                        f"Movie session with ID {session_id} not found",
                    )
                )

            existing = await self.uow.tickets.get_by_user_and_session(user_id, session_id)
            if existing is not None:
                return Return.err(_already_purchased(user_id, session_id))

            try:
                ticket = await self.uow.tickets.create(Ticket.create(user_id, session_id))
            except DuplicateEntryError:
                # Concurrent purchase won the unique index
                return Return.err(_already_purchased(user_id, session_id))

            await self.uow.commit()

            logger.info(f"Ticket purchased: {ticket.id} (user={user_id}, session={session_id})")
            return Return.ok(TicketResponse.from_entity(ticket))

    async def use_ticket(self, ticket_id: UUID) -> Result[TicketResponse]:
        """
        Mark a ticket as used.

        Returns:
            Result[TicketResponse] or Error(TICKET_NOT_FOUND | TICKET_ALREADY_USED)
        """
        async with self.uow:
            ticket = await self.uow.tickets.get_by_id(ticket_id)
            if ticket is None:
                return Return.err(_ticket_not_found(ticket_id))

            try:
                ticket.mark_as_used(utc_now())
            except TicketAlreadyUsedError as e:
                logger.warning(f"Ticket reuse rejected: {ticket_id}")
                return Return.err(Error(e.code, e.message))

            ticket = await self.uow.tickets.update(ticket)
            await self.uow.commit()

            logger.info(f"Ticket used: {ticket_id}")
            return Return.ok(TicketResponse.from_entity(ticket))

    async def delete_ticket(self, ticket_id: UUID) -> Result[None]:
        async with self.uow:
            ticket = await self.uow.tickets.get_by_id(ticket_id)
            if ticket is None:
                return Return.err(_ticket_not_found(ticket_id))

            await self.uow.tickets.delete(ticket_id)
            await self.uow.commit()

        logger.info(f"Ticket deleted: {ticket_id}")
        return Return.ok()

    async def get_user_tickets(
        self, user_id: UUID, usage_filter: TicketUsageFilter = TicketUsageFilter.all
    ) -> Result[List[TicketResponse]]:
        """
        Ticket history of a user.

        Args:
            user_id: Owner of the tickets
            usage_filter: all (default), used or unused

        Returns:
            Result[List[TicketResponse]] or Error(USER_NOT_FOUND)
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(
                    Error("USER_NOT_FOUND", f"User with ID {user_id} not found")
                )

            usage_filter = TicketUsageFilter(usage_filter)
            if usage_filter is TicketUsageFilter.used:
                tickets = await self.uow.tickets.get_used_by_user(user_id)
            elif usage_filter is TicketUsageFilter.unused:
                tickets = await self.uow.tickets.get_unused_by_user(user_id)
            else:
                tickets = await self.uow.tickets.get_by_user(user_id)

            return Return.ok([TicketResponse.from_entity(t) for t in tickets])


def _ticket_not_found(ticket_id: UUID) -> Error:
    return Error("TICKET_NOT_FOUND", f"Ticket with ID {ticket_id} not found")


def _already_purchased(user_id: UUID, session_id: UUID) -> Error:
    return Error(
        "TICKET_ALREADY_PURCHASED",
        f"User {user_id} has already purchased a ticket for session {session_id}",
    )
