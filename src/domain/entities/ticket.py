"""
Ticket Entity

A user's right to attend one movie session.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel, UniqueConstraint

from src.domain.base import utc_now
from src.domain.errors import TicketAlreadyUsedError


class Ticket(SQLModel, table=True):
    """
    Ticket entity.

    Business Rules:
    - One ticket per (user, session)
    - Purchased -> Used is one-way; Used is terminal
    - Deleting the user deletes the ticket
    - Deleting the session keeps the ticket with session_id = NULL (history)
    """

    __tablename__ = "tickets"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(
        foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True
    )
    session_id: Optional[UUID] = Field(
        default=None,
        foreign_key="movie_sessions.id",
        ondelete="SET NULL",
        nullable=True,
        index=True,
    )

    purchased_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime, nullable=False)
    )
    is_used: bool = Field(default=False)
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        UniqueConstraint("user_id", "session_id", name="uq_ticket_user_session"),
    )

    @classmethod
    def create(cls, user_id: UUID, session_id: UUID) -> "Ticket":
        return cls(user_id=user_id, session_id=session_id)

    def mark_as_used(self, used_at: Optional[datetime] = None) -> "Ticket":
        if self.is_used:
            raise TicketAlreadyUsedError(self.id)
        self.is_used = True
        self.used_at = used_at or utc_now()
        return self
