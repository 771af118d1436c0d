"""
Ticket Use Case DTOs
"""

from datetime import datetime
from typing import Optional

from src.app.use_cases.common import CamelModel


class TicketResponse(CamelModel):
    """Ticket as returned by every ticket endpoint"""

    id: str
    user_id: str
    session_id: Optional[str] = None
    purchased_at: datetime
    is_used: bool
    used_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, ticket) -> "TicketResponse":
        return cls(
            id=str(ticket.id),
            user_id=str(ticket.user_id),
            session_id=str(ticket.session_id) if ticket.session_id else None,
            purchased_at=ticket.purchased_at,
            is_used=ticket.is_used,
            used_at=ticket.used_at,
        )
