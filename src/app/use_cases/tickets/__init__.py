"""
Ticket Use Cases

Ticket purchase and usage business logic.
"""

from .ticket_service import TicketService
from .dtos import TicketResponse

__all__ = [
    "TicketService",
    "TicketResponse",
]
