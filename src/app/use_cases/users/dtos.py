"""
User Use Case DTOs
"""

from datetime import datetime
from typing import List

from src.app.use_cases.common import CamelModel
from src.app.use_cases.tickets.dtos import TicketResponse


class UserResponse(CamelModel):
    id: str
    username: str
    role: str
    age: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user) -> "UserResponse":
        return cls(
            id=str(user.id),
            username=user.username,
            role=user.role.value,
            age=user.age,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserDetailResponse(UserResponse):
    """User with ticket history"""

    tickets: List[TicketResponse]
