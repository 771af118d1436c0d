"""
User Entity

An account that logs in and buys tickets.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now
from src.domain.errors import InvalidUserDataError
from src.domain.value_objects import Password
from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity.

    Business Rules:
    - Username must be unique across all users
    - Password stored as bcrypt hash
    - Age must be >= 0
    - Role is set at registration and never changed afterwards
    - Deleting a user cascades to tickets, sessions and refresh tokens
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=255)
    hashed_password: str = Field(max_length=60)  # Bcrypt output is 60 chars
    role: UserRole = Field(default=UserRole.customer)
    age: int

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime, nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime, nullable=False)
    )

    @classmethod
    def create(
        cls,
        username: str,
        password: Password,
        age: int,
        role: UserRole = UserRole.customer,
    ) -> "User":
        if not username or not username.strip():
            raise InvalidUserDataError("Username cannot be empty")
        if age < 0:
            raise InvalidUserDataError("Age must be a non-negative integer")
        return cls(
            username=username,
            hashed_password=password.value,
            role=role,
            age=age,
        )

    @property
    def password(self) -> Password:
        return Password.from_hashed(self.hashed_password)
