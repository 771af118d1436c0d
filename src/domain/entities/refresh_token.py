"""
RefreshToken Entity

Server-side record of an issued refresh token, kept for revocation.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now
from src.domain.value_objects import Token


class RefreshToken(SQLModel, table=True):
    """
    RefreshToken entity.

    Business Rules:
    - Token is JWT-shaped (three dot-separated segments)
    - Valid only while not revoked and not expired
    - Bound to the user session it was issued for
    """

    __tablename__ = "refresh_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    token: str = Field(unique=True, index=True, max_length=1024)

    user_id: UUID = Field(
        foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True
    )
    session_id: UUID = Field(
        foreign_key="user_sessions.id", ondelete="CASCADE", nullable=False, index=True
    )

    is_revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime, nullable=False)
    )
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (Index("idx_refresh_token_revoked", "user_id", "is_revoked"),)

    @classmethod
    def create(
        cls, token: Token, user_id: UUID, session_id: UUID, expires_at: datetime
    ) -> "RefreshToken":
        return cls(
            token=token.value,
            user_id=user_id,
            session_id=session_id,
            expires_at=expires_at,
        )

    def revoke(self) -> None:
        self.is_revoked = True
        self.revoked_at = utc_now()

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        return not self.is_revoked and (now or utc_now()) < self.expires_at
