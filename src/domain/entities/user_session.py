"""
UserSession Entity

Groups the refresh tokens issued by one login so they can be revoked together.
"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class UserSession(SQLModel, table=True):
    """
    UserSession entity.

    Business Rules:
    - Expires 7 days after creation (USER_SESSION_EXPIRES_DAYS)
    - Revoked sessions block logout with the access tokens bound to them
    - Logout revokes every session of the user
    """

    __tablename__ = "user_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(
        foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True
    )

    is_revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime, nullable=False)
    )
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (Index("idx_user_session_revoked", "user_id", "is_revoked"),)

    @classmethod
    def create(cls, user_id: UUID, ttl: timedelta) -> "UserSession":
        now = utc_now()
        return cls(user_id=user_id, created_at=now, expires_at=now + ttl)

    def revoke(self) -> None:
        self.is_revoked = True
        self.revoked_at = utc_now()

    def is_active(self, now: Optional[datetime] = None) -> bool:
        return not self.is_revoked and (now or utc_now()) < self.expires_at
