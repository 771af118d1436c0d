"""
Movie Entity

A title that can be scheduled into movie sessions.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now
from src.domain.errors import InvalidMovieDataError

MIN_AGE_RESTRICTION = 0
MAX_AGE_RESTRICTION = 21


class Movie(SQLModel, table=True):
    """
    Movie entity.

    Business Rules:
    - Title must be non-empty and unique across all movies
    - Age restriction between 0 and 21 inclusive
    - Deleting a movie cascades to its sessions (FK ON DELETE CASCADE)
    """

    __tablename__ = "movies"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(unique=True, index=True, max_length=255)
    age_restriction: int = Field(default=0)

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime, nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime, nullable=False)
    )

    @classmethod
    def create(cls, title: str, age_restriction: int) -> "Movie":
        cls._validate(title, age_restriction)
        return cls(title=title, age_restriction=age_restriction)

    def update(
        self, title: Optional[str] = None, age_restriction: Optional[int] = None
    ) -> "Movie":
        new_title = self.title if title is None else title
        new_age = self.age_restriction if age_restriction is None else age_restriction
        self._validate(new_title, new_age)
        self.title = new_title
        self.age_restriction = new_age
        self.updated_at = utc_now()
        return self

    @staticmethod
    def _validate(title: str, age_restriction: int) -> None:
        if not title or not title.strip():
            raise InvalidMovieDataError("Title cannot be empty")
        if not MIN_AGE_RESTRICTION <= age_restriction <= MAX_AGE_RESTRICTION:
            raise InvalidMovieDataError(
                f"Age restriction must be between {MIN_AGE_RESTRICTION} "
                f"and {MAX_AGE_RESTRICTION}"
            )
