"""
MovieSession Entity

A scheduled screening of a movie in a room at a date and timeslot.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Enum as SAEnum
from sqlmodel import Column, DateTime, Field, SQLModel, UniqueConstraint

from src.domain.base import to_naive_utc, utc_now
from src.domain.errors import InvalidMovieSessionDataError
from .enums import MovieSessionTimeslot


class MovieSession(SQLModel, table=True):
    """
    MovieSession entity.

    Business Rules:
    - Date must be strictly in the future when the session is created
    - Room number is a positive integer
    - Timeslot is one of the seven fixed bands
    - (date, timeslot, room_number) is unique: a room holds one screening per slot
    """

    __tablename__ = "movie_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    movie_id: UUID = Field(
        foreign_key="movies.id", ondelete="CASCADE", nullable=False, index=True
    )
    date: datetime = Field(sa_column=Column(DateTime, nullable=False))
    # Stored by value ("18:00-20:00") so ORDER BY timeslot is chronological
    timeslot: MovieSessionTimeslot = Field(
        sa_column=Column(
            SAEnum(
                MovieSessionTimeslot,
                name="movie_session_timeslot",
                values_callable=lambda enum: [member.value for member in enum],
            ),
            nullable=False,
        )
    )
    room_number: int

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime, nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime, nullable=False)
    )

    __table_args__ = (
        UniqueConstraint(
            "date", "timeslot", "room_number", name="uq_movie_session_room_slot"
        ),
    )

    @classmethod
    def create(
        cls,
        movie_id: UUID,
        date: datetime,
        timeslot: str,
        room_number: int,
        now: Optional[datetime] = None,
    ) -> "MovieSession":
        date = to_naive_utc(date)
        if date <= (now or utc_now()):
            raise InvalidMovieSessionDataError("Session date must be in the future")
        if room_number <= 0:
            raise InvalidMovieSessionDataError(
                "Room number must be a positive integer"
            )
        try:
            slot = MovieSessionTimeslot(timeslot)
        except ValueError:
            raise InvalidMovieSessionDataError(
                f"Invalid timeslot: {timeslot}"
            ) from None

        return cls(movie_id=movie_id, date=date, timeslot=slot, room_number=room_number)
