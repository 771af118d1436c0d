"""
Movie Use Case DTOs

Commands and responses for movies and their sessions.
"""

from datetime import datetime
from typing import List, Optional

from src.app.use_cases.common import CamelModel, PaginationMeta
from src.domain.entities import MovieSessionTimeslot


# ============================================================================
# Command DTOs
# ============================================================================


class CreateMovieCommand(CamelModel):
    title: str
    age_restriction: int


class UpdateMovieCommand(CamelModel):
    """Partial update; None leaves the field unchanged"""

    title: Optional[str] = None
    age_restriction: Optional[int] = None


class CreateMovieSessionCommand(CamelModel):
    date: datetime
    timeslot: str
    room_number: int


# ============================================================================
# Response DTOs
# ============================================================================


class MovieResponse(CamelModel):
    id: str
    title: str
    age_restriction: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, movie) -> "MovieResponse":
        return cls(
            id=str(movie.id),
            title=movie.title,
            age_restriction=movie.age_restriction,
            created_at=movie.created_at,
            updated_at=movie.updated_at,
        )


class MovieSessionResponse(CamelModel):
    id: str
    movie_id: str
    date: datetime
    timeslot: MovieSessionTimeslot
    room_number: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, session) -> "MovieSessionResponse":
        return cls(
            id=str(session.id),
            movie_id=str(session.movie_id),
            date=session.date,
            timeslot=session.timeslot,
            room_number=session.room_number,
            created_at=session.created_at,
            updated_at=session.updated_at,
        )


class MovieDetailResponse(MovieResponse):
    """Movie with every scheduled session"""

    sessions: List[MovieSessionResponse]


class MovieListResponse(CamelModel):
    movies: List[MovieResponse]
    meta: PaginationMeta


class MovieSessionListResponse(CamelModel):
    sessions: List[MovieSessionResponse]
    meta: PaginationMeta
