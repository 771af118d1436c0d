from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.app.repositories.query_options import MovieSessionQueryOptions
from src.domain.entities import MovieSession


class IMovieSessionRepository(ABC):
    """Movie session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[MovieSession]:
        """Get movie session by ID"""
        pass

    @abstractmethod
    async def list_by_movie(
        self, movie_id: UUID, query: MovieSessionQueryOptions
    ) -> Tuple[List[MovieSession], int]:
        """Get one page of a movie's sessions and the total count"""
        pass

    @abstractmethod
    async def list(
        self, query: MovieSessionQueryOptions
    ) -> Tuple[List[MovieSession], int]:
        """Get one page of all sessions and the total count"""
        pass

    @abstractmethod
    async def is_room_available(self, session: MovieSession) -> bool:
        """True when no session holds the same date, timeslot and room"""
        pass

    @abstractmethod
    async def create(self, session: MovieSession) -> MovieSession:
        """Create a new session. Raises DuplicateEntryError if the room is taken."""
        pass

    @abstractmethod
    async def delete(self, session_id: UUID) -> None:
        """Delete session; its tickets keep session_id = NULL"""
        pass
