from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.app.repositories.query_options import MovieQueryOptions
from src.domain.entities import Movie


class IMovieRepository(ABC):
    """Movie repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, movie_id: UUID) -> Optional[Movie]:
        """Get movie by ID"""
        pass

    @abstractmethod
    async def get_by_title(self, title: str) -> Optional[Movie]:
        """Get movie by exact title"""
        pass

    @abstractmethod
    async def list(self, query: MovieQueryOptions) -> Tuple[List[Movie], int]:
        """Get one page of movies and the total count matching the filters"""
        pass

    @abstractmethod
    async def create(self, movie: Movie) -> Movie:
        """Create a new movie. Raises DuplicateEntryError on title clash."""
        pass

    @abstractmethod
    async def update(self, movie: Movie) -> Movie:
        """Update existing movie. Raises DuplicateEntryError on title clash."""
        pass

    @abstractmethod
    async def delete(self, movie_id: UUID) -> None:
        """Delete movie; its sessions go with it (FK cascade)"""
        pass
