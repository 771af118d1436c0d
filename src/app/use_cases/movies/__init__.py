"""
Movie Use Cases

Movies, movie sessions and their bulk variants.
"""

from .movie_service import MovieService
from .dtos import (
    CreateMovieCommand,
    CreateMovieSessionCommand,
    MovieDetailResponse,
    MovieListResponse,
    MovieResponse,
    MovieSessionListResponse,
    MovieSessionResponse,
    UpdateMovieCommand,
)

__all__ = [
    # Services
    "MovieService",
    # DTOs - Commands
    "CreateMovieCommand",
    "UpdateMovieCommand",
    "CreateMovieSessionCommand",
    # DTOs - Responses
    "MovieResponse",
    "MovieDetailResponse",
    "MovieListResponse",
    "MovieSessionResponse",
    "MovieSessionListResponse",
]
