from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.base import (
    LIKE_ESCAPE,
    contains_pattern,
    page_bounds,
    save_and_refresh,
)
from src.app.repositories.movie_repository import IMovieRepository
from src.app.repositories.query_options import MovieQueryOptions
from src.domain.entities import Movie


class MovieRepository(IMovieRepository):
    """Movie repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, movie_id: UUID) -> Optional[Movie]:
        """Get movie by ID"""
        stmt = select(Movie).where(Movie.id == movie_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_title(self, title: str) -> Optional[Movie]:
        """Get movie by exact title"""
        stmt = select(Movie).where(Movie.title == title)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list(self, query: MovieQueryOptions) -> Tuple[List[Movie], int]:
        """Get one page of movies matching title / minimum age filters"""
        stmt = select(Movie)
        if query.title:
            stmt = stmt.where(
                col(Movie.title).ilike(contains_pattern(query.title), escape=LIKE_ESCAPE)
            )
        if query.age_restriction is not None:
            stmt = stmt.where(Movie.age_restriction >= query.age_restriction)

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self.session.exec(count_stmt)).one()

        sort_column = col(getattr(Movie, query.sort or "created_at"))
        order_by = sort_column.desc() if query.order == "desc" else sort_column.asc()
        offset, limit = page_bounds(query.page, query.per_page)
        stmt = stmt.order_by(order_by, col(Movie.id)).offset(offset).limit(limit)

        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def create(self, movie: Movie) -> Movie:
        """Create a new movie"""
        return await save_and_refresh(
            self.session, movie, f'Movie with title "{movie.title}" already exists'
        )

    async def update(self, movie: Movie) -> Movie:
        """Update existing movie"""
        return await save_and_refresh(
            self.session, movie, f'Movie with title "{movie.title}" already exists'
        )

    async def delete(self, movie_id: UUID) -> None:
        """Delete movie (sessions cascade in the database)"""
        await self.session.execute(delete(Movie).where(Movie.id == movie_id))
        await self.session.flush()
