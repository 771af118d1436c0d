from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.base import page_bounds, save_and_refresh
from src.app.repositories.movie_session_repository import IMovieSessionRepository
from src.app.repositories.query_options import MovieSessionQueryOptions
from src.domain.base import to_naive_utc
from src.domain.entities import MovieSession


class MovieSessionRepository(IMovieSessionRepository):
    """Movie session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: UUID) -> Optional[MovieSession]:
        """Get movie session by ID"""
        stmt = select(MovieSession).where(MovieSession.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_movie(
        self, movie_id: UUID, query: MovieSessionQueryOptions
    ) -> Tuple[List[MovieSession], int]:
        """Get one page of a movie's sessions"""
        stmt = select(MovieSession).where(MovieSession.movie_id == movie_id)
        return await self._paginate(stmt, query)

    async def list(
        self, query: MovieSessionQueryOptions
    ) -> Tuple[List[MovieSession], int]:
        """Get one page of all sessions"""
        return await self._paginate(select(MovieSession), query)

    async def is_room_available(self, session: MovieSession) -> bool:
        """Check that no session occupies the same room, date and timeslot"""
        stmt = select(func.count()).select_from(MovieSession).where(
            MovieSession.date == session.date,
            MovieSession.timeslot == session.timeslot,
            MovieSession.room_number == session.room_number,
        )
        count = (await self.session.exec(stmt)).one()
        return count == 0

    async def create(self, session_obj: MovieSession) -> MovieSession:
        """Create a new movie session"""
        return await save_and_refresh(
            self.session,
            session_obj,
            f"Room {session_obj.room_number} is already booked for "
            f"{session_obj.date.isoformat()} {session_obj.timeslot.value}",
        )

    async def delete(self, session_id: UUID) -> None:
        """Delete movie session (tickets keep a NULL session_id)"""
        await self.session.execute(
            delete(MovieSession).where(MovieSession.id == session_id)
        )
        await self.session.flush()

    async def _paginate(
        self, stmt, query: MovieSessionQueryOptions
    ) -> Tuple[List[MovieSession], int]:
        if query.date is not None:
            stmt = stmt.where(MovieSession.date == to_naive_utc(query.date))
        if query.timeslot is not None:
            stmt = stmt.where(MovieSession.timeslot == query.timeslot)
        if query.room_number is not None:
            stmt = stmt.where(MovieSession.room_number == query.room_number)

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self.session.exec(count_stmt)).one()

        sort_column = col(getattr(MovieSession, query.sort or "date"))
        order_by = sort_column.desc() if query.order == "desc" else sort_column.asc()
        offset, limit = page_bounds(query.page, query.per_page)
        stmt = stmt.order_by(order_by, col(MovieSession.id)).offset(offset).limit(limit)

        result = await self.session.exec(stmt)
        return list(result.all()), total
