"""
Movie Service

Movies and their sessions, with all-or-nothing bulk operations and a
read-through response cache that every write clears.
"""

import logging
from typing import List, Optional, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel

from config import ApplicationConfig
from src.app.repositories.query_options import (
    UNLIMITED_PER_PAGE,
    MovieQueryOptions,
    MovieSessionQueryOptions,
)
from src.app.result import Error, Result, Return
from src.app.services.cache import ResponseCache
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Movie, MovieSession
from src.domain.errors import DomainValidationError, DuplicateEntryError
from src.app.use_cases.common import PaginationMeta
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

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class MovieService:
    """
    Movie and movie session orchestration.

    Business Rules:
    - Titles are unique (pre-check plus unique index)
    - A room holds one session per date and timeslot (pre-check plus unique index)
    - Bulk operations stop at the first failure and roll back the whole batch
    - Every committed write clears the whole response cache
    """

    def __init__(self, uow: UnitOfWork, cache: Optional[ResponseCache] = None):
        self.uow = uow
        self.cache = cache

    # ------------------------------------------------------------------
    # Movies
    # ------------------------------------------------------------------

    async def get_movies(
        self, query: MovieQueryOptions, cache_key: Optional[str] = None
    ) -> Result[MovieListResponse]:
        cached = await self._cached(cache_key, MovieListResponse)
        if cached is not None:
            return Return.ok(cached)

        async with self.uow:
            movies, total = await self.uow.movies.list(query)
            response = MovieListResponse(
                movies=[MovieResponse.from_entity(m) for m in movies],
                meta=PaginationMeta.build(query.page, query.per_page, total),
            )

        await self._store(cache_key, response)
        return Return.ok(response)

    async def get_movie_by_id(self, movie_id: UUID) -> Result[MovieDetailResponse]:
        """
        Get a movie together with all of its sessions.

        Returns:
            Result[MovieDetailResponse] or Error(MOVIE_NOT_FOUND)
        """
        async with self.uow:
            movie = await self.uow.movies.get_by_id(movie_id)
            if movie is None:
                return Return.err(_movie_not_found(movie_id))

            sessions, _ = await self.uow.movie_sessions.list_by_movie(
                movie_id, MovieSessionQueryOptions(per_page=UNLIMITED_PER_PAGE)
            )
            base = MovieResponse.from_entity(movie)
            return Return.ok(
                MovieDetailResponse(
                    **base.model_dump(),
                    sessions=[MovieSessionResponse.from_entity(s) for s in sessions],
                )
            )

    async def create_movie(self, command: CreateMovieCommand) -> Result[MovieResponse]:
        """
        Returns:
            Result[MovieResponse] or Error(VALIDATION_ERROR | MOVIE_ALREADY_EXISTS)
        """
        async with self.uow:
            result = await self._add_movie(command)
            if result.is_err():
                return result

            await self.uow.commit()
            response = MovieResponse.from_entity(result.value)

        await self._invalidate()
        logger.info(f"Movie created: {response.id} ({response.title})")
        return Return.ok(response)

    async def create_bulk_movies(
        self, commands: List[CreateMovieCommand]
    ) -> Result[List[MovieResponse]]:
        async with self.uow:
            created = []
            for command in commands:
                result = await self._add_movie(command)
                if result.is_err():
                    logger.warning(f"Bulk movie create aborted: {result.error.code}")
                    return result
                created.append(result.value)

            await self.uow.commit()
            responses = [MovieResponse.from_entity(m) for m in created]

        await self._invalidate()
        logger.info(f"Movies created in bulk: {len(responses)}")
        return Return.ok(responses)

    async def update_movie(
        self, movie_id: UUID, command: UpdateMovieCommand
    ) -> Result[MovieResponse]:
        """
        Partially update a movie.

        Returns:
            Result[MovieResponse] or Error(MOVIE_NOT_FOUND | VALIDATION_ERROR |
            MOVIE_ALREADY_EXISTS)
        """
        async with self.uow:
            movie = await self.uow.movies.get_by_id(movie_id)
            if movie is None:
                return Return.err(_movie_not_found(movie_id))

            if command.title is not None and command.title != movie.title:
                clash = await self.uow.movies.get_by_title(command.title)
                if clash is not None:
                    return Return.err(_title_taken(command.title))

            try:
                movie.update(title=command.title, age_restriction=command.age_restriction)
                movie = await self.uow.movies.update(movie)
            except DomainValidationError as e:
                return Return.err(Error(e.code, e.message))
            except DuplicateEntryError:
                return Return.err(_title_taken(command.title))

            await self.uow.commit()
            response = MovieResponse.from_entity(movie)

        await self._invalidate()
        logger.info(f"Movie updated: {movie_id}")
        return Return.ok(response)

    async def delete_movie(self, movie_id: UUID) -> Result[None]:
        async with self.uow:
            result = await self._remove_movie(movie_id)
            if result.is_err():
                return result
            await self.uow.commit()

        await self._invalidate()
        logger.info(f"Movie deleted: {movie_id}")
        return Return.ok()

    async def delete_bulk_movies(self, movie_ids: List[UUID]) -> Result[None]:
        async with self.uow:
            for movie_id in movie_ids:
                result = await self._remove_movie(movie_id)
                if result.is_err():
                    logger.warning(f"Bulk movie delete aborted: {result.error.code}")
                    return result
            await self.uow.commit()

        await self._invalidate()
        logger.info(f"Movies deleted in bulk: {len(movie_ids)}")
        return Return.ok()

    # ------------------------------------------------------------------
    # Movie sessions
    # ------------------------------------------------------------------

    async def get_sessions(
        self,
        movie_id: UUID,
        query: MovieSessionQueryOptions,
        cache_key: Optional[str] = None,
    ) -> Result[MovieSessionListResponse]:
        """
        Paginated sessions of one movie.

        Returns:
            Result[MovieSessionListResponse] or Error(MOVIE_NOT_FOUND)
        """
        cached = await self._cached(cache_key, MovieSessionListResponse)
        if cached is not None:
            return Return.ok(cached)

        async with self.uow:
            movie = await self.uow.movies.get_by_id(movie_id)
            if movie is None:
                return Return.err(_movie_not_found(movie_id))

            sessions, total = await self.uow.movie_sessions.list_by_movie(movie_id, query)
            response = _session_page(sessions, total, query)

        await self._store(cache_key, response)
        return Return.ok(response)

    async def get_all_sessions(
        self, query: MovieSessionQueryOptions, cache_key: Optional[str] = None
    ) -> Result[MovieSessionListResponse]:
        cached = await self._cached(cache_key, MovieSessionListResponse)
        if cached is not None:
            return Return.ok(cached)

        async with self.uow:
            sessions, total = await self.uow.movie_sessions.list(query)
            response = _session_page(sessions, total, query)

        await self._store(cache_key, response)
        return Return.ok(response)

    async def get_movie_session_by_id(
        self, movie_id: UUID, session_id: UUID
    ) -> Result[MovieSessionResponse]:
        """
        Get one session of a movie.

        Returns:
            Result[MovieSessionResponse] or Error(MOVIE_NOT_FOUND |
            MOVIE_SESSION_NOT_FOUND | MOVIE_SESSION_MISMATCH)
        """
        async with self.uow:
            movie = await self.uow.movies.get_by_id(movie_id)
            if movie is None:
                return Return.err(_movie_not_found(movie_id))

            movie_session = await self.uow.movie_sessions.get_by_id(session_id)
            if movie_session is None:
                return Return.err(_session_not_found(session_id))

            if movie_session.movie_id != movie_id:
                return Return.err(
                    Error(
                        "MOVIE_SESSION_MISMATCH",
                        f"Movie session {session_id} does not belong to movie {movie_id}",
                    )
                )

            return Return.ok(MovieSessionResponse.from_entity(movie_session))

    async def create_session(
        self, movie_id: UUID, command: CreateMovieSessionCommand
    ) -> Result[MovieSessionResponse]:
        """
        Schedule a movie session.

        Returns:
            Result[MovieSessionResponse] or Error(MOVIE_NOT_FOUND |
            VALIDATION_ERROR | ROOM_ALREADY_BOOKED)
        """
        async with self.uow:
            result = await self._add_session(movie_id, command)
            if result.is_err():
                return result

            await self.uow.commit()
            response = MovieSessionResponse.from_entity(result.value)

        await self._invalidate()
        logger.info(f"Movie session created: {response.id} (movie={movie_id})")
        return Return.ok(response)

    async def create_bulk_sessions(
        self, movie_id: UUID, commands: List[CreateMovieSessionCommand]
    ) -> Result[List[MovieSessionResponse]]:
        async with self.uow:
            created = []
            for command in commands:
                result = await self._add_session(movie_id, command)
                if result.is_err():
                    logger.warning(f"Bulk session create aborted: {result.error.code}")
                    return result
                created.append(result.value)

            await self.uow.commit()
            responses = [MovieSessionResponse.from_entity(s) for s in created]

        await self._invalidate()
        logger.info(f"Movie sessions created in bulk: {len(responses)} (movie={movie_id})")
        return Return.ok(responses)

    async def delete_session(self, session_id: UUID) -> Result[None]:
        async with self.uow:
            result = await self._remove_session(session_id)
            if result.is_err():
                return result
            await self.uow.commit()

        await self._invalidate()
        logger.info(f"Movie session deleted: {session_id}")
        return Return.ok()

    async def delete_bulk_sessions(self, session_ids: List[UUID]) -> Result[None]:
        async with self.uow:
            for session_id in session_ids:
                result = await self._remove_session(session_id)
                if result.is_err():
                    logger.warning(f"Bulk session delete aborted: {result.error.code}")
                    return result
            await self.uow.commit()

        await self._invalidate()
        logger.info(f"Movie sessions deleted in bulk: {len(session_ids)}")
        return Return.ok()

    # ------------------------------------------------------------------
    # Steps shared by single and bulk operations (caller owns the transaction)
    # ------------------------------------------------------------------

    async def _add_movie(self, command: CreateMovieCommand) -> Result[Movie]:
        try:
            movie = Movie.create(title=command.title, age_restriction=command.age_restriction)
        except DomainValidationError as e:
            return Return.err(Error(e.code, e.message))

        conflict = _title_taken(movie.title)
        existing = await self.uow.movies.get_by_title(movie.title)
        if existing is not None:
            return Return.err(conflict)

        try:
            movie = await self.uow.movies.create(movie)
        except DuplicateEntryError:
            return Return.err(conflict)
        return Return.ok(movie)

    async def _remove_movie(self, movie_id: UUID) -> Result[None]:
        movie = await self.uow.movies.get_by_id(movie_id)
        if movie is None:
            return Return.err(_movie_not_found(movie_id))
        await self.uow.movies.delete(movie_id)
        return Return.ok()

    async def _add_session(
        self, movie_id: UUID, command: CreateMovieSessionCommand
    ) -> Result[MovieSession]:
        movie = await self.uow.movies.get_by_id(movie_id)
        if movie is None:
            return Return.err(_movie_not_found(movie_id))

        try:
            movie_session = MovieSession.create(
                movie_id=movie_id,
                date=command.date,
                timeslot=command.timeslot,
                room_number=command.room_number,
            )
        except DomainValidationError as e:
            return Return.err(Error(e.code, e.message))

        conflict = _room_booked(movie_session)
        if not await self.uow.movie_sessions.is_room_available(movie_session):
            return Return.err(conflict)

        try:
            movie_session = await self.uow.movie_sessions.create(movie_session)
        except DuplicateEntryError:
            return Return.err(conflict)
        return Return.ok(movie_session)

    async def _remove_session(self, session_id: UUID) -> Result[None]:
        movie_session = await self.uow.movie_sessions.get_by_id(session_id)
        if movie_session is None:
            return Return.err(_session_not_found(session_id))
        await self.uow.movie_sessions.delete(session_id)
        return Return.ok()

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    async def _cached(self, cache_key: Optional[str], model: Type[M]) -> Optional[M]:
        if self.cache is None or cache_key is None:
            return None
        payload = await self.cache.get(cache_key)
        if payload is None:
            return None
        if ApplicationConfig.ENABLE_CACHE_TRACE_LOGS:
            logger.debug(f"Cache hit: {cache_key}")
        return model.model_validate(payload)

    async def _store(self, cache_key: Optional[str], response: BaseModel) -> None:
        if self.cache is None or cache_key is None:
            return
        await self.cache.set(cache_key, response.model_dump(mode="json", by_alias=True))

    async def _invalidate(self) -> None:
        if self.cache is None:
            return
        await self.cache.clear()
        if ApplicationConfig.ENABLE_CACHE_TRACE_LOGS:
            logger.debug("Response cache cleared")


def _session_page(sessions, total: int, query: MovieSessionQueryOptions):
    return MovieSessionListResponse(
        sessions=[MovieSessionResponse.from_entity(s) for s in sessions],
        meta=PaginationMeta.build(query.page, query.per_page, total),
    )


def _movie_not_found(movie_id: UUID) -> Error:
    return Error("MOVIE_NOT_FOUND", f"Movie with ID {movie_id} not found")


def _session_not_found(session_id: UUID) -> Error:
    return Error("MOVIE_SESSION_NOT_FOUND", f"Movie session with ID {session_id} not found")


def _title_taken(title: str) -> Error:
    return Error("MOVIE_ALREADY_EXISTS", f'Movie with title "{title}" already exists')


def _room_booked(movie_session: MovieSession) -> Error:
    timeslot = getattr(movie_session.timeslot, "value", movie_session.timeslot)
    return Error(
        "ROOM_ALREADY_BOOKED",
        f"Room {movie_session.room_number} is already booked for "
        f"{movie_session.date.isoformat()} {timeslot}",
    )
