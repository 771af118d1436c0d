from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import Field

from src.api.error import raise_for_error
from src.api.utils.cache_key import request_cache_key
from src.api.utils.query_params import movie_query, movie_session_query
from src.api.utils.roles import require_roles
from src.app.repositories.query_options import MovieQueryOptions, MovieSessionQueryOptions
from src.app.services.cache import ResponseCache
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import CamelModel
from src.app.use_cases.movies import (
    CreateMovieCommand,
    CreateMovieSessionCommand,
    MovieDetailResponse,
    MovieListResponse,
    MovieResponse,
    MovieService,
    MovieSessionListResponse,
    MovieSessionResponse,
    UpdateMovieCommand,
)
from src.depends import get_cache, get_current_user, get_unit_of_work
from src.domain.entities import UserRole

router = APIRouter(
    prefix="/movies", tags=["Movies"], dependencies=[Depends(get_current_user)]
)

manager_only = [Depends(require_roles(UserRole.manager))]

MOVIE_ERROR_STATUS = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "MOVIE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "MOVIE_SESSION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "MOVIE_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "ROOM_ALREADY_BOOKED": status.HTTP_409_CONFLICT,
    "MOVIE_SESSION_MISMATCH": status.HTTP_409_CONFLICT,
}


class CreateMovieRequest(CamelModel):
    title: str = Field(..., max_length=255, description="Unique movie title")
    age_restriction: int = Field(..., description="Minimum viewer age, 0-21")


class BulkCreateMoviesRequest(CamelModel):
    movies: List[CreateMovieRequest] = Field(..., min_length=1)


class UpdateMovieRequest(CamelModel):
    title: Optional[str] = Field(None, max_length=255)
    age_restriction: Optional[int] = None


class BulkDeleteMoviesRequest(CamelModel):
    movie_ids: List[UUID] = Field(..., min_length=1)


class CreateMovieSessionRequest(CamelModel):
    date: datetime = Field(..., description="Session date, ISO 8601, in the future")
    timeslot: str = Field(..., description="One of the fixed 2-hour bands, e.g. 18:00-20:00")
    room_number: int = Field(..., description="Positive room number")


class BulkCreateMovieSessionsRequest(CamelModel):
    sessions: List[CreateMovieSessionRequest] = Field(..., min_length=1)


def _movie_command(request: CreateMovieRequest) -> CreateMovieCommand:
    return CreateMovieCommand(title=request.title, age_restriction=request.age_restriction)


def _session_command(request: CreateMovieSessionRequest) -> CreateMovieSessionCommand:
    return CreateMovieSessionCommand(
        date=request.date, timeslot=request.timeslot, room_number=request.room_number
    )


@router.get("", status_code=status.HTTP_200_OK, response_model=MovieListResponse)
async def get_movies(
    request: Request,
    query: MovieQueryOptions = Depends(movie_query),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ResponseCache = Depends(get_cache),
):
    """
    List Movies

    Paginated, filterable by title (partial) and minimum age restriction.
    Served through the response cache.
    """
    cache_key = request_cache_key(request, query)
    result = await MovieService(uow, cache).get_movies(query, cache_key)

    if result.is_err():
        raise_for_error(result.error, MOVIE_ERROR_STATUS)

    return result.value


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MovieResponse,
    dependencies=manager_only,
)
async def create_movie(
    request: CreateMovieRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ResponseCache = Depends(get_cache),
):
    """
    Create Movie (manager)

    Raises:
        - 400 Bad Request: Empty title or age restriction outside 0-21
        - 409 Conflict: Title already exists
    """
    result = await MovieService(uow, cache).create_movie(_movie_command(request))

    if result.is_err():
        raise_for_error(result.error, MOVIE_ERROR_STATUS)

    return result.value


@router.post(
    "/bulk",
    status_code=status.HTTP_201_CREATED,
    response_model=List[MovieResponse],
    dependencies=manager_only,
)
async def create_bulk_movies(
    request: BulkCreateMoviesRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ResponseCache = Depends(get_cache),
):
    """
    Create Movies in Bulk (manager)

    All-or-nothing: the first invalid or duplicate movie aborts the batch.
    """
    commands = [_movie_command(movie) for movie in request.movies]
    result = await MovieService(uow, cache).create_bulk_movies(commands)

    if result.is_err():
        raise_for_error(result.error, MOVIE_ERROR_STATUS)

    return result.value


@router.delete(
    "/bulk", status_code=status.HTTP_204_NO_CONTENT, dependencies=manager_only
)
async def delete_bulk_movies(
    request: BulkDeleteMoviesRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ResponseCache = Depends(get_cache),
):
    """
    Delete Movies in Bulk (manager)

    All-or-nothing: an unknown id aborts the batch with 404.
    """
    result = await MovieService(uow, cache).delete_bulk_movies(request.movie_ids)

    if result.is_err():
        raise_for_error(result.error, MOVIE_ERROR_STATUS)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{movie_id}", status_code=status.HTTP_200_OK, response_model=MovieDetailResponse
)
async def get_movie(movie_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Get Movie with all of its sessions

    Raises:
        - 404 Not Found: Movie not found
    """
    result = await MovieService(uow).get_movie_by_id(movie_id)

    if result.is_err():
        raise_for_error(result.error, MOVIE_ERROR_STATUS)

    return result.value


@router.patch(
    "/{movie_id}",
    status_code=status.HTTP_200_OK,
    response_model=MovieResponse,
    dependencies=manager_only,
)
async def update_movie(
    movie_id: UUID,
    request: UpdateMovieRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ResponseCache = Depends(get_cache),
):
    """
    Update Movie (manager)

    Raises:
        - 400 Bad Request: Invalid title or age restriction
        - 404 Not Found: Movie not found
        - 409 Conflict: Another movie has this title
    """
    command = UpdateMovieCommand(
        title=request.title, age_restriction=request.age_restriction
    )
    result = await MovieService(uow, cache).update_movie(movie_id, command)

    if result.is_err():
        raise_for_error(result.error, MOVIE_ERROR_STATUS)

    return result.value


@router.delete(
    "/{movie_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=manager_only
)
async def delete_movie(
    movie_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ResponseCache = Depends(get_cache),
):
    """
    Delete Movie (manager); its sessions are deleted with it

    Raises:
        - 404 Not Found: Movie not found
    """
    result = await MovieService(uow, cache).delete_movie(movie_id)

    if result.is_err():
        raise_for_error(result.error, MOVIE_ERROR_STATUS)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{movie_id}/sessions",
    status_code=status.HTTP_200_OK,
    response_model=MovieSessionListResponse,
)
async def get_movie_sessions(
    movie_id: UUID,
    request: Request,
    query: MovieSessionQueryOptions = Depends(movie_session_query),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ResponseCache = Depends(get_cache),
):
    """
    List Sessions of a Movie

    Raises:
        - 404 Not Found: Movie not found
    """
    result = await MovieService(uow, cache).get_sessions(
        movie_id, query, request_cache_key(request, query)
    )

    if result.is_err():
        raise_for_error(result.error, MOVIE_ERROR_STATUS)

    return result.value


@router.post(
    "/{movie_id}/sessions",
    status_code=status.HTTP_201_CREATED,
    response_model=MovieSessionResponse,
    dependencies=manager_only,
)
async def create_movie_session(
    movie_id: UUID,
    request: CreateMovieSessionRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ResponseCache = Depends(get_cache),
):
    """
    Create Movie Session (manager)

    Raises:
        - 400 Bad Request: Past date, non-positive room or unknown timeslot
        - 404 Not Found: Movie not found
        - 409 Conflict: Room already booked for this date and timeslot
    """
    result = await MovieService(uow, cache).create_session(
        movie_id, _session_command(request)
    )

    if result.is_err():
        raise_for_error(result.error, MOVIE_ERROR_STATUS)

    return result.value


@router.post(
    "/{movie_id}/sessions/bulk",
    status_code=status.HTTP_201_CREATED,
    response_model=List[MovieSessionResponse],
    dependencies=manager_only,
)
async def create_bulk_movie_sessions(
    movie_id: UUID,
    request: BulkCreateMovieSessionsRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ResponseCache = Depends(get_cache),
):
    """
    Create Movie Sessions in Bulk (manager)

    All-or-nothing: the first invalid or conflicting session aborts the batch.
    """
    commands = [_session_command(session) for session in request.sessions]
    result = await MovieService(uow, cache).create_bulk_sessions(movie_id, commands)

    if result.is_err():
        raise_for_error(result.error, MOVIE_ERROR_STATUS)

    return result.value


@router.get(
    "/{movie_id}/sessions/{session_id}",
    status_code=status.HTTP_200_OK,
    response_model=MovieSessionResponse,
)
async def get_movie_session(
    movie_id: UUID, session_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Get one Session of a Movie

    Raises:
        - 404 Not Found: Movie or session not found
        - 409 Conflict: Session belongs to another movie
    """
    result = await MovieService(uow).get_movie_session_by_id(movie_id, session_id)

    if result.is_err():
        raise_for_error(result.error, MOVIE_ERROR_STATUS)

    return result.value
