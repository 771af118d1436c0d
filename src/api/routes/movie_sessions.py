from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import Field

from src.api.error import raise_for_error
from src.api.routes.movies import MOVIE_ERROR_STATUS, manager_only
from src.api.utils.cache_key import request_cache_key
from src.api.utils.query_params import movie_session_query
from src.app.repositories.query_options import MovieSessionQueryOptions
from src.app.services.cache import ResponseCache
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import CamelModel
from src.app.use_cases.movies import MovieService, MovieSessionListResponse
from src.depends import get_cache, get_current_user, get_unit_of_work

router = APIRouter(
    prefix="/movie-sessions",
    tags=["Movie Sessions"],
    dependencies=[Depends(get_current_user)],
)


class BulkDeleteMovieSessionsRequest(CamelModel):
    session_ids: List[UUID] = Field(..., min_length=1)


@router.get("", status_code=status.HTTP_200_OK, response_model=MovieSessionListResponse)
async def get_all_sessions(
    request: Request,
    query: MovieSessionQueryOptions = Depends(movie_session_query),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ResponseCache = Depends(get_cache),
):
    """
    List all Movie Sessions

    Paginated, filterable by date, timeslot and room number.
    Served through the response cache.
    """
    result = await MovieService(uow, cache).get_all_sessions(
        query, request_cache_key(request, query)
    )

    if result.is_err():
        raise_for_error(result.error, MOVIE_ERROR_STATUS)

    return result.value


@router.delete(
    "/bulk", status_code=status.HTTP_204_NO_CONTENT, dependencies=manager_only
)
async def delete_bulk_sessions(
    request: BulkDeleteMovieSessionsRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ResponseCache = Depends(get_cache),
):
    """
    Delete Movie Sessions in Bulk (manager)

    All-or-nothing: an unknown id aborts the batch with 404.
    Tickets of deleted sessions are kept with sessionId = null.
    """
    result = await MovieService(uow, cache).delete_bulk_sessions(request.session_ids)

    if result.is_err():
        raise_for_error(result.error, MOVIE_ERROR_STATUS)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{session_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=manager_only
)
async def delete_session(
    session_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ResponseCache = Depends(get_cache),
):
    """
    Delete Movie Session (manager)

    Raises:
        - 404 Not Found: Session not found
    """
    result = await MovieService(uow, cache).delete_session(session_id)

    if result.is_err():
        raise_for_error(result.error, MOVIE_ERROR_STATUS)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
