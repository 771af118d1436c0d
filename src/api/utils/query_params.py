"""
Listing query parameters

camelCase query names are mapped onto the repository query options.
"""

from datetime import datetime
from typing import Literal, Optional

from fastapi import Query

from src.app.repositories.query_options import (
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    MovieQueryOptions,
    MovieSessionQueryOptions,
)
from src.domain.entities import MovieSessionTimeslot

MAX_PER_PAGE = 100

MOVIE_SORT_FIELDS = {
    "title": "title",
    "ageRestriction": "age_restriction",
    "createdAt": "created_at",
}
SESSION_SORT_FIELDS = {
    "date": "date",
    "timeslot": "timeslot",
    "roomNumber": "room_number",
}


def movie_query(
    page: int = Query(DEFAULT_PAGE, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE, alias="perPage"),
    sort: Optional[Literal["title", "ageRestriction", "createdAt"]] = Query(None),
    order: Literal["asc", "desc"] = Query("asc"),
    title: Optional[str] = Query(None, description="Partial, case-insensitive title"),
    age_restriction: Optional[int] = Query(
        None, ge=0, alias="ageRestriction", description="Minimum age restriction"
    ),
) -> MovieQueryOptions:
    return MovieQueryOptions(
        page=page,
        per_page=per_page,
        sort=MOVIE_SORT_FIELDS[sort] if sort else None,
        order=order,
        title=title,
        age_restriction=age_restriction,
    )


def movie_session_query(
    page: int = Query(DEFAULT_PAGE, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE, alias="perPage"),
    sort: Optional[Literal["date", "timeslot", "roomNumber"]] = Query(None),
    order: Literal["asc", "desc"] = Query("asc"),
    date: Optional[datetime] = Query(None),
    timeslot: Optional[MovieSessionTimeslot] = Query(None),
    room_number: Optional[int] = Query(None, ge=1, alias="roomNumber"),
) -> MovieSessionQueryOptions:
    return MovieSessionQueryOptions(
        page=page,
        per_page=per_page,
        sort=SESSION_SORT_FIELDS[sort] if sort else None,
        order=order,
        date=date,
        timeslot=timeslot,
        room_number=room_number,
    )
