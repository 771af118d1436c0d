from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional

from src.domain.entities import MovieSessionTimeslot

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 25
# Page size used when a caller wants every row (movie detail with sessions)
UNLIMITED_PER_PAGE = 9999

SortOrder = Literal["asc", "desc"]


@dataclass(frozen=True)
class MovieQueryOptions:
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE
    sort: Optional[Literal["title", "age_restriction", "created_at"]] = None
    order: SortOrder = "asc"
    # Minimum age restriction
    age_restriction: Optional[int] = None
    # Partial, case-insensitive title match
    title: Optional[str] = None


@dataclass(frozen=True)
class MovieSessionQueryOptions:
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE
    sort: Optional[Literal["date", "timeslot", "room_number"]] = None
    order: SortOrder = "asc"
    date: Optional[datetime] = None
    timeslot: Optional[MovieSessionTimeslot] = None
    room_number: Optional[int] = None
