from dataclasses import asdict
from datetime import datetime
from enum import Enum
from typing import Union

from fastapi import Request

from src.app.repositories.query_options import MovieQueryOptions, MovieSessionQueryOptions


def _format(value) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def request_cache_key(
    request: Request, query: Union[MovieQueryOptions, MovieSessionQueryOptions]
) -> str:
    """
    Cache key of a GET listing: path plus the parsed query options.

    Parameters the listing does not understand never reach the key, so
    `?x=<random>` maps onto the same entry as the bare path.
    """
    params = "&".join(
        f"{name}={_format(value)}"
        for name, value in sorted(asdict(query).items())
        if value is not None
    )
    return f"{request.url.path}?{params}"
