from sqlalchemy.exc import IntegrityError
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.domain.errors import DuplicateEntryError


async def save_and_refresh(session: AsyncSession, entity: SQLModel, conflict_message: str):
    """
    Add, flush and refresh an entity.

    Unique-index violations surface at flush time and are re-raised as
    DuplicateEntryError so services can answer with a Conflict.
    """
    session.add(entity)
    try:
        await session.flush()
    except IntegrityError as exc:
        if "UNIQUE" in str(exc.orig).upper() or "DUPLICATE" in str(exc.orig).upper():
            raise DuplicateEntryError(conflict_message) from exc
        raise
    await session.refresh(entity)
    return entity


def page_bounds(page: int, per_page: int):
    """Offset and limit for a 1-based page"""
    return (page - 1) * per_page, per_page


LIKE_ESCAPE = "\\"


def contains_pattern(value: str) -> str:
    """LIKE pattern matching `value` anywhere, with % and _ taken literally"""
    escaped = (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
