from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.cache import build_response_cache
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import ACCESS_TOKEN_TYPE, verify_jwt
from src.app.result import Error
from src.app.services.cache import ResponseCache

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)


def enable_sqlite_foreign_keys(async_engine):
    """SQLite ignores ON DELETE rules unless foreign keys are switched on per connection"""
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


enable_sqlite_foreign_keys(engine)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)

response_cache = build_response_cache()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_cache() -> ResponseCache:
    return response_cache


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Raw bearer token from the Authorization header"""
    if credentials is None or not credentials.credentials:
        raise ClientError(
            Error("UNAUTHORIZED", "Missing bearer token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return credentials.credentials


async def get_current_user(token: str = Depends(get_bearer_token)) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        token: Bearer token from Authorization header

    Returns:
        dict with user_id, role and session_id taken from the sub/role/sid claims

    Raises:
        ClientError: 401 if token is missing, invalid or expired
    """
    payload = verify_jwt(token, ACCESS_TOKEN_TYPE)

    if payload is None or not payload.get("sub") or not payload.get("role"):
        raise ClientError(
            Error("UNAUTHORIZED", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return {
        "user_id": payload["sub"],
        "role": payload["role"],
        "session_id": payload.get("sid"),
    }
