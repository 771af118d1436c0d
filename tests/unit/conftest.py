import pytest
from unittest.mock import AsyncMock, MagicMock

from config import ApplicationConfig


def _returns_argument(entity):
    return entity


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories; create/update echo the entity back"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    for name in ("users", "movies", "movie_sessions", "tickets", "refresh_tokens", "user_sessions"):
        repository = AsyncMock()
        repository.create = AsyncMock(side_effect=_returns_argument)
        repository.update = AsyncMock(side_effect=_returns_argument)
        setattr(uow, name, repository)

    return uow
