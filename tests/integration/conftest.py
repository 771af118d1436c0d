import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from tests.integration.helpers import register
from config import ApplicationConfig
from src.depends import enable_sqlite_foreign_keys, get_cache, get_unit_of_work
from src.adapter.services.cache import MemoryResponseCache
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain import entities  # noqa: F401


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Session for inspecting the database from a test"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def cache():
    return MemoryResponseCache(default_ttl=60)


@pytest_asyncio.fixture
async def client(session_factory, cache):
    from httpx import ASGITransport
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    # One session per request, as in production
    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_cache] = lambda: cache

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def manager(client):
    return await register(client, "m1", role="manager", age=30)


@pytest_asyncio.fixture
async def customer(client):
    return await register(client, "c1", role="customer", age=25)


@pytest.fixture
def manager_token(manager):
    return manager["accessToken"]


@pytest.fixture
def customer_token(customer):
    return customer["accessToken"]
