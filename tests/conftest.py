"""Shared pytest fixtures: storages, services, users and an API client."""

import os
import tempfile
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("UPLOADS_PATH", tempfile.mkdtemp(prefix="reportit-uploads-"))
os.environ.setdefault("SEED_DEMO_USERS", "false")

from reportit.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from reportit import models  # noqa: E402,F401
from reportit.auth import create_access_token, get_password_hash  # noqa: E402
from reportit.database import Base  # noqa: E402
from reportit.dependencies import get_storage, wire_badges  # noqa: E402
from reportit.models import Category, Role  # noqa: E402
from reportit.schemas import ReportCreate, UserCreate  # noqa: E402
from reportit.services.actor import Actor  # noqa: E402
from reportit.services.report_service import ReportService  # noqa: E402
from reportit.storage import MemStorage, SqlStorage, Storage  # noqa: E402


def report_data(**overrides) -> ReportCreate:
    """Valid report input with optional overrides"""
    data = {
        "title": "Pothole on Main St",
        "description": "Deep pothole in the right lane",
        "category": Category.ROAD_DAMAGE,
        "address": "12 Main St",
        "neighborhood": "Downtown",
        "latitude": "40.7128",
        "longitude": "-74.0060",
    }
    data.update(overrides)
    return ReportCreate(**data)


async def make_user(storage: Storage, username: str, role: Role = Role.USER, password: str = "x"):
    return await storage.create_user(
        UserCreate(
            username=username,
            password=password,
            name=username.title(),
            email=f"{username}@example.com",
            role=role,
        )
    )


# ===========================================
# STORAGE FIXTURES
# ===========================================


@asynccontextmanager
async def sqlite_storage() -> AsyncIterator[SqlStorage]:
    """SQL store on a private in-memory SQLite database"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool
    )
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        async with session_factory() as session:
            yield SqlStorage(session)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def storage(request) -> AsyncGenerator[Storage, None]:
    """Runs a test once per storage backing"""
    if request.param == "memory":
        yield wire_badges(MemStorage())
        return

    async with sqlite_storage() as sql:
        yield wire_badges(sql)


# ===========================================
# DOMAIN FIXTURES
# ===========================================


@pytest_asyncio.fixture
async def citizen(storage):
    return await make_user(storage, "alice")


@pytest_asyncio.fixture
async def other_citizen(storage):
    return await make_user(storage, "bob")


@pytest_asyncio.fixture
async def admin(storage):
    return await make_user(storage, "admin", role=Role.ADMIN)


@pytest.fixture
def service(storage) -> ReportService:
    return ReportService(storage)


@pytest.fixture
def citizen_actor(citizen) -> Actor:
    return Actor.from_user(citizen)


@pytest.fixture
def admin_actor(admin) -> Actor:
    return Actor.from_user(admin)


# ===========================================
# API FIXTURES
# ===========================================


@pytest.fixture
def api_storage() -> MemStorage:
    storage = MemStorage()
    wire_badges(storage)
    return storage


@pytest_asyncio.fixture
async def client(api_storage) -> AsyncGenerator[AsyncClient, None]:
    from reportit.main import app

    app.dependency_overrides[get_storage] = lambda: api_storage
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_storage, None)


async def auth_headers(storage: Storage, username: str, role: Role = Role.USER) -> dict:
    """Create a user with password "secret1" and return bearer headers"""
    user = await make_user(storage, username, role=role, password=get_password_hash("secret1"))
    return {"Authorization": f"Bearer {create_access_token(user)}"}
