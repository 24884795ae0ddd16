"""Общие фикстуры: отдельная SQLite база на каждый тест и HTTP клиент поверх приложения."""

import os

# Настройки должны быть заданы до импорта приложения
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.db import Base, get_db
from app.db import models  # noqa: F401
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import User

DEFAULT_PASSWORD = "secret123"


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def make_user(session_factory):
    """Создает пользователя напрямую через репозиторий"""
    counter = {"n": 0}

    async def _make_user(name=None, email=None, password=DEFAULT_PASSWORD) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User.create_user(
            email=email or f"user{n}@example.com",
            name=name or f"User {n}",
            password=password,
        )
        async with session_factory() as session:
            return await UserRepository(session).create(user)

    return _make_user


@pytest_asyncio.fixture
async def test_client(session_factory):
    """HTTPX клиент с подменой get_db на тестовую базу"""
    from app.main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
