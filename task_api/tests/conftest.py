"""Pytest configuration для тестов Task Manager API."""

from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from task_api.app import app
from task_api.core.dependencies import get_task_store
from task_api.services.task_service import TaskService
from task_api.services.task_store import TaskStore
from task_api.tests.fakes import FakeRedis


@pytest.fixture
def mock_pipeline() -> MagicMock:
    """Mock транзакционного pipeline Redis."""
    pipe = MagicMock()
    pipe.__aenter__.return_value = pipe
    pipe.__aexit__.return_value = False
    pipe.watch = AsyncMock()
    pipe.exists = AsyncMock(return_value=0)
    pipe.execute = AsyncMock(return_value=[0, 0])
    pipe.reset = AsyncMock()
    return pipe


@pytest.fixture
def mock_redis(mock_pipeline: MagicMock) -> MagicMock:
    """Mock Redis client для тестирования."""
    redis = MagicMock()
    redis.pipeline = MagicMock(return_value=mock_pipeline)
    redis.incr = AsyncMock(return_value=1)
    redis.hset = AsyncMock()
    redis.hgetall = AsyncMock(return_value={})
    redis.exists = AsyncMock(return_value=0)
    redis.delete = AsyncMock(return_value=0)
    redis.zadd = AsyncMock()
    redis.zrem = AsyncMock()
    redis.zrange = AsyncMock(return_value=[])
    redis.ping = AsyncMock(return_value=True)
    redis.aclose = AsyncMock()
    return redis


@pytest.fixture
def fake_redis() -> FakeRedis:
    """In-memory Redis."""
    return FakeRedis()


@pytest.fixture
def store(fake_redis: FakeRedis) -> TaskStore:
    """TaskStore поверх in-memory Redis."""
    return TaskStore(fake_redis, key_prefix="test")  # type: ignore[arg-type]


@pytest.fixture
def service(store: TaskStore) -> TaskService:
    """TaskService поверх in-memory хранилища."""
    return TaskService(store)


@pytest.fixture
def client(store: TaskStore) -> Iterator[TestClient]:
    """Test client для FastAPI приложения.

    Lifespan не запускается (без `with`), хранилище подменяется
    через dependency_overrides.
    """
    app.dependency_overrides[get_task_store] = lambda: store
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
