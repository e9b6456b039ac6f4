"""Unit тесты для служебных endpoints приложения."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from task_api.app import lifespan
from task_api.services.task_store import TaskStore


class TestRootEndpoint:
    """Тесты для корневого endpoint /."""

    def test_root_endpoint(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()

        assert data["service"] == "Task Manager API"
        assert data["version"] == "1.0.0"
        assert data["status"] == "running"
        assert data["endpoints"]["api"] == "/api/tasks"


class TestHealthEndpoint:
    """Тесты для /health endpoint."""

    def test_health_ok(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["storage"] is True
        assert data["version"] == "1.0.0"

    def test_health_storage_down(self, client: TestClient, store: TaskStore) -> None:
        store.redis.ping = AsyncMock(side_effect=ConnectionError("refused"))  # type: ignore[method-assign]

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


class TestLifespan:
    """Тесты для lifespan приложения."""

    async def test_store_is_attached_and_closed(self, store: TaskStore, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("task_api.app.create_task_store", AsyncMock(return_value=store))
        app = AsyncMock()

        async with lifespan(app):
            assert app.state.task_store is store

        assert store.redis.closed is True  # type: ignore[attr-defined]

    async def test_startup_fails_without_storage(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            "task_api.app.create_task_store",
            AsyncMock(side_effect=ConnectionError("Не удалось подключиться к Redis")),
        )

        with pytest.raises(ConnectionError):
            async with lifespan(AsyncMock()):
                pass
