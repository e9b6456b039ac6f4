"""Unit тесты для services/task_service.py."""

import pytest

from task_api.core.enums import Priority
from task_api.services.task_query import TaskQuery
from task_api.services.task_service import TaskService
from task_api.shared.errors import BadRequestError, TaskNotFoundError
from task_api.tests.fakes import FakeRedis

MISSING_ID = "f" * 32


class TestTaskService:
    """Тесты для TaskService."""

    async def test_create_and_get(self, service: TaskService) -> None:
        created = await service.create_task(title="Купить молоко", priority=Priority.LOW)

        fetched = await service.get_task(created.id)

        assert fetched == created
        assert fetched.is_completed is False
        assert fetched.priority is Priority.LOW

    async def test_get_missing(self, service: TaskService) -> None:
        with pytest.raises(TaskNotFoundError):
            await service.get_task(MISSING_ID)

    async def test_list_tasks_page(self, service: TaskService) -> None:
        for title in ("a", "b", "c"):
            await service.create_task(title=title)

        page = await service.list_tasks(TaskQuery(page=2, limit=2))

        assert [task.title for task in page.items] == ["c"]
        assert page.total == 3
        assert page.page == 2
        assert page.limit == 2

    async def test_search_newest_first(self, service: TaskService) -> None:
        await service.create_task(title="Foo Bar")
        await service.create_task(title="other", description="no match")
        await service.create_task(title="barfoo")

        found = await service.search_tasks("foo")

        assert [task.title for task in found] == ["barfoo", "Foo Bar"]

    @pytest.mark.parametrize("text", [None, "", "   "])
    async def test_search_requires_query(self, service: TaskService, text: str | None) -> None:
        with pytest.raises(BadRequestError) as exc_info:
            await service.search_tasks(text)

        assert exc_info.value.message == "Search query is required"

    async def test_update_task(self, service: TaskService) -> None:
        created = await service.create_task(title="old", description="desc")

        updated = await service.update_task(created.id, {"title": "new"})

        assert updated.title == "new"
        assert updated.description == "desc"
        assert updated.id == created.id

    async def test_update_missing(self, service: TaskService) -> None:
        with pytest.raises(TaskNotFoundError):
            await service.update_task(MISSING_ID, {"title": "new"})

    async def test_update_deleted_concurrently(self, service: TaskService, fake_redis: FakeRedis) -> None:
        """Задача удалена между проверкой и записью: 404, а не сиротский hash."""
        created = await service.create_task(title="t")
        exists = fake_redis.exists
        deleted = False

        async def exists_then_delete(*keys: str) -> int:
            nonlocal deleted
            result = await exists(*keys)
            if not deleted:
                deleted = True
                await service.delete_task(created.id)
            return result

        fake_redis.exists = exists_then_delete  # type: ignore[method-assign]

        with pytest.raises(TaskNotFoundError):
            await service.update_task(created.id, {"title": "new"})

        assert fake_redis.hashes == {}

    async def test_set_status(self, service: TaskService) -> None:
        created = await service.create_task(title="t")

        done = await service.set_status(created.id, True)
        assert done.is_completed is True
        assert (await service.get_task(created.id)).is_completed is True

        pending = await service.set_status(created.id, False)
        assert pending.is_completed is False

    async def test_delete_task(self, service: TaskService) -> None:
        created = await service.create_task(title="t")

        await service.delete_task(created.id)

        with pytest.raises(TaskNotFoundError):
            await service.get_task(created.id)

    async def test_delete_missing(self, service: TaskService) -> None:
        with pytest.raises(TaskNotFoundError):
            await service.delete_task(MISSING_ID)
