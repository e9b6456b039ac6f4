"""Task Service для Task Manager API.

Бизнес-логика операций над задачами поверх TaskStore.
"""

from dataclasses import dataclass
from typing import Any

from task_api.core.enums import Priority
from task_api.core.models import Task
from task_api.services.task_query import TaskQuery, matches_search
from task_api.services.task_store import TaskStore
from task_api.shared.errors import BadRequestError, TaskNotFoundError
from task_api.utils.logging import get_logger

logger = get_logger()


@dataclass
class TaskPage:
    """Страница списка задач."""

    items: list[Task]
    total: int
    page: int
    limit: int


class TaskService:
    """Сервис управления задачами."""

    def __init__(self, store: TaskStore) -> None:
        """Инициализировать сервис.

        Args:
            store: Хранилище задач

        """
        self.store = store

    async def list_tasks(self, query: TaskQuery) -> TaskPage:
        """Получить страницу задач по спецификации выборки.

        Args:
            query: Фильтры, сортировка и пагинация

        Returns:
            TaskPage

        """
        items, total = query.apply(await self.store.list_all())

        logger.debug(
            "Список задач",
            total=total,
            page=query.page,
            limit=query.limit,
            sort_by=query.sort_by,
        )
        return TaskPage(items=items, total=total, page=query.page, limit=query.limit)

    async def search_tasks(self, text: str | None) -> list[Task]:
        """Найти задачи по подстроке в заголовке или описании.

        Результат отсортирован от новых к старым.

        Args:
            text: Строка поиска

        Returns:
            Найденные задачи

        Raises:
            BadRequestError: Если строка поиска не передана

        """
        if text is None or not text.strip():
            raise BadRequestError("Search query is required")

        tasks = await self.store.list_all()
        return [task for task in reversed(tasks) if matches_search(task, text)]

    async def get_task(self, task_id: str) -> Task:
        """Получить задачу.

        Raises:
            TaskNotFoundError: Если задача не найдена

        """
        task = await self.store.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def create_task(
        self,
        title: str,
        description: str | None = None,
        priority: Priority = Priority.MEDIUM,
        is_completed: bool = False,
    ) -> Task:
        """Создать задачу."""
        return await self.store.create(
            title=title,
            description=description,
            priority=priority,
            is_completed=is_completed,
        )

    async def update_task(self, task_id: str, changes: dict[str, Any]) -> Task:
        """Частично обновить задачу.

        Сначала проверяет существование задачи, затем применяет
        только переданные поля.

        Args:
            task_id: ID задачи
            changes: Новые значения полей

        Returns:
            Обновлённая задача

        Raises:
            TaskNotFoundError: Если задача не найдена

        """
        await self.get_task(task_id)

        task = await self.store.update(task_id, changes)
        if task is None:
            raise TaskNotFoundError(task_id)

        logger.info("Задача обновлена", task_id=task_id, fields=sorted(changes))
        return task

    async def set_status(self, task_id: str, is_completed: bool) -> Task:
        """Установить признак выполнения задачи."""
        return await self.update_task(task_id, {"is_completed": is_completed})

    async def delete_task(self, task_id: str) -> None:
        """Удалить задачу.

        Raises:
            TaskNotFoundError: Если задача не найдена

        """
        await self.get_task(task_id)

        if not await self.store.delete(task_id):
            raise TaskNotFoundError(task_id)

        logger.info("Задача удалена", task_id=task_id)
