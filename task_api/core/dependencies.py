"""Task Manager API - Dependencies.

Dependency Injection для FastAPI.
"""

import re
from typing import Annotated

from fastapi import Depends, Path, Request

from task_api.config import Settings, settings
from task_api.core.constants import TASK_ID_PATTERN
from task_api.services.task_service import TaskService
from task_api.services.task_store import TaskStore
from task_api.shared.errors import InvalidTaskIdError

_TASK_ID_RE = re.compile(TASK_ID_PATTERN)


# ==================== Settings ====================


def get_settings() -> Settings:
    """Предоставляет настройки приложения.

    Returns:
        Settings instance.

    """
    return settings


# ==================== Storage Dependencies ====================


def get_task_store(request: Request) -> TaskStore:
    """Предоставляет TaskStore, созданный в lifespan приложения.

    Args:
        request: HTTP запрос.

    Returns:
        TaskStore instance.

    """
    return request.app.state.task_store  # type: ignore[no-any-return]


def get_task_service(store: Annotated[TaskStore, Depends(get_task_store)]) -> TaskService:
    """Предоставляет TaskService поверх текущего хранилища.

    Args:
        store: Хранилище задач.

    Returns:
        TaskService instance.

    """
    return TaskService(store)


# ==================== Path Parameters ====================


def valid_task_id(task_id: Annotated[str, Path(description="Идентификатор задачи")]) -> str:
    """Проверить формат идентификатора задачи.

    Args:
        task_id: Идентификатор из пути.

    Returns:
        Тот же идентификатор.

    Raises:
        InvalidTaskIdError: Если формат идентификатора некорректен.

    """
    if not _TASK_ID_RE.fullmatch(task_id):
        raise InvalidTaskIdError(task_id)
    return task_id


# ==================== Type Aliases ====================

SettingsDep = Annotated[Settings, Depends(get_settings)]
TaskStoreDep = Annotated[TaskStore, Depends(get_task_store)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
TaskIdDep = Annotated[str, Depends(valid_task_id)]


async def existing_task_id(task_id: TaskIdDep, service: TaskServiceDep) -> str:
    """Проверить, что задача существует, до разбора тела запроса.

    Args:
        task_id: Проверенный по формату идентификатор.
        service: Сервис задач.

    Returns:
        Тот же идентификатор.

    Raises:
        TaskNotFoundError: Если задачи нет.

    """
    await service.get_task(task_id)
    return task_id


ExistingTaskIdDep = Annotated[str, Depends(existing_task_id)]
