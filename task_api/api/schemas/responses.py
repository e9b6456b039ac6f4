"""Response Schemas для Task Manager API.

Pydantic models для API responses.
Все успешные ответы содержат `success: true`.
"""

from typing import Literal

from pydantic import BaseModel, Field

from task_api.core.enums import HealthStatus
from task_api.core.models import Task


class TaskListResponse(BaseModel):
    """Страница списка задач.

    GET /api/tasks
    """

    success: Literal[True] = True
    count: int = Field(description="Количество задач на странице")
    total: int = Field(description="Общее количество подходящих задач")
    page: int = Field(description="Номер страницы")
    limit: int = Field(description="Размер страницы")
    data: list[Task] = Field(description="Задачи текущей страницы")


class TaskSearchResponse(BaseModel):
    """Результат поиска.

    GET /api/tasks/search
    """

    success: Literal[True] = True
    count: int = Field(description="Количество найденных задач")
    data: list[Task] = Field(description="Найденные задачи (от новых к старым)")


class TaskResponse(BaseModel):
    """Одна задача.

    GET /api/tasks/{task_id}
    """

    success: Literal[True] = True
    data: Task


class TaskMessageResponse(BaseModel):
    """Задача с сообщением об операции.

    Используется в:
    - POST /api/tasks
    - PATCH /api/tasks/{task_id}
    - PATCH /api/tasks/{task_id}/status
    """

    success: Literal[True] = True
    message: str = Field(description="Сообщение об операции")
    data: Task


class MessageResponse(BaseModel):
    """Подтверждение операции без данных.

    DELETE /api/tasks/{task_id}
    """

    success: Literal[True] = True
    message: str = Field(description="Сообщение об операции")


class HealthResponse(BaseModel):
    """Ответ health check."""

    status: HealthStatus = Field(description="Статус сервиса")
    service: str = Field(description="Название сервиса")
    version: str = Field(description="Версия")
    storage: bool = Field(description="Доступность хранилища")
