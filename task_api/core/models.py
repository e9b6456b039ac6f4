"""Доменная модель задачи.

Task - единственная сущность приложения. Имена полей в JSON
совпадают с публичным API (`_id`, `isCompleted`, `createdAt`).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from task_api.core.enums import Priority


class Task(BaseModel):
    """Задача (to-do элемент)."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "_id": "3f2b9c1e8d7a4b6c9e0f1a2b3c4d5e6f",
                    "title": "Купить молоко",
                    "description": "2 литра",
                    "priority": "medium",
                    "isCompleted": False,
                    "createdAt": "2024-01-01T12:00:00Z",
                }
            ]
        },
    )

    id: str = Field(..., alias="_id", description="Идентификатор задачи (назначается хранилищем)")
    title: str = Field(..., min_length=1, description="Заголовок")
    description: str | None = Field(default=None, description="Описание")
    priority: Priority = Field(default=Priority.MEDIUM, description="Приоритет")
    is_completed: bool = Field(default=False, alias="isCompleted", description="Признак выполнения")
    created_at: datetime = Field(..., alias="createdAt", description="Время создания (UTC)")
