"""Request Schemas для Task Manager API.

Pydantic models для валидации входящих запросов.
Неизвестные поля (в том числе `_id` и `createdAt`) игнорируются.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, StringConstraints, field_validator

from task_api.core.enums import Priority

# Непустая строка после удаления пробелов по краям
TitleStr = Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)]


class TaskCreate(BaseModel):
    """Запрос на создание задачи.

    POST /api/tasks
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "examples": [
                {"title": "Купить молоко"},
                {
                    "title": "Подготовить отчёт",
                    "description": "Квартальный отчёт для отдела",
                    "priority": "high",
                    "isCompleted": False,
                },
            ]
        },
    )

    title: TitleStr = Field(..., description="Заголовок задачи")
    description: StrictStr | None = Field(default=None, description="Описание")
    priority: Priority = Field(default=Priority.MEDIUM, description="Приоритет")
    is_completed: StrictBool = Field(default=False, alias="isCompleted", description="Признак выполнения")


class TaskUpdate(BaseModel):
    """Запрос на частичное обновление задачи (merge-patch).

    PATCH /api/tasks/{task_id}

    Применяются только переданные поля. `null` допустим только для `description`.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
        json_schema_extra={"examples": [{"title": "Новый заголовок", "priority": "low"}]},
    )

    title: TitleStr | None = Field(default=None, description="Заголовок задачи")
    description: StrictStr | None = Field(default=None, description="Описание")
    priority: Priority | None = Field(default=None, description="Приоритет")
    is_completed: StrictBool | None = Field(default=None, alias="isCompleted", description="Признак выполнения")

    @field_validator("title", "priority", "is_completed", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        """Запретить явный `null` для обязательных полей задачи."""
        if value is None:
            msg = "must not be null"
            raise ValueError(msg)
        return value

    def changes(self) -> dict[str, Any]:
        """Переданные поля (по именам полей модели)."""
        return self.model_dump(exclude_unset=True)


class TaskStatusUpdate(BaseModel):
    """Запрос на смену статуса выполнения.

    PATCH /api/tasks/{task_id}/status
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        json_schema_extra={"examples": [{"isCompleted": True}]},
    )

    is_completed: StrictBool = Field(..., alias="isCompleted", description="Признак выполнения")
