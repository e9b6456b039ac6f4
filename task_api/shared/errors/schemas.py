"""Error schemas.

Pydantic схемы для ошибок.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Стандартный ответ с ошибкой.

    `error` - одна строка, либо список сообщений (по одному на поле)
    для ошибок валидации.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"success": False, "error": "Task not found"},
                {"success": False, "error": ["`title` is required"]},
            ]
        }
    )

    success: Literal[False] = Field(default=False, description="Признак успешности")
    error: str | list[str] = Field(..., description="Сообщение (или сообщения) об ошибке")
