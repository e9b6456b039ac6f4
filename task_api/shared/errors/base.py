"""Base exception class for application errors.

Базовая логика исключений с автогенерацией кодов и сообщений.
"""

import re
from typing import Any

from task_api.shared.errors.schemas import ErrorResponse


class AppException(Exception):
    """Базовый класс для всех бизнес-ошибок.

    Автоматика:
    - Генерация code из имени класса (TaskNotFoundError -> TASK_NOT_FOUND)
    - Генерация default_message из docstring
    - Генерация OpenAPI схем
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Server Error"

    def __init__(
        self,
        message: str | list[str] | None = None,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        code: str | None = None,
    ) -> None:
        """Инициализация исключения.

        Args:
            message: Сообщение об ошибке (или список сообщений).
            details: Дополнительные детали (только для логов, в ответ не попадают).
            status_code: HTTP статус код.
            code: Код ошибки.

        """
        self.message = message or self.default_message
        self.details = details or {}

        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code

        super().__init__(self.message)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Автоматическая генерация code и default_message.

        Args:
            **kwargs: Дополнительные аргументы.

        """
        super().__init_subclass__(**kwargs)

        # Генерация code из имени класса
        if "code" not in cls.__dict__:
            name = cls.__name__
            for suffix in ("Exception", "Error"):
                if name.endswith(suffix) and name != suffix:
                    name = name[: -len(suffix)]
                    break
            cls.code = re.sub(r"(?<!^)(?=[A-Z])", "_", name).upper()

        # Генерация default_message из docstring
        if "default_message" not in cls.__dict__ and cls.__doc__:
            cls.default_message = cls.__doc__.strip().split("\n")[0]

    def to_response(self) -> ErrorResponse:
        """Сериализация в Pydantic модель.

        Returns:
            ErrorResponse с данными ошибки.

        """
        return ErrorResponse(error=self.message)

    @classmethod
    def openapi_response(cls) -> dict[str, Any]:
        """Генерация OpenAPI схемы.

        Returns:
            Словарь с OpenAPI схемой ответа.

        """
        return {
            "model": ErrorResponse,
            "description": cls.default_message,
            "content": {
                "application/json": {
                    "example": {"success": False, "error": cls.default_message},
                }
            },
        }
