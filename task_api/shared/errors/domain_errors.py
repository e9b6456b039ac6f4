"""Domain errors.

Доменные исключения приложения.
"""

from task_api.shared.errors.base import AppException


class NotFoundError(AppException):
    """Ресурс не найден."""

    status_code = 404
    code = "NOT_FOUND"
    default_message = "Not Found"


class BadRequestError(AppException):
    """Некорректный запрос."""

    status_code = 400
    code = "BAD_REQUEST"
    default_message = "Bad Request"


class ValidationError(BadRequestError):
    """Ошибка валидации данных.

    Сообщение - список строк, по одной на каждое невалидное поле.
    """

    code = "VALIDATION_ERROR"
    default_message = "Validation failed"

    def __init__(self, messages: list[str]) -> None:
        """Инициализация исключения.

        Args:
            messages: Сообщения об ошибках (по одному на поле).

        """
        super().__init__(message=messages, details={"errors": messages})


class InternalServerError(AppException):
    """Внутренняя ошибка сервера."""

    status_code = 500
    code = "INTERNAL_SERVER_ERROR"
    default_message = "Server Error"


class StorageError(InternalServerError):
    """Ошибка хранилища задач."""

    code = "STORAGE_ERROR"
    default_message = "Server Error"


class TaskNotFoundError(NotFoundError):
    """Задача не найдена."""

    code = "TASK_NOT_FOUND"
    default_message = "Task not found"

    def __init__(self, task_id: str) -> None:
        """Инициализация исключения.

        Args:
            task_id: Идентификатор задачи.

        """
        super().__init__(details={"task_id": task_id})


class InvalidTaskIdError(BadRequestError):
    """Некорректный формат идентификатора задачи."""

    code = "INVALID_TASK_ID"
    default_message = "Invalid Task ID format"

    def __init__(self, task_id: str) -> None:
        """Инициализация исключения.

        Args:
            task_id: Полученный идентификатор.

        """
        super().__init__(details={"task_id": task_id})
