"""Shared errors module.

Система обработки ошибок приложения.
"""

from task_api.shared.errors.base import AppException
from task_api.shared.errors.context import (
    get_trace_id,
    new_trace_id,
    resolve_trace_id,
    set_trace_id,
    trace_id_var,
)
from task_api.shared.errors.decorators import safe_store
from task_api.shared.errors.domain_errors import (
    BadRequestError,
    InternalServerError,
    InvalidTaskIdError,
    NotFoundError,
    StorageError,
    TaskNotFoundError,
    ValidationError,
)
from task_api.shared.errors.handlers import setup_exception_handlers, validation_messages
from task_api.shared.errors.mapping import ExceptionMapper, exception_mapper, map_exception
from task_api.shared.errors.schemas import ErrorResponse

__all__ = [
    # Base
    "AppException",
    # Context
    "trace_id_var",
    "get_trace_id",
    "set_trace_id",
    "new_trace_id",
    "resolve_trace_id",
    # Domain errors
    "NotFoundError",
    "BadRequestError",
    "ValidationError",
    "InternalServerError",
    "StorageError",
    "TaskNotFoundError",
    "InvalidTaskIdError",
    # Mapping
    "ExceptionMapper",
    "exception_mapper",
    "map_exception",
    # Handlers
    "setup_exception_handlers",
    "validation_messages",
    # Schemas
    "ErrorResponse",
    # Decorators
    "safe_store",
]
