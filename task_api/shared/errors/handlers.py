"""Exception handlers for FastAPI.

Обработчики исключений для FastAPI приложения.
Все ошибки отдаются в едином формате `{"success": false, "error": ...}`.
"""

from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_api.core.constants import MSG_SERVER_ERROR
from task_api.shared.errors.base import AppException
from task_api.shared.errors.context import get_trace_id
from task_api.shared.errors.domain_errors import ValidationError
from task_api.shared.errors.schemas import ErrorResponse

# Части loc, которые не являются именем поля
_LOC_SOURCES = {"body", "query", "path", "header", "cookie"}


def _field_name(loc: Sequence[Any]) -> str | None:
    """Извлечь имя поля из loc ошибки pydantic."""
    names = [str(part) for part in loc if isinstance(part, str) and part not in _LOC_SOURCES]
    return ".".join(names) if names else None


def _error_message(error: dict[str, Any]) -> tuple[str | None, str]:
    """Сформировать человекочитаемое сообщение для одной ошибки валидации.

    Args:
        error: Элемент списка `errors()` pydantic.

    Returns:
        Пара (имя поля или None, сообщение).

    """
    field = _field_name(error.get("loc", ()))
    error_type = error.get("type", "")
    ctx = error.get("ctx") or {}

    if field is None:
        if error_type == "json_invalid":
            return None, "Malformed JSON body"
        if error_type == "missing":
            return None, "Request body is required"
        return None, "Request body must be a JSON object"

    if error_type == "missing":
        return field, f"`{field}` is required"
    if error_type == "string_too_short":
        return field, f"`{field}` must not be empty"
    if error_type == "string_type":
        return field, f"`{field}` must be a string"
    if error_type == "bool_type":
        return field, f"`{field}` must be a boolean"
    if error_type == "enum":
        return field, f"`{field}` must be one of {ctx.get('expected', '')}"
    if error_type == "value_error" and "error" in ctx:
        return field, f"`{field}` {ctx['error']}"
    return field, f"`{field}`: {error.get('msg', 'invalid value')}"


def validation_messages(errors: Sequence[dict[str, Any]]) -> list[str]:
    """Преобразовать ошибки pydantic в список сообщений (по одному на поле).

    Args:
        errors: Результат `exc.errors()`.

    Returns:
        Список сообщений в порядке появления полей.

    """
    messages: list[str] = []
    seen: set[str | None] = set()

    for error in errors:
        field, message = _error_message(error)
        if field in seen:
            continue
        seen.add(field)
        messages.append(message)

    return messages


def _error_response(status_code: int, error: str | list[str], headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error).model_dump(),
        headers={"X-Trace-Id": get_trace_id(), **(headers or {})},
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Обработчик доменных исключений.

    Args:
        request: HTTP запрос.
        exc: Исключение AppException.

    Returns:
        JSON ответ с ошибкой.

    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Business error: {error_code}",
        error_code=exc.code,
        status_code=exc.status_code,
        path=request.url.path,
        details=exc.details,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
        headers={"X-Error-Code": exc.code, "X-Trace-Id": get_trace_id()},
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Обработчик ошибок валидации входных данных.

    Возвращает 400 и список сообщений, по одному на каждое невалидное поле.

    Args:
        request: HTTP запрос.
        exc: Исключение валидации.

    Returns:
        JSON ответ с ошибкой валидации.

    """
    error = ValidationError(validation_messages(exc.errors()))

    logger.warning(
        "Validation error",
        path=request.url.path,
        errors=error.message,
    )

    return JSONResponse(
        status_code=error.status_code,
        content=error.to_response().model_dump(),
        headers={"X-Error-Code": error.code, "X-Trace-Id": get_trace_id()},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Обработчик HTTP ошибок Starlette (несуществующие маршруты, 405 и т.д.).

    Args:
        request: HTTP запрос.
        exc: HTTP исключение.

    Returns:
        JSON ответ с ошибкой.

    """
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"
        error = f"Not Found - {url}"
    else:
        error = str(exc.detail)

    logger.info("HTTP error {status_code}", status_code=exc.status_code, path=request.url.path)

    return _error_response(exc.status_code, error, getattr(exc, "headers", None))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Последний обработчик для непредвиденных ошибок.

    Отдаёт заявленный исключением статус (атрибут `status_code`) или 500.

    Args:
        request: HTTP запрос.
        exc: Любое исключение.

    Returns:
        JSON ответ с общей ошибкой.

    """
    logger.opt(exception=exc).error(
        "Unhandled exception",
        exception_type=type(exc).__name__,
        path=request.url.path,
    )

    status_code = getattr(exc, "status_code", None)
    if not isinstance(status_code, int):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return _error_response(status_code, str(exc) or MSG_SERVER_ERROR)


def setup_exception_handlers(app: FastAPI) -> None:
    """Зарегистрировать обработчики исключений в FastAPI.

    Args:
        app: Экземпляр FastAPI приложения.

    """
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)

    logger.debug("Exception handlers registered")
