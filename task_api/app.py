"""Task Manager API - FastAPI Application.

Главное приложение с инициализацией всех компонентов.
"""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from task_api.api.routes import health, tasks
from task_api.config import settings
from task_api.core.constants import API_PREFIX, API_VERSION
from task_api.services.task_store import create_task_store
from task_api.shared.errors import setup_exception_handlers
from task_api.shared.errors.context import get_trace_id, resolve_trace_id, set_trace_id
from task_api.utils.logging import get_logger, setup_logging

# Setup logging
setup_logging()
logger = get_logger()


class TraceContextMiddleware:
    """Middleware для установки trace_id в контекст запроса."""

    def __init__(self, app: Any) -> None:
        """Инициализация middleware.

        Args:
            app: ASGI приложение.

        """
        self.app = app

    async def __call__(self, scope: dict, receive: Any, send: Any) -> None:
        """Обработка запроса с установкой trace_id.

        Args:
            scope: ASGI scope.
            receive: ASGI receive callable.
            send: ASGI send callable.

        """
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # Генерируем или извлекаем trace_id
        headers = dict(scope.get("headers", []))
        trace_id = resolve_trace_id(headers.get(b"x-trace-id", b"").decode("latin-1"))

        set_trace_id(trace_id)
        scope.setdefault("state", {})["trace_id"] = trace_id

        await self.app(scope, receive, send)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager для startup/shutdown.

    Хранилище задач создаётся при старте и передаётся в обработчики
    через `app.state`. Если Redis недоступен, запуск прерывается.

    Args:
        app: FastAPI application

    Yields:
        None

    Raises:
        ConnectionError: Если не удалось подключиться к хранилищу.

    """
    # =================================================================
    # Startup
    # =================================================================
    logger.info(
        "Task Manager API запускается",
        env=settings.app_env,
        debug=settings.debug,
        log_level=settings.log_level,
    )

    try:
        task_store = await create_task_store()
    except ConnectionError as e:
        logger.error("Хранилище недоступно, запуск прерван", error=str(e))
        raise

    app.state.task_store = task_store
    logger.info(
        "Task Manager API готов",
        server_host=settings.server_host,
        server_port=settings.server_port,
    )

    yield

    # =================================================================
    # Shutdown
    # =================================================================
    logger.info("Task Manager API останавливается")

    await task_store.close()
    logger.info("Redis connection закрыт")


def create_app() -> FastAPI:
    """Создание и настройка FastAPI приложения.

    Создает экземпляр FastAPI с настроенными:
    - Middleware (CORS, timing, trace_id)
    - Exception handlers
    - API роутерами

    Returns:
        Настроенный экземпляр FastAPI приложения.

    """
    app = FastAPI(
        title=settings.app_name,
        description="REST API для управления задачами",
        version=API_VERSION,
        lifespan=lifespan,
        debug=settings.debug,
        docs_url="/docs" if settings.debug else None,  # Swagger UI только в debug
        redoc_url="/redoc" if settings.debug else None,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials="*" not in settings.cors_allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Timing middleware
    @app.middleware("http")
    async def timing_middleware(request: Request, call_next: Any) -> Any:
        """Middleware для измерения времени выполнения запросов.

        Args:
            request: Входящий HTTP запрос.
            call_next: Следующий обработчик в цепочке.

        Returns:
            HTTP ответ с добавленными заголовками.

        """
        start_time = time.perf_counter()
        trace_id = get_trace_id()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("Запрос завершился с ошибкой: {error}", error=str(e), path=request.url.path)
            raise

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)

        response.headers["X-Trace-ID"] = trace_id
        response.headers["X-Duration-Ms"] = str(duration_ms)

        logger.info(
            "{method} {path} - {status_code}",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        return response

    # trace_id (добавляется последним, чтобы быть внешним middleware)
    app.add_middleware(TraceContextMiddleware)

    # Prometheus metrics
    if settings.app_env != "development":
        Instrumentator().instrument(app).expose(app)
        logger.info("Prometheus metrics enabled на /metrics")

    # Обработчики исключений
    setup_exception_handlers(app)

    # Routes
    app.include_router(health.router)
    app.include_router(tasks.router)

    return app


app = create_app()
