"""Task Manager API - Service Endpoints.

Корневой endpoint и проверка здоровья сервиса.
"""

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from loguru import logger

from task_api.api.schemas.responses import HealthResponse
from task_api.core.constants import API_PREFIX, API_VERSION
from task_api.core.dependencies import SettingsDep, TaskStoreDep
from task_api.core.enums import HealthStatus

router = APIRouter(tags=["Health"])


@router.get("/", summary="Информация о сервисе")
async def root(app_settings: SettingsDep) -> dict[str, Any]:
    """Корневой endpoint с информацией о сервисе.

    Returns:
        Словарь с информацией о сервисе и доступных endpoints.

    """
    return {
        "service": app_settings.app_name,
        "version": API_VERSION,
        "environment": app_settings.app_env,
        "status": "running",
        "endpoints": {
            "api": API_PREFIX,
            "health": "/health",
            "docs": "/docs" if app_settings.debug else "disabled",
        },
    }


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Проверяет доступность хранилища задач",
    responses={503: {"model": HealthResponse, "description": "Хранилище недоступно"}},
)
async def health_check(store: TaskStoreDep, app_settings: SettingsDep) -> JSONResponse:
    """Выполняет проверку здоровья сервиса.

    Returns:
        200 если хранилище доступно, иначе 503.

    """
    logger.debug("Health check requested")

    storage_ok = await store.health_check()
    health = HealthResponse(
        status=HealthStatus.HEALTHY if storage_ok else HealthStatus.UNHEALTHY,
        service=app_settings.app_name,
        version=API_VERSION,
        storage=storage_ok,
    )

    return JSONResponse(
        status_code=status.HTTP_200_OK if storage_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=health.model_dump(mode="json"),
    )
