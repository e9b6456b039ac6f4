"""Tasks API Routes для Task Manager API.

CRUD endpoints для задач, список с фильтрами и поиск.
"""

from typing import Annotated

from fastapi import APIRouter, Query, status

from task_api.api.schemas.requests import TaskCreate, TaskStatusUpdate, TaskUpdate
from task_api.api.schemas.responses import (
    MessageResponse,
    TaskListResponse,
    TaskMessageResponse,
    TaskResponse,
    TaskSearchResponse,
)
from task_api.core.constants import API_PREFIX, MSG_TASK_CREATED, MSG_TASK_REMOVED, MSG_TASK_UPDATED
from task_api.core.dependencies import ExistingTaskIdDep, SettingsDep, TaskIdDep, TaskServiceDep
from task_api.services.task_query import build_list_query
from task_api.shared.errors import (
    BadRequestError,
    ErrorResponse,
    InternalServerError,
    InvalidTaskIdError,
    TaskNotFoundError,
)

router = APIRouter(prefix=API_PREFIX, tags=["tasks"])

_VALIDATION_ERROR = {400: {"model": ErrorResponse, "description": "Невалидный запрос"}}
_SERVER_ERROR = {500: InternalServerError.openapi_response()}
_BY_ID_ERRORS = {
    400: InvalidTaskIdError.openapi_response(),
    404: TaskNotFoundError.openapi_response(),
    **_SERVER_ERROR,
}


@router.get(
    "",
    summary="Список задач",
    description="Фильтрация по status/priority, сортировка sortBy/order, пагинация page/limit",
    responses={400: BadRequestError.openapi_response(), **_SERVER_ERROR},
)
@router.get("/", include_in_schema=False)
async def list_tasks(
    service: TaskServiceDep,
    app_settings: SettingsDep,
    status_filter: Annotated[str | None, Query(alias="status", description="completed | pending")] = None,
    priority: Annotated[str | None, Query(description="low | medium | high")] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy", description="Поле сортировки")] = None,
    order: Annotated[str | None, Query(description="asc | desc")] = None,
    page: Annotated[str | None, Query(description="Номер страницы (с 1)")] = None,
    limit: Annotated[str | None, Query(description="Размер страницы")] = None,
) -> TaskListResponse:
    """Получить страницу задач.

    Returns:
        TaskListResponse с задачами страницы и общим количеством

    Raises:
        BadRequestError: Недопустимое поле сортировки

    """
    query = build_list_query(
        status=status_filter,
        priority=priority,
        sort_by=sort_by,
        order=order,
        page=page,
        limit=limit,
        default_limit=app_settings.default_page_size,
        max_limit=app_settings.max_page_size,
    )
    result = await service.list_tasks(query)

    return TaskListResponse(
        count=len(result.items),
        total=result.total,
        page=result.page,
        limit=result.limit,
        data=result.items,
    )


@router.get(
    "/search",
    summary="Поиск задач",
    description="Подстрока в заголовке или описании без учёта регистра, от новых к старым",
    responses={400: BadRequestError.openapi_response(), **_SERVER_ERROR},
)
async def search_tasks(
    service: TaskServiceDep,
    query: Annotated[str | None, Query(description="Строка поиска")] = None,
) -> TaskSearchResponse:
    """Найти задачи по тексту."""
    tasks = await service.search_tasks(query)
    return TaskSearchResponse(count=len(tasks), data=tasks)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Создать задачу",
    responses={**_VALIDATION_ERROR, **_SERVER_ERROR},
)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_task(request: TaskCreate, service: TaskServiceDep) -> TaskMessageResponse:
    """Создать задачу.

    Args:
        request: Поля новой задачи
        service: Сервис задач

    Returns:
        TaskMessageResponse с созданной задачей

    """
    task = await service.create_task(
        title=request.title,
        description=request.description,
        priority=request.priority,
        is_completed=request.is_completed,
    )
    return TaskMessageResponse(message=MSG_TASK_CREATED, data=task)


@router.get("/{task_id}", summary="Получить задачу", responses=_BY_ID_ERRORS)
async def get_task(task_id: TaskIdDep, service: TaskServiceDep) -> TaskResponse:
    """Получить задачу по ID."""
    task = await service.get_task(task_id)
    return TaskResponse(data=task)


@router.patch(
    "/{task_id}",
    summary="Обновить задачу",
    description="Частичное обновление: применяются только переданные поля",
    responses=_BY_ID_ERRORS,
)
async def update_task(
    task_id: ExistingTaskIdDep,
    service: TaskServiceDep,
    request: TaskUpdate | None = None,
) -> TaskMessageResponse:
    """Частично обновить задачу.

    Args:
        task_id: ID задачи
        request: Изменяемые поля
        service: Сервис задач

    Returns:
        TaskMessageResponse с обновлённой задачей

    """
    changes = request.changes() if request is not None else {}
    task = await service.update_task(task_id, changes)
    return TaskMessageResponse(message=MSG_TASK_UPDATED, data=task)


@router.patch("/{task_id}/status", summary="Сменить статус выполнения", responses=_BY_ID_ERRORS)
async def update_task_status(
    task_id: ExistingTaskIdDep,
    request: TaskStatusUpdate,
    service: TaskServiceDep,
) -> TaskMessageResponse:
    """Отметить задачу выполненной или невыполненной."""
    task = await service.set_status(task_id, request.is_completed)
    state = "completed" if task.is_completed else "pending"
    return TaskMessageResponse(message=f"Task marked as {state}", data=task)


@router.delete("/{task_id}", summary="Удалить задачу", responses=_BY_ID_ERRORS)
async def delete_task(task_id: TaskIdDep, service: TaskServiceDep) -> MessageResponse:
    """Удалить задачу."""
    await service.delete_task(task_id)
    return MessageResponse(message=MSG_TASK_REMOVED)
