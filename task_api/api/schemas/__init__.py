"""API Schemas для Task Manager API."""

from task_api.api.schemas.requests import TaskCreate, TaskStatusUpdate, TaskUpdate
from task_api.api.schemas.responses import (
    HealthResponse,
    MessageResponse,
    TaskListResponse,
    TaskMessageResponse,
    TaskResponse,
    TaskSearchResponse,
)

__all__ = [
    # Requests
    "TaskCreate",
    "TaskUpdate",
    "TaskStatusUpdate",
    # Responses
    "TaskListResponse",
    "TaskSearchResponse",
    "TaskResponse",
    "TaskMessageResponse",
    "MessageResponse",
    "HealthResponse",
]
