"""Services для Task Manager API."""

from task_api.services.task_query import TaskQuery, build_list_query, matches_search
from task_api.services.task_service import TaskPage, TaskService
from task_api.services.task_store import TaskStore, create_task_store

__all__ = [
    "TaskQuery",
    "build_list_query",
    "matches_search",
    "TaskPage",
    "TaskService",
    "TaskStore",
    "create_task_store",
]
