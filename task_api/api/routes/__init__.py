"""API Routes для Task Manager API."""

from task_api.api.routes import health, tasks

__all__ = ["health", "tasks"]
