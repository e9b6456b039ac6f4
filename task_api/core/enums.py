"""Enums для Task Manager API.

Централизованное хранилище всех enum'ов проекта.
"""

from enum import Enum


class Priority(str, Enum):
    """Приоритет задачи."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Порядковый номер приоритета для сортировки (low < medium < high)."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.LOW: 0, Priority.MEDIUM: 1, Priority.HIGH: 2}


class TaskStatusFilter(str, Enum):
    """Значения фильтра `status` в списке задач."""

    COMPLETED = "completed"  # isCompleted = true
    PENDING = "pending"  # isCompleted = false


class SortOrder(str, Enum):
    """Направление сортировки."""

    ASC = "asc"
    DESC = "desc"


class HealthStatus(str, Enum):
    """Статус здоровья сервиса."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
