"""Task Manager API - Core module.

Ядро приложения: константы, enum'ы, зависимости.
"""

from task_api.core.constants import (
    API_PREFIX,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)

__all__ = [
    "API_PREFIX",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
]
