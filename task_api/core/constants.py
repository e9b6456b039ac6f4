"""Константы для Task Manager API.

Централизованное хранилище всех магических чисел и строк.
"""

# === HTTP и API ===
API_PREFIX = "/api/tasks"
API_VERSION = "1.0.0"

# === Server ===
DEFAULT_APP_NAME = "Task Manager API"
DEFAULT_SERVER_HOST = "0.0.0.0"
DEFAULT_SERVER_PORT = 5000

# === Redis ===
DEFAULT_REDIS_URL = "redis://localhost:6379/0"
DEFAULT_REDIS_KEY_PREFIX = "tasks"

# === Пагинация ===
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# === Сортировка ===
DEFAULT_SORT_FIELD = "createdAt"
SORTABLE_FIELDS = ("createdAt", "title", "description", "priority", "isCompleted")

# === Сообщения ответов ===
MSG_TASK_CREATED = "Task created successfully"
MSG_TASK_UPDATED = "Task updated successfully"
MSG_TASK_REMOVED = "Task removed successfully"
MSG_SERVER_ERROR = "Server Error"

# === Форматы ===
TASK_ID_PATTERN = r"^[0-9a-f]{32}$"
