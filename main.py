"""Task Manager API - Entry Point.

Запускает FastAPI приложение через uvicorn.
"""

import uvicorn

from task_api.config import settings


def main() -> None:
    """Запустить Task Manager API."""
    uvicorn.run(
        "task_api.app:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug,  # Auto-reload только в debug
        log_level=settings.log_level.lower(),
        access_log=settings.debug,  # Access log только в debug
    )


if __name__ == "__main__":
    main()
