"""Task Manager API - Logging Configuration.

Настройка Loguru для структурированного логирования.

Этот модуль настраивает единый логгер для всего приложения:
- Loguru для собственных логов (цвета в development, JSON в production)
- trace_id запроса в каждой записи
- Перехват логов сторонних библиотек (uvicorn, fastapi, redis) и перенаправление в Loguru
"""

import json
import logging
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger

from task_api.config import settings
from task_api.shared.errors.context import trace_id_var

if TYPE_CHECKING:
    from loguru import Logger

# Поля extra, которые не должны попадать в логи
_REDACTED_KEYS = {"password", "token", "secret", "api_key", "access_token"}


class InterceptHandler(logging.Handler):
    """Handler для перехвата логов стандартного logging и перенаправления в Loguru.

    Многие библиотеки (uvicorn, fastapi, redis) используют стандартный модуль logging.
    Чтобы все логи были в едином формате Loguru, мы перехватываем их через этот handler.
    """

    def emit(self, record: logging.LogRecord) -> None:
        """Обработка одной записи лога из стандартного logging.

        Args:
            record: Запись лога из стандартного logging со всей информацией
        """
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame = logging.currentframe()
        depth = 2

        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def trace_id_patcher(record: dict[str, Any]) -> None:
    """Добавить trace_id текущего запроса в запись лога.

    Args:
        record: Запись лога Loguru.

    """
    record["extra"].setdefault("trace_id", trace_id_var.get() or "no-trace")


def serialize_record(record: dict[str, Any]) -> str:
    """Сериализовать запись Loguru в JSON строку.

    Args:
        record: Record от Loguru

    Returns:
        JSON строка
    """
    log_entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "module": record["name"],
        "function": record["function"],
        "line": record["line"],
    }

    for key, value in record["extra"].items():
        if key == "serialized":
            continue
        log_entry[key] = "***REDACTED***" if key in _REDACTED_KEYS else value

    if record["exception"] is not None:
        exc_type, exc_value, _ = record["exception"]
        log_entry["exception"] = {
            "type": exc_type.__name__ if exc_type else None,
            "value": str(exc_value) if exc_value else None,
        }

    return json.dumps(log_entry, ensure_ascii=False, default=str)


def json_formatter(record: dict[str, Any]) -> str:
    """JSON formatter для production логирования.

    Loguru трактует результат callable-форматтера как шаблон,
    поэтому готовый JSON кладётся в extra и подставляется оттуда.

    Args:
        record: Record от Loguru

    Returns:
        Шаблон строки для Loguru
    """
    record["extra"]["serialized"] = serialize_record(record)
    return "{extra[serialized]}\n"


def setup_logging() -> None:
    """Настроить Loguru для всего приложения.

    Конфигурация:
    - Development: human-readable в stdout с цветами
    - Production: JSON формат для structured logging
    - Debug: дополнительно JSON файл с ротацией
    - Перехват сторонних логгеров (uvicorn, fastapi, redis)
    """
    logger.remove()
    logger.configure(patcher=trace_id_patcher)  # type: ignore[arg-type]

    dev_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "trace_id=<yellow>{extra[trace_id]}</yellow> - "
        "<level>{message}</level>"
    )

    if settings.app_env == "development":
        logger.add(
            sys.stdout,
            format=dev_format,
            level=settings.log_level,
            colorize=True,
            backtrace=True,
            diagnose=settings.debug,
        )
    else:
        logger.add(
            sys.stdout,
            format=json_formatter,
            level=settings.log_level,
            backtrace=True,
            diagnose=False,
            enqueue=True,
        )

    if settings.debug:
        logger.add(
            "logs/task_api_{time:YYYY-MM-DD}.log",
            format=json_formatter,
            level="DEBUG",
            rotation="50 MB",
            retention="7 days",
            compression="zip",
            backtrace=True,
            diagnose=True,
        )

    configure_third_party_loggers()

    logger.info("Логгер настроен", level=settings.log_level, env=settings.app_env)


def configure_third_party_loggers() -> None:
    """Настройка логирования для сторонних библиотек.

    Перехватывает логи uvicorn, fastapi и redis, перенаправляет их в Loguru
    и задаёт уровни, чтобы не засорять вывод.
    """
    logging.root.handlers = []
    logging.root.setLevel(logging.INFO)

    loggers_to_configure = [
        "",
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "fastapi",
        "redis",
    ]

    for logger_name in loggers_to_configure:
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers.clear()
        logging_logger.addHandler(InterceptHandler())
        logging_logger.propagate = False

        if logger_name == "uvicorn.access":
            logging_logger.setLevel(logging.WARNING if settings.app_env == "production" else logging.INFO)
        else:
            logging_logger.setLevel(logging.INFO)

    logger.debug("Сторонние логгеры настроены")


def get_logger(name: str | None = None) -> "Logger":
    """Получить настроенный logger instance.

    Args:
        name: Имя логгера (обычно __name__ модуля)

    Returns:
        Настроенный Loguru logger
    """
    if name:
        return logger.bind(name=name)
    return logger
