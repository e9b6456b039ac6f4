"""Error handling decorators.

Декораторы для обработки ошибок.
"""

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from loguru import logger

from task_api.shared.errors.base import AppException
from task_api.shared.errors.mapping import map_exception

T = TypeVar("T")


def safe_store(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Декоратор для безопасного выполнения операций хранилища.

    Перехватывает технические исключения (ошибки Redis и т.п.)
    и преобразует их в доменные через ExceptionMapper.

    Args:
        func: Асинхронная функция для декорирования.

    Returns:
        Обернутая функция.

    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)
        except AppException:
            # Пробрасываем доменные исключения как есть
            raise
        except Exception as e:
            logger.opt(exception=e).error(
                "Ошибка хранилища в {function}",
                function=func.__name__,
                exception_type=type(e).__name__,
            )
            raise map_exception(e) from e

    return wrapper
