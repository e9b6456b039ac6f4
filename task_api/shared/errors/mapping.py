"""Маппинг инфраструктурных исключений на доменные.

Этот модуль содержит `ExceptionMapper` для преобразования исключений
инфраструктурного слоя (Redis) в доменные исключения.
"""

from typing import Type

import redis.exceptions

from task_api.shared.errors.base import AppException
from task_api.shared.errors.domain_errors import InternalServerError, StorageError


class ExceptionMapper:
    """Маппер для преобразования инфраструктурных исключений в доменные.

    Examples:
        >>> mapper = ExceptionMapper()
        >>> try:
        ...     # Операция с Redis
        ...     pass
        ... except Exception as e:
        ...     raise mapper.map(e)
    """

    # Маппинг Redis ошибок
    _REDIS_MAPPING: dict[Type[Exception], Type[AppException]] = {
        redis.exceptions.ConnectionError: StorageError,
        redis.exceptions.TimeoutError: StorageError,
        redis.exceptions.ResponseError: StorageError,
        redis.exceptions.RedisError: StorageError,
    }

    def __init__(self) -> None:
        """Инициализация маппера."""
        self._mapping: dict[Type[Exception], Type[AppException]] = {
            **self._REDIS_MAPPING,
        }

    def map(self, exception: Exception) -> AppException:
        """Преобразует исключение в доменное.

        Args:
            exception: Исходное исключение.

        Returns:
            AppException: Доменное исключение.

        Examples:
            >>> mapper = ExceptionMapper()
            >>> error = mapper.map(redis.exceptions.ConnectionError("refused"))
            >>> isinstance(error, StorageError)
            True
        """
        # Если уже доменное исключение, возвращаем как есть
        if isinstance(exception, AppException):
            return exception

        for exc_type, domain_exc_type in self._mapping.items():
            if isinstance(exception, exc_type):
                return domain_exc_type(details=self._details(exception))

        # Если маппинг не найден, оборачиваем в InternalServerError
        return InternalServerError(details=self._details(exception))

    @staticmethod
    def _details(exception: Exception) -> dict[str, str]:
        return {
            "original_exception": exception.__class__.__name__,
            "original_message": str(exception),
        }


# Глобальный экземпляр маппера
exception_mapper = ExceptionMapper()


def map_exception(exception: Exception) -> AppException:
    """Утилита для быстрого маппинга исключений.

    Args:
        exception: Исходное исключение.

    Returns:
        AppException: Доменное исключение.

    """
    return exception_mapper.map(exception)
