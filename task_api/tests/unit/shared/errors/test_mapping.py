"""Тесты маппинга инфраструктурных исключений и декоратора safe_store."""

import pytest
import redis.exceptions

from task_api.shared.errors import (
    InternalServerError,
    StorageError,
    TaskNotFoundError,
    map_exception,
    safe_store,
)


class TestExceptionMapper:
    """Тесты для ExceptionMapper."""

    @pytest.mark.parametrize(
        "exception",
        [
            redis.exceptions.ConnectionError("refused"),
            redis.exceptions.TimeoutError("timeout"),
            redis.exceptions.ResponseError("WRONGTYPE"),
            redis.exceptions.RedisError("boom"),
        ],
    )
    def test_redis_errors_map_to_storage_error(self, exception: Exception) -> None:
        """Ошибки Redis становятся StorageError с сообщением Server Error."""
        error = map_exception(exception)

        assert isinstance(error, StorageError)
        assert error.status_code == 500
        assert error.message == "Server Error"
        assert error.details["original_exception"] == type(exception).__name__

    def test_unknown_error_maps_to_internal(self) -> None:
        """Неизвестное исключение оборачивается в InternalServerError."""
        error = map_exception(KeyError("x"))

        assert type(error) is InternalServerError
        assert error.status_code == 500

    def test_domain_error_passes_through(self) -> None:
        """Доменное исключение возвращается как есть."""
        original = TaskNotFoundError("abc")
        assert map_exception(original) is original


class TestSafeStore:
    """Тесты для декоратора safe_store."""

    async def test_returns_result(self) -> None:
        @safe_store
        async def operation() -> int:
            return 42

        assert await operation() == 42

    async def test_converts_redis_error(self) -> None:
        @safe_store
        async def operation() -> None:
            raise redis.exceptions.ConnectionError("refused")

        with pytest.raises(StorageError) as exc_info:
            await operation()

        assert isinstance(exc_info.value.__cause__, redis.exceptions.ConnectionError)

    async def test_reraises_domain_error(self) -> None:
        @safe_store
        async def operation() -> None:
            raise TaskNotFoundError("abc")

        with pytest.raises(TaskNotFoundError):
            await operation()

    def test_preserves_name(self) -> None:
        @safe_store
        async def some_operation() -> None:
            """Документация."""

        assert some_operation.__name__ == "some_operation"
        assert some_operation.__doc__ == "Документация."
