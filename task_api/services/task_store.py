"""Task Store для Task Manager API.

Redis wrapper - документное хранилище задач.

Redis Schema:
    {prefix}:task:{task_id}  -> Hash (поля задачи, значения в JSON)
    {prefix}:index           -> Sorted Set (task_id, score = порядковый номер создания)
    {prefix}:seq             -> String (счётчик порядковых номеров)
"""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import orjson
from redis.asyncio import Redis
from redis.exceptions import WatchError

from task_api.config import settings
from task_api.core.enums import Priority
from task_api.core.models import Task
from task_api.shared.errors import safe_store
from task_api.utils.logging import get_logger

logger = get_logger()

# Поля задачи, которые можно менять после создания
MUTABLE_FIELDS = frozenset({"title", "description", "priority", "is_completed"})


def _encode(document: dict[str, Any]) -> dict[str, bytes]:
    return {key: orjson.dumps(value) for key, value in document.items()}


def _decode(data: dict[bytes, bytes]) -> dict[str, Any]:
    return {key.decode("utf-8"): orjson.loads(value) for key, value in data.items()}


class TaskStore:
    """Redis-based хранилище задач.

    Обеспечивает:
    - Создание задачи с назначением id и времени создания
    - Чтение, частичное обновление и удаление по id
    - Выборку всех задач в порядке создания
    """

    def __init__(self, redis_client: Redis, key_prefix: str | None = None) -> None:
        """Инициализировать Task Store.

        Args:
            redis_client: Async Redis client
            key_prefix: Префикс ключей (по умолчанию из настроек)

        """
        self.redis = redis_client
        self.key_prefix = key_prefix or settings.redis_key_prefix

    def _task_key(self, task_id: str) -> str:
        return f"{self.key_prefix}:task:{task_id}"

    @property
    def _index_key(self) -> str:
        return f"{self.key_prefix}:index"

    @property
    def _seq_key(self) -> str:
        return f"{self.key_prefix}:seq"

    @safe_store
    async def create(
        self,
        title: str,
        description: str | None = None,
        priority: Priority = Priority.MEDIUM,
        is_completed: bool = False,
    ) -> Task:
        """Создать задачу.

        Args:
            title: Заголовок
            description: Описание
            priority: Приоритет
            is_completed: Признак выполнения

        Returns:
            Сохранённая задача

        """
        task = Task(
            id=uuid4().hex,
            title=title,
            description=description,
            priority=priority,
            is_completed=is_completed,
            created_at=datetime.now(timezone.utc),
        )

        # Пропуск номера при сбое дальше безопасен: важен только порядок
        seq = await self.redis.incr(self._seq_key)

        # Документ и запись в индексе появляются вместе (MULTI/EXEC)
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.hset(
                self._task_key(task.id),
                mapping=_encode(task.model_dump(mode="json")),  # type: ignore[arg-type]
            )
            pipe.zadd(self._index_key, {task.id: seq})
            await pipe.execute()

        logger.info("Задача создана", task_id=task.id, priority=task.priority.value)
        return task

    @safe_store
    async def get(self, task_id: str) -> Task | None:
        """Получить задачу.

        Args:
            task_id: ID задачи

        Returns:
            Задача или None если не найдена

        """
        data = await self.redis.hgetall(self._task_key(task_id))  # type: ignore[misc]

        if not data:
            return None

        return Task.model_validate(_decode(data))

    @safe_store
    async def update(self, task_id: str, changes: dict[str, Any]) -> Task | None:
        """Частично обновить задачу (merge-patch).

        Args:
            task_id: ID задачи
            changes: Новые значения полей (имена полей модели)

        Returns:
            Обновлённая задача или None если не найдена

        Raises:
            ValueError: Если передано неизменяемое или неизвестное поле

        """
        unknown = set(changes) - MUTABLE_FIELDS
        if unknown:
            msg = f"Поля нельзя изменить: {sorted(unknown)}"
            raise ValueError(msg)

        key = self._task_key(task_id)
        document = {
            name: value.value if isinstance(value, Priority) else value
            for name, value in changes.items()
        }

        # WATCH/MULTI: запись только если документ не удалён после проверки
        async with self.redis.pipeline(transaction=True) as pipe:
            while True:
                try:
                    await pipe.watch(key)
                    if not await pipe.exists(key):
                        return None
                    if not document:
                        break
                    pipe.multi()
                    pipe.hset(key, mapping=_encode(document))  # type: ignore[arg-type]
                    await pipe.execute()
                    break
                except WatchError:
                    logger.debug("Задача изменилась во время обновления, повтор", task_id=task_id)

        logger.debug("Задача обновлена", task_id=task_id, fields=sorted(changes))
        return await self.get(task_id)

    @safe_store
    async def delete(self, task_id: str) -> bool:
        """Удалить задачу.

        Args:
            task_id: ID задачи

        Returns:
            True если задача была удалена

        """
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.delete(self._task_key(task_id))
            pipe.zrem(self._index_key, task_id)
            deleted, _ = await pipe.execute()

        logger.debug("Задача удалена", task_id=task_id, deleted=bool(deleted))
        return bool(deleted)

    @safe_store
    async def list_all(self) -> list[Task]:
        """Получить все задачи в порядке создания (от старых к новым).

        Returns:
            Список задач

        """
        task_ids = await self.redis.zrange(self._index_key, 0, -1)

        tasks: list[Task] = []
        for raw_id in task_ids:
            task = await self.get(raw_id.decode("utf-8"))
            if task is not None:
                tasks.append(task)

        return tasks

    async def health_check(self) -> bool:
        """Проверить доступность Redis.

        Returns:
            True если Redis доступен

        """
        try:
            await self.redis.ping()  # type: ignore[misc]
            return True
        except Exception as e:
            logger.warning("Redis недоступен", error=str(e))
            return False

    async def close(self) -> None:
        """Закрыть соединение с Redis."""
        await self.redis.aclose()


async def create_task_store() -> TaskStore:
    """Создать TaskStore с подключением к Redis.

    Returns:
        Настроенный TaskStore instance

    Raises:
        ConnectionError: Если Redis недоступен

    """
    redis_client = Redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=False,  # Мы сами декодируем
    )

    store = TaskStore(redis_client)

    # Проверить подключение
    if not await store.health_check():
        await store.close()
        msg = f"Не удалось подключиться к Redis: {settings.redis_url}"
        raise ConnectionError(msg)

    logger.info("TaskStore создан", redis_url=settings.redis_url)
    return store
