"""Построение запросов к списку задач.

Фильтрация, сортировка, пагинация и текстовый поиск по задачам.
"""

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from task_api.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, DEFAULT_SORT_FIELD, MAX_PAGE_SIZE, SORTABLE_FIELDS
from task_api.core.enums import Priority, SortOrder, TaskStatusFilter
from task_api.core.models import Task
from task_api.shared.errors import BadRequestError


# Ведущее целое с необязательным знаком, как у parseInt
_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


def _text_key(value: str | None) -> str:
    return value.casefold() if value else ""


# Ключи сортировки по имени поля в API
_SORT_KEYS: dict[str, Callable[[Task], Any]] = {
    "createdAt": lambda task: task.created_at,
    "title": lambda task: _text_key(task.title),
    "description": lambda task: _text_key(task.description),
    "priority": lambda task: task.priority.rank,
    "isCompleted": lambda task: task.is_completed,
}


@dataclass(frozen=True)
class TaskQuery:
    """Спецификация выборки списка задач.

    Attributes:
        is_completed: Фильтр по признаку выполнения (None - без фильтра)
        priority: Фильтр по приоритету (None - без фильтра)
        sort_by: Поле сортировки (имя поля в API)
        descending: Сортировка по убыванию
        page: Номер страницы (с 1)
        limit: Размер страницы

    """

    is_completed: bool | None = None
    priority: Priority | None = None
    sort_by: str = DEFAULT_SORT_FIELD
    descending: bool = False
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        """Количество пропускаемых записей."""
        return (self.page - 1) * self.limit

    def matches(self, task: Task) -> bool:
        """Проверить, проходит ли задача фильтры."""
        if self.is_completed is not None and task.is_completed != self.is_completed:
            return False
        if self.priority is not None and task.priority != self.priority:
            return False
        return True

    def sort(self, tasks: Iterable[Task]) -> list[Task]:
        """Отсортировать задачи.

        Ожидает задачи в порядке создания: при равных ключах
        этот порядок сохраняется.
        """
        ordered = list(tasks)

        if self.sort_by == DEFAULT_SORT_FIELD:
            # Порядок создания уже совпадает с сортировкой по createdAt
            return ordered[::-1] if self.descending else ordered

        return sorted(ordered, key=_SORT_KEYS[self.sort_by], reverse=self.descending)

    def paginate(self, tasks: list[Task]) -> list[Task]:
        """Вырезать текущую страницу."""
        return tasks[self.offset : self.offset + self.limit]

    def apply(self, tasks: Iterable[Task]) -> tuple[list[Task], int]:
        """Применить фильтры, сортировку и пагинацию.

        Args:
            tasks: Все задачи в порядке создания

        Returns:
            Пара (задачи текущей страницы, общее количество подходящих задач)

        """
        matched = self.sort(task for task in tasks if self.matches(task))
        return self.paginate(matched), len(matched)


def _parse_positive_int(value: str | int | None, default: int) -> int:
    """Разобрать целое >= 1 по ведущим цифрам ("2abc" -> 2, "1.5" -> 1).

    Без ведущего целого или при значении < 1 возвращается default.
    """
    if value is None:
        return default
    match = _LEADING_INT_RE.match(str(value))
    if match is None:
        return default
    number = int(match.group(1))
    return number if number >= 1 else default


def build_list_query(
    status: str | None = None,
    priority: str | None = None,
    sort_by: str | None = None,
    order: str | None = None,
    page: str | int | None = None,
    limit: str | int | None = None,
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE,
) -> TaskQuery:
    """Построить спецификацию выборки из параметров запроса.

    Неизвестные значения `status` и `priority` не ограничивают выборку.
    Некорректные `page`/`limit` заменяются значениями по умолчанию,
    `limit` ограничен сверху `max_limit`.

    Args:
        status: `completed` или `pending`
        priority: `low`, `medium` или `high`
        sort_by: Поле сортировки из SORTABLE_FIELDS
        order: `asc` или `desc` (всё остальное - по возрастанию)
        page: Номер страницы
        limit: Размер страницы
        default_limit: Размер страницы по умолчанию
        max_limit: Максимальный размер страницы

    Returns:
        TaskQuery

    Raises:
        BadRequestError: Если поле сортировки не разрешено

    """
    is_completed: bool | None = None
    if status == TaskStatusFilter.COMPLETED.value:
        is_completed = True
    elif status == TaskStatusFilter.PENDING.value:
        is_completed = False

    priority_filter: Priority | None = None
    if priority in {item.value for item in Priority}:
        priority_filter = Priority(priority)

    sort_field = sort_by or DEFAULT_SORT_FIELD
    if sort_field not in SORTABLE_FIELDS:
        raise BadRequestError(
            f"Invalid sortBy field: {sort_field}. Allowed: {', '.join(SORTABLE_FIELDS)}",
            details={"sort_by": sort_field},
        )

    return TaskQuery(
        is_completed=is_completed,
        priority=priority_filter,
        sort_by=sort_field,
        descending=order == SortOrder.DESC.value,
        page=_parse_positive_int(page, DEFAULT_PAGE),
        limit=min(_parse_positive_int(limit, default_limit), max_limit),
    )


def matches_search(task: Task, needle: str) -> bool:
    """Проверить вхождение подстроки в заголовок или описание без учёта регистра.

    Args:
        task: Задача
        needle: Строка поиска

    Returns:
        True если подстрока найдена

    """
    folded = needle.casefold()
    return folded in task.title.casefold() or folded in _text_key(task.description)
