"""Unit тесты для services/task_query.py."""

from datetime import datetime, timedelta, timezone

import pytest

from task_api.core.enums import Priority
from task_api.core.models import Task
from task_api.services.task_query import TaskQuery, build_list_query, matches_search
from task_api.shared.errors import BadRequestError

_BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_task(
    index: int,
    title: str = "task",
    description: str | None = None,
    priority: Priority = Priority.MEDIUM,
    is_completed: bool = False,
) -> Task:
    """Задача с временем создания, растущим вместе с index."""
    return Task(
        id=f"{index:032x}",
        title=title,
        description=description,
        priority=priority,
        is_completed=is_completed,
        created_at=_BASE_TIME + timedelta(minutes=index),
    )


class TestBuildListQuery:
    """Разбор параметров запроса."""

    def test_defaults(self) -> None:
        query = build_list_query()

        assert query == TaskQuery()
        assert query.sort_by == "createdAt"
        assert query.descending is False
        assert query.page == 1
        assert query.limit == 10

    @pytest.mark.parametrize(
        ("status", "expected"),
        [("completed", True), ("pending", False), ("done", None), (None, None)],
    )
    def test_status_filter(self, status: str | None, expected: bool | None) -> None:
        assert build_list_query(status=status).is_completed is expected

    @pytest.mark.parametrize(
        ("priority", "expected"),
        [("high", Priority.HIGH), ("low", Priority.LOW), ("urgent", None), ("", None)],
    )
    def test_priority_filter(self, priority: str, expected: Priority | None) -> None:
        assert build_list_query(priority=priority).priority is expected

    @pytest.mark.parametrize(("order", "descending"), [("desc", True), ("asc", False), ("DESC", False), (None, False)])
    def test_order(self, order: str | None, descending: bool) -> None:
        assert build_list_query(order=order).descending is descending

    @pytest.mark.parametrize(
        ("page", "limit", "expected_page", "expected_limit"),
        [
            ("2", "5", 2, 5),
            ("abc", "xyz", 1, 10),
            ("0", "-3", 1, 10),
            (" 3 ", None, 3, 10),
            ("1", "1000", 1, 100),
            ("2abc", "1.5", 2, 1),
            ("+4", "7items", 4, 7),
            ("-2x", "0.9", 1, 10),
        ],
    )
    def test_lenient_pagination(
        self,
        page: str | None,
        limit: str | None,
        expected_page: int,
        expected_limit: int,
    ) -> None:
        query = build_list_query(page=page, limit=limit)

        assert query.page == expected_page
        assert query.limit == expected_limit

    def test_custom_limits(self) -> None:
        query = build_list_query(limit="50", default_limit=20, max_limit=30)
        assert query.limit == 30
        assert build_list_query(default_limit=20).limit == 20

    def test_sort_field_allow_list(self) -> None:
        for field in ("createdAt", "title", "description", "priority", "isCompleted"):
            assert build_list_query(sort_by=field).sort_by == field

    def test_unknown_sort_field_rejected(self) -> None:
        with pytest.raises(BadRequestError) as exc_info:
            build_list_query(sort_by="__proto__")

        assert "sortBy" in exc_info.value.message


class TestTaskQueryApply:
    """Фильтрация, сортировка и пагинация."""

    def test_filters_and_total(self) -> None:
        tasks = [
            make_task(1, is_completed=True, priority=Priority.HIGH),
            make_task(2, is_completed=False, priority=Priority.HIGH),
            make_task(3, is_completed=True, priority=Priority.LOW),
        ]

        items, total = TaskQuery(is_completed=True).apply(tasks)
        assert [task.id for task in items] == [tasks[0].id, tasks[2].id]
        assert total == 2

        items, total = TaskQuery(is_completed=True, priority=Priority.HIGH).apply(tasks)
        assert items == [tasks[0]]
        assert total == 1

    def test_second_page(self) -> None:
        tasks = [make_task(i) for i in range(1, 4)]

        items, total = TaskQuery(page=2, limit=1).apply(tasks)

        assert items == [tasks[1]]
        assert total == 3

    def test_page_past_end_is_empty(self) -> None:
        tasks = [make_task(i) for i in range(1, 4)]

        items, total = TaskQuery(page=5, limit=2).apply(tasks)

        assert items == []
        assert total == 3

    def test_created_at_descending(self) -> None:
        tasks = [make_task(i) for i in range(1, 4)]

        items, _ = TaskQuery(descending=True).apply(tasks)

        assert items == tasks[::-1]

    def test_priority_sorts_by_rank(self) -> None:
        tasks = [
            make_task(1, priority=Priority.MEDIUM),
            make_task(2, priority=Priority.HIGH),
            make_task(3, priority=Priority.LOW),
        ]

        items, _ = TaskQuery(sort_by="priority").apply(tasks)
        assert [task.priority for task in items] == [Priority.LOW, Priority.MEDIUM, Priority.HIGH]

        items, _ = TaskQuery(sort_by="priority", descending=True).apply(tasks)
        assert [task.priority for task in items] == [Priority.HIGH, Priority.MEDIUM, Priority.LOW]

    def test_title_sort_is_case_insensitive_and_stable(self) -> None:
        tasks = [
            make_task(1, title="banana"),
            make_task(2, title="Apple"),
            make_task(3, title="apple"),
        ]

        items, _ = TaskQuery(sort_by="title").apply(tasks)

        assert [task.id for task in items] == [tasks[1].id, tasks[2].id, tasks[0].id]

    def test_description_sort_puts_missing_first(self) -> None:
        tasks = [make_task(1, description="b"), make_task(2), make_task(3, description="a")]

        items, _ = TaskQuery(sort_by="description").apply(tasks)

        assert [task.id for task in items] == [tasks[1].id, tasks[2].id, tasks[0].id]

    def test_is_completed_sort(self) -> None:
        tasks = [make_task(1, is_completed=True), make_task(2, is_completed=False)]

        items, _ = TaskQuery(sort_by="isCompleted").apply(tasks)

        assert [task.is_completed for task in items] == [False, True]


class TestMatchesSearch:
    """Поиск подстроки."""

    @pytest.mark.parametrize(
        ("title", "description", "expected"),
        [
            ("Foo Bar", None, True),
            ("barfoo", None, True),
            ("nothing", "contains FOO inside", True),
            ("nothing", "here", False),
            ("f.o", None, False),
        ],
    )
    def test_case_insensitive_substring(self, title: str, description: str | None, expected: bool) -> None:
        task = make_task(1, title=title, description=description)
        assert matches_search(task, "foo") is expected

    def test_special_characters_are_literal(self) -> None:
        task = make_task(1, title="price (USD)")

        assert matches_search(task, "(usd)") is True
        assert matches_search(task, ".*") is False
