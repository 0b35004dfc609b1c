# tests/test_task_format.py

from __future__ import annotations

from datetime import date

from task_manager.tasks.task_format import (
    format_due_date,
    format_progress,
    format_row,
    is_overdue,
    sort_indicator,
)
from task_manager.tasks.task_models import SortOption

from .fakes import make_task

TODAY = date(2025, 6, 15)


def test_missing_due_date_and_title_fallbacks() -> None:
    task = make_task(1, due_date=None)
    task.title = ""
    assert format_due_date(None) == "No Due Date"
    assert format_row(1, task, today=TODAY) == "1. [ ] Untitled  (Low)  No Due Date"


def test_overdue_only_for_open_tasks_due_before_today() -> None:
    assert is_overdue(make_task(1, due_date=date(2025, 6, 14)), today=TODAY)
    assert not is_overdue(make_task(2, due_date=TODAY), today=TODAY)
    assert not is_overdue(make_task(3, due_date=date(2025, 1, 1), is_completed=True), today=TODAY)
    assert not is_overdue(make_task(4, due_date=None), today=TODAY)


def test_completed_row_markers() -> None:
    row = format_row(2, make_task(1, "Ship it", is_completed=True, due_date=date(2025, 1, 1)), today=TODAY)
    assert row == "2. [x] Ship it  (Low)  Due Jan 1, 2025  DONE!"


def test_sort_indicator_and_progress() -> None:
    assert sort_indicator(SortOption.DUE_DATE, True) == "Sorted by: Due Date (ascending)"
    assert sort_indicator(SortOption.PRIORITY, False) == "Sorted by: Priority (descending)"
    assert sort_indicator(SortOption.PRIORITY, False, reordering=True) == "Reordering: manual order"
    assert format_progress(2 / 3) == "66%"
