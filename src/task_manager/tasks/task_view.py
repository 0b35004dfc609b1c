# src/task_manager/tasks/task_view.py

from __future__ import annotations

"""
Visible-list computation.

Pure functions only: they take the full collection plus the view selection and
return a new list. Nothing here touches the store.
"""

from collections.abc import Callable, Iterable, Sequence
from datetime import date
from typing import Any, TypeVar

from .task_models import SortOption, Task, TaskFilter

T = TypeVar("T")

_FILTERS: dict[TaskFilter, Callable[[Task], bool]] = {
    TaskFilter.ALL: lambda t: True,
    TaskFilter.PENDING: lambda t: not t.is_completed,
    TaskFilter.COMPLETED: lambda t: t.is_completed,
}


def _due_date_key(task: Task) -> tuple[bool, date]:
    # Undated tasks first when ascending.
    return (task.due_date is not None, task.due_date or date.min)


_SORT_KEYS: dict[SortOption, Callable[[Task], Any]] = {
    SortOption.DUE_DATE: _due_date_key,
    SortOption.PRIORITY: lambda t: int(t.priority),
    SortOption.ALPHABETICAL: lambda t: t.title,
}


def filter_tasks(tasks: Iterable[Task], task_filter: TaskFilter) -> list[Task]:
    pred = _FILTERS[TaskFilter(task_filter)]
    return [t for t in tasks if pred(t)]


def sort_key(sort: SortOption) -> Callable[[Task], Any]:
    return _SORT_KEYS[SortOption(sort)]


def compute_visible_tasks(
    tasks: Iterable[Task],
    task_filter: TaskFilter = TaskFilter.ALL,
    sort: SortOption = SortOption.DUE_DATE,
    ascending: bool = True,
    reordering: bool = False,
) -> list[Task]:
    """
    Filter, then order the collection for display.

    While reordering, the order is display_order ascending and the sort
    selection is ignored. Sorting is stable, so ties keep their input order
    in both directions.
    """
    visible = filter_tasks(tasks, task_filter)
    if reordering:
        return sorted(visible, key=lambda t: t.display_order)
    return sorted(visible, key=sort_key(sort), reverse=not ascending)


def move_items(sequence: Sequence[T], source_indices: Iterable[int], destination: int) -> list[T]:
    """
    Drag-and-drop move.

    The items at source_indices are removed (keeping their relative order) and
    inserted before the element that sat at `destination` in the original
    sequence. destination == len(sequence) appends at the end.
    """
    n = len(sequence)
    sources = sorted(set(source_indices))
    if not sources:
        return list(sequence)
    if sources[0] < 0 or sources[-1] >= n:
        raise ValueError(f"source index out of range: {sources} (size {n})")
    if not 0 <= destination <= n:
        raise ValueError(f"destination out of range: {destination} (size {n})")

    moved = [sequence[i] for i in sources]
    src = set(sources)
    rest = [item for i, item in enumerate(sequence) if i not in src]
    insert_at = destination - sum(1 for i in sources if i < destination)
    return rest[:insert_at] + moved + rest[insert_at:]


def completion_progress(tasks: Iterable[Task]) -> float:
    """Share of completed tasks over the whole collection (0.0 when empty)."""
    items = list(tasks)
    if not items:
        return 0.0
    return sum(1 for t in items if t.is_completed) / len(items)
