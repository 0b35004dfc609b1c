# src/task_manager/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..tasks.task_models import SortOption, Task, TaskFilter
from ..tasks.task_view import compute_visible_tasks
from .ports import TaskRepo


@dataclass(slots=True)
class ViewState:
    """Filter/sort selection of the task list screen."""

    task_filter: TaskFilter = TaskFilter.ALL
    sort: SortOption = SortOption.DUE_DATE
    ascending: bool = True
    reordering: bool = False


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object
    task_store: TaskRepo

    view: ViewState = field(default_factory=ViewState)

    # Last snapshot of the store and the rows shown from it.
    # Commands address tasks by 1-based position in `displayed`.
    tasks: list[Task] = field(default_factory=list)
    displayed: list[Task] = field(default_factory=list)

    def refresh(self) -> list[Task]:
        """Reload from the store and recompute the visible list for the current view."""
        self.tasks = self.task_store.fetch_all()
        self.displayed = compute_visible_tasks(
            self.tasks,
            self.view.task_filter,
            self.view.sort,
            self.view.ascending,
            self.view.reordering,
        )
        return self.displayed
