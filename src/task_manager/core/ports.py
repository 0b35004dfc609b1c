# src/task_manager/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage swappable and makes testing easier.
"""

from typing import TYPE_CHECKING, Iterable, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """
    Persistence gateway for tasks.

    Write methods raise PersistenceError when the store fails.
    """

    # Reads
    def fetch_all(self) -> list[Task]: ...
    def get_task(self, task_id: int) -> Task | None: ...
    def max_display_order(self) -> int: ...
    def count_tasks(self) -> int: ...

    # Writes
    def insert(self, task: Task) -> Task: ...
    def update(self, task: Task) -> None: ...
    def update_many(self, tasks: Iterable[Task]) -> None: ...
    def delete(self, task: Task) -> None: ...

    def close(self) -> None: ...
