# src/task_manager/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import IntEnum, StrEnum


class Priority(IntEnum):
    """Task priority, stored as its ordinal (0/1/2)."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_db(cls, raw: int | None) -> Priority:
        if raw is None:
            return cls.LOW
        try:
            return cls(int(raw))
        except (TypeError, ValueError):
            return cls.LOW

    @classmethod
    def from_label(cls, label: str | Priority | None) -> Priority:
        """Lenient lookup used by the editor: unknown labels mean Low."""
        if isinstance(label, Priority):
            return label
        try:
            return cls.parse(label or "")
        except ValueError:
            return cls.LOW

    @classmethod
    def parse(cls, raw: str) -> Priority:
        """Strict lookup by label ("high") or ordinal ("2")."""
        key = raw.strip().lower()
        for p in cls:
            if key in (p.label.lower(), str(p.value)):
                return p
        raise ValueError(f"unknown priority: {raw!r}")


class TaskFilter(StrEnum):
    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class SortOption(StrEnum):
    DUE_DATE = "due_date"
    PRIORITY = "priority"
    ALPHABETICAL = "alphabetical"

    @property
    def label(self) -> str:
        return {
            SortOption.DUE_DATE: "Due Date",
            SortOption.PRIORITY: "Priority",
            SortOption.ALPHABETICAL: "Alphabetical",
        }[self]


@dataclass(slots=True)
class Task:
    id: int | None
    title: str
    description: str = ""
    priority: Priority = Priority.LOW
    due_date: date | None = None
    is_completed: bool = False
    display_order: int = 0

    created_at: float = 0.0
    updated_at: float = 0.0


@dataclass(slots=True, frozen=True)
class TaskDraft:
    """
    Candidate values from the add/edit form.

    Nothing here is validated yet; see task_api.submit_task_edit.
    """

    title: str
    description: str = ""
    priority: Priority | str = Priority.LOW
    due_date: date | None = None
