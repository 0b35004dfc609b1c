# src/task_manager/tasks/task_format.py

from __future__ import annotations

"""Text rendering rules for task rows, details and list chrome."""

from datetime import date

from .task_models import SortOption, Task, TaskFilter

UNTITLED = "Untitled"
NO_DUE_DATE = "No Due Date"

EMPTY_STATE_MESSAGES: dict[TaskFilter, str] = {
    TaskFilter.ALL: "You haven't created any tasks yet. Use /add to get started!",
    TaskFilter.PENDING: "No pending tasks! You're all caught up.",
    TaskFilter.COMPLETED: "No completed tasks yet. Complete some tasks to see them here!",
}


def format_due_date(d: date | None) -> str:
    if d is None:
        return NO_DUE_DATE
    return f"{d:%b} {d.day}, {d.year}"


def is_overdue(task: Task, *, today: date | None = None) -> bool:
    if task.is_completed or task.due_date is None:
        return False
    return task.due_date < (today or date.today())


def status_label(task: Task) -> str:
    return "Completed" if task.is_completed else "In Progress"


def format_row(position: int, task: Task, *, today: date | None = None) -> str:
    check = "x" if task.is_completed else " "
    parts = [
        f"{position}. [{check}] {task.title or UNTITLED}",
        f"({task.priority.label})",
        f"Due {format_due_date(task.due_date)}" if task.due_date else NO_DUE_DATE,
    ]
    if is_overdue(task, today=today):
        parts.append("OVERDUE")
    if task.is_completed:
        parts.append("DONE!")
    return "  ".join(parts)


def format_detail(task: Task) -> str:
    lines = [
        f"{task.title or UNTITLED}  [{task.priority.label}]",
        f"Due {format_due_date(task.due_date)}",
    ]
    if task.description:
        lines += ["Description:", f"  {task.description}"]
    lines.append(f"Status: {status_label(task)}")
    return "\n".join(lines)


def empty_state_message(task_filter: TaskFilter) -> str:
    return EMPTY_STATE_MESSAGES[TaskFilter(task_filter)]


def sort_indicator(sort: SortOption, ascending: bool, *, reordering: bool = False) -> str:
    if reordering:
        return "Reordering: manual order"
    direction = "ascending" if ascending else "descending"
    return f"Sorted by: {SortOption(sort).label} ({direction})"


def format_progress(progress: float) -> str:
    return f"{int(progress * 100)}%"
