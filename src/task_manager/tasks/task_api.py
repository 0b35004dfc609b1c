# src/task_manager/tasks/task_api.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

from ..core.errors import PersistenceError, ValidationError
from ..core.ports import TaskRepo
from .task_models import Priority, Task, TaskDraft
from .task_view import move_items

logger = logging.getLogger(__name__)


def validate_draft(draft: TaskDraft) -> None:
    """Raise ValidationError if the draft cannot be committed."""
    if not draft.title.strip():
        raise ValidationError("Title cannot be empty")
    if draft.description and not draft.description.strip():
        raise ValidationError("Description cannot contain only whitespace")


def submit_task_edit(repo: TaskRepo, draft: TaskDraft, existing: Task | None = None) -> Task:
    """
    Validate and commit a create (existing is None) or an edit.

    Edits keep id, display_order and completion state. New tasks go to the end
    of the manual order. On PersistenceError the draft is left as is so the
    caller can retry.
    """
    validate_draft(draft)

    title = draft.title.strip()
    description = draft.description.strip()
    priority = Priority.from_label(draft.priority)

    if existing is not None:
        task = replace(
            existing,
            title=title,
            description=description,
            priority=priority,
            due_date=draft.due_date,
        )
        try:
            repo.update(task)
        except PersistenceError as e:
            logger.warning("Task edit failed id=%s: %s", existing.id, e)
            raise
        logger.debug("Task edited id=%s", task.id)
        return task

    task = Task(
        id=None,
        title=title,
        description=description,
        priority=priority,
        due_date=draft.due_date,
        is_completed=False,
        display_order=repo.max_display_order() + 1,
    )
    try:
        created = repo.insert(task)
    except PersistenceError as e:
        logger.warning("Task create failed title=%r: %s", title, e)
        raise
    logger.debug("Task created id=%s order=%s", created.id, created.display_order)
    return created


def toggle_completion(repo: TaskRepo, task: Task) -> Task:
    """Flip is_completed and persist. Filter membership changes on the next recompute."""
    updated = replace(task, is_completed=not task.is_completed)
    repo.update(updated)
    logger.debug("Task id=%s completed=%s", task.id, updated.is_completed)
    return updated


def delete_task(repo: TaskRepo, task: Task) -> None:
    repo.delete(task)
    logger.debug("Task deleted id=%s", task.id)


def commit_reorder(
    repo: TaskRepo,
    displayed: Sequence[Task],
    source_indices: Iterable[int],
    destination: int,
) -> list[Task]:
    """
    Apply a drag-and-drop move to the displayed list and persist the new order.

    Only the displayed tasks are renumbered (0..N-1). Tasks hidden by the
    current filter keep their display_order, which may now overlap.
    """
    moved = move_items(displayed, source_indices, destination)
    reordered = [replace(t, display_order=i) for i, t in enumerate(moved)]
    try:
        repo.update_many(reordered)
    except PersistenceError as e:
        logger.warning("Reorder commit failed: %s", e)
        raise
    logger.debug("Reordered %d task(s)", len(reordered))
    return reordered
