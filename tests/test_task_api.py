# tests/test_task_api.py

from __future__ import annotations

from datetime import date

import pytest

from task_manager.core.errors import PersistenceError, ValidationError
from task_manager.tasks.task_api import (
    commit_reorder,
    delete_task,
    submit_task_edit,
    toggle_completion,
)
from task_manager.tasks.task_models import Priority, TaskDraft, TaskFilter
from task_manager.tasks.task_view import compute_visible_tasks

from .fakes import FakeTaskRepo, make_task


def test_whitespace_title_is_rejected_without_write(repo: FakeTaskRepo) -> None:
    with pytest.raises(ValidationError, match="Title cannot be empty"):
        submit_task_edit(repo, TaskDraft(title="   "))
    assert repo.calls == []


def test_whitespace_description_is_rejected(repo: FakeTaskRepo) -> None:
    with pytest.raises(ValidationError, match="Description cannot contain only whitespace"):
        submit_task_edit(repo, TaskDraft(title="Buy milk", description=" \n\t"))
    assert repo.calls == []


def test_create_appends_after_current_max_order() -> None:
    repo = FakeTaskRepo.with_tasks([make_task(1, display_order=4), make_task(2, display_order=7)])
    previous_max = repo.max_display_order()

    task = submit_task_edit(
        repo,
        TaskDraft(title="Buy milk", description="", priority="High", due_date=date(2025, 1, 1)),
    )

    assert task.id is not None
    assert task.title == "Buy milk"
    assert task.priority is Priority.HIGH
    assert task.due_date == date(2025, 1, 1)
    assert task.is_completed is False
    assert task.display_order == previous_max + 1
    assert repo.writes() == ["insert"]


def test_first_task_in_empty_store_gets_order_zero(repo: FakeTaskRepo) -> None:
    task = submit_task_edit(repo, TaskDraft(title="First"))
    assert task.display_order == 0


def test_create_trims_title_and_description(repo: FakeTaskRepo) -> None:
    task = submit_task_edit(repo, TaskDraft(title="  Call mom \n", description="  weekly  "))
    assert task.title == "Call mom"
    assert task.description == "weekly"


def test_unknown_priority_label_falls_back_to_low(repo: FakeTaskRepo) -> None:
    task = submit_task_edit(repo, TaskDraft(title="x", priority="Urgent"))
    assert task.priority is Priority.LOW


def test_edit_preserves_identity_order_and_completion() -> None:
    existing = make_task(5, "Old", display_order=9, is_completed=True, priority=Priority.LOW)
    repo = FakeTaskRepo.with_tasks([existing])

    updated = submit_task_edit(
        repo,
        TaskDraft(title="New", description="details", priority=Priority.MEDIUM, due_date=None),
        existing=existing,
    )

    assert updated.id == 5
    assert updated.display_order == 9
    assert updated.is_completed is True
    assert updated.title == "New"
    assert updated.priority is Priority.MEDIUM
    assert repo.writes() == ["update"]
    assert repo.get_task(5) == updated
    assert existing.title == "Old"


def test_persistence_failure_is_surfaced_and_draft_kept(repo: FakeTaskRepo) -> None:
    repo.fail_writes = True
    draft = TaskDraft(title="Retry me", description="soon")

    with pytest.raises(PersistenceError, match="disk I/O error"):
        submit_task_edit(repo, draft)
    assert draft.title == "Retry me"
    assert repo.count_tasks() == 0

    repo.fail_writes = False
    task = submit_task_edit(repo, draft)
    assert task.title == "Retry me"


def test_reorder_moves_last_to_first() -> None:
    a, b, c = make_task(1, "A", display_order=0), make_task(2, "B", display_order=1), make_task(3, "C", display_order=2)
    repo = FakeTaskRepo.with_tasks([a, b, c])

    reordered = commit_reorder(repo, [a, b, c], [2], 0)

    assert [t.title for t in reordered] == ["C", "A", "B"]
    persisted = {t.title: t.display_order for t in repo.fetch_all()}
    assert persisted == {"C": 0, "A": 1, "B": 2}


def test_reorder_renumbers_only_displayed_subset() -> None:
    hidden = make_task(1, "hidden", display_order=0, is_completed=True)
    x = make_task(2, "X", display_order=5)
    y = make_task(3, "Y", display_order=8)
    repo = FakeTaskRepo.with_tasks([hidden, x, y])

    displayed = compute_visible_tasks(repo.fetch_all(), TaskFilter.PENDING, reordering=True)
    commit_reorder(repo, displayed, [1], 0)

    assert repo.get_task(3).display_order == 0
    assert repo.get_task(2).display_order == 1
    # Hidden task keeps its stale value, now colliding with Y.
    assert repo.get_task(1).display_order == 0


def test_reorder_failure_raises_persistence_error() -> None:
    a, b = make_task(1, "A"), make_task(2, "B")
    repo = FakeTaskRepo.with_tasks([a, b])
    repo.fail_writes = True

    with pytest.raises(PersistenceError):
        commit_reorder(repo, [a, b], [1], 0)


def test_toggle_completion_drops_task_from_pending_view() -> None:
    task = make_task(1, "Pay rent")
    repo = FakeTaskRepo.with_tasks([task, make_task(2, "Other")])
    shown = compute_visible_tasks(repo.fetch_all(), TaskFilter.PENDING)
    assert task in shown

    updated = toggle_completion(repo, shown[0])

    assert updated.is_completed is True
    assert updated.display_order == task.display_order
    pending = compute_visible_tasks(repo.fetch_all(), TaskFilter.PENDING)
    assert [t.id for t in pending] == [2]


def test_toggle_twice_restores_pending() -> None:
    repo = FakeTaskRepo.with_tasks([make_task(1)])
    once = toggle_completion(repo, repo.get_task(1))
    twice = toggle_completion(repo, once)
    assert twice.is_completed is False


def test_delete_removes_task() -> None:
    task = make_task(1)
    repo = FakeTaskRepo.with_tasks([task])

    delete_task(repo, task)

    assert repo.fetch_all() == []
    with pytest.raises(PersistenceError):
        delete_task(repo, task)
