# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from task_manager.config import Settings
from task_manager.tasks.task_models import SortOption, TaskFilter


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TASKMGR_APP_NAME",
        "TASKMGR_DATA_DIR",
        "TASKMGR_TASKS_DB_PATH",
        "TASKMGR_LOG_DIR",
        "TASKMGR_DEFAULT_FILTER",
        "TASKMGR_DEFAULT_SORT",
        "TASKMGR_SORT_ASCENDING",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.app_name == "Task Manager"
    assert s.tasks_db_path == Path(".local/task_manager") / "tasks.sqlite3"
    assert s.log_dir == s.data_dir
    assert s.default_filter is TaskFilter.ALL
    assert s.default_sort is SortOption.DUE_DATE
    assert s.sort_ascending is True


def test_env_overrides_and_bad_values(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKMGR_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("TASKMGR_TASKS_DB_PATH", raising=False)
    monkeypatch.setenv("TASKMGR_DEFAULT_FILTER", "Pending")
    monkeypatch.setenv("TASKMGR_DEFAULT_SORT", "by-mood")
    monkeypatch.setenv("TASKMGR_SORT_ASCENDING", "no")

    s = Settings.from_env()

    assert s.tasks_db_path == tmp_path / "tasks.sqlite3"
    assert s.default_filter is TaskFilter.PENDING
    assert s.default_sort is SortOption.DUE_DATE
    assert s.sort_ascending is False
