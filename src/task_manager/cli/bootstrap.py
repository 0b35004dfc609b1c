# src/task_manager/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the concrete TaskStore and the initial view into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState, ViewState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    view = ViewState(
        task_filter=settings.default_filter,
        sort=settings.default_sort,
        ascending=settings.sort_ascending,
    )
    state = AppState(settings=settings, task_store=TaskStore(settings.tasks_db_path), view=view)
    logger.debug(
        "View: filter=%s sort=%s ascending=%s", view.task_filter, view.sort, view.ascending
    )
    return state
