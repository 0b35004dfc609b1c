# src/task_manager/cli/commands.py

from __future__ import annotations

import inspect
import logging
import shlex
from collections.abc import Callable
from datetime import date
from typing import cast

from ..core.errors import TaskManagerError, ValidationError
from ..core.state import AppState
from ..tasks.task_api import commit_reorder, delete_task, submit_task_edit, toggle_completion
from ..tasks.task_format import (
    empty_state_message,
    format_detail,
    format_progress,
    format_row,
    sort_indicator,
)
from ..tasks.task_models import Priority, SortOption, Task, TaskDraft, TaskFilter
from ..tasks.task_view import completion_progress

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

FIELD_KEYS = ("title", "desc", "priority", "due")

SORT_ALIASES: dict[str, SortOption] = {
    "due": SortOption.DUE_DATE,
    "date": SortOption.DUE_DATE,
    "due_date": SortOption.DUE_DATE,
    "priority": SortOption.PRIORITY,
    "prio": SortOption.PRIORITY,
    "alpha": SortOption.ALPHABETICAL,
    "alphabetical": SortOption.ALPHABETICAL,
    "title": SortOption.ALPHABETICAL,
}


class CommandRegistry:
    """Slash-command registry used by the console (/help, /add, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Validation and persistence errors become a one-line notice; the
        command is aborted.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Cannot parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except TaskManagerError as e:
            logger.info("/%s rejected: %s", name, e)
            return f"Error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def _split_fields(args: list[str]) -> tuple[list[str], dict[str, str]]:
    """Separate `key=value` fields from free words."""
    words: list[str] = []
    fields: dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if sep and key.lower() in FIELD_KEYS:
            fields[key.lower()] = value
        else:
            words.append(arg)
    return words, fields


def _parse_due(raw: str) -> date | None:
    if raw.strip().lower() in ("", "none", "-"):
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        raise ValidationError(f"Invalid due date {raw!r}: use YYYY-MM-DD or none") from None


def _parse_priority(raw: str) -> Priority:
    try:
        return Priority.parse(raw)
    except ValueError:
        raise ValidationError(f"Invalid priority {raw!r}: use low, medium or high") from None


def _row(state: AppState, raw: str) -> Task:
    if not state.displayed:
        state.refresh()
    try:
        pos = int(raw)
    except ValueError:
        raise ValidationError(f"Not a row number: {raw!r}") from None
    if not 1 <= pos <= len(state.displayed):
        raise ValidationError(f"No task at row {pos} (showing {len(state.displayed)})")
    return state.displayed[pos - 1]


def render_list(state: AppState) -> str:
    visible = state.refresh()
    view = state.view
    lines = [
        f"{getattr(state.settings, 'app_name', 'Task Manager')}"
        f" [{view.task_filter.label}] {format_progress(completion_progress(state.tasks))} done",
        sort_indicator(view.sort, view.ascending, reordering=view.reordering),
        "",
    ]
    if not visible:
        lines.append(empty_state_message(view.task_filter))
    else:
        today = date.today()
        lines.extend(format_row(i, t, today=today) for i, t in enumerate(visible, start=1))
    return "\n".join(lines)


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_list(state)


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add Buy milk priority=high due=2025-01-01 desc="2 litres"
    """
    words, fields = _split_fields(args)
    draft = TaskDraft(
        title=fields.get("title", " ".join(words)),
        description=fields.get("desc", ""),
        priority=_parse_priority(fields["priority"]) if "priority" in fields else Priority.LOW,
        due_date=_parse_due(fields.get("due", "")),
    )
    task = submit_task_edit(state.task_store, draft)
    return f"Added: {task.title}\n\n{render_list(state)}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit 2 title="New title" priority=low due=none
    """
    if not args:
        return "Usage: /edit <row> [title=..] [desc=..] [priority=..] [due=..]"
    task = _row(state, args[0])
    words, fields = _split_fields(args[1:])
    if words and "title" not in fields:
        fields["title"] = " ".join(words)
    draft = TaskDraft(
        title=fields.get("title", task.title),
        description=fields.get("desc", task.description),
        priority=_parse_priority(fields["priority"]) if "priority" in fields else task.priority,
        due_date=_parse_due(fields["due"]) if "due" in fields else task.due_date,
    )
    updated = submit_task_edit(state.task_store, draft, existing=task)
    return f"Updated: {updated.title}\n\n{render_list(state)}"


def cmd_show(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /show <row>"
    return format_detail(_row(state, args[0]))


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <row>"
    task = toggle_completion(state.task_store, _row(state, args[0]))
    verb = "Completed" if task.is_completed else "Reopened"
    return f"{verb}: {task.title}\n\n{render_list(state)}"


def cmd_rm(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /rm <row>"
    task = _row(state, args[0])
    delete_task(state.task_store, task)
    return f"Deleted: {task.title}\n\n{render_list(state)}"


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter                      -> show current filter
    /filter all|pending|completed
    """
    if not args:
        return f"Filter: {state.view.task_filter.label}. Use /filter all|pending|completed."
    try:
        state.view.task_filter = TaskFilter(args[0].lower())
    except ValueError:
        return "Usage: /filter all|pending|completed"
    return render_list(state)


def cmd_sort(state: AppState, args: list[str]) -> str:
    """
    /sort                   -> show current sort
    /sort due|priority|alpha [asc|desc]
    /sort asc|desc          -> flip direction only
    """
    view = state.view
    if not args:
        return sort_indicator(view.sort, view.ascending, reordering=view.reordering)

    for arg in (a.lower() for a in args):
        if arg in ("asc", "ascending"):
            view.ascending = True
        elif arg in ("desc", "descending"):
            view.ascending = False
        elif arg in SORT_ALIASES:
            view.sort = SORT_ALIASES[arg]
        else:
            return "Usage: /sort due|priority|alpha [asc|desc]"
    return render_list(state)


def cmd_reorder(state: AppState, args: list[str]) -> str:
    view = state.view
    if not args:
        view.reordering = not view.reordering
    elif args[0].lower() in ("on", "1", "true", "yes"):
        view.reordering = True
    elif args[0].lower() in ("off", "0", "false", "no"):
        view.reordering = False
    else:
        return "Usage: /reorder [on|off]"
    mode = "ON (use /move <from> <to>)" if view.reordering else "OFF"
    return f"Reordering {mode}.\n\n{render_list(state)}"


def cmd_move(state: AppState, args: list[str]) -> str:
    """
    /move 3 1 -> the task at row 3 becomes row 1.
    """
    if not state.view.reordering:
        return "Turn reordering on first: /reorder on"
    if len(args) != 2:
        return "Usage: /move <from> <to>"
    state.refresh()
    _row(state, args[0])
    _row(state, args[1])
    src = int(args[0]) - 1
    dst = int(args[1]) - 1
    # Drop-target index counts positions before the item is lifted out.
    destination = dst + 1 if dst > src else dst
    commit_reorder(state.task_store, state.displayed, [src], destination)
    return render_list(state)


def cmd_status(state: AppState, args: list[str]) -> str:
    view = state.view
    total = state.task_store.count_tasks()
    done = sum(1 for t in state.task_store.fetch_all() if t.is_completed)
    db = getattr(state.settings, "tasks_db_path", "?")
    return (
        "Status:\n"
        f"  Database: {db}\n"
        f"  Tasks: {total} ({done} completed, {total - done} pending)\n"
        f"  Filter: {view.task_filter.label}\n"
        f"  {sort_indicator(view.sort, view.ascending, reordering=view.reordering)}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks for the current filter and sort.", aliases=["ls"])
registry.register(
    "add",
    cmd_add,
    help_text="Add a task: /add <title> [desc=..] [priority=low|medium|high] [due=YYYY-MM-DD].",
)
registry.register(
    "edit",
    cmd_edit,
    help_text="Edit a task: /edit <row> [title=..] [desc=..] [priority=..] [due=..|none].",
)
registry.register("show", cmd_show, help_text="Show task details: /show <row>.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <row>.", aliases=["toggle"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <row>.", aliases=["delete", "del"])
registry.register("filter", cmd_filter, help_text="Filter: /filter all | pending | completed.")
registry.register("sort", cmd_sort, help_text="Sort: /sort due | priority | alpha [asc | desc].")
registry.register("reorder", cmd_reorder, help_text="Manual ordering mode: /reorder [on | off].")
registry.register("move", cmd_move, help_text="Move a row while reordering: /move <from> <to>.")
registry.register("status", cmd_status, help_text="Show database, counts and view settings.")
