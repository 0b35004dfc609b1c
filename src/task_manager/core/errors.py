# src/task_manager/core/errors.py

from __future__ import annotations


class TaskManagerError(Exception):
    """Base class for errors reported to the user as a one-line notice."""


class ValidationError(TaskManagerError):
    """User input failed a precondition. Nothing was written."""


class PersistenceError(TaskManagerError):
    """
    The task store failed to read or write.

    The message carries the underlying store error; the caller keeps its
    candidate values and may retry.
    """
