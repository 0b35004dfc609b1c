# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKMGR_APP_NAME": "App display name (default: Task Manager).",
    "TASKMGR_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TASKMGR_DATA_DIR": "Local data directory (default: .local/task_manager).",
    "TASKMGR_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
    "TASKMGR_LOG_DIR": "Directory for task_manager.log (default: <data_dir>).",
    # Initial view
    "TASKMGR_DEFAULT_FILTER": "all | pending | completed (default: all).",
    "TASKMGR_DEFAULT_SORT": "due_date | priority | alphabetical (default: due_date).",
    "TASKMGR_SORT_ASCENDING": "true/false (default: true).",
}
