"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskDraft, Priority, TaskFilter, SortOption)
- task_store.py: SQLite-backed storage
- task_view.py: filter/sort/reorder computation for the visible list
- task_api.py: editor and commands (create/edit, toggle, delete, reorder commit)
- task_format.py: text rendering of rows, details and list chrome
"""
