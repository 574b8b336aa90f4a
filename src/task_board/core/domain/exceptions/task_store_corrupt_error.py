from __future__ import annotations

from task_board.core.domain.exceptions.task_store_error import TaskStoreError


class TaskStoreCorruptError(TaskStoreError):
    """Raised when the task file exists but its contents cannot be parsed."""
