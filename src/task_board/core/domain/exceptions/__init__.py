from task_board.core.domain.exceptions.task_store_corrupt_error import TaskStoreCorruptError
from task_board.core.domain.exceptions.task_store_error import TaskStoreError

__all__ = [
    "TaskStoreCorruptError",
    "TaskStoreError",
]
