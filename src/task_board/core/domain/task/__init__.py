from task_board.core.domain.task.task import TITLE_MAX_LENGTH, TITLE_MIN_LENGTH, Task
from task_board.core.domain.task.validation_result import ValidationResult

__all__ = [
    "TITLE_MAX_LENGTH",
    "TITLE_MIN_LENGTH",
    "Task",
    "ValidationResult",
]
