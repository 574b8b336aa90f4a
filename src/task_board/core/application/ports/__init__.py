from task_board.core.application.ports.task_repository import TaskRepository

__all__ = ["TaskRepository"]
