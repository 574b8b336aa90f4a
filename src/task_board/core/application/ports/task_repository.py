from abc import ABC, abstractmethod
from typing import Optional

from task_board.core.domain.task.task import Task


class TaskRepository(ABC):
    """Port for the authoritative task collection."""

    @abstractmethod
    def get_all(self) -> list[Task]:
        """Returns every task in insertion order."""
        pass

    @abstractmethod
    def get_by_id(self, task_id: str) -> Optional[Task]:
        """Finds a task by its ID. None means not found."""
        pass

    @abstractmethod
    def add(self, task: Task) -> None:
        """Stores an already validated task."""
        pass

    @abstractmethod
    def toggle_complete(self, task_id: str) -> Optional[Task]:
        """Flips the completed flag and returns the updated task."""
        pass

    @abstractmethod
    def delete(self, task_id: str) -> bool:
        """Removes a task. False when nothing was removed."""
        pass

    @abstractmethod
    def search(self, query: str) -> list[Task]:
        """Case-insensitive substring match on the title."""
        pass
