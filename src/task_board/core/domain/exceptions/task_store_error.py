from __future__ import annotations

from pathlib import Path


class TaskStoreError(Exception):
    """Raised when the task file cannot be read or written."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        location = f" ({self.path})" if self.path is not None else ""
        return f"{self.message}{location}"
