import csv
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

from task_board.core.application.ports.task_repository import TaskRepository
from task_board.core.domain.exceptions.task_store_corrupt_error import TaskStoreCorruptError
from task_board.core.domain.exceptions.task_store_error import TaskStoreError
from task_board.core.domain.task.task import Task
from task_board.infrastructure.observability.logger_factory_service import get_logger

logger = get_logger("task_store")


class TaskStoreCsvAdapter(TaskRepository):
    """
    Task collection backed by a single CSV file.

    The file is read lazily on first access and rewritten in full after
    every mutation. All state lives behind one re-entrant lock, so only one
    writer runs at a time and readers always get a consistent snapshot.
    """

    def __init__(self, file_path: Path):
        self.file_path = Path(file_path)
        self._lock = threading.RLock()
        self._tasks: Optional[list[Task]] = None

    def load(self) -> None:
        """Forces the lazy load so a corrupt file fails at startup."""
        with self._lock:
            self._ensure_loaded()

    def get_all(self) -> list[Task]:
        with self._lock:
            return list(self._ensure_loaded())

    def get_by_id(self, task_id: str) -> Optional[Task]:
        with self._lock:
            return next((task for task in self._ensure_loaded() if task.id == task_id), None)

    def add(self, task: Task) -> None:
        with self._lock:
            tasks = self._ensure_loaded()
            if any(existing.id == task.id for existing in tasks):
                raise ValueError(f"Task id {task.id} already exists")

            updated = [*tasks, task]
            self._write_csv(updated)
            self._tasks = updated

        logger.info("Task stored", task_id=task.id, task_count=len(updated))

    def toggle_complete(self, task_id: str) -> Optional[Task]:
        with self._lock:
            tasks = self._ensure_loaded()
            for index, task in enumerate(tasks):
                if task.id != task_id:
                    continue

                toggled = task.toggled()
                updated = list(tasks)
                updated[index] = toggled
                self._write_csv(updated)
                self._tasks = updated
                return toggled

        return None

    def delete(self, task_id: str) -> bool:
        with self._lock:
            tasks = self._ensure_loaded()
            updated = [task for task in tasks if task.id != task_id]
            if len(updated) == len(tasks):
                return False

            self._write_csv(updated)
            self._tasks = updated

        logger.info("Task removed", task_id=task_id, task_count=len(updated))
        return True

    def search(self, query: str) -> list[Task]:
        needle = (query or "").strip().casefold()
        tasks = self.get_all()
        if not needle:
            return tasks
        return [task for task in tasks if needle in task.title.casefold()]

    def _ensure_loaded(self) -> list[Task]:
        # Caller holds the lock. A failed read leaves the store unloaded.
        if self._tasks is None:
            self._tasks = self._read_csv()
            logger.info(
                "Task file loaded", path=str(self.file_path), task_count=len(self._tasks)
            )
        return self._tasks

    def _read_csv(self) -> list[Task]:
        if not self.file_path.exists():
            return []

        try:
            with open(self.file_path, encoding="utf-8", newline="") as f:
                return self._parse_rows(csv.DictReader(f))
        except TaskStoreCorruptError as e:
            logger.error(
                "Task file is corrupt",
                error_type=type(e).__name__,
                error_details=str(e),
            )
            raise
        except (csv.Error, UnicodeDecodeError) as e:
            logger.error("Task file is corrupt", error_type=type(e).__name__, error_details=str(e))
            raise TaskStoreCorruptError(f"Unreadable task file: {e}", self.file_path) from e
        except OSError as e:
            logger.error("Failed to read task file", error_type=type(e).__name__, error_details=str(e))
            raise TaskStoreError(f"Failed to read task file: {e}", self.file_path) from e

    def _parse_rows(self, reader: csv.DictReader) -> list[Task]:
        if reader.fieldnames is None:
            # Zero-byte file
            return []

        missing = [column for column in Task.REQUIRED_FIELDS if column not in reader.fieldnames]
        if missing:
            raise TaskStoreCorruptError(
                f"Task file header is missing columns {missing}", self.file_path
            )

        tasks: list[Task] = []
        seen: set[str] = set()
        for row in reader:
            line = reader.line_num
            if None in row or any(value is None for value in row.values()):
                raise TaskStoreCorruptError(
                    f"Wrong number of fields at line {line}", self.file_path
                )
            try:
                task = Task.from_row(row)
            except ValueError as e:
                raise TaskStoreCorruptError(
                    f"Malformed task at line {line}: {e}", self.file_path
                ) from e
            if task.id in seen:
                raise TaskStoreCorruptError(
                    f"Duplicate task id {task.id} at line {line}", self.file_path
                )
            seen.add(task.id)
            tasks.append(task)

        return tasks

    def _write_csv(self, tasks: list[Task]) -> None:
        """
        Atomic write: write to temp file then rename.
        """
        tmp_path: Optional[str] = None
        replaced = False
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            # Temp file in the same directory so os.replace stays on one filesystem
            with tempfile.NamedTemporaryFile(
                "w",
                dir=self.file_path.parent,
                prefix=f".{self.file_path.name}.",
                suffix=".tmp",
                delete=False,
                encoding="utf-8",
                newline="",
            ) as tmp:
                tmp_path = tmp.name
                writer = csv.DictWriter(tmp, fieldnames=Task.FIELDS)
                writer.writeheader()
                writer.writerows(task.to_row() for task in tasks)
                tmp.flush()
                os.fsync(tmp.fileno())

            os.replace(tmp_path, self.file_path)
            replaced = True

        except (OSError, csv.Error) as e:
            logger.error(
                "Failed to write task file",
                error_type=type(e).__name__,
                error_details=str(e),
                path=str(self.file_path),
            )
            raise TaskStoreError(f"Failed to write task file: {e}", self.file_path) from e
        finally:
            if not replaced and tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
