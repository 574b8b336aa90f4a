from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, ClassVar
from uuid import uuid4

from task_board.core.domain.task.validation_result import ValidationResult

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}


@dataclass(frozen=True)
class Task:
    """
    A single to-do item.
    Immutable: toggling completion returns a new value so snapshots
    handed out by the store never change underneath a reader.
    """

    FIELDS: ClassVar[tuple[str, ...]] = ("id", "title", "completed", "created_at")
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("id", "title", "completed")

    id: str
    title: str
    completed: bool = False
    created_at: datetime | None = field(default=None)

    @classmethod
    def create(cls, title: str) -> Task:
        return cls(
            id=str(uuid4()),
            title=title.strip(),
            completed=False,
            created_at=datetime.now(timezone.utc),
        )

    @staticmethod
    def validate(title: str | None) -> ValidationResult:
        trimmed = (title or "").strip()
        if not trimmed:
            return ValidationResult.error("Title is required.")
        if len(trimmed) < TITLE_MIN_LENGTH:
            return ValidationResult.error(
                f"Title must be at least {TITLE_MIN_LENGTH} characters."
            )
        if len(trimmed) > TITLE_MAX_LENGTH:
            return ValidationResult.error(
                f"Title must be at most {TITLE_MAX_LENGTH} characters."
            )
        return ValidationResult.success()

    def toggled(self) -> Task:
        return replace(self, completed=not self.completed)

    def to_row(self) -> dict[str, str]:
        """Flat string view in FIELDS order, as written to the CSV file."""
        return {
            "id": self.id,
            "title": self.title,
            "completed": "true" if self.completed else "false",
            "created_at": self.created_at.isoformat() if self.created_at else "",
        }

    @classmethod
    def from_row(cls, row: dict[str, str | None]) -> Task:
        """Inverse of to_row. Raises ValueError on malformed values."""
        task_id = (row.get("id") or "").strip()
        if not task_id:
            raise ValueError("empty task id")

        title = row.get("title")
        if title is None:
            raise ValueError(f"missing title for task {task_id}")

        return cls(
            id=task_id,
            title=title,
            completed=_parse_bool(row.get("completed")),
            created_at=_parse_timestamp(row.get("created_at")),
        )

    def to_context(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "created_at": self.created_at.strftime("%Y-%m-%d %H:%M") if self.created_at else "",
        }


def _parse_bool(raw: str | None) -> bool:
    value = (raw or "").strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid completed flag: {raw!r}")


def _parse_timestamp(raw: str | None) -> datetime | None:
    value = (raw or "").strip()
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"invalid created_at timestamp: {raw!r}") from exc
