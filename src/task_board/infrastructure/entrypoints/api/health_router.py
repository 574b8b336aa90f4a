from importlib.metadata import PackageNotFoundError, version

from fastapi import APIRouter, Depends

from task_board.core.application.ports.task_repository import TaskRepository
from task_board.infrastructure.entrypoints.api.dependencies import get_task_store

router = APIRouter()


@router.get("/health")
def health_check(store: TaskRepository = Depends(get_task_store)):
    try:
        app_version = version("task-board")
    except PackageNotFoundError:
        app_version = "0.0.0"

    return {
        "status": "ok",
        "service": "task-board",
        "version": app_version,
        "tasks": len(store.get_all()),
    }
