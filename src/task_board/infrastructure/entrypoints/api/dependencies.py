from fastapi import Request

from task_board.core.application.ports.task_repository import TaskRepository
from task_board.infrastructure.presentation.task_view_renderer_service import (
    TaskViewRendererService,
)

HTMX_REQUEST_HEADER = "HX-Request"


def get_task_store(request: Request) -> TaskRepository:
    return request.app.state.task_store


def get_renderer(request: Request) -> TaskViewRendererService:
    return request.app.state.renderer


def is_htmx_request(request: Request) -> bool:
    """True when the request comes from htmx and expects fragments."""
    return request.headers.get(HTMX_REQUEST_HEADER, "").strip().lower() == "true"

# Error bodies only carry the OOB #status alert; nothing goes into the request target
HTMX_ERROR_HEADERS = {"HX-Reswap": "none"}
