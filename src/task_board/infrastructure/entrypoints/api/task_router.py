"""Task routes with htmx progressive enhancement.

Every route works as a plain HTML form flow (POST -> redirect -> GET).
When the request carries `HX-Request: true`, the same operation answers
with HTML fragments plus an out-of-band update of the #status region.
"""

from fastapi import APIRouter, Depends, Form, HTTPException, Query, status
from fastapi.responses import HTMLResponse, RedirectResponse

from task_board.core.application.ports.task_repository import TaskRepository
from task_board.core.domain.task.task import Task
from task_board.infrastructure.entrypoints.api.dependencies import (
    HTMX_ERROR_HEADERS,
    get_renderer,
    get_task_store,
    is_htmx_request,
)
from task_board.infrastructure.observability.logger_factory_service import get_logger
from task_board.infrastructure.presentation.task_view_renderer_service import (
    TaskViewRendererService,
)

logger = get_logger("task_router")
router = APIRouter()

TASKS_PATH = "/tasks"


@router.get("/", include_in_schema=False)
def root() -> RedirectResponse:
    return _redirect_to_tasks()


@router.get(TASKS_PATH, response_class=HTMLResponse)
def list_tasks(
    store: TaskRepository = Depends(get_task_store),
    renderer: TaskViewRendererService = Depends(get_renderer),
):
    # Always the full page, htmx or not
    return HTMLResponse(renderer.render_page(store.get_all()))


@router.post(TASKS_PATH, response_class=HTMLResponse)
def add_task(
    title: str = Form(""),
    htmx: bool = Depends(is_htmx_request),
    store: TaskRepository = Depends(get_task_store),
    renderer: TaskViewRendererService = Depends(get_renderer),
):
    title = title.strip()
    result = Task.validate(title)

    if not result.is_valid:
        logger.info("Task rejected", error_type="ValidationError", error_details=result.message)
        if htmx:
            return HTMLResponse(
                renderer.render_status(result.message, error=True),
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                headers=HTMX_ERROR_HEADERS,
            )
        # No-JS flow: the error detail is not carried across the redirect
        return _redirect_to_tasks()

    task = Task.create(title)
    store.add(task)
    logger.info("Task added", task_id=task.id)

    if htmx:
        return _fragments(
            renderer.render_item(task),
            renderer.render_summary(len(store.get_all())),
            renderer.render_status(f'Task "{task.title}" added successfully.'),
        )
    return _redirect_to_tasks()


@router.get(f"{TASKS_PATH}/search", response_class=HTMLResponse)
def search_tasks(
    q: str = Query(""),
    htmx: bool = Depends(is_htmx_request),
    store: TaskRepository = Depends(get_task_store),
    renderer: TaskViewRendererService = Depends(get_renderer),
):
    query = q.strip()
    tasks = store.search(query)

    if htmx:
        message = f'Found {len(tasks)} task(s) matching "{query}".' if query else ""
        return _fragments(renderer.render_list(tasks, query), renderer.render_status(message))
    return HTMLResponse(renderer.render_page(tasks, query))


@router.post(TASKS_PATH + "/{task_id}/toggle", response_class=HTMLResponse)
def toggle_task(
    task_id: str,
    htmx: bool = Depends(is_htmx_request),
    store: TaskRepository = Depends(get_task_store),
    renderer: TaskViewRendererService = Depends(get_renderer),
):
    task_id = _require_task_id(task_id)

    updated = store.toggle_complete(task_id)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

    logger.info("Task toggled", task_id=task_id, completed=updated.completed)

    if htmx:
        state = "marked complete" if updated.completed else "marked incomplete"
        return _fragments(
            renderer.render_item(updated),
            renderer.render_status(f'Task "{updated.title}" {state}.'),
        )
    return _redirect_to_tasks()


@router.post(TASKS_PATH + "/{task_id}/delete", response_class=HTMLResponse)
def delete_task(
    task_id: str,
    htmx: bool = Depends(is_htmx_request),
    store: TaskRepository = Depends(get_task_store),
    renderer: TaskViewRendererService = Depends(get_renderer),
):
    task_id = _require_task_id(task_id)

    task = store.get_by_id(task_id)
    if not store.delete(task_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

    logger.info("Task deleted", task_id=task_id)

    if htmx:
        # The item itself is removed by the client-side outerHTML swap
        title = task.title if task is not None else "Unknown"
        return _fragments(
            renderer.render_summary(len(store.get_all())),
            renderer.render_status(f'Task "{title}" deleted.'),
        )
    return _redirect_to_tasks()


def _require_task_id(task_id: str) -> str:
    task_id = task_id.strip()
    if not task_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing task ID")
    return task_id


def _redirect_to_tasks() -> RedirectResponse:
    return RedirectResponse(url=TASKS_PATH, status_code=status.HTTP_302_FOUND)


def _fragments(*parts: str) -> HTMLResponse:
    return HTMLResponse("\n".join(parts))
