from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_board.core.domain.exceptions.task_store_error import TaskStoreError
from task_board.infrastructure.config.app_settings import AppSettings
from task_board.infrastructure.entrypoints.api.dependencies import (
    HTMX_ERROR_HEADERS,
    is_htmx_request,
)
from task_board.infrastructure.entrypoints.api.health_router import router as health_router
from task_board.infrastructure.entrypoints.api.task_router import router as task_router
from task_board.infrastructure.observability.logger_factory_service import (
    configure_logging,
    get_logger,
)
from task_board.infrastructure.observability.logging.correlation_middleware import (
    CorrelationMiddleware,
)
from task_board.infrastructure.presentation.task_view_renderer_service import (
    TaskViewRendererService,
)
from task_board.infrastructure.repositories.task_store_csv_adapter import TaskStoreCsvAdapter

logger = get_logger("app_factory")


def create_app(settings: AppSettings) -> FastAPI:
    configure_logging(settings)
    logger.info(
        "Boot diagnostics",
        app_name=settings.app_name,
        env=settings.env,
        tasks_file=str(settings.tasks_file),
    )

    task_store = TaskStoreCsvAdapter(settings.tasks_file)
    renderer = TaskViewRendererService(settings.app_name)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        # Fail fast on a corrupt task file instead of on the first request
        task_store.load()
        yield

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.task_store = task_store
    app.state.renderer = renderer

    def error_response(
        request: Request, status_code: int, message: str, headers: Optional[dict] = None
    ) -> HTMLResponse:
        headers = dict(headers or {})
        if is_htmx_request(request):
            content = renderer.render_status(message, error=True)
            headers.update(HTMX_ERROR_HEADERS)
        else:
            content = renderer.render_error_page(status_code, message)
        return HTMLResponse(content, status_code=status_code, headers=headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(request, exc.status_code, str(exc.detail), exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.error(
            "Request validation failed",
            error_type="RequestValidationError",
            error_details=str(exc.errors()),
            url=str(request.url),
        )
        return error_response(
            request, status.HTTP_422_UNPROCESSABLE_ENTITY, "The request could not be processed."
        )

    @app.exception_handler(TaskStoreError)
    async def task_store_exception_handler(request: Request, exc: TaskStoreError):
        logger.error(
            "Task storage failure",
            processing_status="ERROR",
            error_type=type(exc).__name__,
            error_details=str(exc),
            error_retryable=False,
        )
        return error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "The task list could not be read or saved. Please try again later.",
        )

    app.add_middleware(CorrelationMiddleware)
    app.include_router(health_router)
    app.include_router(task_router)

    return app
