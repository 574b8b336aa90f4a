import uvicorn

from task_board.infrastructure.config.app_settings import AppSettings
from task_board.infrastructure.entrypoints.api.app_factory import create_app


def dev():
    """Run the development server."""
    settings = AppSettings()
    uvicorn.run(
        "task_board.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


# Instantiate global app for ASGI
settings = AppSettings()
app = create_app(settings)
