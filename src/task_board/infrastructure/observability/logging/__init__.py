from task_board.infrastructure.observability.logging.correlation_middleware import (
    CorrelationMiddleware,
)
from task_board.infrastructure.observability.logging.log_schema_processor import (
    build_log_schema_processor,
)

__all__ = [
    "CorrelationMiddleware",
    "build_log_schema_processor",
]
