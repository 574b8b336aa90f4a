"""Structured log schema processor for structlog.

Transforms the flat structlog event_dict into the nested JSON layout
shipped by the task board service.
All field extraction uses dict.pop(key, default) to avoid KeyError.
"""

from __future__ import annotations

from typing import Any, Callable

EventDict = dict[str, Any]


def _build_root_fields(event_dict: EventDict, service: str, environment: str) -> EventDict:
    """Extract root-level fields: timestamp, level, service, environment, IDs."""
    return {
        "timestamp": event_dict.pop("timestamp", None),
        "level": event_dict.pop("level", "info"),
        "service": service,
        "environment": environment,
        "correlation_id": event_dict.pop("correlation_id", None),
        "message": event_dict.pop("event", ""),
    }


def _safe_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _build_processing(event_dict: EventDict) -> EventDict | None:
    """Extract processing metrics block."""
    status = event_dict.pop("processing_status", None)
    if status is None:
        return None
    return {
        "status": status,
        "duration_ms": _safe_float(event_dict.pop("processing_duration_ms", None)),
        "http_status": event_dict.pop("processing_http_status", None),
    }


def _build_error(event_dict: EventDict) -> EventDict | None:
    """Extract error block. Returns None if no error_type present."""
    error_type = event_dict.pop("error_type", None)
    if error_type is None:
        return None
    return {
        "type": error_type,
        "details": event_dict.pop("error_details", None),
        "retryable": event_dict.pop("error_retryable", False),
    }


def _build_context(event_dict: EventDict) -> EventDict | None:
    """Extract request/execution context block."""
    component = event_dict.pop("context_component", None)
    endpoint = event_dict.pop("context_endpoint", None)
    method = event_dict.pop("context_method", None)
    if component is None and endpoint is None:
        return None
    return {
        "component": component,
        "endpoint": endpoint,
        "method": method,
    }


def build_log_schema_processor(
    service: str, environment: str
) -> Callable[[Any, str, EventDict], EventDict]:
    """Return a structlog processor bound to the given service identity."""

    def log_schema_processor(
        logger: Any,  # noqa: ARG001
        method_name: str,  # noqa: ARG001
        event_dict: EventDict,
    ) -> EventDict:
        result = _build_root_fields(event_dict, service, environment)

        processing = _build_processing(event_dict)
        if processing is not None:
            result["processing"] = processing

        error = _build_error(event_dict)
        if error is not None:
            result["error"] = error

        context = _build_context(event_dict)
        if context is not None:
            result["context"] = context

        if event_dict:
            result["extra"] = dict(event_dict)

        return result

    return log_schema_processor
