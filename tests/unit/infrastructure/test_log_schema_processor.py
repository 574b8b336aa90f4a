from task_board.infrastructure.observability.logging.log_schema_processor import (
    build_log_schema_processor,
)


def test_flat_event_is_nested_into_schema():
    processor = build_log_schema_processor("task-board", "test")
    event_dict = {
        "event": "Request processed",
        "timestamp": "2024-01-01T00:00:00Z",
        "level": "info",
        "correlation_id": "abc-123",
        "processing_status": "SUCCESS",
        "processing_duration_ms": "12.5",
        "processing_http_status": 200,
        "context_component": "task_router",
        "context_endpoint": "/tasks",
        "context_method": "POST",
        "task_id": "t-1",
    }

    result = processor(None, "info", event_dict)

    assert result == {
        "timestamp": "2024-01-01T00:00:00Z",
        "level": "info",
        "service": "task-board",
        "environment": "test",
        "correlation_id": "abc-123",
        "message": "Request processed",
        "processing": {"status": "SUCCESS", "duration_ms": 12.5, "http_status": 200},
        "context": {"component": "task_router", "endpoint": "/tasks", "method": "POST"},
        "extra": {"task_id": "t-1"},
    }


def test_error_block_and_optional_sections():
    processor = build_log_schema_processor("task-board", "prod")

    result = processor(
        None,
        "error",
        {"event": "Failed", "error_type": "OSError", "error_details": "disk full"},
    )

    assert result["error"] == {"type": "OSError", "details": "disk full", "retryable": False}
    assert "processing" not in result
    assert "context" not in result
    assert "extra" not in result
