from .task_view_renderer_service import TaskViewRendererService

__all__ = ["TaskViewRendererService"]
