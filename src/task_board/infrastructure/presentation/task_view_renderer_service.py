from pathlib import Path
from typing import Any, Dict, Iterable

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from task_board.core.domain.task.task import TITLE_MAX_LENGTH, TITLE_MIN_LENGTH, Task

TEMPLATE_DIR = Path(__file__).parent / "templates"


class TaskViewRendererService:
    """
    Renders full pages and htmx fragments for the task views.
    Every fragment is a plain string; choosing between them is up to the caller.
    """

    def __init__(self, app_name: str, template_dir: Path = TEMPLATE_DIR):
        self.app_name = app_name
        # StrictUndefined raises on missing variables; autoescape covers user titles
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_page(self, tasks: Iterable[Task], query: str = "") -> str:
        """Full document: add form, search form and task list."""
        return self._render("tasks/index.html", self._list_context(tasks, query))

    def render_list(self, tasks: Iterable[Task], query: str = "") -> str:
        return self._render("tasks/_list.html", self._list_context(tasks, query))

    def render_item(self, task: Task) -> str:
        return self._render("tasks/_item.html", {"task": task.to_context()})

    def render_summary(self, task_count: int, query: str = "") -> str:
        """Out-of-band refresh of the task count and empty-list placeholder."""
        return self._render(
            "tasks/_summary.html", {"task_count": task_count, "query": query, "oob": True}
        )

    def render_status(self, message: str, error: bool = False) -> str:
        """Out-of-band fragment targeting the #status live region."""
        return self._render("tasks/_status.html", {"message": message, "error": error})

    def render_error_page(self, status_code: int, message: str) -> str:
        return self._render("error.html", {"status_code": status_code, "message": message})

    def _list_context(self, tasks: Iterable[Task], query: str) -> Dict[str, Any]:
        contexts = [task.to_context() for task in tasks]
        return {
            "tasks": contexts,
            "task_count": len(contexts),
            "query": query,
            "title_min": TITLE_MIN_LENGTH,
            "title_max": TITLE_MAX_LENGTH,
        }

    def _render(self, template_name: str, context: Dict[str, Any]) -> str:
        try:
            template = self.jinja_env.get_template(template_name)
            return template.render(app_name=self.app_name, **context).strip()
        except TemplateError as e:
            # Wrap errors with context
            raise ValueError(f"Error rendering {template_name}: {e}") from e
