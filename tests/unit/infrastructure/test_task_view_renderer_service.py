import pytest

from task_board.core.domain.task.task import Task
from task_board.infrastructure.presentation.task_view_renderer_service import (
    TaskViewRendererService,
)


@pytest.fixture
def renderer():
    return TaskViewRendererService("TestBoard")


def test_render_item_escapes_title(renderer):
    task = Task.create('<script>alert("x")</script>')

    html = renderer.render_item(task)

    assert f'id="task-{task.id}"' in html
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_render_item_reflects_completion(renderer):
    task = Task.create("Water plants").toggled()

    html = renderer.render_item(task)

    assert 'class="task completed"' in html
    assert 'aria-pressed="true"' in html
    assert "Mark incomplete" in html


def test_render_status_is_out_of_band(renderer):
    html = renderer.render_status("Saved.")

    assert html.startswith('<div id="status" hx-swap-oob="true" role="status"')
    assert "Saved." in html
    assert "error" not in html


def test_render_status_error_uses_alert_role(renderer):
    html = renderer.render_status("Title is required.", error=True)

    assert 'role="alert"' in html
    assert 'class="error"' in html


def test_render_page_contains_forms_and_list(renderer):
    html = renderer.render_page([Task.create("Write report")])

    assert html.startswith("<!DOCTYPE html>")
    assert "<title>TestBoard</title>" in html
    assert 'action="/tasks" method="post"' in html
    assert 'action="/tasks/search"' in html
    assert 'id="task-list"' in html
    assert "1 task(s)" in html
    assert "Write report" in html


def test_render_page_empty_shows_placeholder(renderer):
    html = renderer.render_page([])

    assert "No tasks yet." in html


def test_render_list_with_query_is_a_fragment(renderer):
    html = renderer.render_list([], query="milk")

    assert html.startswith('<section id="task-list"')
    assert "<!DOCTYPE html>" not in html
    assert '0 task(s) matching "milk"' in html
    assert "No tasks yet." not in html


def test_render_error_page(renderer):
    html = renderer.render_error_page(404, "Task not found")

    assert "Error 404" in html
    assert "Task not found" in html
    assert 'href="/tasks"' in html


def test_render_page_lets_htmx_swap_error_fragments(renderer):
    html = renderer.render_page([])

    assert 'addEventListener("htmx:beforeSwap"' in html
    assert "[400, 404, 422, 500]" in html
    assert "evt.detail.shouldSwap = true;" in html
    assert "evt.detail.isError = false;" in html


def test_render_summary_is_out_of_band(renderer):
    html = renderer.render_summary(2)

    assert html.startswith('<div id="task-summary" hx-swap-oob="true">')
    assert "2 task(s)" in html
    assert "No tasks yet." not in html


def test_render_summary_empty_shows_placeholder(renderer):
    html = renderer.render_summary(0)

    assert "0 task(s)" in html
    assert "No tasks yet." in html


def test_render_list_summary_is_swapped_in_place(renderer):
    html = renderer.render_list([Task.create("Write report")])

    assert '<div id="task-summary">' in html
    assert "hx-swap-oob" not in html
