import shutil
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from task_board.infrastructure.config.app_settings import AppSettings
from task_board.infrastructure.entrypoints.api.app_factory import create_app
from task_board.infrastructure.repositories.task_store_csv_adapter import TaskStoreCsvAdapter


@pytest.fixture
def temp_workspace():
    tmp = tempfile.mkdtemp()
    yield Path(tmp)
    shutil.rmtree(tmp)


@pytest.fixture
def settings(temp_workspace):
    return AppSettings(
        app_name="TestBoard",
        env="test",
        runtime_data_dir=temp_workspace / "runtime_data",
    )


@pytest.fixture
def task_store(settings):
    return TaskStoreCsvAdapter(settings.tasks_file)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
