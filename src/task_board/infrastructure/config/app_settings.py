from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application settings.
    Every field can be overridden through a TASK_BOARD_* environment variable
    or a local .env file.
    """

    # App Config
    app_name: str = "Task Board"
    env: str = "local"
    log_level: str = "INFO"
    log_format: Optional[str] = None

    # Filesystem
    runtime_data_dir: Path = Field(default=Path("./runtime_data"))
    tasks_filename: str = "tasks.csv"

    # Dev server
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False

    model_config = SettingsConfigDict(env_prefix="TASK_BOARD_", env_file=".env", extra="ignore")

    @property
    def tasks_file(self) -> Path:
        return self.runtime_data_dir / self.tasks_filename
