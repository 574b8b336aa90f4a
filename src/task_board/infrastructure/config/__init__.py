from task_board.infrastructure.config.app_settings import AppSettings

__all__ = ["AppSettings"]
