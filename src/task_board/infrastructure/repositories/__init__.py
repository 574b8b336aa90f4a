from .task_store_csv_adapter import TaskStoreCsvAdapter

__all__ = ["TaskStoreCsvAdapter"]
