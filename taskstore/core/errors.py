# taskstore/core/errors.py

class TaskStoreError(Exception):
    """Base class for errors raised by the task store itself."""


class StoreConnectionError(TaskStoreError):
    """The connection pool could not be established."""


class StoreUnreachableError(TaskStoreError):
    """The store did not answer a liveness check."""


class TaskNotFoundError(TaskStoreError):
    def __init__(self, task_id: int):
        super().__init__(f"task not found: {task_id}")
        self.task_id = task_id


class EmptyLabelError(TaskStoreError, ValueError):
    def __init__(self):
        super().__init__("label cannot be empty")


class NoTasksError(TaskStoreError, ValueError):
    def __init__(self):
        super().__init__("empty tasks list")
