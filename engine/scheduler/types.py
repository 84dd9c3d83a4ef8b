from enum import Enum


class TaskState(str, Enum):
    """
    Finite-state machine for task execution.
    Runtime-only. Never persisted.

    PENDING -> RUNNING -> SUCCEEDED | FAILED
    """

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"

    @property
    def terminal(self) -> bool:
        return self in (TaskState.SUCCEEDED, TaskState.FAILED)
