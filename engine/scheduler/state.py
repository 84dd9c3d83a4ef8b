from typing import Optional
from .types import TaskState


class TaskRuntimeState:
    """
    Runner-owned runtime state.

    Represents HOW a task is progressing within one run.
    Exists only in memory and is discarded with the run.
    """

    __slots__ = (
        "name",
        "state",
        "exit_code",
        "duration",
    )

    def __init__(self, name: str):
        self.name: str = name
        self.state: TaskState = TaskState.PENDING
        self.exit_code: Optional[int] = None
        self.duration: float = 0.0

    def start(self) -> None:
        if self.state is not TaskState.PENDING:
            raise RuntimeError(f"Task {self.name} cannot start from {self.state.value}")
        self.state = TaskState.RUNNING

    def finish(self, exit_code: int, duration: float = 0.0) -> None:
        if self.state is not TaskState.RUNNING:
            raise RuntimeError(f"Task {self.name} is not running")
        self.exit_code = exit_code
        self.duration = duration
        self.state = TaskState.SUCCEEDED if exit_code == 0 else TaskState.FAILED
