from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from sandbox.types import InvocationResult

TaskAction = Callable[[], InvocationResult]


@dataclass(frozen=True, slots=True)
class Task:
    """
    Immutable task descriptor.

    Describes WHAT the task is and what it depends on.
    A task without an action is a pure aggregator.
    Must NEVER be mutated.
    """

    name: str
    description: str = ""
    dependencies: Tuple[str, ...] = ()
    action: Optional[TaskAction] = None

    @property
    def is_aggregator(self) -> bool:
        return self.action is None
