# engine/planner/exceptions.py

from typing import Sequence


class PlannerError(Exception):
    """Base class for task graph construction errors"""


class UnknownTask(PlannerError):
    def __init__(self, name: str, referenced_by: str = None):
        if referenced_by:
            message = f"Task '{referenced_by}' depends on undeclared task '{name}'"
        else:
            message = f"No such task: '{name}'"
        super().__init__(message)
        self.name = name
        self.referenced_by = referenced_by


class DuplicateTask(PlannerError):
    def __init__(self, name: str):
        super().__init__(f"Task declared more than once: '{name}'")
        self.name = name


class CyclicDependency(PlannerError):
    def __init__(self, cycle: Sequence[str]):
        super().__init__("Dependency cycle: " + " -> ".join(cycle))
        self.cycle = tuple(cycle)
