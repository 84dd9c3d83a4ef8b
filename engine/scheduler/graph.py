# engine/scheduler/graph.py

"""
Sequential task graph runner.

The graph is validated once at construction (duplicates, undeclared
dependencies, cycles). A run walks dependencies depth-first, executes
each task at most once, and stops at the first failing action.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from engine.planner.exceptions import CyclicDependency, DuplicateTask, UnknownTask
from engine.scheduler.dag import Task
from engine.scheduler.metrics import RunMetrics
from engine.scheduler.state import TaskRuntimeState
from engine.scheduler.types import TaskState
from sandbox.exceptions import ToolExecutionFailed
from sandbox.utils import get_logger

log = get_logger("engine.graph")


@dataclass
class RunResult:
    task: str
    exit_code: int = 0
    executed: List[str] = field(default_factory=list)
    states: Dict[str, TaskState] = field(default_factory=dict)
    durations: Dict[str, float] = field(default_factory=dict)
    failed_task: Optional[str] = None
    error: Optional[ToolExecutionFailed] = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class _Aborted(Exception):
    """Internal: unwinds the traversal after the first failure."""


class TaskGraph:
    """
    Statically declared tasks with dependency lists.

    Raises:
        DuplicateTask
        UnknownTask
        CyclicDependency
    """

    def __init__(self, tasks: Iterable[Task]):
        self._tasks: Dict[str, Task] = {}
        for task in tasks:
            if task.name in self._tasks:
                raise DuplicateTask(task.name)
            self._tasks[task.name] = task
        self._validate()

    # -------------------------
    # Construction-time checks
    # -------------------------

    def _validate(self) -> None:
        for task in self._tasks.values():
            for dep in task.dependencies:
                if dep not in self._tasks:
                    raise UnknownTask(dep, referenced_by=task.name)

        # white / grey / black DFS colouring
        done = set()
        for name in self._tasks:
            if name not in done:
                self._check_cycles(name, [], set(), done)

    def _check_cycles(self, name: str, path: List[str], on_path: set, done: set) -> None:
        if name in on_path:
            start = path.index(name)
            raise CyclicDependency(path[start:] + [name])
        if name in done:
            return

        path.append(name)
        on_path.add(name)
        for dep in self._tasks[name].dependencies:
            self._check_cycles(dep, path, on_path, done)
        on_path.discard(name)
        path.pop()
        done.add(name)

    # -------------------------
    # Lookup
    # -------------------------

    def __contains__(self, name: str) -> bool:
        return name in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, name: str) -> Task:
        if name not in self._tasks:
            raise UnknownTask(name)
        return self._tasks[name]

    def describe(self) -> List[Tuple[str, str]]:
        """(name, description) pairs sorted alphabetically by name."""
        return sorted((t.name, t.description) for t in self._tasks.values())

    def plan(self, name: str) -> List[str]:
        """
        Execution order for a task without running anything.
        Dependencies first, each task once.
        """
        order: List[str] = []
        self._walk(self.get(name), order, set())
        return order

    def _walk(self, task: Task, order: List[str], visited: set) -> None:
        if task.name in visited:
            return
        visited.add(task.name)
        for dep in task.dependencies:
            self._walk(self._tasks[dep], order, visited)
        order.append(task.name)

    # -------------------------
    # Execution
    # -------------------------

    def run(self, name: str, metrics: Optional[RunMetrics] = None) -> RunResult:
        """
        Runs a task and its dependencies sequentially.

        The first action returning a non-zero exit code aborts the run;
        the run's exit code is that action's exit code. Other
        exceptions raised by an action propagate unchanged.
        """
        root = self.get(name)
        states = {task_name: TaskRuntimeState(task_name) for task_name in self._tasks}
        result = RunResult(task=name)

        log.info(f"Running task '{name}'")
        try:
            self._execute(root, states, set(), result, metrics)
        except _Aborted:
            pass

        result.states = {n: s.state for n, s in states.items()}
        result.durations = {n: s.duration for n, s in states.items() if s.state.terminal}
        return result

    def _execute(
        self,
        task: Task,
        states: Dict[str, TaskRuntimeState],
        visited: set,
        result: RunResult,
        metrics: Optional[RunMetrics],
    ) -> None:
        if task.name in visited:
            return
        visited.add(task.name)

        for dep in task.dependencies:
            self._execute(self._tasks[dep], states, visited, result, metrics)

        state = states[task.name]
        state.start()
        started = time.monotonic()

        if task.action is None:
            state.finish(0, time.monotonic() - started)
            result.executed.append(task.name)
            return

        log.debug(f"Task '{task.name}' started")
        outcome = task.action()
        duration = time.monotonic() - started
        state.finish(outcome.exit_code, duration)
        result.executed.append(task.name)

        if metrics is not None:
            metrics.inc("tasks.failed" if outcome.exit_code else "tasks.succeeded")

        if outcome.exit_code != 0:
            log.error(f"Task '{task.name}' failed with exit code {outcome.exit_code}")
            result.exit_code = outcome.exit_code
            result.failed_task = task.name
            result.error = ToolExecutionFailed(task.name, outcome.exit_code, outcome.output)
            raise _Aborted()

        log.info(f"Task '{task.name}' succeeded ({duration:.1f}s)")
