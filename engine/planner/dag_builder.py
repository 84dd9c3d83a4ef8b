from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from engine.scheduler.dag import Task
from engine.scheduler.graph import TaskGraph
from sandbox import profiles
from sandbox.fileset import resolve
from sandbox.invoker import SandboxInvoker
from sandbox.profiles import ProfileKind
from sandbox.registry import ToolName, ToolRegistry
from sandbox.types import InvocationResult
from sandbox.utils import get_logger

log = get_logger("engine.planner")

# -------------------------
# File sets
# -------------------------

DOCKERFILE_FILES = "**/Dockerfile"
MARKDOWN_FILES = "**/*.md"
YAML_FILES = "**/*.y*ml"
SHELL_FILES = "**/*.sh"
JSON_FILES = "**/*.json"

FORMATTING = ProfileKind.FORMATTING


@dataclass(frozen=True)
class ToolStep:
    """
    One sandboxed command inside a task.

    files overrides the tool's default glob. When both are None the
    tool gets no file arguments (e.g. it scans `.` itself). kind
    overrides the tool's own profile.
    """

    tool: ToolName
    args: Tuple[str, ...] = ()
    files: Optional[str] = None
    kind: Optional[ProfileKind] = None


class SandboxAction:
    """
    Task action running its steps in order; stops at the first failing step.
    File sets are resolved fresh on every call.
    """

    def __init__(self, steps: Sequence[ToolStep], registry: ToolRegistry, invoker: SandboxInvoker, settings):
        self.steps = tuple(steps)
        self.registry = registry
        self.invoker = invoker
        self.root = settings.ROOT_DIR
        self.work_dir = settings.DOCKER_WORK_DIR
        self.user = settings.DOCKER_USER

    def _prepare(self, step: ToolStep):
        spec = self.registry.lookup(step.tool)
        profile = profiles.for_kind(step.kind or spec.profile, self.work_dir, self.user)
        pattern = step.files or spec.pattern
        files = resolve(self.root, pattern) if pattern else ()
        return spec, profile, list(step.args) + list(files)

    def commands(self) -> List[List[str]]:
        """The docker commands this action would run right now."""
        commands = []
        for step in self.steps:
            spec, profile, args = self._prepare(step)
            commands.append(self.invoker.build_command(spec, profile, args))
        return commands

    def __call__(self) -> InvocationResult:
        outputs = []
        for step in self.steps:
            spec, profile, args = self._prepare(step)
            result = self.invoker.invoke(spec, profile, args)
            if not result.ok:
                return result
            if result.output:
                log.debug(result.output.rstrip())
            outputs.append(result.output)
        return InvocationResult(exit_code=0, stdout="".join(outputs))


class PullAction:
    """Pulls every registered tool image."""

    def __init__(self, registry: ToolRegistry, invoker: SandboxInvoker):
        self.registry = registry
        self.invoker = invoker

    def commands(self) -> List[List[str]]:
        return [[self.invoker.docker, "pull", spec.image] for spec in self.registry]

    def __call__(self) -> InvocationResult:
        outputs = [self.invoker.ensure_available(spec).output for spec in self.registry]
        return InvocationResult(exit_code=0, stdout="".join(outputs))


# -------------------------
# Task table
# -------------------------

def _lint_steps():
    return {
        "lint-dockerfile": (
            "lint dockerfile by hadolint and dockerfilelint",
            [
                ToolStep(ToolName.HADOLINT, files=DOCKERFILE_FILES),
                ToolStep(ToolName.DOCKERFILELINT, files=DOCKERFILE_FILES),
            ],
        ),
        "lint-markdown": (
            "lint markdown by markdownlint and prettier",
            [
                ToolStep(ToolName.MARKDOWNLINT, ("--dot", "--config", ".markdownlint.yml"), MARKDOWN_FILES),
                ToolStep(ToolName.PRETTIER, ("--check", "--parser=markdown"), MARKDOWN_FILES),
            ],
        ),
        "lint-yaml": (
            "lint yaml by yamllint and prettier",
            [
                ToolStep(ToolName.YAMLLINT, ("--strict", "--config-file", ".yamllint.yml", ".")),
                ToolStep(ToolName.PRETTIER, ("--check", "--parser=yaml"), YAML_FILES),
            ],
        ),
        "lint-action": (
            "lint action by actionlint",
            [
                ToolStep(ToolName.ACTIONLINT, ("-color", "-ignore", '"permissions" section should not be empty.')),
            ],
        ),
        "lint-shell": (
            "lint shell by shellcheck and shfmt",
            [
                ToolStep(ToolName.SHELLCHECK, files=SHELL_FILES),
                ToolStep(ToolName.SHFMT, ("-i", "2", "-ci", "-bn", "-d", ".")),
            ],
        ),
        "lint-json": (
            "lint json by prettier",
            [
                ToolStep(ToolName.PRETTIER, ("--check", "--parser=json"), JSON_FILES),
            ],
        ),
    }


def _format_steps():
    return {
        "format-markdown": (
            "format markdown by prettier",
            [ToolStep(ToolName.PRETTIER, ("--write", "--parser=markdown"), MARKDOWN_FILES, FORMATTING)],
        ),
        "format-yaml": (
            "format yaml by prettier",
            [ToolStep(ToolName.PRETTIER, ("--write", "--parser=yaml"), YAML_FILES, FORMATTING)],
        ),
        "format-shell": (
            "format shell by shfmt",
            [ToolStep(ToolName.SHFMT, ("-i", "2", "-ci", "-bn", "-w", "."), kind=FORMATTING)],
        ),
        "format-json": (
            "format json by prettier",
            [ToolStep(ToolName.PRETTIER, ("--write", "--parser=json"), JSON_FILES, FORMATTING)],
        ),
    }


def build_tasks(settings, registry: ToolRegistry, invoker: SandboxInvoker) -> List[Task]:
    tasks = [Task("install", "install docker images", (), PullAction(registry, invoker))]

    lint = _lint_steps()
    tasks.append(Task("lint", "lint all", tuple(lint)))
    for name, (description, steps) in lint.items():
        tasks.append(Task(name, description, (), SandboxAction(steps, registry, invoker, settings)))

    fmt = _format_steps()
    tasks.append(Task("format", "format all", tuple(fmt)))
    for name, (description, steps) in fmt.items():
        tasks.append(Task(name, description, (), SandboxAction(steps, registry, invoker, settings)))

    return tasks


def build_task_graph(settings, registry: ToolRegistry = None, invoker: SandboxInvoker = None) -> TaskGraph:
    """
    Build the task graph from settings.

    Raises:
        PlannerError (only if the static table itself is broken)
    """
    registry = registry or ToolRegistry(settings)
    invoker = invoker or SandboxInvoker(settings)
    return TaskGraph(build_tasks(settings, registry, invoker))
