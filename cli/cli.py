import argparse
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from config.settings import Settings, get_settings
from engine.planner.dag_builder import build_task_graph
from engine.planner.exceptions import PlannerError
from engine.scheduler.graph import RunResult, TaskGraph
from engine.scheduler.metrics import RunMetrics
from sandbox.exceptions import ImageUnavailable, SandboxError
from sandbox.utils import set_log_level

console = Console()

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

HELP_TASK = ("help", "show help")

# --- Helper Functions ---

def print_error(message, details=None):
    console.print(f"[bold red]❌ Error:[/bold red] {escape(str(message))}")
    if details:
        console.print(Panel(escape(str(details)), title="Details", border_style="red"))

def print_success(message):
    console.print(f"[bold green]✅ Success:[/bold green] {escape(str(message))}")

def print_help(graph: TaskGraph) -> None:
    """
    Lists every task with its one-line description, sorted by name.
    """
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Task", style="cyan", min_width=30, no_wrap=True)
    table.add_column("Description")
    for name, description in sorted(graph.describe() + [HELP_TASK]):
        table.add_row(name, description)
    console.print(table)

def print_plan(graph: TaskGraph, task: str) -> None:
    for name in graph.plan(task):
        action = graph.get(name).action
        console.print(f"[bold cyan]{name}[/bold cyan]")
        for cmd in getattr(action, "commands", lambda: [])():
            console.print(f"  {escape(' '.join(cmd))}", soft_wrap=True)

def print_summary(result: RunResult, metrics: RunMetrics) -> None:
    table = Table(title=f"Run Summary: {result.task}", show_header=True, header_style="bold magenta")
    table.add_column("Task", style="dim")
    table.add_column("State")
    table.add_column("Seconds", justify="right")
    styles = {"SUCCEEDED": "green", "FAILED": "bold red", "PENDING": "dim", "RUNNING": "yellow"}
    for name in result.executed:
        state = result.states[name].value
        table.add_row(name, f"[{styles[state]}]{state}[/{styles[state]}]", f"{result.durations.get(name, 0.0):.1f}")
    console.print(table)
    console.print(
        f"[dim]succeeded={metrics.counters['tasks.succeeded']} "
        f"failed={metrics.counters['tasks.failed']} "
        f"elapsed={metrics.elapsed_since('run'):.1f}s[/dim]"
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lintbox",
        description="Run linters and formatters in locked-down containers",
    )
    parser.add_argument("task", nargs="?", default="help", help="task to run (default: help)")
    parser.add_argument("-n", "--dry-run", action="store_true", help="print the commands without running them")
    parser.add_argument("--summary", action="store_true", help="print a per-task summary after the run")
    return parser

def run(task: str, graph: TaskGraph, dry_run: bool = False, summary: bool = False) -> int:
    if task == "help":
        print_help(graph)
        return EXIT_OK

    if task not in graph:
        print_error(f"Unknown task: {task}")
        print_help(graph)
        return EXIT_USAGE

    if dry_run:
        print_plan(graph, task)
        return EXIT_OK

    metrics = RunMetrics()
    metrics.mark_time("run")
    result = graph.run(task, metrics=metrics)

    if summary:
        print_summary(result, metrics)

    if not result.ok:
        print_error(result.error, result.error.output)
        return result.exit_code

    print_success(f"{task} completed")
    return EXIT_OK

def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings or get_settings()
    set_log_level(settings.LOG_LEVEL)

    try:
        graph = build_task_graph(settings)
        return run(args.task, graph, dry_run=args.dry_run, summary=args.summary)
    except ImageUnavailable as e:
        message = str(e)
        if not e.output or "no such image" in e.output.lower():
            message += " (run 'lintbox install' first)"
        print_error(message, e.output)
        return EXIT_ERROR
    except (SandboxError, PlannerError) as e:
        print_error(e)
        return EXIT_ERROR
    except KeyboardInterrupt:
        print_error("Interrupted")
        return EXIT_INTERRUPTED

if __name__ == "__main__":
    sys.exit(main())
