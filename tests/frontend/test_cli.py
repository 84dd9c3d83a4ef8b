from unittest.mock import patch

import pytest

from cli import cli
from sandbox.types import InvocationResult
from tests.fakes import completed


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    from rich.console import Console

    monkeypatch.setattr(cli, "console", Console(width=200, force_terminal=False, color_system=None))


def test_no_task_prints_sorted_help(settings, capsys):
    code = cli.main([], settings=settings)

    out = capsys.readouterr().out
    assert code == 0
    names = [line.split()[0] for line in out.splitlines() if line.strip()]
    assert names == sorted(names)
    assert "help" in names
    assert "lint-markdown" in names
    assert "lint markdown by markdownlint and prettier" in out


def test_help_task_exits_zero(settings, capsys):
    assert cli.main(["help"], settings=settings) == 0
    assert "install docker images" in capsys.readouterr().out


def test_unknown_task_shows_help_and_fails(settings, capsys):
    code = cli.main(["deploy"], settings=settings)

    out = capsys.readouterr().out
    assert code == cli.EXIT_USAGE
    assert "Unknown task: deploy" in out
    assert "format all" in out


def test_dry_run_prints_commands_without_running(settings, tmp_path, capsys):
    (tmp_path / "a.json").write_text("{}")

    with patch("sandbox.invoker.run_subprocess") as run:
        code = cli.main(["lint-json", "--dry-run"], settings=settings)

    out = capsys.readouterr().out
    assert code == 0
    run.assert_not_called()
    assert "lint-json" in out
    assert "--network none" in out
    assert "--parser=json a.json" in out


def test_successful_run_exits_zero(settings):
    with patch("sandbox.invoker.run_subprocess", return_value=completed(0)):
        assert cli.main(["lint-action"], settings=settings) == 0


def test_failing_tool_exit_code_is_propagated(settings, capsys):
    side_effect = [completed(0), completed(3, stdout="SC2086 quote this\n")]

    with patch("sandbox.invoker.run_subprocess", side_effect=side_effect):
        code = cli.main(["lint-action"], settings=settings)

    assert code == 3
    assert "SC2086 quote this" in capsys.readouterr().out


def test_missing_image_suggests_install(settings, capsys):
    with patch("sandbox.invoker.run_subprocess", return_value=completed(1)):
        code = cli.main(["lint-yaml"], settings=settings)

    assert code == cli.EXIT_ERROR
    assert "lintbox install" in capsys.readouterr().out


def test_daemon_error_is_shown_without_install_hint(settings, capsys):
    daemon_down = "Cannot connect to the Docker daemon at unix:///var/run/docker.sock. Is the docker daemon running?\n"

    with patch("sandbox.invoker.run_subprocess", return_value=completed(1, stderr=daemon_down)):
        code = cli.main(["lint-action"], settings=settings)

    out = capsys.readouterr().out
    assert code == cli.EXIT_ERROR
    assert "Cannot connect to the Docker daemon" in out
    assert "lintbox install" not in out


def test_no_such_image_keeps_install_hint(settings, capsys):
    missing = "Error: No such image: rhysd/actionlint:latest\n"

    with patch("sandbox.invoker.run_subprocess", return_value=completed(1, stderr=missing)):
        code = cli.main(["lint-action"], settings=settings)

    out = capsys.readouterr().out
    assert code == cli.EXIT_ERROR
    assert "lintbox install" in out
    assert "No such image" in out


def test_interrupt_exits_130(settings):
    with patch("sandbox.invoker.run_subprocess", side_effect=KeyboardInterrupt):
        assert cli.main(["install"], settings=settings) == cli.EXIT_INTERRUPTED


def test_summary_lists_executed_tasks(settings, capsys):
    with patch("sandbox.invoker.run_subprocess", return_value=completed(0)):
        code = cli.main(["format", "--summary"], settings=settings)

    out = capsys.readouterr().out
    assert code == 0
    assert "Run Summary: format" in out
    assert "format-markdown" in out
    assert "SUCCEEDED" in out


def test_run_reports_failing_task(settings, capsys):
    from engine.scheduler.dag import Task
    from engine.scheduler.graph import TaskGraph

    graph = TaskGraph([
        Task("lint-a", "a", (), lambda: InvocationResult(exit_code=1, stderr="broken\n")),
        Task("lint-b", "b", (), lambda: InvocationResult(exit_code=0)),
        Task("lint", "lint all", ("lint-a", "lint-b")),
    ])

    assert cli.run("lint", graph) == 1
    out = capsys.readouterr().out
    assert "lint-a" in out
    assert "broken" in out
