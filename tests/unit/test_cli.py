"""Tests for the taprun CLI entry point."""

from __future__ import annotations

from pathlib import Path

import yaml
from typer.testing import CliRunner

from taprun import __version__
from taprun.cli import cli

runner = CliRunner()


def _links(config_home: Path) -> dict:
    data = yaml.safe_load((config_home / "config.yaml").read_text(encoding="utf-8"))
    return data["cli"]["taps"]["links"]


def test_no_command_lists_tasks(config_home: Path) -> None:
    """No command lists tasks."""
    result = runner.invoke(cli, [])

    assert result.exit_code == 0
    assert "tap" in result.output
    assert "config" in result.output


def test_version(config_home: Path) -> None:
    """--version prints the package version."""
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_unknown_command_exits_2(config_home: Path) -> None:
    """Unknown command exits 2."""
    result = runner.invoke(cli, ["deploy"])

    assert result.exit_code == 2
    assert "Task 'deploy' not found" in result.output


def test_corrupt_config_is_fatal(config_home: Path) -> None:
    """Corrupt config is fatal."""
    config_home.mkdir(parents=True)
    (config_home / "config.yaml").write_text("cli: [broken\n", encoding="utf-8")

    result = runner.invoke(cli, ["tap", "list"])

    assert result.exit_code == 1
    assert "Malformed global config" in result.output


def test_link_then_show_tap(config_home: Path, make_tap) -> None:
    """tap link stores the link and the tap name then resolves to it."""
    root = make_tap("mytap", tasks_source="tasks = {}\n")

    result = runner.invoke(cli, ["tap", "link", "--name", "mytap", "--location", str(root)])

    assert result.exit_code == 0, result.output
    assert "Successfully linked tap 'mytap'" in result.output
    assert _links(config_home) == {
        "mytap": {"path": str(root), "tasks": str(root / "tasks" / "__init__.py")}
    }

    shown = runner.invoke(cli, ["mytap"])
    assert shown.exit_code == 0, shown.output
    assert "mytap" in shown.output


def test_link_missing_name_exits_2(config_home: Path) -> None:
    """Link missing name exits 2."""
    result = runner.invoke(cli, ["tap", "link"])

    assert result.exit_code == 2
    assert "requires option 'name'" in result.output


def test_relink_declined_keeps_link(config_home: Path, make_tap) -> None:
    """Relink declined keeps link."""
    first = make_tap("first")
    second = make_tap("second")
    runner.invoke(cli, ["tap", "link", "--name", "x", "--location", str(first)])

    result = runner.invoke(cli, ["tap", "link", "--name", "x", "--location", str(second)], input="n\n")

    assert result.exit_code == 0, result.output
    assert "Tap link canceled!" in result.output
    assert _links(config_home)["x"]["path"] == str(first)


def test_relink_silent_is_quiet_noop(config_home: Path, make_tap) -> None:
    """Relink silent is quiet noop."""
    first = make_tap("first")
    second = make_tap("second")
    runner.invoke(cli, ["tap", "link", "--name", "x", "--location", str(first)])

    result = runner.invoke(cli, ["tap", "link", "--name", "x", "--location", str(second), "--silent"])

    assert result.exit_code == 0, result.output
    assert "canceled" not in result.output
    assert _links(config_home)["x"]["path"] == str(first)


def test_relink_confirmed_overwrites(config_home: Path, make_tap) -> None:
    """Relink confirmed overwrites."""
    first = make_tap("first")
    second = make_tap("second")
    runner.invoke(cli, ["tap", "link", "--name", "x", "--location", str(first)])

    result = runner.invoke(cli, ["tap", "link", "--name", "x", "--location", str(second)], input="y\n")

    assert result.exit_code == 0, result.output
    assert _links(config_home)["x"]["path"] == str(second)


def test_unlink_and_list(config_home: Path, make_tap) -> None:
    """tap list shows links and tap unlink removes one."""
    runner.invoke(cli, ["tap", "link", "--name", "a", "--location", str(make_tap("a"))])

    listed = runner.invoke(cli, ["tap", "ls"])
    assert listed.exit_code == 0
    assert "Linked taps" in listed.output

    removed = runner.invoke(cli, ["tap", "unlink", "--name", "a"])
    assert removed.exit_code == 0
    assert "Removed tap link 'a'" in removed.output
    assert _links(config_home) == {}


def test_run_inside_linked_tap(config_home: Path, make_tap) -> None:
    """tap run executes the command inside the tap directory."""
    root = make_tap("mytap")
    runner.invoke(cli, ["tap", "link", "--name", "mytap", "--location", str(root)])

    result = runner.invoke(cli, ["mytap", "run", "cmd=echo hello-from-tap"])

    assert result.exit_code == 0, result.output
    assert "hello-from-tap" in result.output


def test_run_in_missing_tap_dir_exits_1(config_home: Path, tmp_path: Path) -> None:
    """Run in missing tap dir exits 1."""
    config_home.mkdir(parents=True)
    (config_home / "config.yaml").write_text(
        yaml.safe_dump({"cli": {"taps": {"links": {"ghost": {"path": str(tmp_path / "gone")}}}}}),
        encoding="utf-8",
    )

    result = runner.invoke(cli, ["ghost", "run", "cmd=ls"])

    assert result.exit_code == 1
    assert "Cannot inject tap 'ghost'" in result.output


def test_failing_tap_tasks_exit_1(config_home: Path, make_tap) -> None:
    """Failing tap tasks exit 1."""
    root = make_tap("bad", tasks_source="raise ImportError('missing dependency')\n")
    runner.invoke(cli, ["tap", "link", "--name", "bad", "--location", str(root)])
    before = (config_home / "config.yaml").read_text(encoding="utf-8")

    result = runner.invoke(cli, ["bad"])

    assert result.exit_code == 1
    assert "Error loading custom tasks" in result.output
    assert (config_home / "config.yaml").read_text(encoding="utf-8") == before


def test_help_renders_task_help(config_home: Path) -> None:
    """Help renders task help."""
    result = runner.invoke(cli, ["tap", "link", "--help"])

    assert result.exit_code == 0
    assert "Links a tap's path" in result.output
    assert not (config_home / "config.yaml").exists()


def test_config_group_without_subtask_shows_help(config_home: Path) -> None:
    """Config group without subtask shows help."""
    result = runner.invoke(cli, ["config"])

    assert result.exit_code == 0
    assert "Inspects the global config" in result.output


def test_config_get(config_home: Path, make_tap) -> None:
    """config get prints a value by dotted key."""
    runner.invoke(cli, ["tap", "link", "--name", "a", "--location", str(make_tap("a"))])

    result = runner.invoke(cli, ["config", "get", "cli.taps.links.a.path"])

    assert result.exit_code == 0
    assert "a" in result.output


def test_run_missing_binary_reports_error(config_home: Path, make_tap) -> None:
    """An unknown executable is reported without a traceback."""
    runner.invoke(cli, ["tap", "link", "--name", "mytap", "--location", str(make_tap("mytap"))])

    result = runner.invoke(cli, ["mytap", "run", "cmd=definitely-not-a-binary-xyz"])

    assert result.exit_code == 1
    assert "Unable to run" in result.output
    assert not isinstance(result.exception, FileNotFoundError)


def test_run_unbalanced_quote_reports_error(config_home: Path, make_tap) -> None:
    """A command that cannot be split is reported without a traceback."""
    runner.invoke(cli, ["tap", "link", "--name", "mytap", "--location", str(make_tap("mytap"))])

    result = runner.invoke(cli, ["mytap", "run", "cmd=echo 'unbalanced"])

    assert result.exit_code == 1
    assert "Unable to run" in result.output
    assert not isinstance(result.exception, ValueError)


def test_run_failing_command_exits_1(config_home: Path, make_tap) -> None:
    """A non-zero exit from the command becomes exit status 1."""
    runner.invoke(cli, ["tap", "link", "--name", "mytap", "--location", str(make_tap("mytap"))])

    result = runner.invoke(cli, ["mytap", "run", "cmd=ls does-not-exist"])

    assert result.exit_code == 1
    assert "command failed" in result.output
