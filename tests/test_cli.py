"""
Tests for the CLI — flag parsing, config merging, exit codes.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from pacbridge.adapters.mock import MockPackageManager
from pacbridge.adapters.registry import ManagerRegistry
from pacbridge.core import context
from pacbridge.main import cli, main


@pytest.fixture
def registry() -> ManagerRegistry:
    reg = ManagerRegistry(detect=lambda: "unknown")
    reg.register("mock", MockPackageManager)
    return reg


@pytest.fixture
def invoke(registry, executor, make_terminal):
    """Run the CLI against the mock manager; returns (result, terminal)."""

    def _invoke(args, answers="", extra_flags=()):
        term = make_terminal(answers)
        obj = {
            "registry": registry,
            "executor": executor,
            "terminal": term,
            "extra_flags": list(extra_flags),
        }
        result = CliRunner().invoke(cli, [*args, "--using", "mock"], obj=obj)
        return result, term

    return _invoke


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "--dry-run" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_compat(self):
        result = CliRunner().invoke(cli, ["--compat"])
        assert result.exit_code == 0
        assert "apt" in result.output
        assert "zypper" in result.output


class TestOperationParsing:
    def test_query(self, invoke, executor):
        result, _ = invoke(["-Q"])
        assert result.exit_code == 0
        assert executor.argvs == [["mockpm", "list"]]

    def test_combined_short_flags(self, invoke):
        result, _ = invoke(["-Scc"])
        assert result.exit_code == 1
        assert "Operation `scc` is unimplemented for `mock`" in result.output

    def test_long_operation(self, invoke, executor):
        result, _ = invoke(["--query", "vim"])
        assert result.exit_code == 0
        assert executor.argvs == [["mockpm", "list", "vim"]]

    def test_no_operation(self, invoke):
        result, _ = invoke([])
        assert result.exit_code == 1
        assert "no operation specified" in result.output

    def test_two_operations(self, invoke):
        result, _ = invoke(["-Q", "-S"])
        assert result.exit_code == 1
        assert "only one operation" in result.output

    def test_invalid_combination(self, invoke):
        result, _ = invoke(["-Qy"])
        assert result.exit_code == 1
        assert "invalid flag combination `-Qy`" in result.output

    def test_extra_flags_passed_through(self, invoke, executor):
        result, _ = invoke(["-R", "vim"], extra_flags=["--purge"])
        assert result.exit_code == 0
        assert executor.argvs == [["mockpm", "remove", "--purge", "vim"]]


class TestExecutionOutcome:
    def test_exit_code_passthrough(self, invoke, executor):
        executor.set_failure("mockpm", 7)
        result, _ = invoke(["-Q"])
        assert result.exit_code == 7
        assert "error:" in result.output

    def test_out_of_range_code(self, invoke, executor):
        executor.set_failure("mockpm", 300)
        result, _ = invoke(["-Q"])
        assert result.exit_code == 1

    def test_signal_exits_one(self, invoke, executor):
        executor.set_signal("mockpm", 9)
        result, _ = invoke(["-Q"])
        assert result.exit_code == 1
        assert "interrupted" in result.output

    def test_dry_run(self, invoke, executor):
        result, term = invoke(["-S", "curl", "--dry-run"])
        assert result.exit_code == 0
        assert executor.call_count == 0
        assert "Pending `mockpm install curl`" in term.stdout.getvalue()

    def test_declined(self, invoke, executor):
        result, term = invoke(["-S", "curl"], answers="n\n")
        assert result.exit_code == 0
        assert executor.call_count == 0
        assert "Canceled" in term.stdout.getvalue()

    def test_accepted(self, invoke, executor):
        result, _ = invoke(["-S", "curl"], answers="y\n")
        assert result.exit_code == 0
        assert executor.argvs == [["mockpm", "install", "curl"]]

    def test_yes_skips_prompt(self, invoke, executor):
        result, term = invoke(["-S", "curl", "--noconfirm"])
        assert result.exit_code == 0
        assert executor.call_count == 1
        assert "[Y/n]" not in term.stdout.getvalue()

    def test_yes_native_flags(self, invoke, executor):
        result, _ = invoke(["-R", "vim", "--yes"])
        assert result.exit_code == 0
        assert executor.argvs == [["mockpm", "remove", "--yes", "vim"]]

    def test_terminal_shared_with_process(self, invoke):
        result, term = invoke(["-Q"])
        assert result.exit_code == 0
        assert context.get_terminal() is term

    def test_unknown_manager(self, executor):
        result = CliRunner().invoke(cli, ["-S", "vim", "--pm", "yum"], obj={"executor": executor})
        assert result.exit_code == 1
        assert "unknown package manager: yum" in result.output
        assert executor.call_count == 0


class TestConfigFile:
    def test_default_pm_from_file(self, registry, executor, make_terminal, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("default_pm: mock\n")
        obj = {"registry": registry, "executor": executor, "terminal": make_terminal()}
        result = CliRunner().invoke(cli, ["-Q", "--config", str(path)], obj=obj)
        assert result.exit_code == 0
        assert executor.argvs == [["mockpm", "list"]]

    def test_file_switches_merge(self, invoke, executor, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("dry_run: true\n")
        result, _ = invoke(["-S", "curl", "--config", str(path)])
        assert result.exit_code == 0
        assert executor.call_count == 0

    def test_invalid_config(self, invoke, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("nonsense: 1\n")
        result, _ = invoke(["-Q", "--config", str(path)])
        assert result.exit_code == 1
        assert "Failed to handle config" in result.output


class TestMain:
    def test_splits_extra_flags(self):
        with patch.object(cli, "main") as mocked:
            main(["-S", "vim", "--", "--no-install-recommends", "-q"])
        mocked.assert_called_once_with(
            args=["-S", "vim"],
            obj={"extra_flags": ["--no-install-recommends", "-q"]},
            prog_name="pacbridge",
        )
