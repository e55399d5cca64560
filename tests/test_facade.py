"""
Tests for the PackageManager façade — run helpers, search, fan-out, dispatch.
"""

import signal
from concurrent.futures import Future
from unittest.mock import patch

import pytest

from pacbridge.adapters.base import OPERATIONS, PackageManager, implemented_operations
from pacbridge.adapters.mock import MockPackageManager
from pacbridge.core.errors import (
    ArgParseError,
    CmdInterruptedError,
    CmdStatusCodeError,
    OperationUnimplementedError,
    OtherError,
)
from pacbridge.core.models.invocation import Invocation
from pacbridge.core.models.strategy import NoCacheStrategy, PromptStrategy, Strategy


class CachingManager(PackageManager):
    """Installs with a configurable no-cache strategy."""

    no_confirm_flags = ("-y",)
    no_cache = NoCacheStrategy.scc()

    @property
    def name(self):
        return "caching"

    def s(self, kws, flags):
        strategy = self.confirm_strategy().model_copy(update={"no_cache": self.no_cache})
        self.run_with(Invocation.new("pm", "install").with_keywords(kws).with_flags(flags), None, strategy)

    def scc(self, kws, flags):
        self.run_with(Invocation.new("pm", "clean").with_flags(flags), None, self.confirm_strategy())


class PromptingCachingManager(CachingManager):
    def s(self, kws, flags):
        strategy = Strategy(prompt=PromptStrategy.custom_confirm(), no_cache=self.no_cache)
        self.run_with(Invocation.new("pm", "install").with_keywords(kws).with_flags(flags), None, strategy)


# ── Operation contract ───────────────────────────────────────────────


class TestOperations:
    def test_thirty_operations(self):
        assert len(OPERATIONS) == 30
        assert len(set(OPERATIONS)) == 30

    def test_unimplemented_by_default(self, make_pm):
        pm = make_pm(MockPackageManager)
        with pytest.raises(OperationUnimplementedError) as exc:
            pm.sccc([], [])
        assert str(exc.value) == "Operation `sccc` is unimplemented for `mock`"

    def test_implemented_operations(self, make_pm):
        assert make_pm(MockPackageManager).implemented_operations() == ["q", "qs", "r", "s"]
        assert implemented_operations(CachingManager) == ["s", "scc"]

    def test_dispatch(self, make_pm, executor):
        make_pm(MockPackageManager).dispatch("q", ["vim"], ["--all"])
        assert executor.argvs == [["mockpm", "list", "--all", "vim"]]

    def test_dispatch_unknown(self, make_pm):
        with pytest.raises(ArgParseError):
            make_pm(MockPackageManager).dispatch("zz", [], [])


# ── run / run_with ───────────────────────────────────────────────────


class TestRun:
    def test_run_leaves_tool_prompt(self, make_pm, executor):
        make_pm(MockPackageManager).q([], [])
        inv, output = executor.call_log[0]
        assert inv.argv == ["mockpm", "list"]
        assert output == "inherit"

    def test_run_adds_no_flags_under_yes(self, make_pm, executor):
        make_pm(MockPackageManager, no_confirm=True).q([], [])
        assert executor.argvs == [["mockpm", "list"]]

    def test_confirm_flags_under_yes(self, make_pm, executor):
        make_pm(MockPackageManager, no_confirm=True).r(["vim"], [])
        assert executor.argvs == [["mockpm", "remove", "--yes", "vim"]]

    def test_confirm_flags_once_per_call(self, make_pm, executor):
        pm = make_pm(MockPackageManager, no_confirm=True)
        pm.r(["vim"], [])
        pm.r(["vim"], [])
        assert [argv.count("--yes") for argv in executor.argvs] == [1, 1]

    def test_run_with_default_strategy(self, make_pm, executor):
        make_pm(MockPackageManager).run_with(Invocation.new("mockpm", "x"))
        assert executor.call_log[0][1] == "stream"


class TestNoCache:
    def test_cleanup_follows_install(self, make_pm, executor):
        make_pm(CachingManager, no_cache=True).s(["vim"], [])
        assert executor.argvs == [["pm", "install", "vim"], ["pm", "clean"]]

    def test_no_cleanup_by_default(self, make_pm, executor):
        make_pm(CachingManager).s(["vim"], [])
        assert executor.argvs == [["pm", "install", "vim"]]

    def test_with_flags(self, make_pm, executor):
        pm = make_pm(CachingManager, no_cache=True)
        pm.no_cache = NoCacheStrategy.with_flags(["--no-cache"])
        pm.s(["vim"], [])
        assert executor.argvs == [["pm", "install", "--no-cache", "vim"]]

    def test_failed_install_skips_cleanup(self, make_pm, executor):
        executor.set_failure("pm", 1)
        with pytest.raises(CmdStatusCodeError):
            make_pm(CachingManager, no_cache=True).s(["vim"], [])
        assert executor.call_count == 1

    def test_declined_install_skips_cleanup(self, make_pm, make_terminal, executor):
        pm = make_pm(PromptingCachingManager, term=make_terminal("n\n"), no_cache=True)
        pm.s(["vim"], [])
        assert executor.call_count == 0

    def test_dry_run_renders_cleanup(self, make_pm, executor, terminal):
        make_pm(CachingManager, dry_run=True, no_cache=True).s(["vim"], [])
        out = terminal.stdout.getvalue()
        assert executor.call_count == 0
        assert "`pm install vim`" in out
        assert "`pm clean`" in out


# ── search_regex ─────────────────────────────────────────────────────


class TestSearchRegex:
    def test_and_semantics(self, make_pm, executor, terminal):
        executor.set_response("mockpm", stdout=b"foo bar\nfoo\nbar\n")
        lines = make_pm(MockPackageManager).search_regex(Invocation.new("mockpm", "list"), ["foo", "bar"])
        assert lines == ["foo bar"]
        assert "foo bar" in terminal.stdout.getvalue()

    def test_runs_captured(self, make_pm, executor):
        executor.set_response("mockpm", stdout=b"")
        make_pm(MockPackageManager).qs(["x"], [])
        assert executor.call_log[0][1] == "capture"

    def test_dry_run(self, make_pm, executor):
        lines = make_pm(MockPackageManager, dry_run=True).search_regex(Invocation.new("mockpm", "list"), ["x"])
        assert lines == []
        assert executor.call_count == 0

    def test_undecodable_output(self, make_pm, executor):
        executor.set_response("mockpm", stdout=b"\xff\xfe\xfa")
        with pytest.raises(OtherError):
            make_pm(MockPackageManager).qs(["x"], [])

    def test_invalid_pattern(self, make_pm, executor):
        executor.set_response("mockpm", stdout=b"a\n")
        with pytest.raises(ArgParseError):
            make_pm(MockPackageManager).qs(["["], [])

    def test_invalid_pattern_spawns_nothing(self, make_pm, executor):
        with pytest.raises(ArgParseError):
            make_pm(MockPackageManager).search_regex(Invocation.new("mockpm", "list"), ["foo("])
        assert executor.call_count == 0


# ── run_each ─────────────────────────────────────────────────────────


class TestRunEach:
    def _invocations(self):
        return [Invocation.new(name) for name in ("alpha", "beta", "gamma")]

    def test_output_in_submission_order(self, make_pm, executor, terminal):
        for name in ("alpha", "beta", "gamma"):
            executor.set_response(name, stdout=f"{name}-out\n".encode())
        outcomes = make_pm(MockPackageManager).run_each(self._invocations())

        out = terminal.stdout.getvalue()
        assert out.index("alpha-out") < out.index("beta-out") < out.index("gamma-out")
        assert [o.argv for o in outcomes] == [("alpha",), ("beta",), ("gamma",)]
        assert {output for _, output in executor.call_log} == {"capture"}

    def test_first_error_raised_after_all(self, make_pm, executor):
        executor.set_failure("beta", 3)
        executor.set_failure("gamma", 4)
        with pytest.raises(CmdStatusCodeError) as exc:
            make_pm(MockPackageManager).run_each(self._invocations())
        assert exc.value.code == 3
        assert executor.call_count == 3

    def test_dry_run_renders_in_order(self, make_pm, executor, terminal):
        make_pm(MockPackageManager, dry_run=True).run_each(self._invocations())
        out = terminal.stdout.getvalue()
        assert executor.call_count == 0
        assert out.index("`alpha`") < out.index("`beta`") < out.index("`gamma`")

    def test_single_invocation_streams(self, make_pm, executor):
        make_pm(MockPackageManager).run_each([Invocation.new("alpha")])
        assert executor.call_log[0][1] == "stream"

    def test_ctrl_c_terminates_children(self, make_pm, executor):
        with patch.object(Future, "result", side_effect=KeyboardInterrupt):
            with pytest.raises(CmdInterruptedError) as exc:
                make_pm(MockPackageManager).run_each(self._invocations())
        assert exc.value.signal == int(signal.SIGINT)
        assert executor.terminated == 1
