"""
Tests for the Invocation builder.
"""

import pytest

from pacbridge.core.models.invocation import Invocation


class TestConstruction:
    def test_new_from_args(self):
        inv = Invocation.new("apt", "install")
        assert inv.argv == ["apt", "install"]

    def test_new_from_sequence(self):
        assert Invocation.new(["dnf", "list", "--installed"]).argv == ["dnf", "list", "--installed"]

    def test_empty_program_rejected(self):
        with pytest.raises(ValueError):
            Invocation.new([])
        with pytest.raises(ValueError):
            Invocation.new("")


class TestBuilders:
    def test_empty_sequences_change_nothing(self):
        inv = Invocation.new("apt", "install")
        assert inv.with_keywords([]).with_flags([]).argv == ["apt", "install"]

    def test_flags_precede_keywords(self):
        inv = Invocation.new("zypper", "install").with_keywords(["curl"]).with_flags(["-y"])
        assert inv.argv == ["zypper", "install", "-y", "curl"]

    def test_append_order_preserved(self):
        inv = (
            Invocation.new("apt", "install")
            .with_keywords(["a", "b"])
            .with_keywords(["c"])
            .with_flags(["--x"])
            .with_flags(["--y"])
        )
        assert inv.argv == ["apt", "install", "--x", "--y", "a", "b", "c"]

    def test_builders_are_pure(self):
        base = Invocation.new("apt", "install")
        base.with_flags(["--yes"])
        assert base.flags == ()

    def test_with_program(self):
        inv = Invocation.new("pip", "list").with_program("pip3")
        assert inv.argv == ["pip3", "list"]


class TestElevation:
    def test_prefix(self):
        inv = Invocation.new("apt", "install").with_keywords(["curl"]).elevated("sudo")
        assert inv.argv == ["sudo", "apt", "install", "curl"]
        assert inv.is_elevated

    def test_multi_word_command(self):
        inv = Invocation.new("apk", "add").elevated("doas -u root")
        assert inv.argv[:3] == ["doas", "-u", "root"]

    def test_env_reinjection(self):
        inv = Invocation.new("apt", "update").elevated("sudo", [("http_proxy", "http://p:3128")])
        assert inv.argv == ["sudo", "env", "http_proxy=http://p:3128", "apt", "update"]

    def test_keywords_untouched(self):
        inv = Invocation.new("apt", "remove").with_keywords(["vim"])
        assert inv.elevated("sudo").keywords == ("vim",)


class TestComposition:
    def test_transform(self):
        inv = Invocation.new("apt").transform(lambda i: i.with_flags(["-q"]))
        assert inv.argv == ["apt", "-q"]

    def test_transform_requires_invocation(self):
        with pytest.raises(TypeError):
            Invocation.new("apt").transform(lambda i: i.argv)

    def test_pipe_returns_callee_result(self):
        assert Invocation.new("brew", "list").pipe(lambda i: len(i.argv)) == 2


class TestRendering:
    def test_render_quotes(self):
        inv = Invocation.new("rpm", "-qa", "--qf", "%{NAME} %{VERSION}")
        assert inv.render() == "rpm -qa --qf '%{NAME} %{VERSION}'"

    def test_str_is_render(self):
        inv = Invocation.new("apt", "list")
        assert str(inv) == inv.render()

    def test_to_dict(self):
        d = Invocation.new("apt", "install").with_keywords(["x"]).to_dict()
        assert d == {"argv": ["apt", "install", "x"], "keywords": ["x"], "flags": []}
