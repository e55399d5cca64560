"""
Tests for manager selection — host detection and the registry.
"""

from pacbridge.adapters.languages.pip import PipManager
from pacbridge.adapters.mock import MockPackageManager
from pacbridge.adapters.registry import ManagerRegistry
from pacbridge.adapters.system.apt import AptManager
from pacbridge.adapters.system.dnf import DnfManager
from pacbridge.adapters.unknown import Unknown
from pacbridge.core.config.loader import Config
from pacbridge.core.use_cases.detect import detect_pm_str


def _which(*present):
    return lambda name: f"/found/{name}" if name in present else None


class TestDetection:
    def test_linux_apt(self):
        assert detect_pm_str("linux", _which("apt")) == "apt"

    def test_linux_priority(self):
        assert detect_pm_str("linux", _which("apt", "apk", "dnf")) == "apk"

    def test_well_known_path(self):
        assert detect_pm_str("linux", _which("/usr/bin/zypper")) == "zypper"

    def test_macos(self):
        assert detect_pm_str("darwin", _which("port", "brew")) == "brew"

    def test_windows(self):
        assert detect_pm_str("win32", _which("choco")) == "choco"

    def test_nothing_found(self):
        assert detect_pm_str("linux", _which()) == "unknown"

    def test_unsupported_platform(self):
        assert detect_pm_str("sunos5", _which("apt")) == "unknown"


class TestRegistry:
    def test_configured_manager(self, executor, terminal):
        pm = ManagerRegistry().create(Config(default_pm="apt"), executor, terminal)
        assert isinstance(pm, AptManager)
        assert pm.executor is executor
        assert pm.terminal is terminal

    def test_pip3(self, executor, terminal):
        pm = ManagerRegistry().create(Config(default_pm="pip3"), executor, terminal)
        assert isinstance(pm, PipManager)
        assert pm.name == "pip3"

    def test_detected_manager(self, executor, terminal):
        pm = ManagerRegistry(detect=lambda: "dnf").create(Config(), executor, terminal)
        assert isinstance(pm, DnfManager)

    def test_config_beats_detection(self, executor, terminal):
        pm = ManagerRegistry(detect=lambda: "dnf").create(Config(default_pm="apt"), executor, terminal)
        assert isinstance(pm, AptManager)

    def test_unsupported_name(self, executor, terminal):
        pm = ManagerRegistry().create(Config(default_pm="yum"), executor, terminal)
        assert isinstance(pm, Unknown)
        assert pm.name == "unknown package manager: yum"

    def test_nothing_detected(self, executor, terminal):
        pm = ManagerRegistry(detect=lambda: "unknown").create(Config(), executor, terminal)
        assert pm.name == "unknown package manager: unknown"

    def test_register_and_list(self, executor, terminal):
        registry = ManagerRegistry()
        registry.register("mock", MockPackageManager)
        assert "mock" in registry.list_managers()
        assert isinstance(registry.create(Config(default_pm="mock"), executor, terminal), MockPackageManager)
        registry.unregister("mock")
        assert "mock" not in registry.list_managers()

    def test_builtin_names(self):
        assert ManagerRegistry().list_managers() == [
            "apk", "apt", "brew", "conda", "dnf", "pip", "pip3", "zypper",
        ]

    def test_compat_table(self):
        table = ManagerRegistry().compat_table()
        assert "s" in table["apt"]
        assert "sccc" not in table["conda"]
        assert table["pip"] == table["pip3"]
