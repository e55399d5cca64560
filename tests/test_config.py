"""
Tests for configuration loading — config.yml parsing, validation and merging.
"""

import textwrap
from pathlib import Path

import pytest

from pacbridge.core.config.loader import Config, ConfigError, config_path, load_config


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yml"
    path.write_text(textwrap.dedent("""\
        default_pm: dnf
        no_confirm: true
        needed: true
        elevation_cmd: doas
    """))
    return path


class TestLoadConfig:
    def test_valid_file(self, config_file: Path):
        cfg = load_config(config_file)
        assert cfg.default_pm == "dnf"
        assert cfg.no_confirm
        assert cfg.needed
        assert not cfg.dry_run
        assert cfg.elevation_cmd == "doas"

    def test_default_location_missing(self):
        assert load_config() == Config()

    def test_env_location(self, config_file: Path, monkeypatch):
        monkeypatch.setenv("PACBRIDGE_CONFIG", str(config_file))
        assert config_path() == config_file
        assert load_config().default_pm == "dnf"

    def test_explicit_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yml")

    def test_directory(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not a file"):
            load_config(tmp_path)

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("")
        assert load_config(path) == Config()

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("default_pm: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("- apt\n- dnf\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_unknown_key(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("default_pm: apt\ncolour: true\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    def test_empty_elevation_cmd(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("elevation_cmd: '  '\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestConfigModel:
    def test_blank_pm_is_none(self):
        assert Config(default_pm="  ").default_pm is None

    def test_frozen(self):
        with pytest.raises(Exception):
            Config().dry_run = True

    def test_join_ors_switches(self):
        merged = Config(dry_run=True).join(Config(needed=True))
        assert merged.dry_run and merged.needed
        assert not merged.no_confirm

    def test_join_prefers_own_pm(self):
        assert Config(default_pm="conda").join(Config(default_pm="apt")).default_pm == "conda"
        assert Config().join(Config(default_pm="apt")).default_pm == "apt"

    def test_join_elevation(self):
        assert Config().join(Config(elevation_cmd="doas")).elevation_cmd == "doas"
        assert Config(elevation_cmd="run0").join(Config(elevation_cmd="doas")).elevation_cmd == "run0"
