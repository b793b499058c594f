"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from gitdriver.config.defaults import DEFAULT_TOML
from gitdriver.config.loader import ConfigError, load_config
from gitdriver.config.schema import DEFAULT_PROTECTED_BRANCHES, GitDriverConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "GITDRIVER_BASE_DIR",
        "GITDRIVER_SIGN_COMMITS",
        "GITDRIVER_PROTECTED_BRANCHES",
        "GITDRIVER_ENFORCE_PROTECTION",
        "GITDRIVER_TIMEOUT",
        "GITDRIVER_NETWORK_TIMEOUT",
        "GITDRIVER_LOG_LEVEL",
        "GITDRIVER_LOG_FORMAT",
        "GITDRIVER_SERVERLESS",
    ):
        monkeypatch.delenv(name, raising=False)


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.git.binary == "git"
        assert cfg.git.default_branch is None
        assert cfg.execution.timeout == 60.0
        assert cfg.execution.network_timeout == 300.0
        assert cfg.protection.protected_branches == DEFAULT_PROTECTED_BRANCHES
        assert cfg.logging.level == "warning"

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / "gitdriver.toml").write_text(
            'version = "1.0"\n'
            "[git]\n"
            'default_branch = "trunk"\n'
            "sign_commits = true\n"
            "[execution]\n"
            "timeout = 5\n"
            "[protection]\n"
            'protected_branches = ["release"]\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.git.default_branch == "trunk"
        assert cfg.git.sign_commits is True
        assert cfg.execution.timeout == 5
        assert cfg.execution.network_timeout == 300.0
        assert cfg.protection.protected_branches == ["release"]

    def test_default_template_parses(self, tmp_path: Path):
        (tmp_path / "gitdriver.toml").write_text(DEFAULT_TOML)
        cfg = load_config(tmp_path)
        assert cfg == GitDriverConfig()

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / "gitdriver.toml").write_text("[git]\ncolour = true\n[extra]\nx = 1\n")
        assert load_config(tmp_path).git.binary == "git"

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text('[logging]\nlevel = "debug"\n')
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.logging.level == "debug"

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / "gitdriver.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_section_must_be_table(self, tmp_path: Path):
        (tmp_path / "gitdriver.toml").write_text('git = "nope"\n')
        with pytest.raises(ConfigError, match=r"\[git\]"):
            load_config(tmp_path)

    def test_non_positive_timeout(self, tmp_path: Path):
        (tmp_path / "gitdriver.toml").write_text("[execution]\ntimeout = 0\n")
        with pytest.raises(ConfigError, match="timeouts"):
            load_config(tmp_path)


class TestEnvVarOverrides:
    def test_base_dir(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GITDRIVER_BASE_DIR", "/srv/work")
        assert load_config(tmp_path).git.base_dir == "/srv/work"

    def test_protected_branches(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GITDRIVER_PROTECTED_BRANCHES", "main, release ,")
        assert load_config(tmp_path).protection.protected_branches == ["main", "release"]

    def test_bools(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GITDRIVER_ENFORCE_PROTECTION", "off")
        monkeypatch.setenv("GITDRIVER_SERVERLESS", "yes")
        cfg = load_config(tmp_path)
        assert cfg.protection.enforce is False
        assert cfg.provider.serverless is True

    def test_env_beats_file(self, tmp_path: Path, monkeypatch):
        (tmp_path / "gitdriver.toml").write_text("[execution]\ntimeout = 5\n")
        monkeypatch.setenv("GITDRIVER_TIMEOUT", "12.5")
        assert load_config(tmp_path).execution.timeout == 12.5

    def test_bad_bool_raises(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GITDRIVER_SIGN_COMMITS", "maybe")
        with pytest.raises(ConfigError, match="GITDRIVER_SIGN_COMMITS"):
            load_config(tmp_path)

    def test_bad_number_raises(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GITDRIVER_NETWORK_TIMEOUT", "soon")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_log_level_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GITDRIVER_LOG_LEVEL", "chatty")
        assert load_config(tmp_path).logging.level == "warning"
