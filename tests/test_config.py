"""Tests for configuration loading.

**Feature: configuration**
"""

import logging
import tempfile
from pathlib import Path

import pytest
import toml

from tradejournal.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG,
    create_template_config,
    get_config_path,
    get_db_path,
    load_config,
    setup_logging,
)


@pytest.fixture
def tmp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_dir: Path):
        assert load_config(tmp_dir / "absent.toml") == DEFAULT_CONFIG

    def test_values_merged_over_defaults(self, tmp_dir: Path):
        path = tmp_dir / "config.toml"
        path.write_text('[journal]\ndb_path = "/data/journal.db"\n')

        config = load_config(path)

        assert config["journal"]["db_path"] == "/data/journal.db"
        assert config["journal"]["default_account"] == 1
        assert config["logging"]["level"] == "WARNING"

    def test_defaults_not_mutated(self, tmp_dir: Path):
        path = tmp_dir / "config.toml"
        path.write_text("[journal]\ndefault_account = 7\n")

        load_config(path)

        assert DEFAULT_CONFIG["journal"]["default_account"] == 1

    def test_invalid_toml(self, tmp_dir: Path):
        path = tmp_dir / "config.toml"
        path.write_text("[journal\n")

        with pytest.raises(ValueError, match="Could not read config"):
            load_config(path)


class TestConfigPath:
    def test_env_override(self, monkeypatch, tmp_dir: Path):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_dir / "alt.toml"))
        assert get_config_path() == tmp_dir / "alt.toml"

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert get_config_path().name == "config.toml"

    def test_db_path_expands_user(self):
        config = {"journal": {"db_path": "~/journal.db"}}
        assert "~" not in str(get_db_path(config))


class TestTemplateConfig:
    def test_writes_defaults(self, tmp_dir: Path):
        path = create_template_config(tmp_dir / "nested" / "config.toml")

        assert path.exists()
        assert toml.load(path)["journal"]["default_account"] == 1

    def test_existing_file_untouched(self, tmp_dir: Path):
        path = tmp_dir / "config.toml"
        path.write_text("[journal]\ndefault_account = 3\n")

        create_template_config(path)

        assert toml.load(path)["journal"]["default_account"] == 3


class TestSetupLogging:
    def test_verbose_is_debug(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        setup_logging(DEFAULT_CONFIG, verbose=True)

        assert calls["level"] == logging.DEBUG

    def test_level_from_config(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        setup_logging({"logging": {"level": "info"}})

        assert calls["level"] == logging.INFO
