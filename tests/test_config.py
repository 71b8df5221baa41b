"""Tests for YAML settings loading."""

import logging
from pathlib import Path

import pytest

from custom_vocabulary import ConfigError
from vocab_cli import config
from vocab_cli.config import Settings, load_settings


class TestDefaults:
    def test_missing_default_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "DEFAULT_CONFIG_PATH", tmp_path / "none.yaml")
        settings = load_settings()
        assert settings == Settings()
        assert settings.quiz_size == 5
        assert settings.log_level_number == logging.WARNING

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "none.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("")
        assert load_settings(path) == Settings()


class TestLoad:
    def test_all_keys(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "database: /data/vocab.db\n"
            "quiz_size: 10\n"
            "export_dir: exports\n"
            "log_level: debug\n"
        )
        settings = load_settings(path)
        assert settings.database == Path("/data/vocab.db")
        assert settings.quiz_size == 10
        assert settings.export_dir == tmp_path / "exports"
        assert settings.log_level == "DEBUG"

    def test_relative_database_resolved_against_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("database: vocab.db\n")
        assert load_settings(path).database == tmp_path / "vocab.db"

    def test_home_is_expanded(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("database: ~/vocab.db\n")
        assert load_settings(path).database == Path.home() / "vocab.db"


class TestInvalid:
    @pytest.mark.parametrize("content,fragment", [
        ("database: [unclosed\n", "Invalid YAML"),
        ("- just\n- a list\n", "mapping"),
        ("colour: blue\n", "Unknown setting"),
        ("quiz_size: 0\n", "quiz_size"),
        ("quiz_size: many\n", "quiz_size"),
        ("quiz_size: true\n", "quiz_size"),
        ("database: 5\n", "database"),
        ("export_dir: ''\n", "export_dir"),
        ("log_level: loud\n", "log_level"),
    ])
    def test_rejected(self, tmp_path, content, fragment):
        path = tmp_path / "settings.yaml"
        path.write_text(content)
        with pytest.raises(ConfigError, match=fragment):
            load_settings(path)
