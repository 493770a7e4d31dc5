"""Tests for environment references in split config files."""

import os

import pytest

from split_every.lib.env import expand_config_values, expand_env_refs, load_env_file
from split_every.lib.errors import ConfigurationError


class TestExpandEnvRefs:
    """Tests for expand_env_refs()."""

    def test_braced_reference(self, monkeypatch):
        monkeypatch.setenv("FIELD_SEP", "|")
        assert expand_env_refs("${FIELD_SEP}") == "|"

    def test_bare_dollar_is_literal(self, monkeypatch):
        monkeypatch.setenv("USER", "zzz")
        assert expand_env_refs("$USER") == "$USER"
        assert expand_env_refs("a$b$") == "a$b$"

    def test_default_used_when_unset(self):
        assert expand_env_refs("${FIELD_SEP:-;}", environ={}) == ";"

    def test_default_ignored_when_set(self):
        assert expand_env_refs("${FIELD_SEP:-;}", environ={"FIELD_SEP": "|"}) == "|"

    def test_empty_default(self):
        assert expand_env_refs("a${GAP:-}b", environ={}) == "ab"

    def test_missing_variable_raises(self):
        with pytest.raises(ConfigurationError) as exc_info:
            expand_env_refs("${MISSING}", field="pattern", environ={})
        assert exc_info.value.field == "pattern"
        assert "MISSING" in str(exc_info.value)
        assert "--env-file" in exc_info.value.suggestion


class TestExpandConfigValues:
    """Tests for expand_config_values()."""

    def test_strings_and_lists_expanded(self):
        env = {"SEP": ";", "N": "4"}
        expanded = expand_config_values(
            {"pattern": "${SEP}", "n": "${N}", "binary": True, "parts": ["${SEP}", 13]},
            environ=env,
        )
        assert expanded == {"pattern": ";", "n": "4", "binary": True, "parts": [";", 13]}

    def test_input_not_mutated(self):
        options = {"pattern": "${SEP}"}
        expand_config_values(options, environ={"SEP": ","})
        assert options == {"pattern": "${SEP}"}


class TestLoadEnvFile:
    """Tests for load_env_file()."""

    def test_load_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("SPLIT_EVERY_TEST_SEP=;\n", encoding="utf-8")
        monkeypatch.setenv("SPLIT_EVERY_TEST_SEP", "placeholder")

        assert load_env_file(env_file, override=True) is True
        assert os.environ["SPLIT_EVERY_TEST_SEP"] == ";"

    def test_load_env_file_missing(self, tmp_path):
        assert load_env_file(tmp_path / "absent.env") is False
