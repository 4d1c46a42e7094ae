"""
Tests for YAML settings loading.

Run with: pytest tests/test_config.py -v
"""

import pytest

from cubby.app.config import _deep_merge, load_config, load_settings
from cubby.errors import ConfigError


class TestDeepMerge:
    def test_nested_override(self):
        merged = _deep_merge({"a": {"b": 1, "c": 2}, "d": 3}, {"a": {"b": 10}})
        assert merged == {"a": {"b": 10, "c": 2}, "d": 3}

    def test_inputs_not_modified(self):
        base = {"a": {"b": 1}}
        _deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}

    def test_non_dict_replaces(self):
        assert _deep_merge({"a": {"b": 1}}, {"a": 5}) == {"a": 5}


class TestLoadSettings:
    def test_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "missing.yaml")
        assert settings.project.name == "My Template"
        assert settings.project.tempo == 120
        assert settings.project.sample_rate == 48000
        assert settings.reabank.pattern == "*.reabank"
        assert settings.logging.level == "WARNING"

    def test_user_overrides(self, tmp_path):
        user = tmp_path / "config.yaml"
        user.write_text("project:\n  tempo: 90\nlogging:\n  level: debug\n", encoding="utf-8")
        settings = load_settings(user)
        assert settings.project.tempo == 90
        assert settings.project.sample_rate == 48000
        assert settings.logging.level == "DEBUG"

    def test_unreadable_yaml_falls_back(self, tmp_path):
        user = tmp_path / "config.yaml"
        user.write_text("project: [unclosed\n", encoding="utf-8")
        assert load_config(user)["project"]["tempo"] == 120

    def test_non_mapping_ignored(self, tmp_path):
        user = tmp_path / "config.yaml"
        user.write_text("- a\n- b\n", encoding="utf-8")
        assert load_settings(user).project.tempo == 120

    @pytest.mark.parametrize("text", [
        "project:\n  tempo: -5\n",
        "project:\n  sample_rate: fast\n",
        "logging:\n  level: LOUD\n",
    ])
    def test_invalid_values(self, tmp_path, text):
        user = tmp_path / "config.yaml"
        user.write_text(text, encoding="utf-8")
        with pytest.raises(ConfigError):
            load_settings(user)
