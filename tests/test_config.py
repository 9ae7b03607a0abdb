import tomllib
from dataclasses import fields
from pathlib import Path

import pytest

from recruiting.config import PROJECT_ROOT, get_env_config, load_config, load_settings, resolve_config


class TestLoadConfig:

    @pytest.mark.parametrize("env, window, level", [
        ("production", 30, "WARNING"),
        ("staging", 30, "INFO"),
        ("development", 90, "DEBUG"),
    ])
    def test_known_environments(self, env, window, level):
        config = load_config(env)
        assert config.env == env
        assert config.reporting.default_window_days == window
        assert config.log_level == level

    def test_unknown_environment(self):
        with pytest.raises(ValueError, match="Unknown environment"):
            load_config("qa")


class TestSettings:

    def test_reads_tool_table_from_pyproject(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text(
            '[tool.recruiting]\nenv = "staging"\ndefault_window_days = 14\n'
        )
        assert get_env_config(tmp_path / "pyproject.toml") == {"env": "staging", "default_window_days": 14}

    def test_missing_pyproject(self, tmp_path):
        assert get_env_config(tmp_path / "pyproject.toml") == {}

    def test_yaml_takes_precedence(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[tool.recruiting]\nenv = "staging"\n')
        (tmp_path / "recruiting.yaml").write_text("env: development\noutput_dir: out/reports\n")
        assert load_settings(tmp_path) == {"env": "development", "output_dir": "out/reports"}

    def test_resolve_applies_overrides(self, tmp_path):
        (tmp_path / "recruiting.yaml").write_text("env: staging\ndefault_window_days: 7\noutput_dir: out\n")
        config = resolve_config(root=tmp_path)
        assert config.env == "staging"
        assert config.reporting.default_window_days == 7
        assert config.reporting.output_dir == Path("out")
        assert config.reporting.time_to_hire_precision == 1

    def test_explicit_env_wins(self, tmp_path):
        (tmp_path / "recruiting.yaml").write_text("env: staging\n")
        assert resolve_config("development", root=tmp_path).env == "development"

    def test_unrecognised_settings_are_ignored(self, tmp_path):
        (tmp_path / "recruiting.yaml").write_text("env: production\nunknown_label: Other\n")
        config = resolve_config(root=tmp_path)
        assert [f.name for f in fields(config.reporting)] == [
            "default_window_days", "time_to_hire_precision", "output_format", "output_dir",
        ]
        assert config.reporting == load_config("production").reporting

    def test_project_metadata(self):
        pyproject = PROJECT_ROOT / "pyproject.toml"
        if not pyproject.exists():
            pytest.skip("not running from a source checkout")
        with open(pyproject, "rb") as f:
            project = tomllib.load(f)["project"]
        assert "readme" not in project
        assert get_env_config(pyproject)["env"] == "production"
