"""Reporting configuration and environment setup."""

from typing import TypeAlias
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

ConfigDict: TypeAlias = dict[str, str | int | bool | list[str]]

PROJECT_ROOT = Path(__file__).parent.parent


@dataclass(frozen=True)
class ReportingConfig:
    default_window_days: int
    time_to_hire_precision: int
    output_format: str
    output_dir: Path


@dataclass(frozen=True)
class RecruitingConfig:
    env: str
    reporting: ReportingConfig
    log_level: str


def load_config(env: str = "production") -> RecruitingConfig:
    match env:
        case "production":
            reporting = ReportingConfig(
                default_window_days=30,
                time_to_hire_precision=1,
                output_format="json",
                output_dir=Path("output/reports"),
            )
            log_level = "WARNING"
        case "staging":
            reporting = ReportingConfig(
                default_window_days=30,
                time_to_hire_precision=1,
                output_format="json",
                output_dir=Path("output/staging/reports"),
            )
            log_level = "INFO"
        case "development":
            reporting = ReportingConfig(
                default_window_days=90,
                time_to_hire_precision=2,
                output_format="json",
                output_dir=Path("output/dev/reports"),
            )
            log_level = "DEBUG"
        case other:
            raise ValueError(f"Unknown environment: {other}")

    return RecruitingConfig(
        env=env,
        reporting=reporting,
        log_level=log_level,
    )


def get_env_config(pyproject: Path | None = None) -> ConfigDict:
    """Read recruiting settings from ``[tool.recruiting]`` in pyproject.toml."""
    pyproject = pyproject or PROJECT_ROOT / "pyproject.toml"
    if not pyproject.exists():
        return {}
    with open(pyproject, "rb") as f:
        data = tomllib.load(f)
    return data.get("tool", {}).get("recruiting", {})


def load_settings(root: Path | None = None) -> ConfigDict:
    """Settings from ``recruiting.yaml`` when present, else pyproject.toml."""
    root = root or PROJECT_ROOT
    config_path = root / "recruiting.yaml"
    if config_path.exists():
        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    return get_env_config(root / "pyproject.toml")


def resolve_config(env: str | None = None, root: Path | None = None) -> RecruitingConfig:
    """Environment defaults with any reporting overrides from the settings file."""
    settings = load_settings(root)
    config = load_config(env or str(settings.get("env", "production")))

    overrides = {}
    for f in fields(ReportingConfig):
        if f.name in settings:
            value = settings[f.name]
            overrides[f.name] = Path(value) if f.name == "output_dir" else value
    if overrides:
        config = replace(config, reporting=replace(config.reporting, **overrides))
    return config
