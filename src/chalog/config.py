"""Configuration helpers for chalog."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Literal, MutableMapping, cast

import yaml

TargetType = Literal["file", "stdout"]

TARGET_FILE: TargetType = "file"
TARGET_STDOUT: TargetType = "stdout"
TARGET_CHOICES: tuple[TargetType, ...] = (TARGET_FILE, TARGET_STDOUT)

DEFAULT_CONFIG_PATH = Path(".chalog.yml")
DEFAULT_INPUT_DIR = Path(".changelog")
DEFAULT_OUTPUT = Path("CHANGELOG.md")
DEFAULT_REPO = ""
DEFAULT_UNRELEASED = "Unreleased"
DEFAULT_PREAMBLE = """# Changelog
All notable changes to this project will be documented in this file.

The format is based on [Keep a Changelog](https://keepachangelog.com/en/1.0.0/), and this project adheres to [Semantic
Versioning](https://semver.org/spec/v2.0.0.html).
"""

_STRING_KEYS = ("repo", "unreleased")
_PATH_KEYS = {"in": "input_dir", "out": "output"}


@dataclass
class Config:
    """Structured representation of the chalog config."""

    input_dir: Path = DEFAULT_INPUT_DIR
    output: Path = DEFAULT_OUTPUT
    repo: str = DEFAULT_REPO
    unreleased: str = DEFAULT_UNRELEASED
    preamble: str = DEFAULT_PREAMBLE
    target: TargetType = TARGET_FILE
    preamble_file: Path | None = field(default=None, compare=False)


def parse_target(value: object, *, source: str = "Config option 'target'") -> TargetType:
    """Validate an output target name."""
    if not isinstance(value, str):
        raise ValueError(f"{source} must be a string.")
    normalized = value.strip().lower()
    if normalized not in TARGET_CHOICES:
        allowed = ", ".join(TARGET_CHOICES)
        raise ValueError(f"{source} must be one of: {allowed}")
    return cast(TargetType, normalized)


def read_preamble(path: Path) -> str:
    """Return the preamble text stored in a file."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ValueError(f"Preamble file not found: {path}") from exc


def config_from_mapping(raw: MutableMapping[str, Any], *, base_dir: Path | None = None) -> Config:
    """Build a Config from a parsed YAML mapping, applying defaults."""
    values: dict[str, Any] = {}
    for key in _STRING_KEYS:
        value = raw.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ValueError(f"Config option '{key}' must be a string.")
        values[key] = value.strip()

    for key, attribute in _PATH_KEYS.items():
        value = raw.get(key)
        if value is None:
            continue
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Config option '{key}' must be a non-empty path.")
        values[attribute] = Path(value.strip())

    target_raw = raw.get("target")
    if target_raw is not None:
        values["target"] = parse_target(target_raw)

    preamble_raw = raw.get("preamble")
    if preamble_raw is not None:
        if not isinstance(preamble_raw, str) or not preamble_raw.strip():
            raise ValueError("Config option 'preamble' must be a path to a file.")
        preamble_path = Path(preamble_raw.strip())
        if base_dir is not None and not preamble_path.is_absolute():
            preamble_path = base_dir / preamble_path
        values["preamble_file"] = preamble_path
        values["preamble"] = read_preamble(preamble_path)

    return Config(**values)


def load_config(path: Path) -> Config:
    """Load the configuration from disk."""
    with path.open("r", encoding="utf-8") as handle:
        try:
            raw = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Failed to parse config '{path}': {exc}") from exc
    if not isinstance(raw, MutableMapping):
        raise ValueError("Config root must be a mapping")
    return config_from_mapping(raw, base_dir=path.parent)


def load_config_if_present(path: Path) -> Config:
    """Load the configuration, falling back to defaults when the file is missing."""
    if not path.exists():
        return Config()
    return load_config(path)


def apply_overrides(config: Config, overrides: dict[str, Any]) -> Config:
    """Return a copy of `config` with the given non-None fields replaced."""
    known = {item.name for item in fields(Config)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(f"Unknown config field(s): {', '.join(unknown)}")
    updates = {key: value for key, value in overrides.items() if value is not None}
    return replace(config, **updates)
