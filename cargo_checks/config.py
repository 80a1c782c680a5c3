"""
config.py

Responsibility: Load optional settings for a check run into a typed model.

This implementation intentionally stays small:
- Settings come from a YAML file named explicitly by the caller; without one
  the defaults apply and nothing on disk is consulted.
- Only the cargo program and the working directory can be chosen; the steps
  themselves are fixed in `steps.py`.
- No environment variables are read.

The CLI applies its own overrides on top of the loaded `Settings`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from cargo_checks.steps import DEFAULT_CARGO

_KNOWN_KEYS = frozenset({"cargo", "workdir"})


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    """Resolved settings for a run. `workdir=None` means the caller's directory."""

    cargo: str = DEFAULT_CARGO
    workdir: Path | None = None

    def with_overrides(self, *, cargo: str | None = None, workdir: str | Path | None = None) -> Settings:
        """
        Return a copy with CLI-level overrides applied (None leaves a value as is).
        """
        out = self
        if cargo is not None:
            if not cargo.strip():
                raise ConfigError("`cargo` cannot be empty.")
            out = replace(out, cargo=cargo.strip())
        if workdir is not None:
            out = replace(out, workdir=Path(workdir).resolve())
        return out


def _read_yaml_mapping(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must be a mapping/object at the top level.")
    return data


def parse_settings(data: dict[str, Any], *, base_dir: Path) -> Settings:
    """
    Build `Settings` from an already-decoded mapping.

    Relative `workdir` values are resolved against `base_dir` (the directory
    holding the config file).
    """
    unknown = sorted(str(k) for k in data if k not in _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")

    cargo_raw = data.get("cargo", DEFAULT_CARGO)
    if not isinstance(cargo_raw, str) or not cargo_raw.strip():
        raise ConfigError("`cargo` must be a non-empty string when provided.")

    workdir: Path | None = None
    workdir_raw = data.get("workdir")
    if workdir_raw is not None:
        if not isinstance(workdir_raw, str) or not workdir_raw.strip():
            raise ConfigError("`workdir` must be a non-empty string when provided.")
        workdir = (base_dir / workdir_raw.strip()).resolve()

    return Settings(cargo=cargo_raw.strip(), workdir=workdir)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """
    Load settings for a run.

    `config_path=None` returns the defaults; a given path must exist.
    """
    if config_path is None:
        return Settings()
    path = Path(config_path)
    if not path.is_file():
        raise ConfigError(f"Config file does not exist: {path}")

    data = _read_yaml_mapping(path)
    return parse_settings(data, base_dir=path.resolve().parent)
