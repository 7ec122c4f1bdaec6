"""Configuration loading: layered TOML files plus environment overrides.

Layers, lowest priority first:
    1. Model defaults
    2. ``$XDG_CONFIG_HOME/remodern/config.toml`` (``~/.config`` fallback)
    3. ``./remodern.toml``
    4. The file named by ``$REMODERN_CONFIG``
    5. The ``path`` passed to :func:`load_config` (``--config``)
    6. ``$REMODERN_LOG_LEVEL``
    7. Programmatic overrides
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from remodern.core.errors import ConfigError

from .schema import RemodernConfig


def _optional_layers() -> list[Path]:
    """Config files that apply only when present."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    user_dir = Path(xdg) if xdg else Path.home() / ".config"
    candidates = [user_dir / "remodern" / "config.toml", Path.cwd() / "remodern.toml"]
    return [p for p in candidates if p.is_file()]


def _required_layer(path: str | Path, what: str) -> Path:
    p = Path(path)
    if not p.is_file():
        msg = f"{what} not found: {path}"
        raise ConfigError(msg)
    return p


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Override wins on conflicts."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _env_overrides() -> dict[str, Any]:
    level = os.environ.get("REMODERN_LOG_LEVEL")
    if level:
        return {"logging": {"level": level}}
    return {}


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> RemodernConfig:
    """Load and validate configuration.

    Raises:
        ConfigError: On a missing required file, invalid TOML, or a
            value the schema rejects.
    """
    files = _optional_layers()
    env_path = os.environ.get("REMODERN_CONFIG")
    if env_path:
        files.append(_required_layer(env_path, "REMODERN_CONFIG file"))
    if path is not None:
        files.append(_required_layer(path, "Config file"))

    merged: dict[str, Any] = {}
    for config_file in files:
        merged = _deep_merge(merged, _read_toml(config_file))
    merged = _deep_merge(merged, _env_overrides())
    if overrides:
        merged = _deep_merge(merged, overrides)

    try:
        return RemodernConfig.model_validate(merged)
    except ValidationError as e:
        msg = f"Configuration validation failed: {e}"
        raise ConfigError(msg) from e
