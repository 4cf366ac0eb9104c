"""
Configuration for gltf1.

All tunable parameters in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/gltf1/config.toml) if exists
3. Environment variables (GLTF1_*) override file
4. CLI flags override everything
"""

from __future__ import annotations

import contextlib
import logging
import os
import tomllib  # stdlib in 3.11+
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class ParseConfig:
    """Validation strictness. Both default to the permissive glTF 1.0 reader behavior."""
    strict_fixed_arrays: bool = False  # reject matrices/vectors of the wrong length
    strict_parameter_arrays: bool = False  # reject mixed-type parameter value arrays


@dataclass
class OutputConfig:
    """CLI rendering settings."""
    max_rows: int = 50


@dataclass
class Config:
    """Root config with all settings."""
    parse: ParseConfig = field(default_factory=ParseConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "gltf1" / "config.toml"
    return Path.home() / ".config" / "gltf1" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, ValueError, TypeError) as e:
            logger.warning("Ignoring config file %s: %s", path, e)
            config = Config()

    # env var overrides
    config = _apply_env(config)

    return config


def _to_bool(value) -> bool:
    """Accept real booleans and the strings "true", "1", "yes" in any case."""
    if isinstance(value, bool):
        return value
    return str(value).lower() in ("true", "1", "yes")


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config."""
    if "parse" in data:
        p = data["parse"]
        if "strict_fixed_arrays" in p:
            config.parse.strict_fixed_arrays = _to_bool(p["strict_fixed_arrays"])
        if "strict_parameter_arrays" in p:
            config.parse.strict_parameter_arrays = _to_bool(p["strict_parameter_arrays"])

    if "output" in data:
        o = data["output"]
        if "max_rows" in o:
            config.output.max_rows = int(o["max_rows"])

    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, Callable[[str], object]]] = {
        "GLTF1_STRICT_FIXED_ARRAYS": ("parse", "strict_fixed_arrays", _to_bool),
        "GLTF1_STRICT_PARAMETER_ARRAYS": ("parse", "strict_parameter_arrays", _to_bool),
        "GLTF1_MAX_ROWS": ("output", "max_rows", int),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError, AttributeError):
                setattr(getattr(config, section), attr, conv(val))

    return config


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
