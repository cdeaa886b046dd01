"""Configuration system for livesass.

Manages configuration via livesass.toml with typed dataclasses
and sensible defaults for all values.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, TypeVar

import tomli_w

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from livesass.exceptions import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

_T = TypeVar("_T")

__all__ = [
    "CONFIG_FILE",
    "DEFAULT_CSS_DIR",
    "DEFAULT_SASS_DIR",
    "ON_ERROR_MODES",
    "CompilerConfig",
    "LivesassConfig",
    "PathsConfig",
    "ReloadConfig",
    "default_config",
    "load_config",
    "save_config",
]

logger = logging.getLogger(__name__)

CONFIG_FILE = "livesass.toml"
DEFAULT_SASS_DIR = "static/sass"
DEFAULT_CSS_DIR = "static/css"
ON_ERROR_MODES = ("abort", "continue")


@dataclass
class PathsConfig:
    """[paths] section."""

    sass_dir: str = DEFAULT_SASS_DIR
    css_dir: str = DEFAULT_CSS_DIR


@dataclass
class CompilerConfig:
    """[compiler] section."""

    backend: str = "libsass"
    output_style: str = "nested"
    executable: str = "sass"
    target_extension: str = "css"


@dataclass
class ReloadConfig:
    """[reload] section."""

    enabled: bool = True
    on_error: str = "abort"
    flatten: bool = True


@dataclass
class LivesassConfig:
    """Root configuration combining all sections."""

    paths: PathsConfig = field(default_factory=PathsConfig)
    compiler: CompilerConfig = field(default_factory=CompilerConfig)
    reload: ReloadConfig = field(default_factory=ReloadConfig)


_SECTIONS: dict[str, type] = {
    "paths": PathsConfig,
    "compiler": CompilerConfig,
    "reload": ReloadConfig,
}


def default_config() -> LivesassConfig:
    """Return a config with all default values."""
    return LivesassConfig()


def _config_to_dict(config: LivesassConfig) -> dict[str, object]:
    """Convert LivesassConfig to a nested dict suitable for TOML serialization."""
    return {name: dict(vars(getattr(config, name))) for name in _SECTIONS}


def save_config(config: LivesassConfig, path: Path) -> None:
    """Save configuration to a TOML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = _config_to_dict(config)
    try:
        with path.open("wb") as f:
            tomli_w.dump(data, f)
        logger.info("Saved config to %s", path)
    except OSError as e:
        logger.error("Failed to save config to %s: %s", path, e)
        raise ConfigError(f"Failed to save config to {path}: {e}") from e


def _load_section(cls: type[_T], data: dict[str, object]) -> _T:
    """Load a dataclass section from a dict, ignoring unknown keys."""
    known_fields = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
    filtered = {k: v for k, v in data.items() if k in known_fields}
    return cls(**filtered)


def _check_types(config: LivesassConfig) -> None:
    """Reject values whose type differs from the field default (e.g. "false" for a bool)."""
    for name in _SECTIONS:
        section = getattr(config, name)
        for f in fields(section):
            value = getattr(section, f.name)
            expected = type(f.default)
            if type(value) is not expected:
                raise ConfigError(
                    f"Invalid {name}.{f.name} {value!r} (expected {expected.__name__})"
                )


def _validate(config: LivesassConfig) -> None:
    _check_types(config)
    if config.reload.on_error not in ON_ERROR_MODES:
        raise ConfigError(
            f"Invalid reload.on_error {config.reload.on_error!r} "
            f"(expected one of: {', '.join(ON_ERROR_MODES)})"
        )
    if not config.compiler.target_extension.strip("."):
        raise ConfigError("compiler.target_extension must not be empty")


def load_config(path: Path) -> LivesassConfig:
    """Load configuration from a TOML file.

    Missing sections or keys get default values.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_bytes()
        data = tomllib.loads(raw.decode("utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    config = LivesassConfig()
    for name, cls in _SECTIONS.items():
        if name not in data:
            continue
        if not isinstance(data[name], dict):
            logger.error("Invalid '%s' section in %s: not a table", name, path)
            raise ConfigError(f"Invalid '{name}' section in {path}: expected a table")
        setattr(config, name, _load_section(cls, data[name]))

    _validate(config)
    logger.info("Loaded config from %s", path)
    return config
