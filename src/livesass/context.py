"""Validated source/output directory pairing.

A ``Context`` is the single source of truth for where stylesheets are read
from and where compiled CSS is written to.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from livesass.exceptions import ConfigError
from livesass.registry import default_registry

if TYPE_CHECKING:
    from livesass.compiler.base import BaseSassCompiler
    from livesass.config import LivesassConfig

__all__ = ["Context"]

logger = logging.getLogger(__name__)


def _normalize(path: Path, label: str, *, strict: bool) -> Path:
    try:
        resolved = path.expanduser().resolve(strict=strict)
    except (OSError, RuntimeError) as e:
        logger.error("Invalid %s directory '%s': %s", label, path, e)
        raise ConfigError(f"Invalid {label} directory '{path}': {e}") from e
    return resolved


@dataclass(frozen=True)
class Context:
    """Configuration shared by the compile and write passes.

    Both directories are absolute and normalized. Build instances with
    :meth:`initialize` (or :meth:`from_config`) rather than directly.
    """

    sass_dir: Path
    css_dir: Path
    backend: BaseSassCompiler

    @classmethod
    def initialize(
        cls,
        sass_dir: Path | str,
        css_dir: Path | str,
        backend: BaseSassCompiler,
    ) -> Context:
        """Create a ``Context`` while checking for bad configuration.

        The source directory must exist. The output directory may be
        missing; it is created by the first write pass.

        Raises:
            ConfigError: If either directory cannot be normalized, the
                source directory is not a directory, or the output directory
                lies inside the source directory.
        """
        sass_path = _normalize(Path(sass_dir), "sass", strict=True)
        if not sass_path.is_dir():
            logger.error("Invalid sass directory '%s': not a directory", sass_dir)
            raise ConfigError(f"Invalid sass directory '{sass_dir}': not a directory")

        css_path = _normalize(Path(css_dir), "css", strict=False)
        if css_path.exists() and not css_path.is_dir():
            logger.error("Invalid css directory '%s': not a directory", css_dir)
            raise ConfigError(f"Invalid css directory '{css_dir}': not a directory")

        # Writes under the watched tree queue change events of their own.
        if css_path == sass_path or sass_path in css_path.parents:
            logger.error(
                "Invalid css directory '%s': inside sass directory '%s'", css_dir, sass_dir
            )
            raise ConfigError(
                f"Invalid css directory '{css_dir}': inside sass directory '{sass_dir}'"
            )

        return cls(sass_dir=sass_path, css_dir=css_path, backend=backend)

    @classmethod
    def from_config(cls, config: LivesassConfig, root: Path | None = None) -> Context:
        """Build a ``Context`` from loaded configuration.

        Relative directories are taken relative to ``root`` (default: the
        current working directory).
        """
        base = root or Path.cwd()
        backend = default_registry.create(config.compiler.backend, config.compiler)
        return cls.initialize(
            base / config.paths.sass_dir,
            base / config.paths.css_dir,
            backend,
        )
