"""In-process backend using the libsass bindings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import sass

from livesass.compiler.base import BaseSassCompiler
from livesass.exceptions import CompileError, ConfigError

if TYPE_CHECKING:
    from pathlib import Path

__all__ = ["OUTPUT_STYLES", "LibSassCompiler"]

logger = logging.getLogger(__name__)

OUTPUT_STYLES = frozenset({"nested", "expanded", "compact", "compressed"})


class LibSassCompiler(BaseSassCompiler):
    """Compiles stylesheets in-process with ``sass.compile``."""

    name = "libsass"

    def __init__(self, output_style: str = "nested") -> None:
        if output_style not in OUTPUT_STYLES:
            raise ConfigError(
                f"unknown output style {output_style!r} "
                f"(expected one of: {', '.join(sorted(OUTPUT_STYLES))})"
            )
        self.output_style = output_style

    def compile(self, path: Path) -> str:
        try:
            return sass.compile(filename=str(path), output_style=self.output_style)
        except (sass.CompileError, OSError) as e:
            raise CompileError(path, str(e)) from e
