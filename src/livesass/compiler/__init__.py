"""Stylesheet compiler backends that compile one file to CSS text."""

from __future__ import annotations

from typing import TYPE_CHECKING

from livesass.compiler.base import BaseSassCompiler
from livesass.compiler.dart import DartSassCompiler
from livesass.compiler.libsass import LibSassCompiler
from livesass.registry import default_registry

if TYPE_CHECKING:
    from pathlib import Path

__all__ = [
    "BaseSassCompiler",
    "DartSassCompiler",
    "LibSassCompiler",
    "compile_file",
]


def compile_file(path: Path, backend: BaseSassCompiler) -> str:
    """Compile a single stylesheet with ``backend`` and return the CSS text."""
    return backend.compile(path)


# Register built-in compiler backends
default_registry.register("libsass", lambda cfg: LibSassCompiler(cfg.output_style))
default_registry.register("dart-sass", lambda cfg: DartSassCompiler(cfg.executable))
