"""External-process backend running the Dart Sass executable."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from livesass.compiler.base import BaseSassCompiler
from livesass.exceptions import CompileError

if TYPE_CHECKING:
    from pathlib import Path

__all__ = ["DartSassCompiler"]

logger = logging.getLogger(__name__)


class DartSassCompiler(BaseSassCompiler):
    """Compiles stylesheets by invoking ``<executable> <path>``.

    The compiled stylesheet is read from standard output. Anything the
    compiler writes to standard error is logged as a warning, whatever the
    exit status; a non-zero exit is then reported as a ``CompileError``.
    """

    name = "dart-sass"

    def __init__(self, executable: str = "sass") -> None:
        self.executable = executable

    def compile(self, path: Path) -> str:
        try:
            proc = subprocess.run(  # noqa: S603
                [self.executable, str(path)],
                capture_output=True,
                check=False,
            )
        except OSError as e:
            raise CompileError(path, f"could not run {self.executable!r}: {e}") from e

        stderr = proc.stderr.decode("utf-8", errors="replace").strip()
        if stderr:
            logger.warning("Dart Sass stderr for %s: %s", path.name, stderr)

        if proc.returncode != 0:
            raise CompileError(path, stderr or f"{self.executable} exited with {proc.returncode}")

        return proc.stdout.decode("utf-8", errors="replace")
