"""Full-tree compile and write-back passes.

``compile_all`` walks the source directory and compiles every regular file;
``write_compiled`` persists the result under the output directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from livesass.config import ON_ERROR_MODES
from livesass.exceptions import CompileError, ConfigError, WriteError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from livesass.context import Context

__all__ = ["compile_all", "iter_source_files", "output_path", "write_compiled"]

logger = logging.getLogger(__name__)


def iter_source_files(root: Path) -> Iterator[Path]:
    """Yield every regular file under ``root`` in sorted walk order.

    Symlinks are not followed and are never yielded. Directories that
    cannot be read are skipped silently.
    """
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if path.is_symlink() or not path.is_file():
                continue
            yield path


def compile_all(
    context: Context,
    *,
    on_error: str = "abort",
    flatten: bool = True,
    logger: logging.Logger = logger,
) -> dict[str, str]:
    """Compile every file under ``context.sass_dir``.

    Args:
        context: Directories and backend to use.
        on_error: ``"abort"`` stops the walk at the first compile failure
            and returns what was compiled so far; ``"continue"`` skips the
            failing file and keeps going. Failures are logged either way.
        flatten: Key results by base name (later files overwrite earlier
            ones with the same name) instead of by relative path.
        logger: Logger receiving compile diagnostics.

    Returns:
        Mapping from source name to compiled CSS text.

    Raises:
        ConfigError: If ``on_error`` is not a known mode.
    """
    if on_error not in ON_ERROR_MODES:
        raise ConfigError(
            f"Invalid on_error {on_error!r} (expected one of: {', '.join(ON_ERROR_MODES)})"
        )

    compiled: dict[str, str] = {}

    for path in iter_source_files(context.sass_dir):
        if flatten:
            key = path.name
        else:
            key = PurePosixPath(path.relative_to(context.sass_dir)).as_posix()
        try:
            result = context.backend.compile(path)
        except CompileError as e:
            logger.error("Failed to compile file '%s'", key)
            logger.error("Sass error: %s", e.diagnostic)
            if on_error == "abort":
                break
            continue

        if key in compiled:
            logger.debug("Duplicate source name '%s', keeping %s", key, path)
        compiled[key] = result

    logger.debug("Compiled %d file(s) from %s", len(compiled), context.sass_dir)
    return compiled


def output_path(name: str, css_dir: Path, target_extension: str = "css") -> Path:
    """Return where the compiled form of source ``name`` is written."""
    return (css_dir / name).with_suffix("." + target_extension.lstrip("."))


def write_compiled(
    compiled: dict[str, str],
    context: Context,
    *,
    target_extension: str = "css",
    logger: logging.Logger = logger,
) -> list[Path]:
    """Write compiled stylesheets into ``context.css_dir``.

    Existing files are truncated. Missing parent directories are created.

    Returns:
        Paths of the files written.

    Raises:
        WriteError: If any file cannot be created or written. The pass
            stops at the first failure.
    """
    written: list[Path] = []

    for name, css in compiled.items():
        css_path = output_path(name, context.css_dir, target_extension)
        try:
            css_path.parent.mkdir(parents=True, exist_ok=True)
            with css_path.open("wb") as f:
                f.write(css.encode("utf-8"))
        except OSError as e:
            logger.error("Failed to write css file '%s': %s", css_path, e)
            raise WriteError(css_path, str(e)) from e
        written.append(css_path)

    logger.info("Wrote %d css file(s) to %s", len(written), context.css_dir)
    return written
