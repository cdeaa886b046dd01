"""Concurrency-safe facade over the compile, write and watch passes.

A hosting application creates one ``ContextManager`` at startup, calls
:meth:`ContextManager.compile_all_and_write` once, then calls
:meth:`ContextManager.reload_if_needed` on every request or timer tick.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

from livesass.config import ON_ERROR_MODES
from livesass.exceptions import ConfigError, WatchError
from livesass.locks import ReadWriteLock
from livesass.tree import compile_all, write_compiled
from livesass.watcher import watch

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from livesass.context import Context
    from livesass.watcher import WatchSubscription

__all__ = ["ContextManager", "ContextSlot"]


class ContextSlot:
    """Mutable holder handed out by :meth:`ContextManager.context_mut`.

    Assigning ``slot.context`` replaces the configuration for every later
    compile pass. The watch subscription is not moved to the new source
    directory.
    """

    def __init__(self, context: Context) -> None:
        self.context = context


class ContextManager:
    """Owns a ``Context`` and keeps the output directory up to date.

    The ``Context`` sits behind a reader/writer lock: compile passes read it
    concurrently, :meth:`context_mut` takes it exclusively.

    Live reload is decided once, here: if ``live_reload`` is set and the
    watch can be established, :meth:`reload_if_needed` recompiles after
    changes; otherwise it is a permanent no-op.

    ``watch_factory`` is called as ``watch_factory(sass_dir, logger=logger)``,
    so the injected logger also receives the watcher's messages. Compiler
    backends are built before the manager and keep their module loggers.

    Usage::

        manager = ContextManager(Context.initialize("static/sass", "static/css", backend))
        manager.compile_all_and_write()
        ...
        manager.reload_if_needed()  # on each request
    """

    def __init__(
        self,
        context: Context,
        *,
        live_reload: bool = True,
        on_error: str = "abort",
        flatten: bool = True,
        target_extension: str = "css",
        logger: logging.Logger | None = None,
        watch_factory: Callable[..., WatchSubscription] = watch,
    ) -> None:
        if on_error not in ON_ERROR_MODES:
            raise ConfigError(
                f"Invalid on_error {on_error!r} (expected one of: {', '.join(ON_ERROR_MODES)})"
            )
        self._slot = ContextSlot(context)
        self._lock = ReadWriteLock()
        self._reload_gate = threading.Lock()
        self._on_error = on_error
        self._flatten = flatten
        self._target_extension = target_extension
        self._logger = logger or logging.getLogger(__name__)
        self._watcher: WatchSubscription | None = None

        if live_reload:
            try:
                self._watcher = watch_factory(context.sass_dir, logger=self._logger)
            except WatchError as e:
                self._logger.warning("Failed to enable live sass compiling: %s", e)
                self._logger.debug("Reload error: %r", e)
                self._logger.warning("Live sass compiling is unavailable.")

    @contextmanager
    def context(self) -> Iterator[Context]:
        """Yield the current ``Context`` under a shared read lock."""
        with self._lock.read():
            yield self._slot.context

    @contextmanager
    def context_mut(self) -> Iterator[ContextSlot]:
        """Yield the ``ContextSlot`` under the exclusive write lock."""
        with self._lock.write():
            yield self._slot

    def compile_all(self) -> dict[str, str]:
        """Compile every file in the source directory."""
        with self.context() as ctx:
            return self._compile(ctx)

    def write_compiled(self, compiled: dict[str, str]) -> list[Path]:
        """Write compiled files to the output directory.

        Raises:
            WriteError: If any output file cannot be written.
        """
        with self.context() as ctx:
            return self._write(compiled, ctx)

    def compile_all_and_write(self) -> list[Path]:
        """Shorthand for ``compile_all`` + ``write_compiled`` in one read lock.

        Raises:
            WriteError: If any output file cannot be written.
        """
        with self.context() as ctx:
            return self._write(self._compile(ctx), ctx)

    def is_reloading(self) -> bool:
        """Return ``True`` if live reload is active."""
        return self._watcher is not None

    def reload_if_needed(self) -> bool:
        """Recompile everything if the source directory changed.

        Concurrent callers are coalesced: while one pass runs, other callers
        return immediately and leave queued changes for the next call.

        Returns:
            ``True`` if this call ran a compile pass.
        """
        if self._watcher is None:
            return False

        if not self._reload_gate.acquire(blocking=False):
            return False
        try:
            if self._watcher.pending_count() == 0:
                return False
            self._logger.info("Change detected: compiling sass files.")
            self.compile_all_and_write()
            return True
        finally:
            self._reload_gate.release()

    def close(self) -> None:
        """Tear down the watch subscription, if any."""
        if self._watcher is not None:
            self._watcher.close()

    def __enter__(self) -> ContextManager:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _compile(self, ctx: Context) -> dict[str, str]:
        return compile_all(
            ctx, on_error=self._on_error, flatten=self._flatten, logger=self._logger
        )

    def _write(self, compiled: dict[str, str], ctx: Context) -> list[Path]:
        return write_compiled(
            compiled, ctx, target_extension=self._target_extension, logger=self._logger
        )
