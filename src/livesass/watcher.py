"""Filesystem change subscription for live reload.

Wraps a ``watchdog`` observer that queues one signal per content-changing
event under the source directory. Consumers only ask whether anything
changed; which file changed is discarded.
"""

from __future__ import annotations

import logging
import queue
import threading
from pathlib import Path

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from livesass.exceptions import WatchError

__all__ = ["WatchSubscription", "watch"]

logger = logging.getLogger(__name__)

# Opened/closed-without-write events fire while the compile pass reads
# sources; counting them would retrigger compilation forever.
_CHANGE_EVENTS = frozenset(
    {EVENT_TYPE_CREATED, EVENT_TYPE_DELETED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED}
)


class _QueueingHandler(FileSystemEventHandler):
    def __init__(self, events: queue.SimpleQueue[str]) -> None:
        super().__init__()
        self._events = events

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type in _CHANGE_EVENTS:
            self._events.put(event.event_type)


class WatchSubscription:
    """An active recursive watch plus its queue of unconsumed change signals."""

    def __init__(
        self,
        directory: Path,
        *,
        recursive: bool = True,
        logger: logging.Logger = logger,
    ) -> None:
        self.directory = directory
        self._logger = logger
        self._events: queue.SimpleQueue[str] = queue.SimpleQueue()
        self._drain_lock = threading.Lock()
        self._closed = False
        self._observer = Observer()
        self._observer.daemon = True
        self._observer.schedule(
            _QueueingHandler(self._events), str(directory), recursive=recursive
        )
        self._observer.start()

    @property
    def is_alive(self) -> bool:
        return self._observer.is_alive()

    def pending_count(self) -> int:
        """Consume every queued change signal and return how many there were.

        Never blocks waiting for new events. Only one caller drains at a
        time, so each signal is counted exactly once.
        """
        count = 0
        with self._drain_lock:
            while True:
                try:
                    self._events.get_nowait()
                except queue.Empty:
                    break
                count += 1
        return count

    def close(self) -> None:
        """Stop the observer thread. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._observer.stop()
        self._observer.join()
        self._logger.debug("Stopped watching %s", self.directory)

    def __enter__(self) -> WatchSubscription:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def watch(
    directory: Path,
    recursive: bool = True,
    *,
    logger: logging.Logger = logger,
) -> WatchSubscription:
    """Start watching ``directory`` for changes.

    ``logger`` receives the subscription's lifecycle messages.

    Raises:
        WatchError: If the directory is missing or the platform refuses the
            watch (descriptor limits, permissions).
    """
    if not directory.is_dir():
        raise WatchError(f"Cannot watch {directory}: not a directory")
    try:
        subscription = WatchSubscription(directory, recursive=recursive, logger=logger)
    except (OSError, RuntimeError) as e:
        raise WatchError(f"Cannot watch {directory}: {e}") from e
    logger.info("Watching %s for changes", directory)
    return subscription
