"""Lifecycle adapter for hosting applications.

Maps the three hooks a web framework usually offers (startup, ready, per
request) onto ``ContextManager`` operations without depending on any
particular framework.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from livesass.config import default_config
from livesass.context import Context
from livesass.exceptions import LivesassError
from livesass.manager import ContextManager
from livesass.watcher import watch

if TYPE_CHECKING:
    from collections.abc import Callable

    from livesass.config import LivesassConfig
    from livesass.watcher import WatchSubscription

__all__ = ["SassHost"]

logger = logging.getLogger(__name__)


def _display(path: Path, root: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        return path


class SassHost:
    """Drives a ``ContextManager`` from framework lifecycle hooks.

    Usage::

        host = SassHost(load_config(Path("livesass.toml")))
        host.on_startup()      # abort launch on ConfigError
        host.on_ready()        # first compile pass
        host.on_request()      # per request, development only
    """

    def __init__(
        self,
        config: LivesassConfig | None = None,
        *,
        watch_factory: Callable[..., WatchSubscription] | None = None,
    ) -> None:
        self.config = config or default_config()
        self._watch_factory = watch_factory
        self._root = Path.cwd()
        self._manager: ContextManager | None = None

    @property
    def manager(self) -> ContextManager:
        if self._manager is None:
            raise LivesassError("SassHost.on_startup() has not been called")
        return self._manager

    def on_startup(self, root: Path | None = None) -> ContextManager:
        """Validate configuration and create the manager.

        Raises:
            ConfigError: If the configured directories are invalid. The
                host must not continue launching.
            PluginError: If the configured backend is unknown.
        """
        self._root = (root or Path.cwd()).resolve()
        try:
            context = Context.from_config(self.config, self._root)
        except LivesassError:
            logger.error("Sass initialization failed. Aborting launch.")
            raise

        self._manager = ContextManager(
            context,
            live_reload=self.config.reload.enabled,
            on_error=self.config.reload.on_error,
            flatten=self.config.reload.flatten,
            target_extension=self.config.compiler.target_extension,
            watch_factory=self._watch_factory or watch,
        )
        return self._manager

    def on_ready(self) -> list[Path]:
        """Log the configured directories and run the first compile pass."""
        manager = self.manager
        with manager.context() as ctx:
            logger.info("Sass:")
            logger.info("  sass directory: %s", _display(ctx.sass_dir, self._root))
            logger.info("  css directory: %s", _display(ctx.css_dir, self._root))
            logger.info("  backend: %s", ctx.backend.name)
        logger.info("  live reload: %s", "on" if manager.is_reloading() else "off")

        logger.info("Pre-compiling sass files")
        return manager.compile_all_and_write()

    def on_request(self) -> bool:
        """Recompile if sources changed since the last call."""
        if not self.config.reload.enabled:
            return False
        return self.manager.reload_if_needed()

    def shutdown(self) -> None:
        if self._manager is not None:
            self._manager.close()
