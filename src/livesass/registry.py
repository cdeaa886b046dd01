"""Compiler backend registry for livesass.

Maps config strings to factory functions that create backend instances.
Example: ``registry.create("libsass", compiler_config)`` → ``LibSassCompiler``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from livesass.exceptions import PluginError

if TYPE_CHECKING:
    from collections.abc import Callable

    from livesass.compiler.base import BaseSassCompiler
    from livesass.config import CompilerConfig

__all__ = ["CompilerRegistry", "default_registry"]

logger = logging.getLogger(__name__)


class CompilerRegistry:
    """Config-driven factory that maps a backend name to a compiler instance.

    When ``auto_discover`` is ``True``, the first lookup triggers a lazy
    import of ``livesass.compiler`` so that the built-in backends are
    registered without requiring an explicit import.

    Usage::

        registry = CompilerRegistry()
        registry.register("libsass", lambda cfg: LibSassCompiler(cfg.output_style))
        compiler = registry.create("libsass", config.compiler)
    """

    def __init__(self, *, auto_discover: bool = False) -> None:
        self._factories: dict[str, Callable[[CompilerConfig], BaseSassCompiler]] = {}
        self._auto_discover = auto_discover
        self._discovered = False

    def register(
        self,
        name: str,
        factory: Callable[[CompilerConfig], BaseSassCompiler],
    ) -> None:
        """Register a backend factory.

        Args:
            name: Backend name (e.g. "libsass", "dart-sass").
            factory: Callable that accepts ``CompilerConfig`` and returns a backend.

        Raises:
            PluginError: If a backend with the same name already exists.
        """
        if name in self._factories:
            raise PluginError(f"Compiler backend '{name}' already registered")

        self._factories[name] = factory
        logger.debug("Registered compiler backend %s", name)

    def _ensure_discovered(self) -> None:
        """Lazily import built-in backend modules on first use."""
        if self._discovered or not self._auto_discover:
            return
        self._discovered = True
        import livesass.compiler  # noqa: F401  (registers built-in backends)

    def create(self, name: str, config: CompilerConfig) -> BaseSassCompiler:
        """Create a backend instance from the registry.

        Raises:
            PluginError: If the name is not registered.
        """
        self._ensure_discovered()

        if name not in self._factories:
            raise PluginError(
                f"Unknown compiler backend '{name}'. Available: {sorted(self._factories)}"
            )

        logger.info("Creating compiler backend %s", name)
        return self._factories[name](config)

    def list_backends(self) -> list[str]:
        """List registered backend names."""
        self._ensure_discovered()
        return sorted(self._factories)

    def has_backend(self, name: str) -> bool:
        """Check whether a backend is registered."""
        self._ensure_discovered()
        return name in self._factories


default_registry = CompilerRegistry(auto_discover=True)
