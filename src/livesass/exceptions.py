"""Custom exception hierarchy for livesass."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

__all__ = [
    "CompileError",
    "ConfigError",
    "LivesassError",
    "PluginError",
    "WatchError",
    "WriteError",
]


class LivesassError(Exception):
    """Base exception for all livesass errors."""


class ConfigError(LivesassError):
    """Raised when configuration loading or path validation fails."""


class CompileError(LivesassError):
    """Raised when a single stylesheet fails to compile."""

    def __init__(self, path: Path, diagnostic: str) -> None:
        super().__init__(f"Failed to compile {path}: {diagnostic}")
        self.path = path
        self.diagnostic = diagnostic


class WriteError(LivesassError):
    """Raised when a compiled stylesheet cannot be written."""

    def __init__(self, path: Path, cause: str) -> None:
        super().__init__(f"Failed to write {path}: {cause}")
        self.path = path


class WatchError(LivesassError):
    """Raised when a filesystem watch cannot be established."""


class PluginError(LivesassError):
    """Raised when compiler backend lookup or registration fails."""
