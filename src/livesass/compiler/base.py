"""Abstract base class for stylesheet compiler backends."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

__all__ = ["BaseSassCompiler"]

logger = logging.getLogger(__name__)


class BaseSassCompiler(ABC):
    """Base class for all stylesheet compiler backends.

    A backend compiles exactly one source file and holds no state between
    calls, so a single instance may be shared across threads.
    """

    name: str = ""

    @abstractmethod
    def compile(self, path: Path) -> str:
        """Compile one stylesheet.

        Args:
            path: Source file to compile.

        Returns:
            The compiled stylesheet text.

        Raises:
            CompileError: If compilation fails (syntax error, unreadable file).
        """
