"""Shared fixtures for livesass tests."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

import pytest

from livesass.compiler.base import BaseSassCompiler
from livesass.context import Context
from livesass.exceptions import CompileError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


class FakeCompiler(BaseSassCompiler):
    """Backend that "compiles" by wrapping the source text.

    Files containing ``!broken`` fail with a ``CompileError``. When
    ``gate`` is set, each compile waits for it, letting tests hold a pass
    in flight.
    """

    name = "fake"

    def __init__(self) -> None:
        self.calls: list[Path] = []
        self.gate: threading.Event | None = None
        self.entered = threading.Event()

    def compile(self, path: Path) -> str:
        self.calls.append(path)
        self.entered.set()
        if self.gate is not None:
            self.gate.wait(timeout=5)
        source = path.read_text(encoding="utf-8")
        if "!broken" in source:
            raise CompileError(path, "Invalid CSS after '!broken'")
        return f"/* {path.name} */\n{source}"


@pytest.fixture
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture
def sass_dir(tmp_path: Path) -> Path:
    """A source tree with two top-level stylesheets and one nested partial."""
    root = tmp_path / "sass"
    (root / "components").mkdir(parents=True)
    (root / "main.scss").write_text("body { color: red; }\n", encoding="utf-8")
    (root / "print.scss").write_text("body { color: black; }\n", encoding="utf-8")
    (root / "components" / "button.scss").write_text(".btn { padding: 0; }\n", encoding="utf-8")
    return root


@pytest.fixture
def css_dir(tmp_path: Path) -> Path:
    return tmp_path / "css"


@pytest.fixture
def context(sass_dir: Path, css_dir: Path, fake_compiler: FakeCompiler) -> Context:
    return Context.initialize(sass_dir, css_dir, fake_compiler)


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Undo ``logging.basicConfig(force=True)`` calls made by CLI commands."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
