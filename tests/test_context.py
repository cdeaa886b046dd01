"""Tests for livesass.context — directory validation and normalization."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from livesass.compiler.libsass import LibSassCompiler
from livesass.config import LivesassConfig
from livesass.context import Context
from livesass.exceptions import ConfigError, PluginError

if TYPE_CHECKING:
    from pathlib import Path

    from tests.conftest import FakeCompiler


class TestInitialize:
    def test_paths_are_absolute_and_normalized(
        self, sass_dir: Path, css_dir: Path, fake_compiler: FakeCompiler
    ):
        ctx = Context.initialize(
            sass_dir / "components" / "..", css_dir / "sub" / "..", fake_compiler
        )
        assert ctx.sass_dir == sass_dir.resolve()
        assert ctx.css_dir == css_dir.resolve()
        assert ctx.sass_dir.is_absolute()
        assert ".." not in ctx.css_dir.parts

    def test_relative_paths_resolved_against_cwd(
        self,
        sass_dir: Path,
        fake_compiler: FakeCompiler,
        monkeypatch: pytest.MonkeyPatch,
    ):
        monkeypatch.chdir(sass_dir.parent)
        ctx = Context.initialize("sass", "css", fake_compiler)
        assert ctx.sass_dir == sass_dir.resolve()
        assert ctx.css_dir == (sass_dir.parent / "css").resolve()

    def test_output_dir_need_not_exist(
        self, sass_dir: Path, tmp_path: Path, fake_compiler: FakeCompiler
    ):
        ctx = Context.initialize(sass_dir, tmp_path / "not" / "yet", fake_compiler)
        assert not ctx.css_dir.exists()

    def test_missing_sass_dir_raises(self, tmp_path: Path, fake_compiler: FakeCompiler):
        missing = tmp_path / "missing"
        with pytest.raises(ConfigError, match="Invalid sass directory") as exc:
            Context.initialize(missing, tmp_path / "css", fake_compiler)
        assert str(missing) in str(exc.value)

    def test_sass_dir_is_file_raises(self, tmp_path: Path, fake_compiler: FakeCompiler):
        f = tmp_path / "main.scss"
        f.write_text("", encoding="utf-8")
        with pytest.raises(ConfigError, match="not a directory"):
            Context.initialize(f, tmp_path / "css", fake_compiler)

    def test_css_dir_is_file_raises(self, sass_dir: Path, tmp_path: Path, fake_compiler):
        f = tmp_path / "out.css"
        f.write_text("", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid css directory"):
            Context.initialize(sass_dir, f, fake_compiler)

    def test_css_dir_inside_sass_dir_raises(self, sass_dir: Path, fake_compiler: FakeCompiler):
        with pytest.raises(ConfigError, match="inside sass directory") as exc:
            Context.initialize(sass_dir, sass_dir / "css", fake_compiler)
        assert str(sass_dir) in str(exc.value)

    def test_css_dir_same_as_sass_dir_raises(self, sass_dir: Path, fake_compiler: FakeCompiler):
        with pytest.raises(ConfigError, match="inside sass directory"):
            Context.initialize(sass_dir, sass_dir / "components" / "..", fake_compiler)

    def test_sass_dir_inside_css_dir_allowed(self, tmp_path: Path, fake_compiler: FakeCompiler):
        (tmp_path / "static" / "sass").mkdir(parents=True)
        ctx = Context.initialize(tmp_path / "static" / "sass", tmp_path / "static", fake_compiler)
        assert ctx.sass_dir.parent == ctx.css_dir

    def test_failure_is_logged(
        self, tmp_path: Path, fake_compiler: FakeCompiler, caplog: pytest.LogCaptureFixture
    ):
        with pytest.raises(ConfigError):
            Context.initialize(tmp_path / "missing", tmp_path / "css", fake_compiler)
        assert "Invalid sass directory" in caplog.text

    def test_context_is_immutable(self, context: Context, tmp_path: Path):
        with pytest.raises(AttributeError):
            context.css_dir = tmp_path  # type: ignore[misc]


class TestFromConfig:
    def test_relative_to_root(self, tmp_path: Path):
        (tmp_path / "static" / "sass").mkdir(parents=True)
        ctx = Context.from_config(LivesassConfig(), tmp_path)
        assert ctx.sass_dir == (tmp_path / "static" / "sass").resolve()
        assert ctx.css_dir == (tmp_path / "static" / "css").resolve()
        assert isinstance(ctx.backend, LibSassCompiler)

    def test_backend_options_passed(self, tmp_path: Path):
        (tmp_path / "static" / "sass").mkdir(parents=True)
        config = LivesassConfig()
        config.compiler.output_style = "compressed"
        ctx = Context.from_config(config, tmp_path)
        assert ctx.backend.output_style == "compressed"

    def test_unknown_backend_raises(self, tmp_path: Path):
        (tmp_path / "static" / "sass").mkdir(parents=True)
        config = LivesassConfig()
        config.compiler.backend = "ruby-sass"
        with pytest.raises(PluginError, match="ruby-sass"):
            Context.from_config(config, tmp_path)

    def test_nested_css_dir_raises(self, tmp_path: Path):
        (tmp_path / "static").mkdir()
        config = LivesassConfig()
        config.paths.sass_dir = "static"
        config.paths.css_dir = "static/css"
        with pytest.raises(ConfigError, match="inside sass directory"):
            Context.from_config(config, tmp_path)

    def test_missing_default_sass_dir_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            Context.from_config(LivesassConfig(), tmp_path)
