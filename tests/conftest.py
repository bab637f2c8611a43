"""Shared pytest fixtures for the modgen test suite.

Provides reusable fixtures for:
- Temporary parent directories receiving generated projects
- A factory for validated generation configs
- Default settings
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from modgen.config import GeneratorSettings
from modgen.scaffolder.models import GenerationConfig
from modgen.scaffolder.validation import GenerationConfigBuilder


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def parent_dir(tmp_path: Path) -> Path:
    """Empty directory that receives the generated project folder."""
    work = tmp_path / "work"
    work.mkdir()
    yield work


@pytest.fixture(autouse=True)
def _clean_modgen_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep MODGEN_* variables from the developer's shell out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("MODGEN_"):
            monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> GeneratorSettings:
    return GeneratorSettings()


@pytest.fixture
def make_config(parent_dir: Path) -> Callable[..., GenerationConfig]:
    """Factory building a validated config under ``parent_dir``.

    Usage::

        config = make_config("GD", name="Charts", tooling=False)
        config = make_config("G", language="kotlin", dsl="groovy")
    """

    def _make(
        scopes: str = "GD",
        name: str = "My Module",
        package: str = "com.example.mymodule",
        tooling: bool = True,
        overwrite: bool = False,
        directory: Path | None = None,
        settings: GeneratorSettings | None = None,
        language: str = "java",
        dsl: str = "kotlin",
        replacements: dict[str, str] | None = None,
        root_plugins: str = "",
    ) -> GenerationConfig:
        return (
            GenerationConfigBuilder(settings)
            .module_name(name)
            .package_name(package)
            .scopes(scopes)
            .parent_dir(directory if directory is not None else parent_dir)
            .include_build_tooling(tooling)
            .overwrite(overwrite)
            .project_language(language)
            .settings_dsl(dsl)
            .build_dsl(dsl)
            .custom_replacements(replacements or {})
            .root_plugin_config(root_plugins)
            .build()
        )

    return _make


@pytest.fixture
def gd_config(make_config) -> GenerationConfig:
    """Gateway + Designer module named 'My Module'."""
    return make_config("GD")


@pytest.fixture
def list_tree() -> Callable[[Path], list[str]]:
    """Every file under a root as a sorted list of POSIX relative paths."""

    def _list(root: Path) -> list[str]:
        return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())

    return _list
