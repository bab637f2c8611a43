"""End-to-end generation through the public API.

Runs validation, resolution, descriptor synthesis and materialization
against real temporary directories and checks the properties every
generated project must have.
"""

from __future__ import annotations

from itertools import combinations
from pathlib import Path

import pytest

from modgen.scaffolder import (
    ConfigError,
    ErrorKind,
    GenerationConfigBuilder,
    TargetNotEmptyError,
    generate,
)
from modgen.scaffolder.substitution import find_unresolved_markers


pytestmark = pytest.mark.integration

ALL_SCOPE_SELECTIONS = [
    "".join(combo) for size in (1, 2, 3) for combo in combinations("GDC", size)
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _build(parent: Path, scopes: str, name: str = "My Module", **kwargs):
    builder = (
        GenerationConfigBuilder()
        .module_name(name)
        .package_name(kwargs.pop("package", "com.example.mymodule"))
        .scopes(scopes)
        .parent_dir(parent)
    )
    if kwargs.pop("overwrite", False):
        builder.overwrite()
    if "language" in kwargs:
        builder.project_language(kwargs.pop("language"))
    if "dsl" in kwargs:
        dsl = kwargs.pop("dsl")
        builder.settings_dsl(dsl).build_dsl(dsl)
    if "replacements" in kwargs:
        builder.custom_replacements(kwargs.pop("replacements"))
    return builder.build()


def _snapshot(root: Path) -> dict[str, bytes]:
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


def _is_text(relative: str) -> bool:
    return Path(relative).name not in (".gitignore", ".gitattributes")


# ---------------------------------------------------------------------------
# Determinism and ordering
# ---------------------------------------------------------------------------


class TestDeterminism:
    def test_identical_trees_in_two_directories(self, tmp_path: Path):
        first = generate(_build(tmp_path / "one", "GDC")).root
        second = generate(_build(tmp_path / "two", "GDC")).root
        assert _snapshot(first) == _snapshot(second)

    def test_scope_input_order_irrelevant(self, tmp_path: Path):
        first = generate(_build(tmp_path / "one", "GD")).root
        second = generate(_build(tmp_path / "two", "dg")).root
        assert _snapshot(first) == _snapshot(second)

    def test_descriptors_list_submodules_canonically(self, tmp_path: Path):
        root = generate(_build(tmp_path, "CDG")).root
        settings = (root / "settings.gradle.kts").read_text(encoding="utf-8")
        build = (root / "build.gradle.kts").read_text(encoding="utf-8")
        for text in (settings, build):
            positions = [text.index(f'":{name}"') for name in ("common", "gateway", "designer", "client")]
            assert positions == sorted(positions)


# ---------------------------------------------------------------------------
# Marker resolution
# ---------------------------------------------------------------------------


class TestNoLeftoverMarkers:
    @pytest.mark.parametrize("scopes", ALL_SCOPE_SELECTIONS)
    def test_every_text_file_resolved(self, tmp_path: Path, scopes: str):
        root = generate(_build(tmp_path, scopes)).root
        for relative, data in _snapshot(root).items():
            assert "<" not in relative, relative
            if _is_text(relative):
                assert find_unresolved_markers(data.decode("utf-8")) == [], relative

    @pytest.mark.parametrize("language,dsl", [("kotlin", "kotlin"), ("java", "groovy"), ("kotlin", "groovy")])
    def test_language_and_dsl_variants_resolved(self, tmp_path: Path, language: str, dsl: str):
        root = generate(_build(tmp_path, "GDC", language=language, dsl=dsl)).root
        for relative, data in _snapshot(root).items():
            assert "<" not in relative, relative
            if _is_text(relative):
                assert find_unresolved_markers(data.decode("utf-8")) == [], relative

    def test_readme_markers_resolved(self, tmp_path: Path):
        root = generate(_build(tmp_path, "G")).root
        readme = (root / "README.md").read_text(encoding="utf-8")
        assert "Gradle root project | `my-module`" in readme
        assert "Ignition SDK | `8.1.20`" in readme
        assert "gradle wrapper --gradle-version 7.5.1" in readme

    def test_custom_replacements_in_contents(self, tmp_path: Path):
        root = generate(_build(tmp_path, "G", replacements={"the Ignition platform": "ACME"})).root
        hook = next(root.rglob("MyModuleGatewayHook.java")).read_text(encoding="utf-8")
        assert "instantiated by ACME when" in hook


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


class TestLayout:
    def test_gateway_only(self, tmp_path: Path):
        root = generate(_build(tmp_path, "G")).root
        java = "src/main/java/com/example/mymodule"
        assert sorted(_snapshot(root)) == sorted([
            ".gitattributes",
            ".gitignore",
            "README.md",
            "build.gradle.kts",
            "settings.gradle.kts",
            "gradle/wrapper/gradle-wrapper.properties",
            "common/build.gradle.kts",
            f"common/{java}/common/MyModuleModule.java",
            "gateway/build.gradle.kts",
            f"gateway/{java}/gateway/MyModuleGatewayHook.java",
        ])
        assert not (root / "designer").exists()
        assert not (root / "client").exists()

    def test_gateway_and_designer_do_not_depend_on_each_other(self, tmp_path: Path):
        root = generate(_build(tmp_path, "GD")).root
        gateway = (root / "gateway" / "build.gradle.kts").read_text(encoding="utf-8")
        designer = (root / "designer" / "build.gradle.kts").read_text(encoding="utf-8")
        assert 'project(":common")' in gateway
        assert 'project(":common")' in designer
        assert ":designer" not in gateway
        assert ":gateway" not in designer

    def test_class_name_derivation(self, tmp_path: Path):
        root = generate(_build(tmp_path, "D", name="My Module")).root
        hooks = [p.name for p in root.rglob("*.java")]
        assert sorted(hooks) == ["MyModuleDesignerHook.java", "MyModuleModule.java"]

    def test_kotlin_groovy_project(self, tmp_path: Path):
        root = generate(_build(tmp_path, "G", language="kotlin", dsl="groovy")).root
        kotlin = "src/main/kotlin/com/example/mymodule"
        assert sorted(_snapshot(root)) == sorted([
            ".gitattributes",
            ".gitignore",
            "README.md",
            "build.gradle",
            "settings.gradle",
            "gradle/wrapper/gradle-wrapper.properties",
            "common/build.gradle",
            f"common/{kotlin}/common/MyModuleModule.kt",
            "gateway/build.gradle",
            f"gateway/{kotlin}/gateway/MyModuleGatewayHook.kt",
        ])
        hook = (root / "gateway" / kotlin / "gateway" / "MyModuleGatewayHook.kt").read_text(encoding="utf-8")
        assert hook.startswith("package com.example.mymodule.gateway\n")
        assert "class MyModuleGatewayHook : AbstractGatewayModuleHook()" in hook


# ---------------------------------------------------------------------------
# Failures leave the disk untouched
# ---------------------------------------------------------------------------


class TestFailures:
    def test_no_scope_selected(self, tmp_path: Path):
        with pytest.raises(ConfigError) as exc_info:
            _build(tmp_path, "")
        assert exc_info.value.kinds == {ErrorKind.NO_SCOPE_SELECTED}
        assert list(tmp_path.iterdir()) == []

    def test_invalid_module_name(self, tmp_path: Path):
        with pytest.raises(ConfigError) as exc_info:
            _build(tmp_path, "G", name="1bad.name")
        assert ErrorKind.INVALID_MODULE_NAME in exc_info.value.kinds
        assert list(tmp_path.iterdir()) == []

    def test_invalid_package_name(self, tmp_path: Path):
        with pytest.raises(ConfigError) as exc_info:
            _build(tmp_path, "G", package="1bad.name")
        assert exc_info.value.kinds == {ErrorKind.INVALID_PACKAGE_NAME}
        assert list(tmp_path.iterdir()) == []

    def test_target_not_empty(self, tmp_path: Path):
        root = tmp_path / "my-module"
        root.mkdir()
        (root / "existing.txt").write_text("keep")
        with pytest.raises(ConfigError) as exc_info:
            _build(tmp_path, "G")
        assert exc_info.value.kinds == {ErrorKind.TARGET_NOT_EMPTY}
        assert [p.name for p in root.iterdir()] == ["existing.txt"]

    def test_colliding_file_with_overwrite(self, tmp_path: Path):
        root = tmp_path / "my-module"
        (root / "gateway").mkdir(parents=True)
        (root / "gateway" / "build.gradle.kts").write_text("custom")
        with pytest.raises(TargetNotEmptyError):
            generate(_build(tmp_path, "G", overwrite=True))
        assert sorted(p.relative_to(root).as_posix() for p in root.rglob("*")) == [
            "gateway", "gateway/build.gradle.kts",
        ]
