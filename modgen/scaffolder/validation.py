"""Validation of raw generation parameters.

:func:`validate` turns the loosely-typed values a caller collects (free-text
module name, dotted package string, scope shorthand, directory path) into a
:class:`GenerationConfig`.  Every rule is checked on every call and all
violations are reported together in a single :class:`ConfigError`.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from modgen.config import GeneratorSettings
from modgen.scaffolder.errors import ConfigError, ErrorKind, Violation
from modgen.scaffolder.models import (
    GenerationConfig,
    GradleDsl,
    ProjectScope,
    SourceLanguage,
    canonical_order,
)
from modgen.scaffolder.substitution import BUILTIN_MARKERS
from modgen.utils import slugify, to_class_name


# Module names beyond this length are accepted but flagged.
LONG_NAME_THRESHOLD = 32

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
# Module names end up inside Java and Kotlin string literals.
_MODULE_NAME = re.compile(r"[A-Za-z][A-Za-z0-9 _.-]*")

# Reserved words and literals of the Java language; none may appear as a
# package component.
JAVA_RESERVED_WORDS: frozenset[str] = frozenset({
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "final", "finally", "float", "for", "goto", "if", "implements",
    "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "return", "short", "static",
    "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
    "transient", "try", "void", "volatile", "while", "_",
    "true", "false", "null",
})


class RawGenerationParams(BaseModel):
    """Unvalidated parameters as supplied by a caller."""

    module_name: str = Field(default="", description="Free-text module name")
    package_name: str = Field(default="", description="Dotted root package")
    scopes: str = Field(default="", description="Scope shorthand, e.g. 'GDC'")
    parent_dir: Path = Field(default=Path("."), description="Where the project folder goes")
    include_build_tooling: bool = True
    overwrite: bool = False
    project_language: SourceLanguage = SourceLanguage.JAVA
    settings_dsl: GradleDsl = GradleDsl.KOTLIN
    build_dsl: GradleDsl = GradleDsl.KOTLIN
    root_plugin_config: str = Field(default="", description="Replacement root plugins block body")
    custom_replacements: dict[str, str] = Field(default_factory=dict)
    settings: GeneratorSettings = Field(default_factory=GeneratorSettings)


# ---------------------------------------------------------------------------
# Individual rules
# ---------------------------------------------------------------------------

def check_module_name(name: str) -> list[Violation]:
    """Validate the display name used to derive class and file names."""
    trimmed = name.strip()
    if not trimmed:
        return [Violation(ErrorKind.INVALID_MODULE_NAME, "The module name is empty.")]
    if not re.match(r"[A-Za-z]", trimmed):
        return [Violation(
            ErrorKind.INVALID_MODULE_NAME,
            f"The module name '{trimmed}' does not start with a letter.",
        )]
    if not _MODULE_NAME.fullmatch(trimmed):
        return [Violation(
            ErrorKind.INVALID_MODULE_NAME,
            f"The module name '{trimmed}' may only contain letters, digits, "
            "spaces, '_', '-' and '.'.",
        )]
    if not slugify(trimmed) or not to_class_name(trimmed):
        return [Violation(
            ErrorKind.INVALID_MODULE_NAME,
            f"The module name '{trimmed}' has no usable characters.",
        )]
    return []


def check_package_name(package: str) -> list[Violation]:
    """Validate a dotted package name against Java identifier rules."""
    if not package.strip():
        return [Violation(ErrorKind.INVALID_PACKAGE_NAME, "The package name is empty.")]

    problems: list[str] = []
    for index, segment in enumerate(package.split(".")):
        if not segment:
            problems.append(f"segment {index + 1} is empty")
        elif not _IDENTIFIER.fullmatch(segment):
            problems.append(f"'{segment}' is not a valid identifier")
        elif segment in JAVA_RESERVED_WORDS:
            problems.append(f"'{segment}' is a reserved word")

    if problems:
        return [Violation(
            ErrorKind.INVALID_PACKAGE_NAME,
            f"The package name '{package}' is invalid: {'; '.join(problems)}.",
        )]
    return []


def parse_scopes(shorthand: str) -> tuple[tuple[ProjectScope, ...], list[Violation]]:
    """Parse scope shorthand such as ``"GD"`` into canonical-order scopes.

    Letters are case-insensitive; whitespace and commas are ignored.
    Unrecognised and repeated letters are violations.
    """
    codes = [c for c in shorthand if not c.isspace() and c != ","]
    violations: list[Violation] = []
    seen: list[ProjectScope] = []
    unknown: list[str] = []
    duplicates: list[str] = []

    for code in codes:
        try:
            scope = ProjectScope.from_code(code)
        except ValueError:
            if code not in unknown:
                unknown.append(code)
            continue
        if scope in seen:
            if code.upper() not in duplicates:
                duplicates.append(code.upper())
        else:
            seen.append(scope)

    if unknown:
        violations.append(Violation(
            ErrorKind.INVALID_SCOPE,
            f"Unrecognized scope code(s) {', '.join(unknown)} in '{shorthand}'; "
            "use G (Gateway), D (Designer) or C (Client).",
        ))
    if duplicates:
        violations.append(Violation(
            ErrorKind.INVALID_SCOPE,
            f"Duplicate scope code(s) {', '.join(duplicates)} in '{shorthand}'.",
        ))
    if not codes:
        violations.append(Violation(ErrorKind.NO_SCOPE_SELECTED, "No scope was selected."))

    return canonical_order(seen), violations


def check_target_dir(target: Path, overwrite: bool) -> list[Violation]:
    """Check that *target* may receive a freshly generated tree."""
    if not target.exists():
        for ancestor in target.parents:
            if ancestor.exists():
                if not ancestor.is_dir():
                    return [Violation(
                        ErrorKind.TARGET_NOT_EMPTY,
                        f"'{ancestor}' exists and is not a directory.",
                    )]
                break
        return []
    if not target.is_dir():
        return [Violation(
            ErrorKind.TARGET_NOT_EMPTY, f"'{target}' exists and is not a directory."
        )]
    if not overwrite and any(target.iterdir()):
        return [Violation(
            ErrorKind.TARGET_NOT_EMPTY,
            f"The target directory '{target}' is not empty; pass overwrite to generate into it.",
        )]
    return []



def check_custom_replacements(replacements: dict[str, str]) -> list[Violation]:
    """Reject empty keys and keys that would shadow a built-in marker."""
    violations: list[Violation] = []
    for key in replacements:
        if not key:
            violations.append(Violation(
                ErrorKind.INVALID_REPLACEMENT, "A custom replacement has an empty key."
            ))
        elif key in BUILTIN_MARKERS:
            violations.append(Violation(
                ErrorKind.INVALID_REPLACEMENT,
                f"The custom replacement '{key}' collides with a built-in marker.",
            ))
    return violations

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def validate(raw: RawGenerationParams) -> GenerationConfig:
    """Validate *raw* and return the canonical configuration.

    Nothing is printed. Non-fatal findings, such as an overly long module
    name, are returned in ``GenerationConfig.warnings``.

    Raises:
        ConfigError: Listing every violated rule.
    """
    violations: list[Violation] = []
    module_name = raw.module_name.strip()
    package_name = raw.package_name.strip()

    violations.extend(check_module_name(module_name))
    violations.extend(check_package_name(package_name))
    scopes, scope_violations = parse_scopes(raw.scopes)
    violations.extend(scope_violations)
    violations.extend(check_custom_replacements(raw.custom_replacements))

    parent_dir = Path(raw.parent_dir).expanduser().resolve()
    module_id = slugify(module_name)
    if module_id:
        violations.extend(check_target_dir(parent_dir / module_id, raw.overwrite))

    if violations:
        raise ConfigError(violations)

    warnings: list[str] = []
    if len(module_name) > LONG_NAME_THRESHOLD:
        warnings.append(
            f"The module name '{module_name}' is excessively long, consider renaming."
        )

    settings = raw.settings
    return GenerationConfig(
        module_name=module_name,
        module_id=module_id,
        package_name=package_name,
        scopes=scopes,
        parent_dir=parent_dir,
        include_build_tooling=raw.include_build_tooling,
        overwrite=raw.overwrite,
        project_language=raw.project_language,
        settings_dsl=raw.settings_dsl,
        build_dsl=raw.build_dsl,
        root_plugin_config=raw.root_plugin_config,
        custom_replacements=dict(raw.custom_replacements),
        warnings=tuple(warnings),
        module_description=settings.module_description,
        sdk_version=settings.sdk_version,
        required_ignition_version=settings.required_ignition_version,
        module_plugin_version=settings.module_plugin_version,
        gradle_version=settings.gradle_version,
        skip_module_signing=settings.skip_module_signing,
        debug_plugin_config=settings.debug_plugin_config,
    )


class GenerationConfigBuilder:
    """Fluent builder producing a validated :class:`GenerationConfig`.

    Example::

        config = (
            GenerationConfigBuilder()
            .module_name("My Module")
            .package_name("com.example.thing")
            .scopes("GD")
            .parent_dir(Path("/tmp/work"))
            .build()
        )
    """

    def __init__(self, settings: Optional[GeneratorSettings] = None) -> None:
        self._values: dict[str, Any] = {}
        self._settings = settings or GeneratorSettings()

    def module_name(self, name: str) -> "GenerationConfigBuilder":
        self._values["module_name"] = name
        return self

    def package_name(self, package: str) -> "GenerationConfigBuilder":
        self._values["package_name"] = package
        return self

    def scopes(self, shorthand: str) -> "GenerationConfigBuilder":
        self._values["scopes"] = shorthand
        return self

    def parent_dir(self, path: str | Path) -> "GenerationConfigBuilder":
        self._values["parent_dir"] = Path(path)
        return self

    def include_build_tooling(self, enabled: bool = True) -> "GenerationConfigBuilder":
        self._values["include_build_tooling"] = enabled
        return self

    def overwrite(self, enabled: bool = True) -> "GenerationConfigBuilder":
        self._values["overwrite"] = enabled
        return self

    def project_language(self, language: SourceLanguage | str) -> "GenerationConfigBuilder":
        self._values["project_language"] = SourceLanguage(language)
        return self

    def settings_dsl(self, dsl: GradleDsl | str) -> "GenerationConfigBuilder":
        self._values["settings_dsl"] = GradleDsl(dsl)
        return self

    def build_dsl(self, dsl: GradleDsl | str) -> "GenerationConfigBuilder":
        self._values["build_dsl"] = GradleDsl(dsl)
        return self

    def root_plugin_config(self, config: str) -> "GenerationConfigBuilder":
        self._values["root_plugin_config"] = config
        return self

    def custom_replacements(self, replacements: dict[str, str]) -> "GenerationConfigBuilder":
        self._values["custom_replacements"] = dict(replacements)
        return self

    def skip_module_signing(self, enabled: bool = True) -> "GenerationConfigBuilder":
        self._settings = self._settings.model_copy(update={"skip_module_signing": enabled})
        return self

    def debug_plugin_config(self, enabled: bool = True) -> "GenerationConfigBuilder":
        self._settings = self._settings.model_copy(update={"debug_plugin_config": enabled})
        return self

    def raw(self) -> RawGenerationParams:
        """The collected, still unvalidated parameters."""
        return RawGenerationParams(**self._values, settings=self._settings)

    def build(self) -> GenerationConfig:
        """Validate the collected parameters.

        Raises:
            ConfigError: If any rule is violated.
        """
        return validate(self.raw())
