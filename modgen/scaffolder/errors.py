"""Exceptions raised by the scaffolding engine.

Every failure the engine can report is a subclass of :class:`GenerationError`
and carries structured attributes (the violated rules, the offending paths)
so that callers can present them without parsing messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    """Classification of every error the engine reports."""
    INVALID_MODULE_NAME = "InvalidModuleName"
    INVALID_PACKAGE_NAME = "InvalidPackageName"
    INVALID_SCOPE = "InvalidScope"
    NO_SCOPE_SELECTED = "NoScopeSelected"
    INVALID_REPLACEMENT = "InvalidReplacement"
    TARGET_NOT_EMPTY = "TargetNotEmpty"
    TEMPLATE_PLAN_CONFLICT = "TemplatePlanConflict"
    MATERIALIZATION_IO_ERROR = "MaterializationIOError"


@dataclass(frozen=True)
class Violation:
    """A single violated validation rule."""

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class GenerationError(Exception):
    """Base class for all scaffolding failures."""

    kind: ErrorKind | None = None


class ConfigError(GenerationError):
    """Raised when the raw generation parameters fail validation.

    All violations found in a single pass are collected so the caller can
    report the complete list of corrections at once.
    """

    def __init__(self, violations: list[Violation]) -> None:
        self.violations = list(violations)
        lines = "\n".join(f"  - {v}" for v in self.violations)
        super().__init__(f"Configuration is invalid:\n{lines}")

    @property
    def kinds(self) -> set[ErrorKind]:
        """The distinct kinds of rule that were violated."""
        return {v.kind for v in self.violations}


class TargetNotEmptyError(GenerationError):
    """Raised when planned output paths already exist on disk.

    Detected before the first write, so nothing has been created when this
    is raised.
    """

    kind = ErrorKind.TARGET_NOT_EMPTY

    def __init__(self, paths: list[Path]) -> None:
        self.paths = list(paths)
        shown = ", ".join(str(p) for p in self.paths[:5])
        more = f" (and {len(self.paths) - 5} more)" if len(self.paths) > 5 else ""
        super().__init__(f"Refusing to overwrite existing paths: {shown}{more}")


class TemplatePlanConflict(GenerationError, AssertionError):
    """Two plan entries resolved to the same output path.

    This is a defect in the template catalog, never a user error.
    """

    kind = ErrorKind.TEMPLATE_PLAN_CONFLICT

    def __init__(self, path: object, sources: tuple[str, str]) -> None:
        self.path = path
        self.sources = sources
        super().__init__(
            f"Template plan conflict: '{sources[0]}' and '{sources[1]}' "
            f"both resolve to '{path}'"
        )


class MaterializationIOError(GenerationError):
    """Reading a template or writing the tree failed.

    ``cause`` is the underlying ``OSError``, or the ``UnicodeDecodeError`` of a
    text template that is not valid UTF-8.
    """

    kind = ErrorKind.MATERIALIZATION_IO_ERROR

    def __init__(self, path: Path, cause: OSError | UnicodeDecodeError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to materialize '{path}': {cause}")
