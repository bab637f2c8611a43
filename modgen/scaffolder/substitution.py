"""Placeholder substitution for template paths and contents.

Templates carry literal markers such as ``<PACKAGE_ROOT>`` that are replaced
with values derived from the :class:`GenerationConfig`.  Replacement is a
single left-to-right pass over the input: a substituted value is never
scanned again, so a value that happens to look like a marker stays as-is.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from enum import Enum
from pathlib import PurePosixPath

from modgen.scaffolder.models import GenerationConfig


class TemplateMarker(str, Enum):
    """Markers recognised in template files and output path patterns."""

    #: Dotted root package.  In paths, one directory per package component.
    PACKAGE_ROOT = "<PACKAGE_ROOT>"
    #: PascalCase class prefix derived from the module name.
    MODULE_CLASSNAME = "<MODULE_CLASSNAME>"
    #: Slug of the module name.
    MODULE_ID = "<MODULE_ID>"
    #: The module name as entered.
    MODULE_NAME = "<MODULE_NAME>"
    #: Name of the ``.modl`` file produced by the build.
    MODULE_FILENAME = "<MODULE_FILENAME>"
    #: Gradle root project name.
    ROOT_PROJECT_NAME = "<ROOT_PROJECT_NAME>"
    GRADLE_VERSION = "<GRADLE_VERSION>"
    SDK_VERSION = "<SDK_VERSION>"

    def __str__(self) -> str:
        return self.value


BUILTIN_MARKERS: frozenset[str] = frozenset(m.value for m in TemplateMarker)

# Anything shaped like a marker: angle brackets around UPPER_SNAKE_CASE with at
# least one underscore, so Java generics such as ``<T>`` do not match.
MARKER_PATTERN = re.compile(r"<[A-Z][A-Z0-9]*(?:_[A-Z0-9]+)+>")


class TokenTable(Mapping[str, str]):
    """Immutable mapping of marker -> replacement value."""

    def __init__(self, values: Mapping[str, str]) -> None:
        self._values = dict(values)
        # Longest keys first so overlapping markers resolve to the longest match.
        keys = sorted(self._values, key=len, reverse=True)
        self._pattern = re.compile("|".join(re.escape(k) for k in keys)) if keys else None

    @classmethod
    def from_config(cls, config: GenerationConfig) -> "TokenTable":
        """Derive the token table for *config*.

        Custom replacements are added alongside the built-in markers; they
        never replace a built-in marker.
        """
        values = dict(config.custom_replacements)
        values.update({
            TemplateMarker.PACKAGE_ROOT.value: config.package_name,
            TemplateMarker.MODULE_CLASSNAME.value: config.class_name,
            TemplateMarker.MODULE_ID.value: config.module_id,
            TemplateMarker.MODULE_NAME.value: config.module_name,
            TemplateMarker.MODULE_FILENAME.value: config.module_filename,
            TemplateMarker.ROOT_PROJECT_NAME.value: config.module_id,
            TemplateMarker.GRADLE_VERSION.value: config.gradle_version,
            TemplateMarker.SDK_VERSION.value: config.sdk_version,
        })
        return cls(values)

    def for_paths(self) -> "TokenTable":
        """Variant used for output paths.

        Only built-in markers apply to paths, and the package becomes one
        directory per component.
        """
        values = {k: v for k, v in self._values.items() if k in BUILTIN_MARKERS}
        package = values.get(TemplateMarker.PACKAGE_ROOT.value)
        if package is not None:
            values[TemplateMarker.PACKAGE_ROOT.value] = package.replace(".", "/")
        return TokenTable(values)

    @property
    def pattern(self) -> re.Pattern[str] | None:
        return self._pattern

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"TokenTable({self._values!r})"


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render(text: str, tokens: TokenTable) -> str:
    """Replace every marker occurrence in *text* with its value."""
    if tokens.pattern is None:
        return text
    return tokens.pattern.sub(lambda m: tokens[m.group(0)], text)


def render_path(pattern: str, tokens: TokenTable) -> PurePosixPath:
    """Resolve an output path pattern to a relative path.

    ``<PACKAGE_ROOT>`` expands to one path segment per package component.

    Raises:
        ValueError: If the result is absolute or escapes the project root.
            Either indicates a broken catalog entry.
    """
    path = PurePosixPath(render(pattern, tokens.for_paths()))
    if path.is_absolute() or ".." in path.parts or not path.parts:
        raise ValueError(f"Output path pattern {pattern!r} resolved to invalid path {path}")
    return path


def find_unresolved_markers(text: str) -> list[str]:
    """Return the distinct marker-shaped tokens left in *text*, sorted."""
    return sorted(set(MARKER_PATTERN.findall(text)))
