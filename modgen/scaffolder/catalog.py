"""The fixed catalog of project templates.

Each :class:`TemplateEntry` names a resource under ``templates/``, the output
path it is written to, the scope it belongs to and, for hook classes, the
source language it is written in.  Catalog order is the
order files appear in the scaffold plan; nothing downstream re-sorts it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from modgen.scaffolder.models import ProjectScope, ScopePredicate, SourceLanguage, TemplateEntry


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


def _hook_entry(
    scope: ProjectScope, predicate: ScopePredicate, language: SourceLanguage
) -> TemplateEntry:
    folder = scope.folder_name
    ext = language.extension
    src = f"src/main/{language.source_dir}/<PACKAGE_ROOT>"
    return TemplateEntry(
        source=f"hook/{scope.hook_suffix}.{ext}",
        output=f"{folder}/{src}/{folder}/<MODULE_CLASSNAME>{scope.hook_suffix}.{ext}",
        predicate=predicate,
        language=language,
    )


def _hook_entries(language: SourceLanguage) -> tuple[TemplateEntry, ...]:
    return (
        _hook_entry(ProjectScope.COMMON, ScopePredicate.always(), language),
        _hook_entry(ProjectScope.GATEWAY, ScopePredicate.requires(ProjectScope.GATEWAY), language),
        _hook_entry(ProjectScope.DESIGNER, ScopePredicate.requires(ProjectScope.DESIGNER), language),
        _hook_entry(ProjectScope.CLIENT, ScopePredicate.requires(ProjectScope.CLIENT), language),
    )


DEFAULT_ENTRIES: tuple[TemplateEntry, ...] = (
    *_hook_entries(SourceLanguage.JAVA),
    *_hook_entries(SourceLanguage.KOTLIN),
    TemplateEntry(source="docs/README.md", output="README.md"),
    TemplateEntry(
        source="tooling/gradle-wrapper.properties",
        output="gradle/wrapper/gradle-wrapper.properties",
        tooling=True,
    ),
    TemplateEntry(source="tooling/gitignore", output=".gitignore", binary=True, tooling=True),
    TemplateEntry(
        source="tooling/gitattributes", output=".gitattributes", binary=True, tooling=True
    ),
)


class TemplateCatalog:
    """Ordered registry of template entries backed by a resource directory."""

    def __init__(
        self,
        entries: Iterable[TemplateEntry] = DEFAULT_ENTRIES,
        template_dir: Optional[str | Path] = None,
    ) -> None:
        self._entries = tuple(entries)
        self.template_dir = Path(template_dir) if template_dir is not None else _DEFAULT_TEMPLATE_DIR

    @classmethod
    def default(cls) -> "TemplateCatalog":
        """The catalog shipped with the tool."""
        return cls()

    def entries(self) -> tuple[TemplateEntry, ...]:
        return self._entries

    def path_of(self, source: str) -> Path:
        """Absolute location of the template resource *source*."""
        return self.template_dir / source

    def read(self, source: str) -> bytes:
        """Return the raw bytes of the template resource *source*."""
        return self.path_of(source).read_bytes()

    def __len__(self) -> int:
        return len(self._entries)
