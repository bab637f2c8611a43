"""Template resolution: from catalog and config to a scaffold plan."""

from __future__ import annotations

from typing import Optional

from modgen.scaffolder.catalog import TemplateCatalog
from modgen.scaffolder.models import GenerationConfig, ScaffoldPlan, ScaffoldPlanEntry, TemplateEntry
from modgen.scaffolder.substitution import TokenTable, render_path


class TemplateResolver:
    """Selects the catalog entries a configuration needs and resolves their paths.

    Entries keep catalog order.  An entry is selected when its scope
    predicate holds for the configured scopes. Build tooling entries also
    need tooling to be requested, and language-specific entries need the
    configured project language.
    """

    def __init__(self, catalog: Optional[TemplateCatalog] = None) -> None:
        self.catalog = catalog if catalog is not None else TemplateCatalog.default()

    def is_selected(self, entry: TemplateEntry, config: GenerationConfig) -> bool:
        if entry.tooling and not config.include_build_tooling:
            return False
        if entry.language is not None and entry.language is not config.project_language:
            return False
        return entry.predicate.is_satisfied_by(config.scopes)

    def resolve(self, config: GenerationConfig) -> ScaffoldPlan:
        """Build the template-backed part of the scaffold plan.

        Raises:
            TemplatePlanConflict: If two selected entries resolve to the same path.
        """
        tokens = TokenTable.from_config(config)
        return ScaffoldPlan(
            ScaffoldPlanEntry(
                output_path=render_path(entry.output, tokens),
                source=entry.source,
                binary=entry.binary,
            )
            for entry in self.catalog.entries()
            if self.is_selected(entry, config)
        )


def resolve(config: GenerationConfig, catalog: Optional[TemplateCatalog] = None) -> ScaffoldPlan:
    """Shortcut for ``TemplateResolver(catalog).resolve(config)``."""
    return TemplateResolver(catalog).resolve(config)
