"""Main scaffolding orchestrator.

Takes a validated ``GenerationConfig`` and generates a complete Ignition
module project: one Gradle submodule per selected scope plus Common, stub
hook classes, the multi-module build descriptors and optional build tooling.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from modgen.scaffolder.catalog import TemplateCatalog
from modgen.scaffolder.descriptors import BuildDescriptorSynthesizer
from modgen.scaffolder.errors import TargetNotEmptyError
from modgen.scaffolder.materializer import MaterializationResult, TreeMaterializer
from modgen.scaffolder.models import GenerationConfig, ScaffoldPlan
from modgen.scaffolder.resolver import TemplateResolver
from modgen.scaffolder.substitution import TokenTable
from modgen.scaffolder.templates import TemplateRenderer


class ModuleGenerator:
    """Generates a module project from a ``GenerationConfig``.

    The generated tree contains:
    - a ``common`` submodule, always
    - one submodule per selected scope with its Java or Kotlin hook class
    - settings and build scripts, Kotlin or Groovy DSL, at the root and in
      each submodule
    - README, Gradle wrapper properties and VCS housekeeping files
    """

    def __init__(
        self,
        config: GenerationConfig,
        catalog: Optional[TemplateCatalog] = None,
        renderer: Optional[TemplateRenderer] = None,
    ) -> None:
        self.config = config
        self.catalog = catalog if catalog is not None else TemplateCatalog.default()
        self.resolver = TemplateResolver(self.catalog)
        self.synthesizer = BuildDescriptorSynthesizer(renderer)

    # -- Public API --------------------------------------------------------

    def tokens(self) -> TokenTable:
        return TokenTable.from_config(self.config)

    def plan(self) -> ScaffoldPlan:
        """Full plan: catalog templates followed by the build descriptors.

        Raises:
            TemplatePlanConflict: If two entries resolve to the same path.
        """
        return self.resolver.resolve(self.config).merge(
            self.synthesizer.synthesize(self.config)
        )

    def generate(self) -> MaterializationResult:
        """Generate the project under ``config.root_dir``.

        Raises:
            TargetNotEmptyError: If the target directory is not empty and
                overwrite was not requested, or planned files already exist.
            MaterializationIOError: If the filesystem fails mid-write.
        """
        root = self.config.root_dir
        if not self.config.overwrite and _is_occupied(root):
            raise TargetNotEmptyError([root])

        plan = self.plan()
        materializer = TreeMaterializer(root, self.catalog, self.tokens())
        return materializer.materialize(plan)


def _is_occupied(path: Path) -> bool:
    if not path.exists():
        return False
    return not path.is_dir() or any(path.iterdir())


def generate(config: GenerationConfig, catalog: Optional[TemplateCatalog] = None) -> MaterializationResult:
    """Generate the project described by *config*."""
    return ModuleGenerator(config, catalog).generate()
