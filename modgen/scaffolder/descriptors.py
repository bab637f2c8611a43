"""Build descriptor synthesis.

Produces the Gradle files that tie the generated submodules together: the
root settings and build scripts plus one build script per submodule, in the
Kotlin or Groovy DSL the config asks for.  Every submodule other than Common
depends on Common and on nothing else; submodules are always listed in
canonical order (Common, Gateway, Designer, Client).
"""

from __future__ import annotations

import textwrap
from pathlib import PurePosixPath
from typing import Any, Optional

from modgen.scaffolder.models import (
    GenerationConfig,
    ProjectScope,
    ScaffoldPlanEntry,
    SourceLanguage,
    SubmoduleDescriptor,
)
from modgen.scaffolder.templates import TemplateRenderer


NEXUS_URL = "https://nexus.inductiveautomation.com/repository/public"
JAVA_VERSION = 11
KOTLIN_PLUGIN_VERSION = "1.6.21"

_SDK_GROUP = "com.inductiveautomation.ignitionsdk"

# SDK artifacts each scope compiles against, without version.
SCOPE_ARTIFACTS: dict[ProjectScope, tuple[str, ...]] = {
    ProjectScope.COMMON: (f"{_SDK_GROUP}:ignition-common",),
    ProjectScope.GATEWAY: (
        f"{_SDK_GROUP}:ignition-common",
        f"{_SDK_GROUP}:gateway-api",
    ),
    ProjectScope.DESIGNER: (
        f"{_SDK_GROUP}:designer-api",
        f"{_SDK_GROUP}:ignition-common",
    ),
    ProjectScope.CLIENT: (
        f"{_SDK_GROUP}:client-api",
        f"{_SDK_GROUP}:vision-client-api",
        f"{_SDK_GROUP}:ignition-common",
    ),
}


def module_scopes_for(scope: ProjectScope, selected: tuple[ProjectScope, ...]) -> str:
    """Scope letters under which the packaging plugin loads *scope*'s jar.

    Common is loaded everywhere the module runs; the Vision client jar is
    also needed by the Designer when both are selected.
    """
    if scope is ProjectScope.COMMON:
        return "".join(s.code for s in selected)
    if scope is ProjectScope.CLIENT and ProjectScope.DESIGNER in selected:
        return "CD"
    return scope.code


class BuildDescriptorSynthesizer:
    """Renders the multi-module build descriptors for a configuration."""

    def __init__(self, renderer: Optional[TemplateRenderer] = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    # -- Dependency graph --------------------------------------------------

    def submodules(self, config: GenerationConfig) -> list[SubmoduleDescriptor]:
        """Describe every submodule of the project, in canonical order."""
        descriptors: list[SubmoduleDescriptor] = []
        for scope in config.effective_scopes:
            depends_on: tuple[str, ...] = ()
            if scope is not ProjectScope.COMMON:
                depends_on = (ProjectScope.COMMON.folder_name,)
            descriptors.append(SubmoduleDescriptor(
                scope=scope,
                depends_on=depends_on,
                packaged=True,
                artifacts=SCOPE_ARTIFACTS[scope],
                module_scopes=module_scopes_for(scope, config.scopes),
            ))
        return descriptors

    # -- Rendering ---------------------------------------------------------

    def synthesize(self, config: GenerationConfig) -> list[ScaffoldPlanEntry]:
        """Return plan entries for the settings, root and submodule build files."""
        submodules = self.submodules(config)
        context = self._build_context(config, submodules)

        settings_dsl = config.settings_dsl
        build_dsl = config.build_dsl
        build_script = build_dsl.build_script

        entries = [
            ScaffoldPlanEntry(
                output_path=PurePosixPath(settings_dsl.settings_script),
                text=self.renderer.render(
                    f"buildscript/{settings_dsl.value}/{settings_dsl.settings_script}.j2", context
                ),
            ),
            ScaffoldPlanEntry(
                output_path=PurePosixPath(build_script),
                text=self.renderer.render(
                    f"buildscript/{build_dsl.value}/root.{build_script}.j2", context
                ),
            ),
        ]
        for sub in submodules:
            entries.append(ScaffoldPlanEntry(
                output_path=PurePosixPath(sub.name, build_script),
                text=self.renderer.render(
                    f"buildscript/{build_dsl.value}/subproject.{build_script}.j2",
                    {**context, "sub": sub},
                ),
            ))
        return entries

    def _build_context(
        self, config: GenerationConfig, submodules: list[SubmoduleDescriptor]
    ) -> dict[str, Any]:
        hooks = [
            {"fqcn": config.hook_fqcn(scope), "code": scope.code}
            for scope in config.scopes
        ]
        root_plugin_lines = textwrap.dedent(config.root_plugin_config).strip("\n").splitlines()
        return {
            "config": config,
            "module_id": f"{config.package_name}.{config.module_id}",
            "submodules": submodules,
            "hooks": hooks,
            "nexus_url": NEXUS_URL,
            "java_version": JAVA_VERSION,
            "kotlin": config.project_language is SourceLanguage.KOTLIN,
            "kotlin_plugin_version": KOTLIN_PLUGIN_VERSION,
            "root_plugin_lines": root_plugin_lines,
        }
