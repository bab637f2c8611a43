"""Ignition module scaffolder -- generates multi-module Gradle projects.

Validates the caller's parameters into a ``GenerationConfig``, resolves the
template catalog against the selected scopes, synthesizes the build
descriptors and writes the resulting tree.

Quick usage::

    from modgen.scaffolder import GenerationConfigBuilder, generate

    config = (
        GenerationConfigBuilder()
        .module_name("My Module")
        .package_name("com.example.mymodule")
        .scopes("GD")
        .parent_dir("/tmp/output")
        .build()
    )
    result = generate(config)
"""

from modgen.scaffolder.catalog import TemplateCatalog
from modgen.scaffolder.descriptors import BuildDescriptorSynthesizer
from modgen.scaffolder.errors import (
    ConfigError,
    ErrorKind,
    GenerationError,
    MaterializationIOError,
    TargetNotEmptyError,
    TemplatePlanConflict,
    Violation,
)
from modgen.scaffolder.generator import ModuleGenerator, generate
from modgen.scaffolder.materializer import MaterializationResult, TreeMaterializer
from modgen.scaffolder.models import (
    GenerationConfig,
    GradleDsl,
    ProjectScope,
    ScaffoldPlan,
    SourceLanguage,
)
from modgen.scaffolder.resolver import TemplateResolver
from modgen.scaffolder.templates import TemplateRenderer
from modgen.scaffolder.validation import GenerationConfigBuilder, RawGenerationParams, validate

__all__ = [
    "BuildDescriptorSynthesizer",
    "ConfigError",
    "ErrorKind",
    "GenerationConfig",
    "GenerationConfigBuilder",
    "GenerationError",
    "GradleDsl",
    "MaterializationIOError",
    "MaterializationResult",
    "ModuleGenerator",
    "ProjectScope",
    "RawGenerationParams",
    "ScaffoldPlan",
    "SourceLanguage",
    "TargetNotEmptyError",
    "TemplateCatalog",
    "TemplatePlanConflict",
    "TemplateRenderer",
    "TemplateResolver",
    "TreeMaterializer",
    "Violation",
    "generate",
    "validate",
]
