"""Data model for the module scaffolding engine.

``GenerationConfig`` is the validated, immutable input to a generation.  The
remaining types (catalog entries, plan entries, submodule descriptors) are
owned by the engine for the duration of a single call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field

from modgen.scaffolder.errors import TemplatePlanConflict
from modgen.utils import to_class_name


# ---------------------------------------------------------------------------
# Scopes
# ---------------------------------------------------------------------------

class ProjectScope(str, Enum):
    """An execution context of the Ignition platform, one per submodule.

    The value is the submodule folder name.
    """
    COMMON = "common"
    GATEWAY = "gateway"
    DESIGNER = "designer"
    CLIENT = "client"

    @property
    def folder_name(self) -> str:
        return self.value

    @property
    def code(self) -> str:
        """Single-letter shorthand; Common has none since it is always derived."""
        return _SCOPE_CODES.get(self, "")

    @property
    def hook_suffix(self) -> str:
        """Suffix of the stub class generated for this scope."""
        if self is ProjectScope.COMMON:
            return "Module"
        return f"{self.value.capitalize()}Hook"

    @classmethod
    def from_code(cls, code: str) -> "ProjectScope":
        """Look up a selectable scope by its shorthand letter (case-insensitive)."""
        for scope, scope_code in _SCOPE_CODES.items():
            if scope_code == code.upper():
                return scope
        raise ValueError(f"Unknown scope code: {code!r}")


_SCOPE_CODES: dict[ProjectScope, str] = {
    ProjectScope.GATEWAY: "G",
    ProjectScope.DESIGNER: "D",
    ProjectScope.CLIENT: "C",
}

#: Order in which submodules are always listed, independent of input order.
CANONICAL_SCOPE_ORDER: tuple[ProjectScope, ...] = (
    ProjectScope.COMMON,
    ProjectScope.GATEWAY,
    ProjectScope.DESIGNER,
    ProjectScope.CLIENT,
)


def canonical_order(scopes: Iterable[ProjectScope]) -> tuple[ProjectScope, ...]:
    """Return *scopes* de-duplicated and sorted into canonical order."""
    wanted = set(scopes)
    return tuple(s for s in CANONICAL_SCOPE_ORDER if s in wanted)


# ---------------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------------

class SourceLanguage(str, Enum):
    """Language the generated hook classes are written in."""
    JAVA = "java"
    KOTLIN = "kotlin"

    @property
    def extension(self) -> str:
        return "kt" if self is SourceLanguage.KOTLIN else "java"

    @property
    def source_dir(self) -> str:
        """Folder under ``src/main`` holding sources of this language."""
        return self.value


class GradleDsl(str, Enum):
    """Dialect of the generated Gradle scripts."""
    KOTLIN = "kotlin"
    GROOVY = "groovy"

    @property
    def build_script(self) -> str:
        return "build.gradle.kts" if self is GradleDsl.KOTLIN else "build.gradle"

    @property
    def settings_script(self) -> str:
        return "settings.gradle.kts" if self is GradleDsl.KOTLIN else "settings.gradle"


# ---------------------------------------------------------------------------
# Generation configuration
# ---------------------------------------------------------------------------

class GenerationConfig(BaseModel):
    """Validated, immutable parameters of a single generation.

    Construct through :func:`modgen.scaffolder.validation.validate` or the
    ``GenerationConfigBuilder``; building one directly skips validation.
    """

    model_config = ConfigDict(frozen=True)

    module_name: str = Field(..., description="Human readable module name")
    module_id: str = Field(..., description="Lowercase hyphenated slug of the module name")
    package_name: str = Field(..., description="Dotted root package, e.g. 'com.example.thing'")
    scopes: tuple[ProjectScope, ...] = Field(
        ..., description="Selected scopes in canonical order (Common is implied)"
    )
    parent_dir: Path = Field(..., description="Absolute directory receiving the project folder")
    include_build_tooling: bool = Field(
        default=True, description="Emit wrapper properties and VCS housekeeping files"
    )
    overwrite: bool = Field(
        default=False, description="Permit generating into a non-empty target directory"
    )
    project_language: SourceLanguage = Field(
        default=SourceLanguage.JAVA, description="Language of the generated hook classes"
    )
    settings_dsl: GradleDsl = Field(default=GradleDsl.KOTLIN)
    build_dsl: GradleDsl = Field(default=GradleDsl.KOTLIN)
    root_plugin_config: str = Field(
        default="", description="Replaces the contents of the root plugins block when set"
    )
    custom_replacements: dict[str, str] = Field(
        default_factory=dict,
        description="Extra literal replacements applied to text file contents",
    )
    warnings: tuple[str, ...] = Field(
        default=(), description="Non-fatal findings from validation, for the caller to report"
    )

    # Values written into the generated build descriptors.
    module_description: str = Field(default="")
    sdk_version: str = Field(default="8.1.20")
    required_ignition_version: str = Field(default="8.1.11")
    module_plugin_version: str = Field(default="0.4.0")
    gradle_version: str = Field(default="7.5.1")
    skip_module_signing: bool = Field(default=True)
    debug_plugin_config: bool = Field(default=False)

    @property
    def class_name(self) -> str:
        """PascalCase form of the module name, e.g. ``MyModule``."""
        return to_class_name(self.module_name)

    @property
    def module_filename(self) -> str:
        """Name of the ``.modl`` file, without extension."""
        return "-".join(self.module_name.split())

    @property
    def root_dir(self) -> Path:
        """Directory that receives the generated tree."""
        return self.parent_dir / self.module_id

    @property
    def package_path(self) -> PurePosixPath:
        """The root package as a relative directory path."""
        return PurePosixPath(*self.package_name.split("."))

    @property
    def effective_scopes(self) -> tuple[ProjectScope, ...]:
        """Common plus the selected scopes, in canonical order."""
        return canonical_order((ProjectScope.COMMON, *self.scopes))

    def hook_class_name(self, scope: ProjectScope) -> str:
        return f"{self.class_name}{scope.hook_suffix}"

    def hook_fqcn(self, scope: ProjectScope) -> str:
        """Fully qualified name of the stub class for *scope*."""
        return f"{self.package_name}.{scope.folder_name}.{self.hook_class_name(scope)}"


# ---------------------------------------------------------------------------
# Template catalog entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScopePredicate:
    """Inclusion condition of a catalog entry.

    Either ``always`` (shared/common content, included once any scope is
    selected) or ``requires`` exactly one named scope.
    """

    scope: Optional[ProjectScope] = None

    @classmethod
    def always(cls) -> "ScopePredicate":
        return cls(None)

    @classmethod
    def requires(cls, scope: ProjectScope) -> "ScopePredicate":
        return cls(scope)

    @property
    def is_always(self) -> bool:
        return self.scope is None

    def is_satisfied_by(self, scopes: Iterable[ProjectScope]) -> bool:
        selected = tuple(scopes)
        if not selected:
            return False
        if self.scope is None or self.scope is ProjectScope.COMMON:
            return True
        return self.scope in selected

    def __str__(self) -> str:
        return "always" if self.scope is None else f"requires {self.scope.value}"


@dataclass(frozen=True)
class TemplateEntry:
    """A single template in the catalog.

    Attributes:
        source: Path of the template resource, relative to the template root.
        output: Output path pattern relative to the project root; may contain
            markers such as ``<PACKAGE_ROOT>``.
        predicate: Scope condition for inclusion.
        binary: Copy byte-for-byte instead of running substitution.
        tooling: Only emitted when ``include_build_tooling`` is set.
        language: Only emitted for projects in this source language; ``None``
            for language-neutral files.
    """

    source: str
    output: str
    predicate: ScopePredicate = field(default_factory=ScopePredicate.always)
    binary: bool = False
    tooling: bool = False
    language: Optional[SourceLanguage] = None


# ---------------------------------------------------------------------------
# Scaffold plan
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScaffoldPlanEntry:
    """A resolved output file and where its content comes from.

    Exactly one of ``source`` (a catalog template) or ``text`` (inline
    content produced by the descriptor synthesizer) is set.
    """

    output_path: PurePosixPath
    source: Optional[str] = None
    text: Optional[str] = None
    binary: bool = False

    def __post_init__(self) -> None:
        if (self.source is None) == (self.text is None):
            raise ValueError("Plan entry needs exactly one of 'source' or 'text'")

    @property
    def origin(self) -> str:
        """Short description of the content source, for diagnostics."""
        return self.source if self.source is not None else f"<synthesized {self.output_path}>"


class ScaffoldPlan:
    """Ordered, immutable sequence of plan entries with unique output paths."""

    def __init__(self, entries: Iterable[ScaffoldPlanEntry] = ()) -> None:
        checked: dict[PurePosixPath, ScaffoldPlanEntry] = {}
        for entry in entries:
            existing = checked.get(entry.output_path)
            if existing is not None:
                raise TemplatePlanConflict(
                    entry.output_path, (existing.origin, entry.origin)
                )
            checked[entry.output_path] = entry
        self._entries: tuple[ScaffoldPlanEntry, ...] = tuple(checked.values())

    def merge(self, entries: Iterable[ScaffoldPlanEntry]) -> "ScaffoldPlan":
        """Return a new plan with *entries* appended."""
        return ScaffoldPlan((*self._entries, *entries))

    @property
    def entries(self) -> tuple[ScaffoldPlanEntry, ...]:
        return self._entries

    def paths(self) -> list[PurePosixPath]:
        return [e.output_path for e in self._entries]

    def __iter__(self) -> Iterator[ScaffoldPlanEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> ScaffoldPlanEntry:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"ScaffoldPlan({len(self._entries)} entries)"


# ---------------------------------------------------------------------------
# Build descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SubmoduleDescriptor:
    """A per-scope build unit of the generated project.

    Attributes:
        scope: The scope this submodule implements.
        depends_on: Names of submodules this one depends on.
        packaged: Whether the submodule contributes a jar to the module.
        artifacts: SDK artifacts compiled against (``group:name``).
        module_scopes: Scope letters under which the packaging plugin loads
            this submodule, e.g. ``"GD"`` for a Common shared by Gateway and
            Designer.
    """

    scope: ProjectScope
    depends_on: tuple[str, ...] = ()
    packaged: bool = True
    artifacts: tuple[str, ...] = ()
    module_scopes: str = ""

    @property
    def name(self) -> str:
        return self.scope.folder_name

    @property
    def gradle_path(self) -> str:
        return f":{self.name}"
