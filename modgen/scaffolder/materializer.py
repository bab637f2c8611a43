"""Writes a scaffold plan to disk.

Materialization happens in two phases.  First every output path is checked
against the filesystem and every file's content is rendered in memory; any
failure here leaves the disk untouched.  Only then are directories created
and files written, in plan order.

The write phase is best effort: if the filesystem fails part way through,
files written so far are left in place and a
:class:`~modgen.scaffolder.errors.MaterializationIOError` names the path
that failed.  There is no rollback.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from modgen.scaffolder.catalog import TemplateCatalog
from modgen.scaffolder.errors import MaterializationIOError, TargetNotEmptyError
from modgen.scaffolder.models import ScaffoldPlan, ScaffoldPlanEntry
from modgen.scaffolder.substitution import TokenTable, render


@dataclass
class MaterializationResult:
    """What a materialization created."""

    root: Path
    files: list[Path] = field(default_factory=list)
    directories: list[Path] = field(default_factory=list)

    def relative_files(self) -> list[str]:
        return [p.relative_to(self.root).as_posix() for p in self.files]


class TreeMaterializer:
    """Renders and writes plan entries beneath a project root."""

    def __init__(self, root_dir: Path, catalog: TemplateCatalog, tokens: TokenTable) -> None:
        self.root_dir = Path(root_dir)
        self.catalog = catalog
        self.tokens = tokens

    # -- Public API --------------------------------------------------------

    def materialize(self, plan: ScaffoldPlan) -> MaterializationResult:
        """Write every entry of *plan* under the project root.

        Raises:
            TargetNotEmptyError: If any planned file already exists, or a
                planned directory is occupied by a file.  Raised before
                anything is written.
            MaterializationIOError: If reading a template or writing an
                output fails.
        """
        self.check_collisions(plan)
        contents = [(self.root_dir / entry.output_path, self.content_of(entry)) for entry in plan]

        result = MaterializationResult(root=self.root_dir)
        for target, data in contents:
            self._ensure_dir(target.parent, result)
            try:
                target.write_bytes(data)
            except OSError as exc:
                raise MaterializationIOError(target, exc) from exc
            result.files.append(target)
        return result

    def check_collisions(self, plan: ScaffoldPlan) -> None:
        """Raise :class:`TargetNotEmptyError` if the plan would clobber anything."""
        collisions: list[Path] = []
        for entry in plan:
            target = self.root_dir / entry.output_path
            if target.exists() or target.is_symlink():
                collisions.append(target)
                continue
            for ancestor in target.parents:
                if ancestor == self.root_dir or self.root_dir not in ancestor.parents:
                    break
                if ancestor.exists() and not ancestor.is_dir():
                    collisions.append(ancestor)
                    break
        if self.root_dir.exists() and not self.root_dir.is_dir():
            collisions.insert(0, self.root_dir)
        if collisions:
            raise TargetNotEmptyError(list(dict.fromkeys(collisions)))

    def content_of(self, entry: ScaffoldPlanEntry) -> bytes:
        """Final bytes of *entry*: verbatim for binary entries, substituted otherwise."""
        if entry.text is not None:
            return render(entry.text, self.tokens).encode("utf-8")

        path = self.catalog.path_of(entry.source)
        try:
            raw = self.catalog.read(entry.source)
        except OSError as exc:
            raise MaterializationIOError(path, exc) from exc
        if entry.binary:
            return raw
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MaterializationIOError(path, exc) from exc
        return render(text, self.tokens).encode("utf-8")

    # -- Internal ----------------------------------------------------------

    def _ensure_dir(self, directory: Path, result: MaterializationResult) -> None:
        if directory.is_dir():
            return
        missing = [directory, *(p for p in directory.parents if not p.exists())]
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise MaterializationIOError(directory, exc) from exc
        result.directories.extend(sorted(set(missing), key=lambda p: len(p.parts)))
