# File: crudgen/generator.py
"""
crudgen - CRUD Generation Pipeline (Orchestrator)
===================================================

Connects the pieces for one ``make:crud`` invocation:

    name → derive() → build_registry() → preload stubs → emit each artifact

Workflow::

    1. Derive the ResourceNameSet (InvalidInputError before anything is written).
    2. Build the artifact registry for the project layout.
    3. Load every stub up front; a missing stub aborts the whole run while
       the project is still untouched.
    4. Emit artifacts in registry order, collecting EmitResults.
    5. A missing routes file is recorded on the report (earlier artifacts
       stay on disk); any OSError propagates.

Also home to the config-file loader that builds a ``ProjectLayout``.
"""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml
from pydantic import ValidationError

from crudgen.errors import ConfigError, MissingRouteFileError
from crudgen.exporters import ArtifactEmitter, Clock, CommandRunner, EmitResult
from crudgen.models import EmitStatus, ProjectLayout, ResourceNameSet
from crudgen.naming import derive
from crudgen.registry import ArtifactSpec, build_registry, seeder_class
from crudgen.templates import TemplateLoader
from crudgen.utils import Timer

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.generator")

CONFIG_FILENAMES: Tuple[str, ...] = ("crudgen.yaml", "crudgen.yml", "crudgen.json")
CONFIG_SECTION: str = "crudgen"


# ---------------------------------------------------------------------------
# Generation report
# ---------------------------------------------------------------------------


@dataclass(frozen=False, slots=True)
class GenerationReport:
    """
    What one ``generate()`` call did.

    ``results`` is in emission order.  ``errors`` holds recoverable failures
    (currently only a missing routes file).
    """

    names: ResourceNameSet
    root: Path
    api_prefix: str = "/api"
    results: List[EmitResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return not self.errors

    def count(self, status: EmitStatus) -> int:
        return sum(1 for r in self.results if r.status is status)

    def endpoints(self) -> List[str]:
        """The five apiResource routes, e.g. ``GET    /api/blogs/{id}``."""
        base: str = f"{self.api_prefix.rstrip('/')}/{self.names.resource_slug}"
        return [
            f"GET    {base}",
            f"POST   {base}",
            f"GET    {base}/{{id}}",
            f"PUT    {base}/{{id}}",
            f"DELETE {base}/{{id}}",
        ]

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines: List[str] = []
        status: str = "✅ CRUD generation completed!" if self.success else "❌ CRUD generation incomplete"
        lines.append(status)
        lines.append("")
        for result in self.results:
            icon: str = "⊘" if result.skipped else "✓"
            lines.append(f"  {icon} {result.describe(self.root)}")

        if self.errors:
            lines.append("")
            lines.append(f"Errors ({len(self.errors)}):")
            for err in self.errors:
                lines.append(f"  ✗ {err}")

        lines.append("")
        lines.append("Next:")
        lines.append("  php artisan migrate")
        lines.append(f"  php artisan db:seed --class={seeder_class(self.names)}")
        lines.append("")
        lines.append("API endpoints:")
        lines.extend(f"  {e}" for e in self.endpoints())
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------


def _load_config_file(path: Path) -> Dict[str, Any]:
    """Parse a YAML or JSON config file into a mapping."""
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    try:
        if path.suffix.lower() == ".json":
            data: Any = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid config in {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Expected a mapping at top level of {path}, got {type(data).__name__}."
        )
    section: Any = data.get(CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigError(f"'{CONFIG_SECTION}' in {path} must be a mapping.")
    return section


def find_config_file(root: Path) -> Optional[Path]:
    """First of ``crudgen.yaml`` / ``crudgen.yml`` / ``crudgen.json`` in *root*."""
    for filename in CONFIG_FILENAMES:
        candidate: Path = root / filename
        if candidate.is_file():
            return candidate
    return None


def load_layout(
    root: Path,
    config_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> ProjectLayout:
    """
    Build the ``ProjectLayout`` for a project.

    Precedence (lowest to highest): model defaults, config file, *overrides*.
    ``root`` always wins over any ``root`` in the file.

    Raises:
        ConfigError: Unreadable file or invalid values.
    """
    data: Dict[str, Any] = {}

    path: Optional[Path] = config_path if config_path is not None else find_config_file(root)
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        data.update(_load_config_file(path))
        logger.info("Loaded config from %s", path)

    if overrides:
        data.update(overrides)
    data["root"] = root

    try:
        return ProjectLayout.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid crudgen configuration: {exc}") from exc


# ---------------------------------------------------------------------------
# CrudGenerator
# ---------------------------------------------------------------------------


class CrudGenerator:
    """
    Generates the full CRUD artifact set for one resource.

    Usage::

        generator = CrudGenerator(layout, force=False)
        report = generator.generate("Admin/Team", model="Member")
        print(report.summary())
    """

    def __init__(
        self,
        layout: ProjectLayout,
        *,
        force: bool = False,
        clock: Clock = datetime.now,
        runner: CommandRunner = subprocess.run,
    ) -> None:
        self._layout: ProjectLayout = layout
        self._force: bool = force
        self._clock: Clock = clock
        self._runner: CommandRunner = runner

    @property
    def layout(self) -> ProjectLayout:
        return self._layout

    def generate(self, name: str, model: Optional[str] = None) -> GenerationReport:
        """
        Derive names from *name* and emit every registered artifact.

        Raises:
            InvalidInputError: Bad resource name or model override.
            TemplateNotFoundError: A stub is missing (nothing written).
            OSError: Filesystem failure (earlier artifacts remain).
        """
        with Timer("make:crud") as timer:
            names: ResourceNameSet = derive(name, model)
            logger.info(
                "Generating CRUD for %r (class %s, model %s, table %s)",
                names.raw_input,
                names.class_name,
                names.model_class_name,
                names.table_name,
            )

            specs: List[ArtifactSpec] = build_registry(self._layout)
            loader: TemplateLoader = TemplateLoader(self._layout)
            templates: Dict[str, str] = {spec.stub: loader.load(spec.stub) for spec in specs}

            emitter: ArtifactEmitter = ArtifactEmitter(
                self._layout,
                force=self._force,
                clock=self._clock,
                runner=self._runner,
            )
            report: GenerationReport = GenerationReport(
                names=names,
                root=self._layout.root,
                api_prefix=self._layout.api_prefix,
            )

            for spec in specs:
                try:
                    report.results.append(emitter.emit(spec, names, templates[spec.stub]))
                except MissingRouteFileError as exc:
                    logger.error("%s", exc)
                    report.errors.append(str(exc))

        report.elapsed_seconds = timer.elapsed
        logger.info(
            "Done in %.3fs: %d written, %d skipped, %d error(s).",
            timer.elapsed,
            len(report.results) - report.count(EmitStatus.SKIPPED),
            report.count(EmitStatus.SKIPPED),
            len(report.errors),
        )
        return report


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "CONFIG_FILENAMES",
    "CrudGenerator",
    "GenerationReport",
    "find_config_file",
    "load_layout",
]
