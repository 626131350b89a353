# File: crudgen/exporters.py
"""
crudgen - Artifact Emitter (File-System Manager)
==================================================

Responsible for:
    1. Computing each artifact's destination from the registry.
    2. Applying the artifact's write policy against what is already on disk.
    3. Writing rendered stubs atomically (write-to-temp then rename).
    4. Appending route registrations to the routes file.
    5. Publishing bundled stubs into the project for customisation.

Write policies:

    OVERWRITE   existing file and no --force  -> SKIPPED (exists)
                otherwise                      -> CREATED / UPDATED
    MIGRATION   existing *_create_<table>_table.<ext> -> overwritten in place (UPDATED)
                none                               -> new timestamped file (CREATED)
    APPEND      routes file missing  -> bootstrap command, then MissingRouteFileError
                slug already registered -> SKIPPED (already_registered)
                otherwise               -> APPENDED

Nothing is rolled back: a failure part-way leaves earlier artifacts on disk.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from crudgen.errors import MissingRouteFileError
from crudgen.models import (
    ArtifactKind,
    EmitStatus,
    ProjectLayout,
    ResourceNameSet,
    SkipReason,
    WritePolicy,
)
from crudgen.registry import ArtifactSpec, migration_glob, route_registration_pattern
from crudgen.templates import BUNDLED_STUBS_DIR, STUB_SUFFIX, bundled_stub_names, render
from crudgen.utils import append_file, ensure_directory, read_file, relative_to_root, write_file

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.exporters")

Clock = Callable[[], datetime]
CommandRunner = Callable[..., "subprocess.CompletedProcess[str]"]

_BOOTSTRAP_TIMEOUT_SECONDS: int = 120


# ---------------------------------------------------------------------------
# Result record
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EmitResult:
    """Outcome of emitting (or publishing) a single artifact."""

    kind: Optional[ArtifactKind]
    label: str
    status: EmitStatus
    path: Path
    reason: Optional[SkipReason] = None

    @property
    def skipped(self) -> bool:
        return self.status is EmitStatus.SKIPPED

    @property
    def written(self) -> bool:
        return self.status is not EmitStatus.SKIPPED

    def describe(self, root: Optional[Path] = None) -> str:
        """One-line description, e.g. ``Model: created app/Models/Blog.php``."""
        shown: str = relative_to_root(self.path, root) if root else str(self.path)
        text: str = f"{self.label}: {self.status.value} {shown}"
        if self.reason is not None:
            text += f" ({self.reason.value})"
        return text


# ---------------------------------------------------------------------------
# ArtifactEmitter
# ---------------------------------------------------------------------------


class ArtifactEmitter:
    """
    Writes rendered artifacts into a project.

    Usage::

        emitter = ArtifactEmitter(layout, force=False)
        for spec in build_registry(layout):
            result = emitter.emit(spec, names, loader.load(spec.stub))

    ``clock`` stamps new migration files; ``runner`` executes the bootstrap
    command (``subprocess.run`` signature).  Both are injectable for tests.

    Thread-safety: NOT thread-safe.  One emitter per invocation.
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
        self._bootstrap_attempted: bool = False

    # -----------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------

    def emit(
        self,
        spec: ArtifactSpec,
        names: ResourceNameSet,
        template: str,
    ) -> EmitResult:
        """
        Render *template* for *spec* and apply the spec's write policy.

        Raises:
            MissingRouteFileError: APPEND policy and no routes file.
            OSError: Any filesystem failure.
        """
        destination: Path = spec.destination(names, self._layout, self._clock())
        content: str = render(template, spec.placeholders(names, self._layout))

        if spec.policy is WritePolicy.MIGRATION:
            result: EmitResult = self._emit_migration(spec, names, destination, content)
        elif spec.policy is WritePolicy.APPEND:
            result = self._emit_route(spec, names, destination, content)
        else:
            result = self._emit_file(spec, destination, content)

        self._log_result(result)
        return result

    # -----------------------------------------------------------------
    # Internal: policies
    # -----------------------------------------------------------------

    def _emit_file(self, spec: ArtifactSpec, destination: Path, content: str) -> EmitResult:
        existed: bool = destination.exists()
        if existed and not self._force:
            return EmitResult(
                spec.kind, spec.label, EmitStatus.SKIPPED, destination, SkipReason.EXISTS
            )

        write_file(destination, content)
        status: EmitStatus = EmitStatus.UPDATED if existed else EmitStatus.CREATED
        return EmitResult(spec.kind, spec.label, status, destination)

    def _emit_migration(
        self,
        spec: ArtifactSpec,
        names: ResourceNameSet,
        destination: Path,
        content: str,
    ) -> EmitResult:
        existing: Optional[Path] = self.find_existing_migration(names)
        if existing is not None:
            logger.debug("Reusing existing migration for '%s': %s", names.table_name, existing)
            write_file(existing, content)
            return EmitResult(spec.kind, spec.label, EmitStatus.UPDATED, existing)

        write_file(destination, content)
        return EmitResult(spec.kind, spec.label, EmitStatus.CREATED, destination)

    def _emit_route(
        self,
        spec: ArtifactSpec,
        names: ResourceNameSet,
        routes_file: Path,
        content: str,
    ) -> EmitResult:
        if not routes_file.is_file():
            self._bootstrap_routes(routes_file)
        if not routes_file.is_file():
            raise MissingRouteFileError(routes_file)

        if route_registration_pattern(names).search(read_file(routes_file)):
            return EmitResult(
                spec.kind,
                spec.label,
                EmitStatus.SKIPPED,
                routes_file,
                SkipReason.ALREADY_REGISTERED,
            )

        append_file(routes_file, content)
        return EmitResult(spec.kind, spec.label, EmitStatus.APPENDED, routes_file)

    # -----------------------------------------------------------------
    # Internal: helpers
    # -----------------------------------------------------------------

    def find_existing_migration(self, names: ResourceNameSet) -> Optional[Path]:
        """First (sorted) migration file that already creates this table."""
        migrations_dir: Path = self._layout.path(self._layout.migrations_dir)
        if not migrations_dir.is_dir():
            return None
        # Path.glob matches dotfiles (editor swap files, our own temp files).
        matches: List[Path] = sorted(
            p
            for p in migrations_dir.glob(migration_glob(names, self._layout))
            if p.is_file() and not p.name.startswith(".")
        )
        return matches[0] if matches else None

    def _bootstrap_routes(self, routes_file: Path) -> None:
        """Ask the host framework to create the routes file (once per emitter)."""
        command: List[str] = list(self._layout.bootstrap_command)
        if not command or self._bootstrap_attempted:
            return
        self._bootstrap_attempted = True

        logger.warning(
            "Route file %s is missing; running: %s", routes_file, " ".join(command)
        )
        try:
            completed = self._runner(
                command,
                cwd=str(self._layout.root),
                capture_output=True,
                text=True,
                timeout=_BOOTSTRAP_TIMEOUT_SECONDS,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            logger.error("Bootstrap command failed to run: %s", exc)
            return

        if completed.returncode != 0:
            logger.error(
                "Bootstrap command exited with %d: %s",
                completed.returncode,
                (completed.stderr or completed.stdout or "").strip(),
            )
        else:
            logger.debug("Bootstrap output: %s", (completed.stdout or "").strip())

    def _log_result(self, result: EmitResult) -> None:
        message: str = result.describe(self._layout.root)
        if result.skipped:
            hint: str = " (use --force to overwrite)" if result.reason is SkipReason.EXISTS else ""
            logger.warning("%s%s", message, hint)
        else:
            logger.info("%s", message)


# ---------------------------------------------------------------------------
# Stub publishing
# ---------------------------------------------------------------------------


def publish_stubs(
    layout: ProjectLayout,
    *,
    force: bool = False,
    names: Optional[Sequence[str]] = None,
) -> List[EmitResult]:
    """
    Copy bundled stubs into ``layout.stubs_dir`` so the project can edit them.

    Existing files are skipped unless *force*.  Returns one result per stub.
    """
    target_dir: Path = layout.path(layout.stubs_dir)
    ensure_directory(target_dir)

    results: List[EmitResult] = []
    for name in names if names is not None else bundled_stub_names():
        source: Path = BUNDLED_STUBS_DIR / (name + STUB_SUFFIX)
        target: Path = target_dir / source.name
        existed: bool = target.exists()

        if existed and not force:
            result: EmitResult = EmitResult(
                None, "Stub", EmitStatus.SKIPPED, target, SkipReason.EXISTS
            )
            logger.warning("%s (use --force to overwrite)", result.describe(layout.root))
        else:
            shutil.copyfile(source, target)
            result = EmitResult(
                None,
                "Stub",
                EmitStatus.UPDATED if existed else EmitStatus.CREATED,
                target,
            )
            logger.info("%s", result.describe(layout.root))
        results.append(result)

    logger.info("Published %d stub(s) to %s.", sum(r.written for r in results), target_dir)
    return results


__all__: List[str] = [
    "ArtifactEmitter",
    "EmitResult",
    "publish_stubs",
]
