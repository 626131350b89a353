"""
tests/conftest.py
Shared fixtures for the crudgen test suite.

No external mocking libraries are used; real file I/O is performed inside
temporary project directories managed by pytest's tmp_path fixture.  The
bootstrap command runner is replaced with a recording fake so no test ever
spawns ``php``.
"""

from __future__ import annotations

import logging
import pathlib
import subprocess
from datetime import datetime
from typing import Any, Callable, List, Optional, Sequence

import pytest

from crudgen.generator import CrudGenerator
from crudgen.models import ProjectLayout


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ROUTES_PREAMBLE: str = (
    "<?php\n"
    "\n"
    "use Illuminate\\Support\\Facades\\Route;\n"
)

FIXED_NOW: datetime = datetime(2024, 5, 1, 12, 30, 45)


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_crudgen_logger() -> Any:
    """Undo the handler/propagation changes cli_main makes to the crudgen logger."""
    yield
    root_logger = logging.getLogger("crudgen")
    root_logger.handlers.clear()
    root_logger.propagate = True
    root_logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Bootstrap runner fake
# ---------------------------------------------------------------------------


class FakeRunner:
    """
    Stands in for ``subprocess.run``.

    Records every call; when *creates* is given, writes that file (relative
    to ``cwd``) the way ``php artisan install:api`` would.
    """

    def __init__(
        self,
        creates: Optional[str] = None,
        returncode: int = 0,
        raises: Optional[BaseException] = None,
    ) -> None:
        self.creates: Optional[str] = creates
        self.returncode: int = returncode
        self.raises: Optional[BaseException] = raises
        self.calls: List[Sequence[str]] = []
        self.kwargs: List[dict] = []

    def __call__(self, command: Sequence[str], **kwargs: Any) -> subprocess.CompletedProcess:
        self.calls.append(list(command))
        self.kwargs.append(kwargs)
        if self.raises is not None:
            raise self.raises
        if self.creates is not None:
            target = pathlib.Path(kwargs["cwd"]) / self.creates
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(ROUTES_PREAMBLE, encoding="utf-8")
        return subprocess.CompletedProcess(command, self.returncode, stdout="", stderr="")


# ---------------------------------------------------------------------------
# Project fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fixed_clock() -> Callable[[], datetime]:
    """Clock pinned to FIXED_NOW so migration filenames are predictable."""
    return lambda: FIXED_NOW


@pytest.fixture()
def project_root(tmp_path: pathlib.Path) -> pathlib.Path:
    """A bare Laravel-shaped project: just a routes/api.php file."""
    root = tmp_path / "app"
    (root / "routes").mkdir(parents=True)
    (root / "routes" / "api.php").write_text(ROUTES_PREAMBLE, encoding="utf-8")
    return root


@pytest.fixture()
def layout(project_root: pathlib.Path) -> ProjectLayout:
    """Default layout rooted at the temp project, with bootstrap disabled."""
    return ProjectLayout(root=project_root, bootstrap_command=[])


@pytest.fixture()
def generator(
    layout: ProjectLayout, fixed_clock: Callable[[], datetime]
) -> CrudGenerator:
    """Generator without --force."""
    return CrudGenerator(layout, clock=fixed_clock, runner=FakeRunner())


@pytest.fixture()
def force_generator(
    layout: ProjectLayout, fixed_clock: Callable[[], datetime]
) -> CrudGenerator:
    """Generator with --force."""
    return CrudGenerator(layout, force=True, clock=fixed_clock, runner=FakeRunner())


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def snapshot(root: pathlib.Path) -> dict:
    """Map of relative path -> content for every file under *root*."""
    return {
        p.relative_to(root).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }
