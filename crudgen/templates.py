# File: crudgen/templates.py
"""
crudgen - Stub Loader & Renderer
==================================

Stubs are plain text files (``<name>.stub``) containing ``{{ token }}``
placeholders.  Rendering is literal find-and-replace, not a template
language:

    - tokens with no entry in the placeholder map are left verbatim;
    - entries in the map that the stub never mentions are ignored.

Lookup order for a stub named ``controller``:

    1. ``<project root>/<layout.stubs_dir>/controller.stub``  (project override)
    2. ``crudgen/stubs/controller.stub``                        (bundled default)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from crudgen.errors import TemplateNotFoundError
from crudgen.models import ProjectLayout
from crudgen.utils import read_file

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.templates")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

BUNDLED_STUBS_DIR: Path = Path(__file__).parent / "stubs"
STUB_SUFFIX: str = ".stub"


def token(name: str) -> str:
    """Return the placeholder marker for *name* (``{{ name }}``)."""
    return "{{ " + name + " }}"


def render(text: str, placeholders: Mapping[str, str]) -> str:
    """
    Substitute every ``{{ key }}`` in *text* with its value.

    Keys are bare names (``"class"``), not markers.  Replacement happens in
    mapping order and values are inserted literally.
    """
    for key, value in placeholders.items():
        text = text.replace(token(key), value)
    return text


def bundled_stub_names() -> List[str]:
    """Names of all stubs shipped with the package, sorted."""
    return sorted(p.name[: -len(STUB_SUFFIX)] for p in BUNDLED_STUBS_DIR.glob("*" + STUB_SUFFIX))


class TemplateLoader:
    """
    Resolves stub names to text, preferring project overrides.

    Loaded stubs are cached for the lifetime of the loader; one loader
    serves one generator run.
    """

    def __init__(
        self,
        layout: ProjectLayout,
        bundled_dir: Optional[Path] = None,
    ) -> None:
        self._override_dir: Path = layout.path(layout.stubs_dir)
        self._bundled_dir: Path = bundled_dir if bundled_dir is not None else BUNDLED_STUBS_DIR
        self._cache: Dict[str, str] = {}

    def candidates(self, name: str) -> Tuple[Path, Path]:
        """Paths checked for *name*, in precedence order."""
        filename: str = name + STUB_SUFFIX
        return (self._override_dir / filename, self._bundled_dir / filename)

    def resolve(self, name: str) -> Path:
        """
        Return the path that :meth:`load` would read for *name*.

        Raises:
            TemplateNotFoundError: If no candidate exists.
        """
        searched: Tuple[Path, Path] = self.candidates(name)
        for path in searched:
            if path.is_file():
                return path
        raise TemplateNotFoundError(name, searched)

    def load(self, name: str) -> str:
        """Return the stub text for *name*."""
        if name in self._cache:
            return self._cache[name]

        path: Path = self.resolve(name)
        text: str = read_file(path)
        if path.parent == self._override_dir:
            logger.info("Using project stub override: %s", path)
        else:
            logger.debug("Using bundled stub: %s", path)

        self._cache[name] = text
        return text


__all__: List[str] = [
    "BUNDLED_STUBS_DIR",
    "STUB_SUFFIX",
    "TemplateLoader",
    "bundled_stub_names",
    "render",
    "token",
]
