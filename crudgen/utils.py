# File: crudgen/utils.py
"""
crudgen - Utility Functions & Helpers
=======================================
String casing transforms and file I/O helpers shared by the name deriver,
the stub loader and the emitter.

- Casing functions are ``@lru_cache``'d; the same handful of identifiers
  is converted many times while building placeholder maps.
- File writes go through a write-to-temp-then-rename helper so a crash
  never leaves a half-written artifact behind.
"""

from __future__ import annotations

import functools
import logging
import os
import re
import tempfile
import time
from pathlib import Path
from typing import List, Optional, Tuple

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.utils")

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns (compiled once at module load)
# ---------------------------------------------------------------------------

_NON_ALPHANUM_RE: re.Pattern[str] = re.compile(r"[^a-zA-Z0-9]")
# Digits (and any lowercase run after them) stay attached to the preceding
# word; only a leading digit run forms a word of its own.
_SPLIT_WORDS_RE: re.Pattern[str] = re.compile(
    r"[A-Z]?[a-z]+(?:\d+[a-z]*)*"
    r"|[A-Z]+(?:\d+[a-z]*)*(?=[A-Z][a-z]|\b)"
    r"|[A-Z]+(?:\d+[a-z]*)*"
    r"|\d+"
)


# ---------------------------------------------------------------------------
# Cached string transformation functions
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def _extract_words(name: str) -> Tuple[str, ...]:
    """
    Split an identifier into words, keeping each word's original casing.

    Non-alphanumeric characters (including any non-ASCII letter) act as
    separators and camel-case transitions start new words.  Digits belong to
    the word they follow, so ``Item2s`` is one word.

        >>> _extract_words("blog_post")
        ('blog', 'post')
        >>> _extract_words("HTTPClient")
        ('HTTP', 'Client')
        >>> _extract_words("Oauth2Clients")
        ('Oauth2', 'Clients')
    """
    cleaned: str = _NON_ALPHANUM_RE.sub(" ", name)
    return tuple(w for w in _SPLIT_WORDS_RE.findall(cleaned) if w)


@functools.lru_cache(maxsize=None)
def to_pascal_case(name: str) -> str:
    """
    Convert any string to PascalCase.

    Only the first letter of each word is touched, so acronyms survive.

    Examples:
        >>> to_pascal_case("blog_post")
        'BlogPost'
        >>> to_pascal_case("blog-post")
        'BlogPost'
        >>> to_pascal_case("HTTPClient")
        'HTTPClient'
    """
    if not name:
        return ""
    return "".join(w[0].upper() + w[1:] for w in _extract_words(name))


@functools.lru_cache(maxsize=None)
def to_camel_case(name: str) -> str:
    """
    Convert any string to camelCase (PascalCase with a lowercase first letter).

    Examples:
        >>> to_camel_case("BlogPost")
        'blogPost'
        >>> to_camel_case("blog_post")
        'blogPost'
    """
    pascal: str = to_pascal_case(name)
    if not pascal:
        return ""
    return pascal[0].lower() + pascal[1:]


@functools.lru_cache(maxsize=None)
def to_snake_case(name: str) -> str:
    """
    Convert any string to snake_case.

    Examples:
        >>> to_snake_case("BlogPosts")
        'blog_posts'
        >>> to_snake_case("HTTPClients")
        'http_clients'
    """
    return "_".join(w.lower() for w in _extract_words(name))


@functools.lru_cache(maxsize=None)
def to_kebab_case(name: str) -> str:
    """Convert any string to kebab-case (used in URL paths)."""
    return "-".join(w.lower() for w in _extract_words(name))


@functools.lru_cache(maxsize=None)
def to_plural(name: str) -> str:
    """
    Suffix pluralisation: append ``"s"``.

    There is no irregular-plural table, so ``Category`` becomes
    ``Categorys`` and ``Person`` becomes ``Persons``.
    """
    if not name:
        return ""
    return name + "s"


# ---------------------------------------------------------------------------
# File I/O helpers
# ---------------------------------------------------------------------------


def ensure_directory(path: Path) -> None:
    """Create directory (and parents) if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)


def write_file(path: Path, content: str) -> int:
    """
    Write *content* to *path*, creating parent directories as needed.

    The content goes to a temporary file in the same directory which is then
    renamed over the target, so readers never see a half-written file.

    Returns the number of bytes written.
    """
    ensure_directory(path.parent)

    encoded: bytes = content.encode("utf-8")

    fd, tmp_path = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(encoded)
        os.replace(tmp_path, str(path))
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise

    logger.debug("Wrote %d bytes to %s", len(encoded), path)
    return len(encoded)



def append_file(path: Path, content: str) -> int:
    """
    Append *content* to an existing file.

    A newline is inserted first when the file does not already end with one.
    """
    existing: str = read_file(path)
    if existing and not existing.endswith("\n"):
        content = "\n" + content

    with open(path, "a", encoding="utf-8") as fh:
        fh.write(content)

    logger.debug("Appended %d characters to %s", len(content), path)
    return len(content)


def read_file(path: Path) -> str:
    """Read a file and return its content as a string."""
    return path.read_text(encoding="utf-8")


def relative_to_root(path: Path, root: Path) -> str:
    """Render *path* relative to *root* when possible (for log/report output)."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


# ---------------------------------------------------------------------------
# Timer context manager
# ---------------------------------------------------------------------------


class Timer:
    """
    Simple context-manager timer for profiling generation steps.

    Usage:
        with Timer("emit artifacts") as t:
            ...
        print(t.elapsed)
    """

    __slots__ = ("label", "start_time", "end_time", "elapsed")

    def __init__(self, label: str = "operation") -> None:
        self.label: str = label
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        logger.debug("Timer [%s]: %.4f seconds", self.label, self.elapsed)

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "to_pascal_case",
    "to_camel_case",
    "to_snake_case",
    "to_kebab_case",
    "to_plural",
    "ensure_directory",
    "write_file",
    "append_file",
    "read_file",
    "relative_to_root",
    "Timer",
]
