# File: crudgen/naming.py
"""
crudgen - Name Deriver
========================

Turns one user-supplied resource identifier into the full set of names the
templates need.  Pure and deterministic: identical input always produces an
identical :class:`ResourceNameSet`.

    >>> names = derive("Admin/blog_post", model_override="Post")
    >>> names.class_name, names.model_class_name, names.table_name
    ('BlogPost', 'Post', 'posts')
    >>> names.resource_slug, names.namespace_suffix, names.path_prefix
    ('blog-posts', '\\\\Admin', 'Admin/')
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from crudgen.errors import InvalidInputError
from crudgen.models import ResourceNameSet
from crudgen.utils import (
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_plural,
    to_snake_case,
)

logger: logging.Logger = logging.getLogger("crudgen.naming")

_PATH_SEPARATORS_RE: re.Pattern[str] = re.compile(r"[\\/]+")

NAMESPACE_SEPARATOR: str = "\\"
PATH_SEPARATOR: str = "/"


def split_segments(raw_input: str) -> List[str]:
    """Split on runs of ``/`` or ``\\`` and drop empty segments."""
    return [p for p in _PATH_SEPARATORS_RE.split(raw_input.strip()) if p]


def derive(raw_input: str, model_override: Optional[str] = None) -> ResourceNameSet:
    """
    Derive every name variant for *raw_input*.

    Args:
        raw_input: Resource name, optionally path-like (``"Admin/Team"``).
        model_override: Explicit model class name; blank means "none".

    Raises:
        InvalidInputError: No segments remain after splitting, or the subject
            or override contains no alphanumeric characters.
    """
    segments: List[str] = split_segments(raw_input)
    if not segments:
        raise InvalidInputError(raw_input)

    *folders, subject = segments

    class_name: str = to_pascal_case(subject)
    if not class_name:
        raise InvalidInputError(
            raw_input, f"Resource name {raw_input!r} has no usable characters."
        )

    model_class_name: str = class_name
    if model_override and model_override.strip():
        model_class_name = to_pascal_case(model_override.strip())
        if not model_class_name:
            raise InvalidInputError(
                raw_input, f"Model name {model_override!r} has no usable characters."
            )

    folders_pascal: List[str] = [f for f in (to_pascal_case(s) for s in folders) if f]

    names: ResourceNameSet = ResourceNameSet(
        raw_input=raw_input,
        path_segments=tuple(segments),
        class_name=class_name,
        model_class_name=model_class_name,
        variable_name=to_camel_case(class_name),
        resource_slug=to_kebab_case(to_plural(class_name)),
        table_name=to_snake_case(to_plural(model_class_name)),
        namespace_suffix=(
            NAMESPACE_SEPARATOR + NAMESPACE_SEPARATOR.join(folders_pascal)
            if folders_pascal
            else ""
        ),
        path_prefix=(
            PATH_SEPARATOR.join(folders_pascal) + PATH_SEPARATOR
            if folders_pascal
            else ""
        ),
    )
    logger.debug("Derived %r from %r", names, raw_input)
    return names


__all__: List[str] = [
    "NAMESPACE_SEPARATOR",
    "PATH_SEPARATOR",
    "derive",
    "split_segments",
]
