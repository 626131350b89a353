# File: crudgen/models.py
"""
crudgen - Core Data Models
============================
Pydantic V2 models shared by every stage of the pipeline:

    CLI → ProjectLayout → derive() → ResourceNameSet → registry → emitter

``ProjectLayout`` replaces the host framework's global path helpers
(``app_path()``, ``database_path()``, ``base_path()``): every directory,
namespace and convention the generator relies on is an explicit field with a
default matching a stock Laravel application.

``ResourceNameSet`` is the immutable record of derived names computed once
per invocation.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.models")

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ArtifactKind(str, Enum):
    """Artifact kinds, declared in emission order."""

    MODEL = "model"
    REQUEST = "request"
    SERVICE = "service"
    CONTROLLER = "controller"
    RESOURCE = "resource"
    MIGRATION = "migration"
    SEEDER = "seeder"
    ROUTE = "route"


class WritePolicy(str, Enum):
    """How an artifact treats an existing destination."""

    OVERWRITE = "overwrite"  # skip if present unless --force
    MIGRATION = "migration"  # reuse any *_create_<table>_table.<ext> in place
    APPEND = "append"  # append to the routes file unless already registered


class EmitStatus(str, Enum):
    """Outcome of emitting one artifact."""

    CREATED = "created"
    UPDATED = "updated"
    APPENDED = "appended"
    SKIPPED = "skipped"


class SkipReason(str, Enum):
    """Why an artifact was left untouched."""

    EXISTS = "exists"
    ALREADY_REGISTERED = "already_registered"


# ---------------------------------------------------------------------------
# Project layout (configuration)
# ---------------------------------------------------------------------------

_LAYOUT_CONFIG: ConfigDict = ConfigDict(
    validate_assignment=True,
    extra="forbid",
)


class ProjectLayout(BaseModel):
    """
    Where generated artifacts go and which conventions they follow.

    All directory fields are relative to ``root``; use :meth:`path` to
    resolve them.
    """

    model_config = _LAYOUT_CONFIG

    root: Path = Field(
        default_factory=Path.cwd, description="Host project root directory."
    )
    extension: str = Field(
        default="php", min_length=1, description="File extension of generated sources."
    )

    # -- Directories --------------------------------------------------------
    models_dir: str = Field(default="app/Models")
    requests_dir: str = Field(default="app/Http/Requests")
    services_dir: str = Field(default="app/Services")
    controllers_dir: str = Field(default="app/Http/Controllers/Api")
    resources_dir: str = Field(default="app/Http/Resources")
    migrations_dir: str = Field(default="database/migrations")
    seeders_dir: str = Field(default="database/seeders")
    routes_file: str = Field(default="routes/api.php")
    stubs_dir: str = Field(
        default="stubs/crud-generator",
        description="Project-level stub overrides, checked before bundled stubs.",
    )

    # -- Namespaces ---------------------------------------------------------
    model_namespace: str = Field(default="App\\Models")
    request_namespace: str = Field(default="App\\Http\\Requests")
    service_namespace: str = Field(default="App\\Services")
    controller_namespace: str = Field(default="App\\Http\\Controllers\\Api")
    resource_namespace: str = Field(default="App\\Http\\Resources")
    seeder_namespace: str = Field(default="Database\\Seeders")

    # -- Conventions --------------------------------------------------------
    api_prefix: str = Field(
        default="/api", description="URL prefix the routes file is mounted under."
    )
    migration_timestamp_format: str = Field(default="%Y_%m_%d_%H%M%S")
    bootstrap_command: List[str] = Field(
        default_factory=lambda: ["php", "artisan", "install:api", "--no-interaction"],
        description="Run once in the project root when the routes file is missing.",
    )

    # -- Variants -----------------------------------------------------------
    generate_resource: bool = Field(
        default=True, description="Emit a resource transformer and use it in the controller."
    )
    register_routes: bool = Field(
        default=True, description="Append an apiResource registration to the routes file."
    )

    @field_validator(
        "model_namespace",
        "request_namespace",
        "service_namespace",
        "controller_namespace",
        "resource_namespace",
        "seeder_namespace",
    )
    @classmethod
    def _strip_namespace_separators(cls, v: str) -> str:
        return v.strip("\\")

    @field_validator(
        "models_dir",
        "requests_dir",
        "services_dir",
        "controllers_dir",
        "resources_dir",
        "migrations_dir",
        "seeders_dir",
        "stubs_dir",
    )
    @classmethod
    def _normalise_dir(cls, v: str) -> str:
        return v.replace("\\", "/").rstrip("/")

    @field_validator("extension")
    @classmethod
    def _strip_dot(cls, v: str) -> str:
        return v.lstrip(".")

    def path(self, relative: str) -> Path:
        """Resolve a layout-relative path against ``root``."""
        return self.root / relative


# ---------------------------------------------------------------------------
# Derived names
# ---------------------------------------------------------------------------


class ResourceNameSet(BaseModel):
    """
    Every casing / pluralisation variant derived from one resource name.

    Built by :func:`crudgen.naming.derive`; frozen so every artifact of a
    run sees the same values.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    raw_input: str
    path_segments: Tuple[str, ...]
    class_name: str = Field(..., min_length=1)  # Blog
    model_class_name: str = Field(..., min_length=1)  # Blog or the --model override
    variable_name: str  # blog
    resource_slug: str  # blogs
    table_name: str  # blogs
    namespace_suffix: str = ""  # \Admin
    path_prefix: str = ""  # Admin/

    def __repr__(self) -> str:
        return (
            f"<ResourceNameSet {self.namespace_suffix}\\{self.class_name} "
            f"model={self.model_class_name} table={self.table_name}>"
        )


__all__: List[str] = [
    "ArtifactKind",
    "WritePolicy",
    "EmitStatus",
    "SkipReason",
    "ProjectLayout",
    "ResourceNameSet",
]
