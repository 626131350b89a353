# File: crudgen/__init__.py
"""
crudgen - API CRUD Scaffolding Generator
==========================================

Generates the model, form request, service, controller, API resource,
migration and seeder for one resource of a Laravel-style project, and
registers its ``apiResource`` route.

Architecture overview::

    ┌──────────────┐     ┌────────────────┐     ┌──────────────────┐
    │  CLI / Entry │────▶│ CrudGenerator  │────▶│  ArtifactEmitter │
    │   (cli.py)   │     │ (generator.py) │     │  (exporters.py)  │
    └──────────────┘     └───────┬────────┘     └──────────────────┘
                                 │
                    ┌────────────┼────────────┐
                    ▼            ▼            ▼
             ┌──────────┐ ┌───────────┐ ┌───────────┐
             │  naming  │ │ registry  │ │ templates │
             │  (.py)   │ │  (.py)    │ │  (.py)    │
             └──────────┘ └───────────┘ └───────────┘

Usage::

    # As a library
    from crudgen import CrudGenerator, load_layout
    layout = load_layout(Path("."))
    report = CrudGenerator(layout).generate("Admin/Team", model="Member")

    # From the command line
    crudgen make:crud Admin/Team --model=Member

Public API:
    - CrudGenerator      - Orchestrator
    - derive             - Name deriver
    - ProjectLayout      - Project conventions (paths, namespaces, variants)
    - ResourceNameSet    - Derived names
    - build_registry     - Artifact table
    - TemplateLoader     - Stub lookup (project override, then bundled)
    - ArtifactEmitter    - File writer with per-kind write policies
    - publish_stubs      - Copy bundled stubs into the project
"""

from __future__ import annotations

__version__: str = "1.0.0"
__license__: str = "MIT"

from crudgen.errors import (
    ConfigError,
    CrudGenError,
    InvalidInputError,
    MissingRouteFileError,
    TemplateNotFoundError,
)
from crudgen.models import (
    ArtifactKind,
    EmitStatus,
    ProjectLayout,
    ResourceNameSet,
    SkipReason,
    WritePolicy,
)
from crudgen.naming import derive
from crudgen.registry import ArtifactSpec, build_registry
from crudgen.templates import TemplateLoader, render
from crudgen.exporters import ArtifactEmitter, EmitResult, publish_stubs
from crudgen.generator import CrudGenerator, GenerationReport, load_layout

__all__: list[str] = [
    "__version__",
    "__license__",
    # Orchestrator
    "CrudGenerator",
    "GenerationReport",
    "load_layout",
    # Naming
    "derive",
    # Models
    "ArtifactKind",
    "EmitStatus",
    "ProjectLayout",
    "ResourceNameSet",
    "SkipReason",
    "WritePolicy",
    # Registry / templates / emitter
    "ArtifactSpec",
    "build_registry",
    "TemplateLoader",
    "render",
    "ArtifactEmitter",
    "EmitResult",
    "publish_stubs",
    # Errors
    "CrudGenError",
    "InvalidInputError",
    "TemplateNotFoundError",
    "MissingRouteFileError",
    "ConfigError",
]
