# File: crudgen/registry.py
"""
crudgen - Artifact Registry
=============================

One :class:`ArtifactSpec` per artifact kind.  Each entry says which stub to
render, where the result goes, which placeholder values it receives and how
an existing destination is treated.  The emitter is generic; everything
kind-specific lives in this table.

Cross-references (the controller importing the service, the seeder importing
the model, the route pointing at the controller) are computed from the same
``ResourceNameSet`` and ``ProjectLayout`` as the referenced artifact's own
entry, so class names, namespaces and file names always agree.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List

from crudgen.models import ArtifactKind, ProjectLayout, ResourceNameSet, WritePolicy

logger: logging.Logger = logging.getLogger("crudgen.registry")

DestinationFn = Callable[[ResourceNameSet, ProjectLayout, datetime], Path]
PlaceholderFn = Callable[[ResourceNameSet, ProjectLayout], Dict[str, str]]


@dataclass(frozen=True, slots=True)
class ArtifactSpec:
    """Static description of one artifact kind."""

    kind: ArtifactKind
    label: str
    stub: str
    policy: WritePolicy
    destination: DestinationFn
    placeholders: PlaceholderFn


# ---------------------------------------------------------------------------
# Class names & namespaces
# ---------------------------------------------------------------------------


def request_class(names: ResourceNameSet) -> str:
    return names.class_name + "Request"


def service_class(names: ResourceNameSet) -> str:
    return names.class_name + "Service"


def controller_class(names: ResourceNameSet) -> str:
    return names.class_name + "Controller"


def resource_class(names: ResourceNameSet) -> str:
    return names.class_name + "Resource"


def seeder_class(names: ResourceNameSet) -> str:
    return names.class_name + "Seeder"


def namespaces(names: ResourceNameSet, layout: ProjectLayout) -> Dict[ArtifactKind, str]:
    """Fully-qualified namespace of every class-bearing artifact."""
    suffix: str = names.namespace_suffix
    return {
        ArtifactKind.MODEL: layout.model_namespace + suffix,
        ArtifactKind.REQUEST: layout.request_namespace + suffix,
        ArtifactKind.SERVICE: layout.service_namespace + suffix,
        ArtifactKind.CONTROLLER: layout.controller_namespace + suffix,
        ArtifactKind.RESOURCE: layout.resource_namespace + suffix,
        ArtifactKind.SEEDER: layout.seeder_namespace,
    }


# ---------------------------------------------------------------------------
# Destinations
# ---------------------------------------------------------------------------


def _source_file(directory: str, class_name: str) -> DestinationFn:
    def destination(names: ResourceNameSet, layout: ProjectLayout, now: datetime) -> Path:
        filename: str = f"{names.path_prefix}{class_name.format(n=names)}.{layout.extension}"
        return layout.path(getattr(layout, directory)) / filename

    return destination


def migration_glob(names: ResourceNameSet, layout: ProjectLayout) -> str:
    """Pattern matching any existing migration that creates this table."""
    return f"*_create_{names.table_name}_table.{layout.extension}"


def _migration_destination(names: ResourceNameSet, layout: ProjectLayout, now: datetime) -> Path:
    stamp: str = now.strftime(layout.migration_timestamp_format)
    filename: str = f"{stamp}_create_{names.table_name}_table.{layout.extension}"
    return layout.path(layout.migrations_dir) / filename


def _seeder_destination(names: ResourceNameSet, layout: ProjectLayout, now: datetime) -> Path:
    return layout.path(layout.seeders_dir) / f"{seeder_class(names)}.{layout.extension}"


def _routes_destination(names: ResourceNameSet, layout: ProjectLayout, now: datetime) -> Path:
    return layout.path(layout.routes_file)


def route_registration_pattern(names: ResourceNameSet) -> re.Pattern[str]:
    """Matches an existing ``apiResource('<slug>'`` registration, either quote style."""
    return re.compile(r"apiResource\(\s*['\"]" + re.escape(names.resource_slug) + r"['\"]")


# ---------------------------------------------------------------------------
# Placeholder maps
# ---------------------------------------------------------------------------


def _model_placeholders(names: ResourceNameSet, layout: ProjectLayout) -> Dict[str, str]:
    return {
        "namespace": namespaces(names, layout)[ArtifactKind.MODEL],
        "class": names.model_class_name,
        "table": names.table_name,
    }


def _request_placeholders(names: ResourceNameSet, layout: ProjectLayout) -> Dict[str, str]:
    return {
        "namespace": namespaces(names, layout)[ArtifactKind.REQUEST],
        "class": request_class(names),
    }


def _service_placeholders(names: ResourceNameSet, layout: ProjectLayout) -> Dict[str, str]:
    ns: Dict[ArtifactKind, str] = namespaces(names, layout)
    return {
        "namespace": ns[ArtifactKind.SERVICE],
        "class": service_class(names),
        "modelNamespace": ns[ArtifactKind.MODEL],
        "model": names.model_class_name,
        "variable": names.variable_name,
    }


def _controller_placeholders(names: ResourceNameSet, layout: ProjectLayout) -> Dict[str, str]:
    ns: Dict[ArtifactKind, str] = namespaces(names, layout)
    return {
        "namespace": ns[ArtifactKind.CONTROLLER],
        "class": controller_class(names),
        "requestNamespace": ns[ArtifactKind.REQUEST],
        "request": request_class(names),
        "serviceNamespace": ns[ArtifactKind.SERVICE],
        "service": service_class(names),
        "resourceNamespace": ns[ArtifactKind.RESOURCE],
        "resourceClass": resource_class(names),
        "modelNamespace": ns[ArtifactKind.MODEL],
        "model": names.model_class_name,
        "variable": names.variable_name,
        "resource": names.resource_slug,
    }


def _resource_placeholders(names: ResourceNameSet, layout: ProjectLayout) -> Dict[str, str]:
    return {
        "namespace": namespaces(names, layout)[ArtifactKind.RESOURCE],
        "class": resource_class(names),
    }


def _migration_placeholders(names: ResourceNameSet, layout: ProjectLayout) -> Dict[str, str]:
    return {"table": names.table_name}


def _seeder_placeholders(names: ResourceNameSet, layout: ProjectLayout) -> Dict[str, str]:
    ns: Dict[ArtifactKind, str] = namespaces(names, layout)
    return {
        "namespace": ns[ArtifactKind.SEEDER],
        "class": seeder_class(names),
        "modelNamespace": ns[ArtifactKind.MODEL],
        "model": names.model_class_name,
    }


def _route_placeholders(names: ResourceNameSet, layout: ProjectLayout) -> Dict[str, str]:
    return {
        "class": names.class_name,
        "resource": names.resource_slug,
        "variable": names.variable_name,
        "controllerNamespace": namespaces(names, layout)[ArtifactKind.CONTROLLER],
        "controller": controller_class(names),
    }


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def build_registry(layout: ProjectLayout) -> List[ArtifactSpec]:
    """
    Return the artifact table for *layout*, in emission order.

    ``layout.generate_resource`` drops the resource transformer and switches
    the controller to the plain-JSON stub; ``layout.register_routes`` drops
    the route entry.
    """
    specs: List[ArtifactSpec] = [
        ArtifactSpec(
            kind=ArtifactKind.MODEL,
            label="Model",
            stub="model",
            policy=WritePolicy.OVERWRITE,
            destination=_source_file("models_dir", "{n.model_class_name}"),
            placeholders=_model_placeholders,
        ),
        ArtifactSpec(
            kind=ArtifactKind.REQUEST,
            label="Request",
            stub="request",
            policy=WritePolicy.OVERWRITE,
            destination=_source_file("requests_dir", "{n.class_name}Request"),
            placeholders=_request_placeholders,
        ),
        ArtifactSpec(
            kind=ArtifactKind.SERVICE,
            label="Service",
            stub="service",
            policy=WritePolicy.OVERWRITE,
            destination=_source_file("services_dir", "{n.class_name}Service"),
            placeholders=_service_placeholders,
        ),
        ArtifactSpec(
            kind=ArtifactKind.CONTROLLER,
            label="Controller",
            stub="controller.api" if layout.generate_resource else "controller",
            policy=WritePolicy.OVERWRITE,
            destination=_source_file("controllers_dir", "{n.class_name}Controller"),
            placeholders=_controller_placeholders,
        ),
    ]

    if layout.generate_resource:
        specs.append(ArtifactSpec(
            kind=ArtifactKind.RESOURCE,
            label="Resource",
            stub="resource",
            policy=WritePolicy.OVERWRITE,
            destination=_source_file("resources_dir", "{n.class_name}Resource"),
            placeholders=_resource_placeholders,
        ))

    specs.append(ArtifactSpec(
        kind=ArtifactKind.MIGRATION,
        label="Migration",
        stub="migration",
        policy=WritePolicy.MIGRATION,
        destination=_migration_destination,
        placeholders=_migration_placeholders,
    ))
    specs.append(ArtifactSpec(
        kind=ArtifactKind.SEEDER,
        label="Seeder",
        stub="seeder",
        policy=WritePolicy.OVERWRITE,
        destination=_seeder_destination,
        placeholders=_seeder_placeholders,
    ))

    if layout.register_routes:
        specs.append(ArtifactSpec(
            kind=ArtifactKind.ROUTE,
            label="Route",
            stub="route",
            policy=WritePolicy.APPEND,
            destination=_routes_destination,
            placeholders=_route_placeholders,
        ))

    logger.debug("Registry: %s", ", ".join(s.kind.value for s in specs))
    return specs


__all__: List[str] = [
    "ArtifactSpec",
    "build_registry",
    "controller_class",
    "migration_glob",
    "namespaces",
    "request_class",
    "resource_class",
    "route_registration_pattern",
    "seeder_class",
    "service_class",
]
