"""
Component Catalog

Normalises raw solution-component records into Component entities.

Record shape (camelCase keys as returned by the metadata collaborator,
snake_case accepted too):
    id           non-empty string, unique within a scan
    name         display name (defaults to id)
    logicalName  logical / schema name (defaults to id)
    type         type discriminator: enum value, alias or Dataverse type code
    isManaged    bool, or 0 / 1
    inSolution   bool, or 0 / 1; false for an object the solution references
                 that exists in the environment but is not packaged (default true)

Duplicate ids and unknown type discriminators are recoverable: they are
logged, recorded as warnings and the catalog is still produced. A malformed
input shape is fatal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

from solution_deps.domain.models import Component, ComponentType

logger = logging.getLogger(__name__)


@dataclass
class CatalogResult:
    """Normalised components in input order plus recoverable warnings."""
    components: List[Component] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.components)


def _coerce_flag(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return False


def _first(record: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return default


def build_catalog(raw_components: Sequence[Mapping[str, Any]]) -> CatalogResult:
    """
    Build the component catalog from raw records.

    On a duplicate id the later record replaces the earlier one, keeping
    the position of the first occurrence.

    Raises:
        TypeError: if *raw_components* is not a list, a record is not a
            mapping, or an id is not a string.
        ValueError: if an id is empty.
    """
    if not isinstance(raw_components, (list, tuple)):
        raise TypeError(
            f"components must be a list, got {type(raw_components).__name__}"
        )

    result = CatalogResult()
    by_id: Dict[str, Component] = {}

    for position, record in enumerate(raw_components):
        if not isinstance(record, Mapping):
            raise TypeError(
                f"component record #{position} must be a mapping, got {type(record).__name__}"
            )
        component_id = record.get("id")
        if not isinstance(component_id, str):
            raise TypeError(
                f"component record #{position} has a non-string id: {component_id!r}"
            )
        if not component_id.strip():
            raise ValueError(f"component record #{position} has an empty id")

        raw_type = _first(record, "type", "componentType", "component_type")
        component_type = ComponentType.from_string(raw_type)
        if not ComponentType.is_known(raw_type):
            message = f"Unknown component type {raw_type!r} for {component_id!r}; using Other"
            logger.warning(message)
            result.warnings.append(message)

        component = Component(
            id=component_id,
            name=str(_first(record, "name", "displayName", default=component_id)),
            logical_name=str(_first(record, "logicalName", "logical_name", default=component_id)),
            type=component_type,
            is_managed=_coerce_flag(_first(record, "isManaged", "is_managed")),
            in_solution=_coerce_flag(_first(record, "inSolution", "in_solution"), default=True),
        )

        if component_id in by_id:
            message = f"Duplicate component id {component_id!r}; later record overwrites earlier"
            logger.warning(message)
            result.warnings.append(message)
        by_id[component_id] = component

    result.components = list(by_id.values())
    logger.info("Catalog built: %d components (%d warnings)", len(result.components), len(result.warnings))
    return result
