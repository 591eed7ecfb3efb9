"""
Reference Extractor

Turns type-specific raw payloads into DependencyFact records.

Each ComponentType has a list of extraction strategies registered with
``@register_extractor``. A strategy receives the component, its payload and
a ReferenceIndex, and returns the ids the component depends on. The graph
builder only ever sees the resulting (from_id, to_id) facts, so it stays
agnostic of component types.

Payload keys understood:
    dependsOn         explicit list of component ids (every type)
    formxml           form definition; <Library name="..."> -> WebResource
    objecttypecode    owning entity of a form -> Entity
    fetchxml          view query; <entity name> / <link-entity name> -> Entity
    returnedtypecode  entity a view returns -> Entity
    primaryentity     entity a workflow runs against -> Entity

Logical names that do not resolve to a scanned component are returned as
``inferred:<type>:<name>`` ids so that they surface as missing references.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from solution_deps.domain.models import Component, ComponentType, DependencyFact

logger = logging.getLogger(__name__)


class ReferenceIndex:
    """Resolves (type, logical name) pairs to component ids."""

    def __init__(self, components: Iterable[Component]) -> None:
        self._by_name: Dict[Tuple[ComponentType, str], str] = {}
        for comp in components:
            key = (comp.type, comp.logical_name.strip().lower())
            # First component wins when logical names collide
            self._by_name.setdefault(key, comp.id)

    def resolve(self, component_type: ComponentType, logical_name: str) -> str:
        key = logical_name.strip().lower()
        found = self._by_name.get((component_type, key))
        if found is not None:
            return found
        return inferred_id(component_type, key)


def inferred_id(component_type: ComponentType, logical_name: str) -> str:
    """Synthetic id for a reference known only by its logical name."""
    return f"inferred:{component_type.value.lower()}:{logical_name.strip().lower()}"


Extractor = Callable[[Component, Mapping[str, Any], ReferenceIndex], List[str]]

_EXTRACTORS: Dict[ComponentType, List[Extractor]] = defaultdict(list)


def register_extractor(*component_types: ComponentType) -> Callable[[Extractor], Extractor]:
    """Register a strategy for the given component types (all types when none given)."""
    targets = component_types or tuple(ComponentType)

    def decorator(func: Extractor) -> Extractor:
        for component_type in targets:
            _EXTRACTORS[component_type].append(func)
        return func

    return decorator


def extractors_for(component_type: ComponentType) -> List[Extractor]:
    return list(_EXTRACTORS.get(component_type, []))


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

class PayloadError(ValueError):
    """A single payload could not be interpreted; the component keeps no facts from it."""


def _parse_xml(text: Any, component: Component, field_name: str) -> Optional[ET.Element]:
    if not isinstance(text, str) or not text.strip():
        return None
    try:
        return ET.fromstring(text)
    except ET.ParseError as exc:
        raise PayloadError(f"Malformed {field_name} for {component.id!r}: {exc}") from exc


@register_extractor()
def explicit_dependencies(component: Component, payload: Mapping[str, Any], index: ReferenceIndex) -> List[str]:
    raw = payload.get("dependsOn", [])
    if not isinstance(raw, (list, tuple)):
        raise PayloadError(f"dependsOn for {component.id!r} must be a list")
    targets = []
    for target in raw:
        if not isinstance(target, str):
            raise PayloadError(f"dependsOn for {component.id!r} contains a non-string id: {target!r}")
        targets.append(target)
    return targets


@register_extractor(ComponentType.FORM)
def form_libraries(component: Component, payload: Mapping[str, Any], index: ReferenceIndex) -> List[str]:
    targets = []
    owner = payload.get("objecttypecode")
    if isinstance(owner, str) and owner.strip():
        targets.append(index.resolve(ComponentType.ENTITY, owner))

    root = _parse_xml(payload.get("formxml"), component, "formxml")
    if root is not None:
        for library in root.iter("Library"):
            name = library.get("name")
            if name:
                targets.append(index.resolve(ComponentType.WEB_RESOURCE, name))
    return targets


@register_extractor(ComponentType.VIEW)
def view_entities(component: Component, payload: Mapping[str, Any], index: ReferenceIndex) -> List[str]:
    targets = []
    returned = payload.get("returnedtypecode")
    if isinstance(returned, str) and returned.strip():
        targets.append(index.resolve(ComponentType.ENTITY, returned))

    root = _parse_xml(payload.get("fetchxml"), component, "fetchxml")
    if root is not None:
        for tag in ("entity", "link-entity"):
            for element in root.iter(tag):
                name = element.get("name")
                if name:
                    targets.append(index.resolve(ComponentType.ENTITY, name))
    return targets


@register_extractor(ComponentType.WORKFLOW)
def workflow_entity(component: Component, payload: Mapping[str, Any], index: ReferenceIndex) -> List[str]:
    primary = payload.get("primaryentity")
    if isinstance(primary, str) and primary.strip() and primary.lower() != "none":
        return [index.resolve(ComponentType.ENTITY, primary)]
    return []


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

@dataclass
class ExtractionResult:
    facts: List[DependencyFact] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def extract_references(
    components: Sequence[Component],
    payloads: Optional[Mapping[str, Mapping[str, Any]]],
) -> ExtractionResult:
    """
    Run the registered strategies for every component that has a payload.

    A payload for an unknown component id, or one a strategy cannot
    interpret, is skipped with a warning.

    Raises:
        TypeError: if *payloads* is not a mapping of id -> mapping.
    """
    result = ExtractionResult()
    if payloads is None:
        return result
    if not isinstance(payloads, Mapping):
        raise TypeError(f"payloads must be a mapping, got {type(payloads).__name__}")

    by_id = {c.id: c for c in components}
    index = ReferenceIndex(components)

    for component_id, payload in payloads.items():
        if not isinstance(payload, Mapping):
            raise TypeError(
                f"payload for {component_id!r} must be a mapping, got {type(payload).__name__}"
            )
        component = by_id.get(component_id)
        if component is None:
            message = f"Payload for unknown component {component_id!r} ignored"
            logger.warning(message)
            result.warnings.append(message)
            continue

        for extractor in extractors_for(component.type):
            try:
                targets = extractor(component, payload, index)
            except PayloadError as exc:
                logger.warning("%s", exc)
                result.warnings.append(str(exc))
                continue
            result.facts.extend(DependencyFact(component.id, target) for target in targets)

    logger.debug("Extracted %d dependency facts from %d payloads", len(result.facts), len(payloads))
    return result
