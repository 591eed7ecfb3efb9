from __future__ import annotations

from enum import Enum
from typing import Dict, Union


class ComponentType(str, Enum):
    """Kind of platform object tracked by the analyzer."""
    ENTITY = "Entity"
    FORM = "Form"
    VIEW = "View"
    PLUGIN = "Plugin"
    WEB_RESOURCE = "WebResource"
    WORKFLOW = "Workflow"
    APP = "App"
    OTHER = "Other"

    @classmethod
    def from_string(cls, value: Union[str, int, None]) -> ComponentType:
        """
        Resolve a type discriminator to a ComponentType.

        Accepts enum values, common aliases and Dataverse solution component
        type codes. Anything unrecognised resolves to OTHER.
        """
        if value is None or isinstance(value, bool):
            return cls.OTHER
        if isinstance(value, int):
            return _TYPE_CODES.get(value, cls.OTHER)
        key = str(value).strip()
        if key.isdigit():
            return _TYPE_CODES.get(int(key), cls.OTHER)
        return _ALIASES.get(key.lower().replace("_", "").replace(" ", ""), cls.OTHER)

    @classmethod
    def is_known(cls, value: Union[str, int, None]) -> bool:
        """True when *value* resolves to a concrete type (explicit 'Other' included)."""
        resolved = cls.from_string(value)
        if resolved is not cls.OTHER:
            return True
        return isinstance(value, str) and value.strip().lower() == "other"


# Dataverse solutioncomponent.componenttype codes
_TYPE_CODES: Dict[int, ComponentType] = {
    1: ComponentType.ENTITY,
    24: ComponentType.FORM,
    26: ComponentType.VIEW,
    29: ComponentType.WORKFLOW,
    60: ComponentType.FORM,
    61: ComponentType.WEB_RESOURCE,
    80: ComponentType.APP,
    90: ComponentType.PLUGIN,
    300: ComponentType.APP,
}

_ALIASES: Dict[str, ComponentType] = {
    "entity": ComponentType.ENTITY,
    "table": ComponentType.ENTITY,
    "form": ComponentType.FORM,
    "systemform": ComponentType.FORM,
    "view": ComponentType.VIEW,
    "savedquery": ComponentType.VIEW,
    "plugin": ComponentType.PLUGIN,
    "plugintype": ComponentType.PLUGIN,
    "webresource": ComponentType.WEB_RESOURCE,
    "workflow": ComponentType.WORKFLOW,
    "process": ComponentType.WORKFLOW,
    "app": ComponentType.APP,
    "appmodule": ComponentType.APP,
    "canvasapp": ComponentType.APP,
    "other": ComponentType.OTHER,
}
