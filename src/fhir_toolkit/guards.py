"""
Resource type guards.

Each guard accepts either an entity instance or a wire JSON dict and
answers by ``resourceType``, so the same check works before and after
deserialization and across FHIR versions.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from fhir_toolkit._constants import RESOURCE_TYPE_KEY
from fhir_toolkit.registry import is_entity


def resource_type_of(obj: Any) -> Optional[str]:
    """``resourceType`` of *obj*, or ``None`` if it is not a resource."""
    if is_entity(obj):
        return getattr(type(obj), "resource_type", None) or None
    if isinstance(obj, Mapping):
        value = obj.get(RESOURCE_TYPE_KEY)
        return value if isinstance(value, str) and value else None
    return None


def is_resource(obj: Any) -> bool:
    return resource_type_of(obj) is not None


def is_resource_type(obj: Any, resource_type: str) -> bool:
    return resource_type_of(obj) == resource_type


def is_patient(obj: Any) -> bool:
    return is_resource_type(obj, "Patient")


def is_observation(obj: Any) -> bool:
    return is_resource_type(obj, "Observation")


def is_condition(obj: Any) -> bool:
    return is_resource_type(obj, "Condition")


def is_bundle(obj: Any) -> bool:
    return is_resource_type(obj, "Bundle")
