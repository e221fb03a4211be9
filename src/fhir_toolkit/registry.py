"""
Per-version model registries.

Each FHIR version owns a :class:`ModelRegistry` mapping type names
(``"Coding"``, ``"Observation"``) to entity classes.  Composite fields
refer to their type by name, so the codec resolves nested types through
the registry of the version being read.  A registry may inherit from a
parent: R4B and R5 fall back to the R4 definitions they do not override.

Registries are populated by importing the version's model package; this
happens lazily in :func:`get_registry`.
"""

from __future__ import annotations

import dataclasses
import importlib
import logging
from typing import Any, Iterator, Optional, TypeVar

from fhir_toolkit._constants import (
    DEFAULT_FHIR_VERSION,
    MODEL_MODULES,
    SUPPORTED_FHIR_VERSIONS,
)
from fhir_toolkit.fields import collect_fields

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)

_registries: dict[str, "ModelRegistry"] = {}


def declare(cls: T) -> T:
    """Turn a class of field declarations into an entity dataclass.

    Applies ``dataclasses.dataclass`` (keeping the entity base's
    ``__repr__``) and records the ordered field specs and choice
    families on the class.  Used directly for the abstract envelope
    tiers; concrete types go through :meth:`ModelRegistry.model`.
    """
    cls = dataclasses.dataclass(repr=False)(cls)
    fields, choices = collect_fields(cls)
    cls.__fhir_fields__ = fields
    cls.__fhir_field_index__ = {spec.name: spec for spec in fields}
    cls.__fhir_choices__ = choices
    return cls


class ModelRegistry:
    """Name → entity class table for one FHIR version.

    Args:
        version: FHIR version label (``"R4"``, ``"R4B"``, ``"R5"``).
        parent:  Registry consulted for names this one does not define.
    """

    def __init__(self, version: str, parent: Optional[ModelRegistry] = None) -> None:
        if version not in SUPPORTED_FHIR_VERSIONS:
            raise ValueError(
                f"Unsupported FHIR version '{version}'. "
                f"Supported: {', '.join(SUPPORTED_FHIR_VERSIONS)}"
            )
        self.version = version
        self.parent = parent
        self._types: dict[str, type] = {}
        _registries[version] = self

    def __repr__(self) -> str:
        return f"ModelRegistry({self.version!r}, types={len(self._types)})"

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def register(self, cls: T, name: Optional[str] = None) -> T:
        """Register an already-declared entity class under *name*."""
        type_name = name or cls.__name__
        self._types[type_name] = cls
        if "__fhir_registry__" not in cls.__dict__:
            cls.__fhir_registry__ = self
        logger.debug("Registered %s type %s", self.version, type_name)
        return cls

    def model(self, cls: T) -> T:
        """Class decorator: :func:`declare` the class and register it."""
        return self.register(declare(cls))

    def get(self, name: str) -> Optional[type]:
        cls = self._types.get(name)
        if cls is None and self.parent is not None:
            return self.parent.get(name)
        return cls

    def lookup(self, name: str) -> type:
        """Return the class registered as *name*.

        Raises:
            KeyError: If neither this registry nor a parent defines it.
        """
        cls = self.get(name)
        if cls is None:
            raise KeyError(f"FHIR {self.version} has no model for type '{name}'")
        return cls

    def derives_from(self, other: ModelRegistry) -> bool:
        """True if *other* is this registry or one of its ancestors."""
        registry: Optional[ModelRegistry] = self
        while registry is not None:
            if registry is other:
                return True
            registry = registry.parent
        return False

    def names(self) -> Iterator[str]:
        """All resolvable type names, own definitions first."""
        seen: set[str] = set()
        registry: Optional[ModelRegistry] = self
        while registry is not None:
            for name in registry._types:
                if name not in seen:
                    seen.add(name)
                    yield name
            registry = registry.parent

    def resource_types(self) -> dict[str, type]:
        """Resolvable resource classes keyed by their ``resourceType``."""
        result: dict[str, type] = {}
        for name in self.names():
            cls = self.lookup(name)
            resource_type = getattr(cls, "resource_type", None)
            if resource_type:
                result[resource_type] = cls
        return result


def get_registry(fhir_version: str = DEFAULT_FHIR_VERSION) -> ModelRegistry:
    """Return the registry for *fhir_version*, importing its models.

    Raises:
        ValueError: If *fhir_version* is not supported.
    """
    if fhir_version not in SUPPORTED_FHIR_VERSIONS:
        raise ValueError(
            f"Unsupported FHIR version '{fhir_version}'. "
            f"Supported: {', '.join(SUPPORTED_FHIR_VERSIONS)}"
        )
    if fhir_version not in _registries:
        importlib.import_module(MODEL_MODULES[fhir_version])
    return _registries[fhir_version]


def registry_of(entity_or_cls: Any) -> ModelRegistry:
    """Registry an entity (or entity class) was registered in.

    Abstract tiers and unregistered classes use the default version.
    """
    cls = entity_or_cls if isinstance(entity_or_cls, type) else type(entity_or_cls)
    registry = getattr(cls, "__fhir_registry__", None)
    if registry is None:
        return get_registry(DEFAULT_FHIR_VERSION)
    return registry


def is_entity(obj: Any) -> bool:
    """True for instances of declared entity classes."""
    return hasattr(type(obj), "__fhir_fields__") and not isinstance(obj, type)
