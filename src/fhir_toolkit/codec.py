"""
Ordered wire-JSON codec for FHIR entities.

Serialization walks an entity's declared fields in their normative order
(envelope tiers first), so output key order never depends on the order
in which values were assigned.  Primitive fields are written with their
``_x`` extension sibling directly after them; for primitive arrays the
sibling is a parallel array whose empty slots are ``null``.

Deserialization is the reverse walk.  It checks the *shape* of each
present key against its declaration (array vs single value, primitive
vs object) and raises :class:`~fhir_toolkit.errors.FhirStructureError`
naming the field on a mismatch.  Missing required fields are not
checked here; that belongs to validation.  Unknown keys are dropped
unless ``strict=True``.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping
from typing import Any, Iterator, Optional

from fhir_toolkit._constants import RESOURCE_TYPE_KEY
from fhir_toolkit.errors import FhirStructureError
from fhir_toolkit.fields import PRIMITIVE, RESOURCE, SHADOW, FieldSpec
from fhir_toolkit.registry import ModelRegistry, get_registry, is_entity, registry_of

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
# SERIALIZATION
# ═══════════════════════════════════════════════════════════════════


def to_json(entity: Any) -> dict[str, Any]:
    """Serialize an entity to its wire JSON object.

    Resources start with ``resourceType``; every other key follows the
    class's declared field order.  Fields holding ``None`` or an empty
    array are omitted, as are ``_x`` siblings with no content.

    Args:
        entity: Any declared entity instance.

    Returns:
        A new ``dict`` sharing no mutable state with *entity*.
    """
    result: dict[str, Any] = {}
    resource_type = getattr(type(entity), "resource_type", None)
    if resource_type:
        result[RESOURCE_TYPE_KEY] = resource_type

    for spec in entity.__fhir_fields__:
        value = getattr(entity, spec.name)
        # FHIR JSON has no empty arrays and no empty _x siblings.
        if value is None or (spec.many and not value):
            continue
        if spec.many:
            items = [_dump_item(spec, item) for item in value]
            if spec.kind == SHADOW:
                items = [item or None for item in items]
                if all(item is None for item in items):
                    continue
            result[spec.name] = items
        else:
            dumped = _dump_item(spec, value)
            if spec.kind == SHADOW and not dumped:
                continue
            result[spec.name] = dumped
    return result


def _dump_item(spec: FieldSpec, item: Any) -> Any:
    if item is None or spec.kind == PRIMITIVE:
        return item
    if isinstance(item, Mapping):
        return copy.deepcopy(dict(item))
    return to_json(item)


def dumps(entity: Any, **kwargs: Any) -> str:
    """Serialize an entity to JSON text.  *kwargs* go to ``json.dumps``."""
    return json.dumps(to_json(entity), **kwargs)


# ═══════════════════════════════════════════════════════════════════
# DESERIALIZATION
# ═══════════════════════════════════════════════════════════════════


def from_json(
    data: Mapping[str, Any],
    cls: Optional[type] = None,
    *,
    fhir_version: Optional[str] = None,
    strict: bool = False,
) -> Any:
    """Reconstruct an entity from wire JSON.

    Args:
        data:         Parsed JSON object.
        cls:          Entity class to build.  When omitted, ``data`` must
                      be a resource and its ``resourceType`` selects the
                      class.
        fhir_version: Version whose registry resolves nested type names.
                      Defaults to the version *cls* was registered in, or
                      R4.
        strict:       Raise on keys the class does not declare instead of
                      dropping them.

    Returns:
        A fully populated entity instance.

    Raises:
        FhirStructureError: On a shape mismatch, a missing or unknown
            ``resourceType``, several members of one choice family, or an
            unknown key in strict mode.
        ValueError: If *fhir_version* is not supported.
    """
    if fhir_version is not None:
        registry = get_registry(fhir_version)
    elif cls is not None:
        registry = registry_of(cls)
    else:
        registry = get_registry()

    if cls is None:
        cls = _resource_class(data, registry, "")
    elif not isinstance(data, Mapping):
        raise FhirStructureError(
            f"{cls.__name__} expects a JSON object, got {type(data).__name__}",
            field=cls.__name__,
        )
    return _load_entity(cls, data, registry, strict, "")


def loads(
    text: str | bytes,
    cls: Optional[type] = None,
    *,
    fhir_version: Optional[str] = None,
    strict: bool = False,
) -> Any:
    """Parse JSON text and :func:`from_json` the result."""
    return from_json(json.loads(text), cls, fhir_version=fhir_version, strict=strict)


def read_field(
    spec: FieldSpec,
    value: Any,
    registry: ModelRegistry,
    *,
    strict: bool = False,
    path: str = "",
    own: bool = True,
) -> Any:
    """Convert one field value to its in-memory form.

    Plain dicts become entities.  With *own* (the default) entity
    instances are deep-copied so a parent never shares a nested entity
    with another owner; constructors pass ``own=False`` to keep the
    instances they were handed.  Used by the codec and by every code
    path that assigns fields from user input.
    """
    if value is None:
        return None
    path = path or spec.name
    if spec.many:
        if not isinstance(value, (list, tuple)):
            raise FhirStructureError(
                f"Field '{path}' expects an array, got {type(value).__name__}",
                field=spec.name, path=path,
            )
        return [
            _load_item(spec, item, registry, strict, f"{path}[{i}]", own)
            for i, item in enumerate(value)
        ]
    if isinstance(value, (list, tuple)):
        raise FhirStructureError(
            f"Field '{path}' expects a single value, got an array",
            field=spec.name, path=path,
        )
    return _load_item(spec, value, registry, strict, path, own)


def _load_entity(
    cls: type,
    data: Mapping[str, Any],
    registry: ModelRegistry,
    strict: bool,
    path: str,
) -> Any:
    declared = cls.__fhir_field_index__
    resource_type = getattr(cls, "resource_type", None)

    if resource_type and data.get(RESOURCE_TYPE_KEY, resource_type) != resource_type:
        raise FhirStructureError(
            f"Expected resourceType '{resource_type}', got '{data[RESOURCE_TYPE_KEY]}'",
            field=RESOURCE_TYPE_KEY, path=_join(path, RESOURCE_TYPE_KEY),
        )

    for key in data:
        if key in declared or (resource_type and key == RESOURCE_TYPE_KEY):
            continue
        if strict:
            raise FhirStructureError(
                f"Unknown field '{key}' on {cls.__name__}",
                field=key, path=_join(path, key),
            )
        logger.debug("Dropping unknown field %r on %s", key, cls.__name__)

    values: dict[str, Any] = {}
    for spec in cls.__fhir_fields__:
        raw = data.get(spec.name)
        if raw is None:
            continue
        values[spec.name] = read_field(
            spec, raw, registry, strict=strict, path=_join(path, spec.name),
        )

    check_choice_values(cls, values, path)
    return cls(**values)


def _load_item(
    spec: FieldSpec,
    item: Any,
    registry: ModelRegistry,
    strict: bool,
    path: str,
    own: bool = True,
) -> Any:
    if spec.kind == PRIMITIVE:
        if isinstance(item, (Mapping, list, tuple)) or is_entity(item):
            raise FhirStructureError(
                f"Field '{path}' expects a primitive value, got {type(item).__name__}",
                field=spec.name, path=path,
            )
        return item

    if item is None:
        # Holes are only meaningful in parallel _x arrays.
        if spec.kind == SHADOW and spec.many:
            return None
        raise FhirStructureError(
            f"Field '{path}' does not allow null entries",
            field=spec.name, path=path,
        )

    if spec.kind == RESOURCE:
        if is_entity(item) and getattr(type(item), "resource_type", None):
            return copy.deepcopy(item) if own else item
        cls = _resource_class(item, registry, path)
        return _load_entity(cls, item, registry, strict, path)

    cls = registry.lookup(spec.type_name)
    if is_entity(item):
        if not _fits(item, spec.type_name, cls, registry):
            raise FhirStructureError(
                f"Field '{path}' expects {spec.type_name}, got {type(item).__name__}",
                field=spec.name, path=path,
            )
        return copy.deepcopy(item) if own else item
    if not isinstance(item, Mapping):
        raise FhirStructureError(
            f"Field '{path}' expects a JSON object, got {type(item).__name__}",
            field=spec.name, path=path,
        )
    return _load_entity(cls, item, registry, strict, path)


def _fits(item: Any, type_name: str, cls: type, registry: ModelRegistry) -> bool:
    if isinstance(item, cls):
        return True
    # A class inherited unchanged by a later version holds that version's
    # types, e.g. the R4 Extension read through R5 carries R5 SampledData.
    own = registry_of(item)
    return (
        own is not registry
        and own.derives_from(registry)
        and isinstance(item, own.lookup(type_name))
    )


def _resource_class(data: Any, registry: ModelRegistry, path: str) -> type:
    if not isinstance(data, Mapping):
        raise FhirStructureError(
            f"Field '{path}' expects a resource object, got {type(data).__name__}",
            field=path.rsplit(".", 1)[-1] if path else RESOURCE_TYPE_KEY,
            path=path or None,
        )
    resource_type = data.get(RESOURCE_TYPE_KEY)
    if not resource_type:
        raise FhirStructureError(
            "FHIR resource must contain a 'resourceType' field",
            field=RESOURCE_TYPE_KEY, path=_join(path, RESOURCE_TYPE_KEY),
        )
    cls = registry.resource_types().get(resource_type)
    if cls is None:
        raise FhirStructureError(
            f"Unknown resourceType '{resource_type}' for FHIR {registry.version}",
            field=RESOURCE_TYPE_KEY, path=_join(path, RESOURCE_TYPE_KEY),
        )
    return cls


def check_choice_values(cls: type, values: Mapping[str, Any], path: str = "") -> None:
    """Reject input populating more than one member of a choice family."""
    for family, members in cls.__fhir_choices__.items():
        present = [spec.name for spec in members.values() if values.get(spec.name) is not None]
        if len(present) > 1:
            key = f"{family}[x]"
            raise FhirStructureError(
                f"Choice field '{_join(path, key)}' has more than one value: "
                f"{', '.join(present)}",
                field=key, path=_join(path, key),
            )


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


# ═══════════════════════════════════════════════════════════════════
# PRIMITIVE / EXTENSION PAIRING
# ═══════════════════════════════════════════════════════════════════


def primitive_items(entity: Any, name: str) -> Iterator[tuple[Any, Any]]:
    """Zip a primitive array with its ``_name`` extension array.

    Yields ``(value, element)`` for every position of the longer of the
    two arrays; positions without a value or without metadata yield
    ``None`` in that slot.  A shorter, holed or absent extension array
    is normal input.

    Raises:
        KeyError: If *name* is not a declared primitive array.
    """
    spec = type(entity).__fhir_field_index__.get(name)
    if spec is None or spec.kind != PRIMITIVE or not spec.many:
        raise KeyError(f"{type(entity).__name__} has no primitive array field '{name}'")

    values = getattr(entity, name) or []
    shadows = getattr(entity, spec.shadow_name, None) or []
    for i in range(max(len(values), len(shadows))):
        value = values[i] if i < len(values) else None
        element = shadows[i] if i < len(shadows) else None
        yield value, element


def primitive_extension(entity: Any, name: str, index: Optional[int] = None) -> Any:
    """Return the ``Element`` carrying metadata for primitive *name*.

    For array fields pass *index*; out-of-range positions return
    ``None``.  Returns ``None`` when the field has no shadow or the
    shadow is unset.
    """
    spec = type(entity).__fhir_field_index__.get(name)
    if spec is None or spec.kind != PRIMITIVE:
        raise KeyError(f"{type(entity).__name__} has no primitive field '{name}'")
    shadow = getattr(entity, spec.shadow_name, None)
    if shadow is None or index is None:
        return shadow
    return shadow[index] if 0 <= index < len(shadow) else None

