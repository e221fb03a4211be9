"""
Choice-type (``[x]``) resolution.

A FHIR choice field such as ``Observation.value[x]`` is stored as a
family of mutually exclusive concrete attributes (``valueQuantity``,
``valueBoolean``, ...).  At most one member of a family may hold a value
on any instance.  :func:`set_choice` is the only write path that keeps
that true: it stores the new value and clears every sibling together
with the ``_x`` shadow of each primitive sibling.  Last write wins.

Families are closed.  An unknown family or a suffix outside the declared
set raises :class:`~fhir_toolkit.errors.ChoiceTypeError`; a value whose
shape contradicts the suffix raises ``TypeError``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from fhir_toolkit._constants import (
    NUMERIC_PRIMITIVES,
    PRIMITIVE_PYTHON_TYPES,
    STRING_PRIMITIVES,
)
from fhir_toolkit.codec import read_field
from fhir_toolkit.errors import ChoiceTypeError
from fhir_toolkit.fields import PRIMITIVE, FieldSpec
from fhir_toolkit.registry import is_entity, registry_of


def choice_family(cls: type, family: str) -> dict[str, FieldSpec]:
    """Return ``{suffix: FieldSpec}`` for *family* on *cls*.

    Raises:
        ChoiceTypeError: If *cls* declares no such family.
    """
    members = cls.__fhir_choices__.get(family)
    if members is None:
        declared = ", ".join(f"{name}[x]" for name in cls.__fhir_choices__) or "none"
        raise ChoiceTypeError(
            f"{cls.__name__} has no choice field '{family}[x]' (declared: {declared})",
            family=family,
        )
    return members


def choice_members(cls: type, family: str) -> tuple[str, ...]:
    """Allowed type suffixes of *family*, in declaration order."""
    return tuple(choice_family(cls, family))


def set_choice(entity: Any, family: str, suffix: str, value: Any) -> Any:
    """Store *value* as the ``suffix`` member of *family*, clearing the rest.

    Composite members accept an entity of the declared type or a plain
    dict, which is converted.  ``None`` clears the whole family.

    Args:
        entity: Entity instance to modify in place.
        family: Choice family base name, e.g. ``"value"``.
        suffix: Type suffix, e.g. ``"Quantity"`` or ``"Boolean"``.
        value:  Value matching the chosen type.

    Returns:
        *entity*, for chaining.

    Raises:
        ChoiceTypeError: If *family* is not declared or *suffix* is not
            one of its members.
        TypeError: If *value* does not fit the chosen type.
    """
    members = choice_family(type(entity), family)
    if value is None:
        return clear_choice(entity, family)

    spec = members.get(suffix)
    if spec is None:
        raise ChoiceTypeError(
            f"'{suffix}' is not an allowed type for {type(entity).__name__}."
            f"{family}[x]; expected one of: {', '.join(members)}",
            family=family,
        )

    stored = _checked_value(entity, spec, value)
    _clear_members(entity, members, keep=suffix)
    setattr(entity, spec.name, stored)
    return entity


def get_choice(entity: Any, family: str) -> Optional[tuple[str, Any]]:
    """Return ``(suffix, value)`` of the populated member, or ``None``."""
    for suffix, spec in choice_family(type(entity), family).items():
        value = getattr(entity, spec.name)
        if value is not None:
            return suffix, value
    return None


def clear_choice(entity: Any, family: str) -> Any:
    """Unset every member of *family* and their shadows."""
    _clear_members(entity, choice_family(type(entity), family))
    return entity


def check_exclusive(entity: Any) -> None:
    """Raise if any choice family of *entity* holds more than one value."""
    cls = type(entity)
    check_exclusive_values(cls, {spec.name: getattr(entity, spec.name) for spec in cls.__fhir_fields__})


def check_exclusive_values(cls: type, values: Mapping[str, Any]) -> None:
    """Same check as :func:`check_exclusive`, on a name -> value mapping."""
    for family, members in cls.__fhir_choices__.items():
        present = [spec.name for spec in members.values() if values.get(spec.name) is not None]
        if len(present) > 1:
            raise ChoiceTypeError(
                f"{cls.__name__}.{family}[x] allows one value, "
                f"got: {', '.join(present)}",
                family=family,
            )


def _clear_members(entity: Any, members: dict[str, FieldSpec], keep: Optional[str] = None) -> None:
    index = type(entity).__fhir_field_index__
    for suffix, spec in members.items():
        if suffix == keep:
            continue
        setattr(entity, spec.name, None)
        # Composite members have no shadow.
        if spec.kind == PRIMITIVE and spec.shadow_name in index:
            setattr(entity, spec.shadow_name, None)


def _checked_value(entity: Any, spec: FieldSpec, value: Any) -> Any:
    if spec.kind != PRIMITIVE:
        if not (is_entity(value) or isinstance(value, Mapping)):
            raise TypeError(
                f"{spec.name} expects a {spec.type_name} or dict, "
                f"got: {type(value).__name__}"
            )
        if is_entity(value):
            expected = registry_of(entity).lookup(spec.type_name)
            if not isinstance(value, expected):
                raise TypeError(
                    f"{spec.name} expects a {spec.type_name}, got: {type(value).__name__}"
                )
        return read_field(spec, value, registry_of(entity), path=spec.name)

    if isinstance(value, (Mapping, list, tuple)) or is_entity(value):
        raise TypeError(
            f"{spec.name} expects a {spec.type_name} primitive, got: {type(value).__name__}"
        )
    if spec.type_name in NUMERIC_PRIMITIVES and isinstance(value, bool):
        raise TypeError(f"{spec.name} expects a number, got: bool")
    allowed = PRIMITIVE_PYTHON_TYPES.get(spec.type_name)
    if allowed is not None and not isinstance(value, allowed):
        raise TypeError(
            f"{spec.name} expects {spec.type_name}, got: {type(value).__name__}"
        )
    if spec.type_name in STRING_PRIMITIVES and not isinstance(value, str):
        raise TypeError(
            f"{spec.name} expects a {spec.type_name} string, got: {type(value).__name__}"
        )
    return value
