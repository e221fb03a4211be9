"""
Field declarations for generated FHIR entity classes.

Every entity class is a dataclass whose fields are declared with one of
the helpers below.  The helpers return ordinary ``dataclasses.field``
objects (default ``None``) carrying a :class:`FieldSpec` in their
metadata, so the declared order of the dataclass *is* the normative
FHIR serialization order:

    @registry.model
    class Coding(Element):
        system: Optional[str] = primitive("uri")
        _system: Optional[Element] = shadow()
        code: Optional[str] = primitive("code")
        _code: Optional[Element] = shadow()

Choice-type (``[x]``) members are declared individually, each tagged
with the family it belongs to:

        valueBoolean: Optional[bool] = primitive("boolean", choice="value")
        _valueBoolean: Optional[Element] = shadow()
        valueQuantity: Optional[Quantity] = composite("Quantity", choice="value")

Composite members never have a shadow.  A shadow always follows the
primitive it belongs to and takes its cardinality.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional

from fhir_toolkit._constants import SHADOW_PREFIX

# Field kinds
PRIMITIVE = "primitive"
SHADOW = "shadow"
COMPOSITE = "composite"
RESOURCE = "resource"

_METADATA_KEY = "fhir"


@dataclass(frozen=True)
class FieldSpec:
    """Static description of one declared field.

    Attributes:
        kind:      One of ``primitive``, ``shadow``, ``composite``,
                   ``resource``.
        type_name: FHIR type name (``"code"``, ``"Quantity"``, ...).
                   ``"Element"`` for shadows, ``"Resource"`` for
                   polymorphic resource slots.
        many:      True for array-valued fields.
        family:    Choice family base name for ``[x]`` members.
        required:  Minimum cardinality of 1.  Informational only; the
                   codec never enforces it.
        name:      Attribute and wire key.  Filled in by
                   :func:`collect_fields`.
    """

    kind: str
    type_name: str
    many: bool = False
    family: Optional[str] = None
    required: bool = False
    name: str = ""

    @property
    def suffix(self) -> Optional[str]:
        """Type suffix of a choice member (``"Quantity"`` for ``valueQuantity``)."""
        if self.family is None:
            return None
        return self.name[len(self.family):]

    @property
    def shadow_name(self) -> str:
        return SHADOW_PREFIX + self.name


# ── Declaration helpers ────────────────────────────────────────────


def _declare(spec: FieldSpec) -> Any:
    return dataclasses.field(default=None, metadata={_METADATA_KEY: spec})


def primitive(
    type_name: str,
    *,
    many: bool = False,
    choice: Optional[str] = None,
    required: bool = False,
) -> Any:
    """Declare a primitive-valued field (string, number or boolean)."""
    return _declare(FieldSpec(PRIMITIVE, type_name, many, choice, required))


def shadow() -> Any:
    """Declare the ``_x`` extension slot of the preceding primitive ``x``."""
    return _declare(FieldSpec(SHADOW, "Element"))


def composite(
    type_name: str,
    *,
    many: bool = False,
    choice: Optional[str] = None,
    required: bool = False,
) -> Any:
    """Declare a field holding a nested datatype or backbone element."""
    return _declare(FieldSpec(COMPOSITE, type_name, many, choice, required))


def resource(*, many: bool = False, required: bool = False) -> Any:
    """Declare a field holding whole resources selected by ``resourceType``."""
    return _declare(FieldSpec(RESOURCE, "Resource", many, None, required))


# ── Collection ─────────────────────────────────────────────────────


def collect_fields(cls: type) -> tuple[tuple[FieldSpec, ...], dict[str, dict[str, FieldSpec]]]:
    """Read the ordered field specs and choice families of a dataclass.

    Returns:
        ``(fields, choices)`` where *fields* is in declaration order
        (inherited envelope fields first) and *choices* maps each family
        name to ``{suffix: FieldSpec}`` in declaration order.

    Raises:
        TypeError: If a shadow does not directly follow a primitive of
            the matching name.
    """
    specs: list[FieldSpec] = []
    choices: dict[str, dict[str, FieldSpec]] = {}

    for f in dataclasses.fields(cls):
        spec = f.metadata.get(_METADATA_KEY)
        if spec is None:
            continue
        spec = dataclasses.replace(spec, name=f.name)

        if spec.kind == SHADOW:
            owner = specs[-1] if specs else None
            if owner is None or owner.kind != PRIMITIVE or owner.shadow_name != spec.name:
                raise TypeError(
                    f"{cls.__name__}.{spec.name}: a shadow must directly follow "
                    f"the primitive '{spec.name[len(SHADOW_PREFIX):]}'"
                )
            spec = dataclasses.replace(spec, many=owner.many)

        if spec.family is not None:
            choices.setdefault(spec.family, {})[spec.suffix] = spec

        specs.append(spec)

    return tuple(specs), choices
