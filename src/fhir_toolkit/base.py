"""
Entity base contract and FHIR envelope tiers.

Every modeled type derives from one of four tiers whose fields are
serialized before the type's own fields, each tier extending the one
above it:

  Element          id, extension
  BackboneElement  + modifierExtension
  Resource         id, meta, implicitRules, language
  DomainResource   + text, contained, extension, modifierExtension

Entities are dataclasses used as value objects.  ``with_changes``,
``apply_transform`` and ``with_choice`` return new instances; nested
entities are owned by exactly one parent, so every path that takes
entities from outside copies them.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Callable, ClassVar, Iterable, Optional

from fhir_toolkit import codec
from fhir_toolkit.choice import check_exclusive, check_exclusive_values, get_choice, set_choice
from fhir_toolkit.fields import FieldSpec, composite, primitive, resource, shadow
from fhir_toolkit.registry import ModelRegistry, declare, registry_of
from fhir_toolkit.validation import ValidationResult, validate, validate_or_throw


class Base:
    """Behaviour shared by every entity class.

    Subclasses are produced by :func:`~fhir_toolkit.registry.declare`,
    which fills in the class attributes below.

    Plain constructor keywords keep the entity instances they are given,
    like any dataclass, so passing one instance to two constructors
    shares it.  ``from_json``, ``assign_fields``, builders and the
    copy-on-write methods copy incoming entities.
    """

    __fhir_fields__: ClassVar[tuple[FieldSpec, ...]] = ()
    __fhir_field_index__: ClassVar[dict[str, FieldSpec]] = {}
    __fhir_choices__: ClassVar[dict[str, dict[str, FieldSpec]]] = {}
    __fhir_registry__: ClassVar[Optional[ModelRegistry]] = None

    def __post_init__(self) -> None:
        # Plain dicts handed to the constructor become entities.
        registry = registry_of(self)
        for spec in self.__fhir_fields__:
            value = getattr(self, spec.name)
            if value is not None:
                setattr(self, spec.name, codec.read_field(spec, value, registry, own=False))
        check_exclusive(self)

    def __repr__(self) -> str:
        populated = [
            spec.name for spec in self.__fhir_fields__
            if spec.name != "id" and getattr(self, spec.name) is not None
        ]
        parts = [f"id={self.id!r}"] if getattr(self, "id", None) else []
        if populated:
            parts.append(f"fields=[{', '.join(populated)}]")
        return f"{type(self).__name__}({', '.join(parts)})"

    # ── Construction ───────────────────────────────────────────────

    @classmethod
    def from_json(cls, data: Mapping[str, Any], *, strict: bool = False) -> Any:
        """Build an instance of this class from wire JSON."""
        return codec.from_json(data, cls, strict=strict)

    @classmethod
    def from_partial(cls, partial: Mapping[str, Any]) -> Any:
        """Build an instance from a partial map, ignoring undeclared keys."""
        entity = cls()
        entity.assign_fields(partial)
        return entity

    def assign_fields(
        self,
        partial: Mapping[str, Any],
        declared_names: Optional[Iterable[str]] = None,
    ) -> None:
        """Copy the keys of *partial* listed in *declared_names* onto self.

        *declared_names* defaults to every field the class declares.
        Keys outside it are dropped silently.  Nested values go through
        the codec, so dicts become entities and entities are copied.
        Setting one member of a choice family evicts the member already
        present, as :func:`~fhir_toolkit.choice.set_choice` does.

        Every value is converted and checked before any is written, so
        on error the entity is left unchanged.

        Raises:
            FhirStructureError: If a value does not fit its field.
            ChoiceTypeError: If *partial* sets two members of one family.
        """
        index = self.__fhir_field_index__
        names = index if declared_names is None else declared_names
        registry = registry_of(self)
        updates: dict[str, Any] = {}
        for name in names:
            spec = index.get(name)
            if spec is None or name not in partial:
                continue
            updates[name] = codec.read_field(spec, partial[name], registry)

        state = {spec.name: getattr(self, spec.name) for spec in self.__fhir_fields__}
        for name, value in updates.items():
            family = index[name].family
            if family is None or value is None:
                continue
            for sibling in self.__fhir_choices__[family].values():
                if sibling.name != name:
                    state[sibling.name] = None
                    if sibling.shadow_name in index:
                        state[sibling.shadow_name] = None
        state.update(updates)
        check_exclusive_values(type(self), state)

        for name, value in state.items():
            setattr(self, name, value)

    # ── Serialization ──────────────────────────────────────────────

    def to_json(self) -> dict[str, Any]:
        """Wire JSON with keys in FHIR-defined order."""
        return codec.to_json(self)

    def clone(self) -> Any:
        """Deep copy sharing no mutable state with this instance."""
        return copy.deepcopy(self)

    # ── Copy-on-write ──────────────────────────────────────────────

    def with_changes(self, partial: Optional[Mapping[str, Any]] = None, **changes: Any) -> Any:
        """Return a new instance with *partial* / *changes* laid over this one.

        Does not modify this instance.  Setting one member of a choice
        family evicts the members already present.  A ``None`` value
        removes the field.
        """
        overlay = {**(partial or {}), **changes}
        current = self.to_json()
        for name, value in overlay.items():
            spec = self.__fhir_field_index__.get(name)
            if spec is None or spec.family is None or value is None:
                continue
            for sibling in self.__fhir_choices__[spec.family].values():
                if sibling.name != name:
                    current.pop(sibling.name, None)
                    current.pop(sibling.shadow_name, None)
        return codec.from_json({**current, **overlay}, type(self))

    def apply_transform(self, fn: Callable[[dict[str, Any]], Mapping[str, Any]]) -> Any:
        """Return a new instance overlaid with ``fn(current_json)``."""
        return self.with_changes(fn(self.to_json()))

    def with_choice(self, family: str, suffix: str, value: Any) -> Any:
        """Copy-on-write form of :func:`~fhir_toolkit.choice.set_choice`."""
        return set_choice(self.clone(), family, suffix, value)

    def get_choice(self, family: str) -> Optional[tuple[str, Any]]:
        """``(suffix, value)`` of the populated member of *family*, if any."""
        return get_choice(self, family)

    # ── Validation hook ────────────────────────────────────────────

    def validate(self) -> ValidationResult:
        return validate(self)

    def validate_or_throw(self) -> Any:
        return validate_or_throw(self)


# ═══════════════════════════════════════════════════════════════════
# ENVELOPE TIERS
# ═══════════════════════════════════════════════════════════════════


@declare
class Element(Base):
    """Base for all datatypes; also the type of every ``_x`` shadow."""

    id: Optional[str] = primitive("string")
    extension: Optional[list[Any]] = composite("Extension", many=True)


@declare
class BackboneElement(Element):
    """Element nested in a resource that may carry modifier extensions."""

    modifierExtension: Optional[list[Any]] = composite("Extension", many=True)


@declare
class Resource(Base):
    """Base for all resources.  ``resource_type`` is the discriminator."""

    resource_type: ClassVar[str] = ""

    id: Optional[str] = primitive("id")
    meta: Optional[Any] = composite("Meta")
    implicitRules: Optional[str] = primitive("uri")
    _implicitRules: Optional[Element] = shadow()
    language: Optional[str] = primitive("code")
    _language: Optional[Element] = shadow()


@declare
class DomainResource(Resource):
    """Resource with narrative, contained resources and extensions."""

    text: Optional[Any] = composite("Narrative")
    contained: Optional[list[Resource]] = resource(many=True)
    extension: Optional[list[Any]] = composite("Extension", many=True)
    modifierExtension: Optional[list[Any]] = composite("Extension", many=True)
