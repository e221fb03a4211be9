"""
Fluent builders for FHIR entities.

A builder owns a private staging entity of its ``model`` class.  Setters
write to the staging entity and return the builder; :meth:`build` hands
the entity over and consumes the builder.

Setters are derived from the model's declared fields, using the
snake_case form of the FHIR name:

    patient = (
        PatientBuilder()
        .set_id("p1")
        .add_name({"family": "Smith", "given": ["John"]})
        .set_birth_date("1990-05-15")
        .set_deceased("Boolean", False)
        .build()
    )

``set_<field>(value)`` exists for single-valued fields,
``add_<field>(item)`` for array fields and ``set_<family>(suffix, value)``
for choice families.  Setting a concrete choice member such as
``set_value_quantity(q)`` is routed through the same exclusive path.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, ClassVar, Optional

from fhir_toolkit.choice import set_choice
from fhir_toolkit.codec import read_field
from fhir_toolkit.errors import BuilderConsumedError
from fhir_toolkit.fields import SHADOW, FieldSpec
from fhir_toolkit.registry import registry_of
from fhir_toolkit.validation import validate_or_throw

logger = logging.getLogger(__name__)

_ACTIONS = ("set", "add")


def snake_to_camel(name: str) -> str:
    """``birth_date`` -> ``birthDate``; names without underscores pass through."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


class ModelBuilder:
    """Base class of all builders.

    Subclasses set ``model`` to the entity class they build.

    Raises:
        TypeError: On instantiation of a builder without a ``model``.
    """

    model: ClassVar[Optional[type]] = None

    def __init__(self) -> None:
        if self.model is None:
            raise TypeError(f"{type(self).__name__} does not define a model class")
        self._staging: Any = self.model()
        self._consumed = False

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else repr(self._staging)
        return f"{type(self).__name__}({state})"

    # ── Dynamic setters ────────────────────────────────────────────

    def __getattr__(self, name: str) -> Callable[..., ModelBuilder]:
        # Only called for names not found normally.
        action, _, rest = name.partition("_")
        if name.startswith("_") or action not in _ACTIONS or not rest:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

        model = type(self).model
        field_name = snake_to_camel(rest)
        spec = model.__fhir_field_index__.get(field_name)

        if action == "set" and field_name in model.__fhir_choices__:
            return lambda suffix, value: self.set_choice(field_name, suffix, value)
        if spec is not None and spec.kind != SHADOW:
            if action == "set" and spec.family is not None:
                return lambda value: self.set_choice(spec.family, spec.suffix, value)
            if action == "set" and not spec.many:
                return lambda value: self._set(spec, value)
            if action == "add" and spec.many:
                return lambda item: self._add(spec, item)

        raise AttributeError(
            f"{type(self).__name__} has no setter '{name}' "
            f"({model.__name__} declares no matching field '{field_name}')"
        )

    def _set(self, spec: FieldSpec, value: Any) -> ModelBuilder:
        self._check_open()
        registry = registry_of(self.model)
        setattr(self._staging, spec.name, read_field(spec, value, registry))
        return self

    def _add(self, spec: FieldSpec, item: Any) -> ModelBuilder:
        self._check_open()
        registry = registry_of(self.model)
        converted = read_field(spec, [item], registry)[0]
        current = getattr(self._staging, spec.name)
        if current is None:
            setattr(self._staging, spec.name, [converted])
        else:
            current.append(converted)
        return self

    # ── Explicit setters ───────────────────────────────────────────

    def set_choice(self, family: str, suffix: str, value: Any) -> ModelBuilder:
        """Set one member of a choice family, clearing its siblings."""
        self._check_open()
        set_choice(self._staging, family, suffix, value)
        return self

    def merge(self, partial: Mapping[str, Any]) -> ModelBuilder:
        """Copy every declared key of *partial* onto the staging entity."""
        self._check_open()
        self._staging.assign_fields(partial)
        return self

    # ── Build ──────────────────────────────────────────────────────

    def build(self) -> Any:
        """Return the built entity.  The builder cannot be used afterwards."""
        self._check_open()
        entity, self._staging = self._staging, None
        self._consumed = True
        logger.debug("Built %r", entity)
        return entity

    def build_or_throw(self) -> Any:
        """Build, then run the registered validators.

        Raises:
            FhirValidationError: If validation reports an error.
        """
        return validate_or_throw(self.build())

    def _check_open(self) -> None:
        if self._consumed:
            raise BuilderConsumedError(
                f"{type(self).__name__} has already built its "
                f"{self.model.__name__}; create a new builder"
            )
