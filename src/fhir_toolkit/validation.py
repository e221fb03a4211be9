"""
Validation hook for FHIR entities.

The object model does not judge content: with no validators registered
every entity is valid.  Validation engines plug in through
:func:`register_validator`; each validator receives an entity and
returns an iterable of :class:`ValidationIssue`.

:func:`required_fields` is a shallow opt-in validator reporting declared
fields with minimum cardinality 1 that are unset, recursing through
nested entities.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator

from fhir_toolkit.errors import FhirValidationError
from fhir_toolkit.fields import PRIMITIVE, SHADOW
from fhir_toolkit.registry import is_entity

logger = logging.getLogger(__name__)


@dataclass
class ValidationIssue:
    path: str
    code: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "warning"]


Validator = Callable[[Any], Iterable[ValidationIssue]]

_registry: dict[str, Validator] = {}


# ── Registry ───────────────────────────────────────────────────────


def register_validator(name: str, fn: Validator, *, force: bool = False) -> None:
    """Register a validator under *name*.

    Raises:
        ValueError: If *name* is empty or already registered without
            *force*.
    """
    if not name or not name.strip():
        raise ValueError("Validator name must be a non-empty string")
    if name in _registry and not force:
        raise ValueError(
            f"Validator '{name}' is already registered. "
            "Pass force=True to replace it."
        )
    _registry[name] = fn


def unregister_validator(name: str) -> None:
    """Remove the validator registered as *name*.

    Raises:
        KeyError: If *name* is not registered.
    """
    if name not in _registry:
        raise KeyError(f"Validator '{name}' is not registered")
    del _registry[name]


def list_validators() -> list[str]:
    return list(_registry)


def reset_validators() -> None:
    """Remove every registered validator.  Mostly useful in tests."""
    _registry.clear()


# ── Entry points ───────────────────────────────────────────────────


def validate(entity: Any) -> ValidationResult:
    """Run every registered validator over *entity*."""
    issues: list[ValidationIssue] = []
    for name, fn in _registry.items():
        found = list(fn(entity))
        logger.debug("Validator %s reported %d issue(s)", name, len(found))
        issues.extend(found)
    valid = not any(issue.severity == "error" for issue in issues)
    return ValidationResult(valid, issues)


def validate_or_throw(entity: Any) -> Any:
    """Validate *entity* and return it unchanged.

    Raises:
        FhirValidationError: If any validator reported an error.
    """
    result = validate(entity)
    if not result.valid:
        summary = "; ".join(f"{i.path}: {i.message}" for i in result.errors)
        raise FhirValidationError(
            f"{type(entity).__name__} failed validation: {summary}",
            result=result,
        )
    return entity


# ── Shallow required-field check ───────────────────────────────────


def required_fields(entity: Any) -> Iterator[ValidationIssue]:
    """Report unset required fields of *entity* and its nested entities."""
    yield from _required(entity, type(entity).__name__)


def _required(entity: Any, path: str) -> Iterator[ValidationIssue]:
    for spec in entity.__fhir_fields__:
        value = getattr(entity, spec.name)
        location = f"{path}.{spec.name}"
        if value is None or value == []:
            if spec.required:
                yield ValidationIssue(
                    location, "required", f"Property \"{spec.name}\" is required",
                )
            continue
        if spec.kind in (PRIMITIVE, SHADOW):
            continue
        items = value if spec.many else [value]
        for i, item in enumerate(items):
            if is_entity(item):
                yield from _required(item, f"{location}[{i}]" if spec.many else location)
