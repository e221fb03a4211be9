"""Exception types raised by the FHIR object model."""

from __future__ import annotations

from typing import Any, Optional


class FhirError(Exception):
    """Root of all errors raised by fhir_toolkit."""


class FhirStructureError(FhirError, ValueError):
    """Wire JSON whose shape contradicts a field declaration.

    Raised for scalar/array/object mismatches, a missing or unknown
    ``resourceType``, more than one member of a choice family, and
    unknown keys in strict mode.

    Attributes:
        field: Name of the offending field (wire key).
        path:  Dotted location of the field inside the document.
    """

    def __init__(self, message: str, *, field: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        self.path = path or field


class ChoiceTypeError(FhirError, ValueError):
    """Unknown choice family or type suffix, or a violated exclusivity."""

    def __init__(self, message: str, *, family: str) -> None:
        super().__init__(message)
        self.family = family


class FhirValidationError(FhirError, ValueError):
    """Raised by ``validate_or_throw`` when validators report errors."""

    def __init__(self, message: str, *, result: Any) -> None:
        super().__init__(message)
        self.result = result


class BuilderConsumedError(FhirError, RuntimeError):
    """A builder was used again after ``build()``."""
