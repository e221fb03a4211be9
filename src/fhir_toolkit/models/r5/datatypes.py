"""
FHIR R5 datatypes that differ from R4.

Everything else resolves to the R4 definition through the registry
parent.
"""

from __future__ import annotations

from typing import Optional

from fhir_toolkit.base import Element
from fhir_toolkit.fields import composite, primitive, shadow
from fhir_toolkit.models.r4.datatypes import CodeableConcept, Quantity, Reference
from fhir_toolkit.models.r5._registry import registry


@registry.model
class CodeableReference(Element):
    """Reference to a resource or a concept."""

    concept: Optional[CodeableConcept] = composite("CodeableConcept")
    reference: Optional[Reference] = composite("Reference")


@registry.model
class SampledData(Element):
    """A series of measurements taken by a device (R5 layout)."""

    origin: Optional[Quantity] = composite("Quantity", required=True)
    interval: Optional[float] = primitive("decimal")
    _interval: Optional[Element] = shadow()
    intervalUnit: Optional[str] = primitive("code", required=True)
    _intervalUnit: Optional[Element] = shadow()
    factor: Optional[float] = primitive("decimal")
    _factor: Optional[Element] = shadow()
    lowerLimit: Optional[float] = primitive("decimal")
    _lowerLimit: Optional[Element] = shadow()
    upperLimit: Optional[float] = primitive("decimal")
    _upperLimit: Optional[Element] = shadow()
    dimensions: Optional[int] = primitive("positiveInt", required=True)
    _dimensions: Optional[Element] = shadow()
    codeMap: Optional[str] = primitive("canonical")
    _codeMap: Optional[Element] = shadow()
    offsets: Optional[str] = primitive("string")
    _offsets: Optional[Element] = shadow()
    data: Optional[str] = primitive("string")
    _data: Optional[Element] = shadow()
