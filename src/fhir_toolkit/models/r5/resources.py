"""
FHIR R5 Observation and its backbone elements.

R5 widens ``value[x]`` with ``Attachment`` and ``Reference``, adds
``instantiates[x]``, ``triggeredBy`` and ``bodyStructure``, and gives
reference ranges a ``normalValue``.
"""

from __future__ import annotations

from typing import Optional

from fhir_toolkit.base import BackboneElement, DomainResource, Element
from fhir_toolkit.fields import composite, primitive, shadow
from fhir_toolkit.models.r4.datatypes import (
    Annotation,
    Attachment,
    CodeableConcept,
    Identifier,
    Period,
    Quantity,
    Range,
    Ratio,
    Reference,
    Timing,
)
from fhir_toolkit.models.r5._registry import registry
from fhir_toolkit.models.r5.datatypes import SampledData


# ── Backbone elements ──────────────────────────────────────────────


@registry.model
class ObservationTriggeredBy(BackboneElement):
    """Triggering observation(s)."""

    observation: Optional[Reference] = composite("Reference", required=True)
    type: Optional[str] = primitive("code", required=True)
    _type: Optional[Element] = shadow()
    reason: Optional[str] = primitive("string")
    _reason: Optional[Element] = shadow()


@registry.model
class ObservationReferenceRange(BackboneElement):
    """Provides guide for interpretation."""

    low: Optional[Quantity] = composite("Quantity")
    high: Optional[Quantity] = composite("Quantity")
    normalValue: Optional[CodeableConcept] = composite("CodeableConcept")
    type: Optional[CodeableConcept] = composite("CodeableConcept")
    appliesTo: Optional[list[CodeableConcept]] = composite("CodeableConcept", many=True)
    age: Optional[Range] = composite("Range")
    text: Optional[str] = primitive("markdown")
    _text: Optional[Element] = shadow()


@registry.model
class ObservationComponent(BackboneElement):
    """Component results."""

    code: Optional[CodeableConcept] = composite("CodeableConcept", required=True)
    valueQuantity: Optional[Quantity] = composite("Quantity", choice="value")
    valueCodeableConcept: Optional[CodeableConcept] = composite("CodeableConcept", choice="value")
    valueString: Optional[str] = primitive("string", choice="value")
    _valueString: Optional[Element] = shadow()
    valueBoolean: Optional[bool] = primitive("boolean", choice="value")
    _valueBoolean: Optional[Element] = shadow()
    valueInteger: Optional[int] = primitive("integer", choice="value")
    _valueInteger: Optional[Element] = shadow()
    valueRange: Optional[Range] = composite("Range", choice="value")
    valueRatio: Optional[Ratio] = composite("Ratio", choice="value")
    valueSampledData: Optional[SampledData] = composite("SampledData", choice="value")
    valueTime: Optional[str] = primitive("time", choice="value")
    _valueTime: Optional[Element] = shadow()
    valueDateTime: Optional[str] = primitive("dateTime", choice="value")
    _valueDateTime: Optional[Element] = shadow()
    valuePeriod: Optional[Period] = composite("Period", choice="value")
    valueAttachment: Optional[Attachment] = composite("Attachment", choice="value")
    valueReference: Optional[Reference] = composite("Reference", choice="value")
    dataAbsentReason: Optional[CodeableConcept] = composite("CodeableConcept")
    interpretation: Optional[list[CodeableConcept]] = composite("CodeableConcept", many=True)
    referenceRange: Optional[list[ObservationReferenceRange]] = composite(
        "ObservationReferenceRange", many=True,
    )


# ── Resource ───────────────────────────────────────────────────────


@registry.model
class Observation(DomainResource):
    """Measurements and simple assertions."""

    resource_type = "Observation"

    identifier: Optional[list[Identifier]] = composite("Identifier", many=True)
    instantiatesCanonical: Optional[str] = primitive("canonical", choice="instantiates")
    _instantiatesCanonical: Optional[Element] = shadow()
    instantiatesReference: Optional[Reference] = composite("Reference", choice="instantiates")
    basedOn: Optional[list[Reference]] = composite("Reference", many=True)
    triggeredBy: Optional[list[ObservationTriggeredBy]] = composite(
        "ObservationTriggeredBy", many=True,
    )
    partOf: Optional[list[Reference]] = composite("Reference", many=True)
    status: Optional[str] = primitive("code", required=True)
    _status: Optional[Element] = shadow()
    category: Optional[list[CodeableConcept]] = composite("CodeableConcept", many=True)
    code: Optional[CodeableConcept] = composite("CodeableConcept", required=True)
    subject: Optional[Reference] = composite("Reference")
    focus: Optional[list[Reference]] = composite("Reference", many=True)
    encounter: Optional[Reference] = composite("Reference")
    effectiveDateTime: Optional[str] = primitive("dateTime", choice="effective")
    _effectiveDateTime: Optional[Element] = shadow()
    effectivePeriod: Optional[Period] = composite("Period", choice="effective")
    effectiveTiming: Optional[Timing] = composite("Timing", choice="effective")
    effectiveInstant: Optional[str] = primitive("instant", choice="effective")
    _effectiveInstant: Optional[Element] = shadow()
    issued: Optional[str] = primitive("instant")
    _issued: Optional[Element] = shadow()
    performer: Optional[list[Reference]] = composite("Reference", many=True)
    valueQuantity: Optional[Quantity] = composite("Quantity", choice="value")
    valueCodeableConcept: Optional[CodeableConcept] = composite("CodeableConcept", choice="value")
    valueString: Optional[str] = primitive("string", choice="value")
    _valueString: Optional[Element] = shadow()
    valueBoolean: Optional[bool] = primitive("boolean", choice="value")
    _valueBoolean: Optional[Element] = shadow()
    valueInteger: Optional[int] = primitive("integer", choice="value")
    _valueInteger: Optional[Element] = shadow()
    valueRange: Optional[Range] = composite("Range", choice="value")
    valueRatio: Optional[Ratio] = composite("Ratio", choice="value")
    valueSampledData: Optional[SampledData] = composite("SampledData", choice="value")
    valueTime: Optional[str] = primitive("time", choice="value")
    _valueTime: Optional[Element] = shadow()
    valueDateTime: Optional[str] = primitive("dateTime", choice="value")
    _valueDateTime: Optional[Element] = shadow()
    valuePeriod: Optional[Period] = composite("Period", choice="value")
    valueAttachment: Optional[Attachment] = composite("Attachment", choice="value")
    valueReference: Optional[Reference] = composite("Reference", choice="value")
    dataAbsentReason: Optional[CodeableConcept] = composite("CodeableConcept")
    interpretation: Optional[list[CodeableConcept]] = composite("CodeableConcept", many=True)
    note: Optional[list[Annotation]] = composite("Annotation", many=True)
    bodySite: Optional[CodeableConcept] = composite("CodeableConcept")
    bodyStructure: Optional[Reference] = composite("Reference")
    method: Optional[CodeableConcept] = composite("CodeableConcept")
    specimen: Optional[Reference] = composite("Reference")
    device: Optional[Reference] = composite("Reference")
    referenceRange: Optional[list[ObservationReferenceRange]] = composite(
        "ObservationReferenceRange", many=True,
    )
    hasMember: Optional[list[Reference]] = composite("Reference", many=True)
    derivedFrom: Optional[list[Reference]] = composite("Reference", many=True)
    component: Optional[list[ObservationComponent]] = composite(
        "ObservationComponent", many=True,
    )
