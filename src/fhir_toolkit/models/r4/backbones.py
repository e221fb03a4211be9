"""
FHIR R4 backbone elements of the modeled resources.

Backbone types are registered under the resource name followed by the
element path in CamelCase (``Observation.referenceRange`` ->
``ObservationReferenceRange``).
"""

from __future__ import annotations

from typing import Any, Optional

from fhir_toolkit.base import BackboneElement, Element
from fhir_toolkit.fields import composite, primitive, resource, shadow
from fhir_toolkit.models.r4._registry import registry
from fhir_toolkit.models.r4.datatypes import (
    Address,
    CodeableConcept,
    ContactPoint,
    HumanName,
    Period,
    Quantity,
    Range,
    Ratio,
    Reference,
    SampledData,
)

registry.register(BackboneElement)


# ── Observation ────────────────────────────────────────────────────


@registry.model
class ObservationReferenceRange(BackboneElement):
    """Provides guide for interpretation."""

    low: Optional[Quantity] = composite("Quantity")
    high: Optional[Quantity] = composite("Quantity")
    type: Optional[CodeableConcept] = composite("CodeableConcept")
    appliesTo: Optional[list[CodeableConcept]] = composite("CodeableConcept", many=True)
    age: Optional[Range] = composite("Range")
    text: Optional[str] = primitive("string")
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
    dataAbsentReason: Optional[CodeableConcept] = composite("CodeableConcept")
    interpretation: Optional[list[CodeableConcept]] = composite("CodeableConcept", many=True)
    referenceRange: Optional[list[ObservationReferenceRange]] = composite(
        "ObservationReferenceRange", many=True,
    )


# ── Patient ────────────────────────────────────────────────────────


@registry.model
class PatientContact(BackboneElement):
    """A contact party (e.g. guardian, partner, friend) for the patient."""

    relationship: Optional[list[CodeableConcept]] = composite("CodeableConcept", many=True)
    name: Optional[HumanName] = composite("HumanName")
    telecom: Optional[list[ContactPoint]] = composite("ContactPoint", many=True)
    address: Optional[Address] = composite("Address")
    gender: Optional[str] = primitive("code")
    _gender: Optional[Element] = shadow()
    organization: Optional[Reference] = composite("Reference")
    period: Optional[Period] = composite("Period")


@registry.model
class PatientCommunication(BackboneElement):
    """A language which may be used to communicate with the patient."""

    language: Optional[CodeableConcept] = composite("CodeableConcept", required=True)
    preferred: Optional[bool] = primitive("boolean")
    _preferred: Optional[Element] = shadow()


@registry.model
class PatientLink(BackboneElement):
    """Link to another patient resource that concerns the same actual person."""

    other: Optional[Reference] = composite("Reference", required=True)
    type: Optional[str] = primitive("code", required=True)
    _type: Optional[Element] = shadow()


# ── Condition ──────────────────────────────────────────────────────


@registry.model
class ConditionStage(BackboneElement):
    """Stage/grade, usually assessed formally."""

    summary: Optional[CodeableConcept] = composite("CodeableConcept")
    assessment: Optional[list[Reference]] = composite("Reference", many=True)
    type: Optional[CodeableConcept] = composite("CodeableConcept")


@registry.model
class ConditionEvidence(BackboneElement):
    """Supporting evidence."""

    code: Optional[list[CodeableConcept]] = composite("CodeableConcept", many=True)
    detail: Optional[list[Reference]] = composite("Reference", many=True)


# ── Bundle ─────────────────────────────────────────────────────────


@registry.model
class BundleLink(BackboneElement):
    """Links related to this Bundle."""

    relation: Optional[str] = primitive("string", required=True)
    _relation: Optional[Element] = shadow()
    url: Optional[str] = primitive("uri", required=True)
    _url: Optional[Element] = shadow()


@registry.model
class BundleEntrySearch(BackboneElement):
    """Search related information."""

    mode: Optional[str] = primitive("code")
    _mode: Optional[Element] = shadow()
    score: Optional[float] = primitive("decimal")
    _score: Optional[Element] = shadow()


@registry.model
class BundleEntryRequest(BackboneElement):
    """Additional execution information (transaction/batch/history)."""

    method: Optional[str] = primitive("code", required=True)
    _method: Optional[Element] = shadow()
    url: Optional[str] = primitive("uri", required=True)
    _url: Optional[Element] = shadow()
    ifNoneMatch: Optional[str] = primitive("string")
    _ifNoneMatch: Optional[Element] = shadow()
    ifModifiedSince: Optional[str] = primitive("instant")
    _ifModifiedSince: Optional[Element] = shadow()
    ifMatch: Optional[str] = primitive("string")
    _ifMatch: Optional[Element] = shadow()
    ifNoneExist: Optional[str] = primitive("string")
    _ifNoneExist: Optional[Element] = shadow()


@registry.model
class BundleEntryResponse(BackboneElement):
    """Results of execution (transaction/batch/history)."""

    status: Optional[str] = primitive("string", required=True)
    _status: Optional[Element] = shadow()
    location: Optional[str] = primitive("uri")
    _location: Optional[Element] = shadow()
    etag: Optional[str] = primitive("string")
    _etag: Optional[Element] = shadow()
    lastModified: Optional[str] = primitive("instant")
    _lastModified: Optional[Element] = shadow()
    outcome: Optional[Any] = resource()


@registry.model
class BundleEntry(BackboneElement):
    """Entry in the bundle - will have a resource or information."""

    link: Optional[list[BundleLink]] = composite("BundleLink", many=True)
    fullUrl: Optional[str] = primitive("uri")
    _fullUrl: Optional[Element] = shadow()
    resource: Optional[Any] = resource()
    search: Optional[BundleEntrySearch] = composite("BundleEntrySearch")
    request: Optional[BundleEntryRequest] = composite("BundleEntryRequest")
    response: Optional[BundleEntryResponse] = composite("BundleEntryResponse")

