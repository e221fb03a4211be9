"""
FHIR R4 resources.
"""

from __future__ import annotations

from typing import Optional

from fhir_toolkit.base import DomainResource, Element, Resource
from fhir_toolkit.fields import composite, primitive, shadow
from fhir_toolkit.models.r4._registry import registry
from fhir_toolkit.models.r4.backbones import (
    BundleEntry,
    BundleLink,
    ConditionEvidence,
    ConditionStage,
    ObservationComponent,
    ObservationReferenceRange,
    PatientCommunication,
    PatientContact,
    PatientLink,
)
from fhir_toolkit.models.r4.datatypes import (
    Address,
    Age,
    Annotation,
    Attachment,
    CodeableConcept,
    ContactPoint,
    HumanName,
    Identifier,
    Period,
    Quantity,
    Range,
    Ratio,
    Reference,
    SampledData,
    Signature,
    Timing,
)

registry.register(Resource)
registry.register(DomainResource)


@registry.model
class Patient(DomainResource):
    """Information about an individual or animal receiving health care services."""

    resource_type = "Patient"

    identifier: Optional[list[Identifier]] = composite("Identifier", many=True)
    active: Optional[bool] = primitive("boolean")
    _active: Optional[Element] = shadow()
    name: Optional[list[HumanName]] = composite("HumanName", many=True)
    telecom: Optional[list[ContactPoint]] = composite("ContactPoint", many=True)
    gender: Optional[str] = primitive("code")
    _gender: Optional[Element] = shadow()
    birthDate: Optional[str] = primitive("date")
    _birthDate: Optional[Element] = shadow()
    deceasedBoolean: Optional[bool] = primitive("boolean", choice="deceased")
    _deceasedBoolean: Optional[Element] = shadow()
    deceasedDateTime: Optional[str] = primitive("dateTime", choice="deceased")
    _deceasedDateTime: Optional[Element] = shadow()
    address: Optional[list[Address]] = composite("Address", many=True)
    maritalStatus: Optional[CodeableConcept] = composite("CodeableConcept")
    multipleBirthBoolean: Optional[bool] = primitive("boolean", choice="multipleBirth")
    _multipleBirthBoolean: Optional[Element] = shadow()
    multipleBirthInteger: Optional[int] = primitive("integer", choice="multipleBirth")
    _multipleBirthInteger: Optional[Element] = shadow()
    photo: Optional[list[Attachment]] = composite("Attachment", many=True)
    contact: Optional[list[PatientContact]] = composite("PatientContact", many=True)
    communication: Optional[list[PatientCommunication]] = composite(
        "PatientCommunication", many=True,
    )
    generalPractitioner: Optional[list[Reference]] = composite("Reference", many=True)
    managingOrganization: Optional[Reference] = composite("Reference")
    link: Optional[list[PatientLink]] = composite("PatientLink", many=True)


@registry.model
class Observation(DomainResource):
    """Measurements and simple assertions."""

    resource_type = "Observation"

    identifier: Optional[list[Identifier]] = composite("Identifier", many=True)
    basedOn: Optional[list[Reference]] = composite("Reference", many=True)
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
    dataAbsentReason: Optional[CodeableConcept] = composite("CodeableConcept")
    interpretation: Optional[list[CodeableConcept]] = composite("CodeableConcept", many=True)
    note: Optional[list[Annotation]] = composite("Annotation", many=True)
    bodySite: Optional[CodeableConcept] = composite("CodeableConcept")
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


@registry.model
class Condition(DomainResource):
    """Detailed information about conditions, problems or diagnoses."""

    resource_type = "Condition"

    identifier: Optional[list[Identifier]] = composite("Identifier", many=True)
    clinicalStatus: Optional[CodeableConcept] = composite("CodeableConcept")
    verificationStatus: Optional[CodeableConcept] = composite("CodeableConcept")
    category: Optional[list[CodeableConcept]] = composite("CodeableConcept", many=True)
    severity: Optional[CodeableConcept] = composite("CodeableConcept")
    code: Optional[CodeableConcept] = composite("CodeableConcept")
    bodySite: Optional[list[CodeableConcept]] = composite("CodeableConcept", many=True)
    subject: Optional[Reference] = composite("Reference", required=True)
    encounter: Optional[Reference] = composite("Reference")
    onsetDateTime: Optional[str] = primitive("dateTime", choice="onset")
    _onsetDateTime: Optional[Element] = shadow()
    onsetAge: Optional[Age] = composite("Age", choice="onset")
    onsetPeriod: Optional[Period] = composite("Period", choice="onset")
    onsetRange: Optional[Range] = composite("Range", choice="onset")
    onsetString: Optional[str] = primitive("string", choice="onset")
    _onsetString: Optional[Element] = shadow()
    abatementDateTime: Optional[str] = primitive("dateTime", choice="abatement")
    _abatementDateTime: Optional[Element] = shadow()
    abatementAge: Optional[Age] = composite("Age", choice="abatement")
    abatementPeriod: Optional[Period] = composite("Period", choice="abatement")
    abatementRange: Optional[Range] = composite("Range", choice="abatement")
    abatementString: Optional[str] = primitive("string", choice="abatement")
    _abatementString: Optional[Element] = shadow()
    recordedDate: Optional[str] = primitive("dateTime")
    _recordedDate: Optional[Element] = shadow()
    recorder: Optional[Reference] = composite("Reference")
    asserter: Optional[Reference] = composite("Reference")
    stage: Optional[list[ConditionStage]] = composite("ConditionStage", many=True)
    evidence: Optional[list[ConditionEvidence]] = composite("ConditionEvidence", many=True)
    note: Optional[list[Annotation]] = composite("Annotation", many=True)


@registry.model
class Bundle(Resource):
    """Contains a collection of resources."""

    resource_type = "Bundle"

    identifier: Optional[Identifier] = composite("Identifier")
    type: Optional[str] = primitive("code", required=True)
    _type: Optional[Element] = shadow()
    timestamp: Optional[str] = primitive("instant")
    _timestamp: Optional[Element] = shadow()
    total: Optional[int] = primitive("unsignedInt")
    _total: Optional[Element] = shadow()
    link: Optional[list[BundleLink]] = composite("BundleLink", many=True)
    entry: Optional[list[BundleEntry]] = composite("BundleEntry", many=True)
    signature: Optional[Signature] = composite("Signature")
