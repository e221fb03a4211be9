"""
FHIR R4 datatypes.

See https://hl7.org/fhir/R4/datatypes.html.  Field order follows the
published element order; it is the order used on the wire.
"""

from __future__ import annotations

from typing import Optional

from fhir_toolkit.base import Element
from fhir_toolkit.fields import composite, primitive, shadow
from fhir_toolkit.models.r4._registry import registry

registry.register(Element)


@registry.model
class Extension(Element):
    """Optional extension element (R4 §2.4)."""

    url: Optional[str] = primitive("uri", required=True)
    valueBase64Binary: Optional[str] = primitive("base64Binary", choice="value")
    _valueBase64Binary: Optional[Element] = shadow()
    valueBoolean: Optional[bool] = primitive("boolean", choice="value")
    _valueBoolean: Optional[Element] = shadow()
    valueCanonical: Optional[str] = primitive("canonical", choice="value")
    _valueCanonical: Optional[Element] = shadow()
    valueCode: Optional[str] = primitive("code", choice="value")
    _valueCode: Optional[Element] = shadow()
    valueDate: Optional[str] = primitive("date", choice="value")
    _valueDate: Optional[Element] = shadow()
    valueDateTime: Optional[str] = primitive("dateTime", choice="value")
    _valueDateTime: Optional[Element] = shadow()
    valueDecimal: Optional[float] = primitive("decimal", choice="value")
    _valueDecimal: Optional[Element] = shadow()
    valueId: Optional[str] = primitive("id", choice="value")
    _valueId: Optional[Element] = shadow()
    valueInstant: Optional[str] = primitive("instant", choice="value")
    _valueInstant: Optional[Element] = shadow()
    valueInteger: Optional[int] = primitive("integer", choice="value")
    _valueInteger: Optional[Element] = shadow()
    valueMarkdown: Optional[str] = primitive("markdown", choice="value")
    _valueMarkdown: Optional[Element] = shadow()
    valueOid: Optional[str] = primitive("oid", choice="value")
    _valueOid: Optional[Element] = shadow()
    valuePositiveInt: Optional[int] = primitive("positiveInt", choice="value")
    _valuePositiveInt: Optional[Element] = shadow()
    valueString: Optional[str] = primitive("string", choice="value")
    _valueString: Optional[Element] = shadow()
    valueTime: Optional[str] = primitive("time", choice="value")
    _valueTime: Optional[Element] = shadow()
    valueUnsignedInt: Optional[int] = primitive("unsignedInt", choice="value")
    _valueUnsignedInt: Optional[Element] = shadow()
    valueUri: Optional[str] = primitive("uri", choice="value")
    _valueUri: Optional[Element] = shadow()
    valueUrl: Optional[str] = primitive("url", choice="value")
    _valueUrl: Optional[Element] = shadow()
    valueUuid: Optional[str] = primitive("uuid", choice="value")
    _valueUuid: Optional[Element] = shadow()
    valueAddress: Optional[Address] = composite("Address", choice="value")
    valueAge: Optional[Age] = composite("Age", choice="value")
    valueAnnotation: Optional[Annotation] = composite("Annotation", choice="value")
    valueAttachment: Optional[Attachment] = composite("Attachment", choice="value")
    valueCodeableConcept: Optional[CodeableConcept] = composite("CodeableConcept", choice="value")
    valueCoding: Optional[Coding] = composite("Coding", choice="value")
    valueContactPoint: Optional[ContactPoint] = composite("ContactPoint", choice="value")
    valueCount: Optional[Count] = composite("Count", choice="value")
    valueDistance: Optional[Distance] = composite("Distance", choice="value")
    valueDuration: Optional[Duration] = composite("Duration", choice="value")
    valueHumanName: Optional[HumanName] = composite("HumanName", choice="value")
    valueIdentifier: Optional[Identifier] = composite("Identifier", choice="value")
    valueMoney: Optional[Money] = composite("Money", choice="value")
    valuePeriod: Optional[Period] = composite("Period", choice="value")
    valueQuantity: Optional[Quantity] = composite("Quantity", choice="value")
    valueRange: Optional[Range] = composite("Range", choice="value")
    valueRatio: Optional[Ratio] = composite("Ratio", choice="value")
    valueReference: Optional[Reference] = composite("Reference", choice="value")
    valueSampledData: Optional[SampledData] = composite("SampledData", choice="value")
    valueSignature: Optional[Signature] = composite("Signature", choice="value")
    valueTiming: Optional[Timing] = composite("Timing", choice="value")
    valueMeta: Optional[Meta] = composite("Meta", choice="value")


@registry.model
class Coding(Element):
    """A reference to a code defined by a terminology system."""

    system: Optional[str] = primitive("uri")
    _system: Optional[Element] = shadow()
    version: Optional[str] = primitive("string")
    _version: Optional[Element] = shadow()
    code: Optional[str] = primitive("code")
    _code: Optional[Element] = shadow()
    display: Optional[str] = primitive("string")
    _display: Optional[Element] = shadow()
    userSelected: Optional[bool] = primitive("boolean")
    _userSelected: Optional[Element] = shadow()


@registry.model
class CodeableConcept(Element):
    """Concept - reference to a terminology or just text."""

    coding: Optional[list[Coding]] = composite("Coding", many=True)
    text: Optional[str] = primitive("string")
    _text: Optional[Element] = shadow()


@registry.model
class Quantity(Element):
    """A measured or measurable amount."""

    value: Optional[float] = primitive("decimal")
    _value: Optional[Element] = shadow()
    comparator: Optional[str] = primitive("code")
    _comparator: Optional[Element] = shadow()
    unit: Optional[str] = primitive("string")
    _unit: Optional[Element] = shadow()
    system: Optional[str] = primitive("uri")
    _system: Optional[Element] = shadow()
    code: Optional[str] = primitive("code")
    _code: Optional[Element] = shadow()


# Quantity specializations add constraints only, no elements.


@registry.model
class Age(Quantity):
    """A duration of time during which an organism has existed."""


@registry.model
class Count(Quantity):
    """A measured amount of discrete items."""


@registry.model
class Distance(Quantity):
    """A length - a value with a unit that is a physical distance."""


@registry.model
class Duration(Quantity):
    """A length of time."""


@registry.model
class Money(Element):
    """An amount of economic utility in some recognized currency."""

    value: Optional[float] = primitive("decimal")
    _value: Optional[Element] = shadow()
    currency: Optional[str] = primitive("code")
    _currency: Optional[Element] = shadow()


@registry.model
class Range(Element):
    """Set of values bounded by low and high."""

    low: Optional[Quantity] = composite("Quantity")
    high: Optional[Quantity] = composite("Quantity")


@registry.model
class Ratio(Element):
    """A ratio of two Quantity values - a numerator and a denominator."""

    numerator: Optional[Quantity] = composite("Quantity")
    denominator: Optional[Quantity] = composite("Quantity")


@registry.model
class Period(Element):
    """Time range defined by start and end date/time."""

    start: Optional[str] = primitive("dateTime")
    _start: Optional[Element] = shadow()
    end: Optional[str] = primitive("dateTime")
    _end: Optional[Element] = shadow()


@registry.model
class Reference(Element):
    """A reference from one resource to another."""

    reference: Optional[str] = primitive("string")
    _reference: Optional[Element] = shadow()
    type: Optional[str] = primitive("uri")
    _type: Optional[Element] = shadow()
    identifier: Optional[Identifier] = composite("Identifier")
    display: Optional[str] = primitive("string")
    _display: Optional[Element] = shadow()


@registry.model
class Identifier(Element):
    """An identifier intended for computation."""

    use: Optional[str] = primitive("code")
    _use: Optional[Element] = shadow()
    type: Optional[CodeableConcept] = composite("CodeableConcept")
    system: Optional[str] = primitive("uri")
    _system: Optional[Element] = shadow()
    value: Optional[str] = primitive("string")
    _value: Optional[Element] = shadow()
    period: Optional[Period] = composite("Period")
    assigner: Optional[Reference] = composite("Reference")


@registry.model
class HumanName(Element):
    """Name of a human - parts and usage."""

    use: Optional[str] = primitive("code")
    _use: Optional[Element] = shadow()
    text: Optional[str] = primitive("string")
    _text: Optional[Element] = shadow()
    family: Optional[str] = primitive("string")
    _family: Optional[Element] = shadow()
    given: Optional[list[str]] = primitive("string", many=True)
    _given: Optional[list[Optional[Element]]] = shadow()
    prefix: Optional[list[str]] = primitive("string", many=True)
    _prefix: Optional[list[Optional[Element]]] = shadow()
    suffix: Optional[list[str]] = primitive("string", many=True)
    _suffix: Optional[list[Optional[Element]]] = shadow()
    period: Optional[Period] = composite("Period")


@registry.model
class ContactPoint(Element):
    """Details of a technology mediated contact point (phone, fax, email, etc.)."""

    system: Optional[str] = primitive("code")
    _system: Optional[Element] = shadow()
    value: Optional[str] = primitive("string")
    _value: Optional[Element] = shadow()
    use: Optional[str] = primitive("code")
    _use: Optional[Element] = shadow()
    rank: Optional[int] = primitive("positiveInt")
    _rank: Optional[Element] = shadow()
    period: Optional[Period] = composite("Period")


@registry.model
class Address(Element):
    """An address expressed using postal conventions."""

    use: Optional[str] = primitive("code")
    _use: Optional[Element] = shadow()
    type: Optional[str] = primitive("code")
    _type: Optional[Element] = shadow()
    text: Optional[str] = primitive("string")
    _text: Optional[Element] = shadow()
    line: Optional[list[str]] = primitive("string", many=True)
    _line: Optional[list[Optional[Element]]] = shadow()
    city: Optional[str] = primitive("string")
    _city: Optional[Element] = shadow()
    district: Optional[str] = primitive("string")
    _district: Optional[Element] = shadow()
    state: Optional[str] = primitive("string")
    _state: Optional[Element] = shadow()
    postalCode: Optional[str] = primitive("string")
    _postalCode: Optional[Element] = shadow()
    country: Optional[str] = primitive("string")
    _country: Optional[Element] = shadow()
    period: Optional[Period] = composite("Period")


@registry.model
class Annotation(Element):
    """Text node with attribution."""

    authorReference: Optional[Reference] = composite("Reference", choice="author")
    authorString: Optional[str] = primitive("string", choice="author")
    _authorString: Optional[Element] = shadow()
    time: Optional[str] = primitive("dateTime")
    _time: Optional[Element] = shadow()
    text: Optional[str] = primitive("markdown", required=True)
    _text: Optional[Element] = shadow()


@registry.model
class Attachment(Element):
    """Content in a format defined elsewhere."""

    contentType: Optional[str] = primitive("code")
    _contentType: Optional[Element] = shadow()
    language: Optional[str] = primitive("code")
    _language: Optional[Element] = shadow()
    data: Optional[str] = primitive("base64Binary")
    _data: Optional[Element] = shadow()
    url: Optional[str] = primitive("url")
    _url: Optional[Element] = shadow()
    size: Optional[int] = primitive("unsignedInt")
    _size: Optional[Element] = shadow()
    hash: Optional[str] = primitive("base64Binary")
    _hash: Optional[Element] = shadow()
    title: Optional[str] = primitive("string")
    _title: Optional[Element] = shadow()
    creation: Optional[str] = primitive("dateTime")
    _creation: Optional[Element] = shadow()


@registry.model
class SampledData(Element):
    """A series of measurements taken by a device."""

    origin: Optional[Quantity] = composite("Quantity", required=True)
    period: Optional[float] = primitive("decimal", required=True)
    _period: Optional[Element] = shadow()
    factor: Optional[float] = primitive("decimal")
    _factor: Optional[Element] = shadow()
    lowerLimit: Optional[float] = primitive("decimal")
    _lowerLimit: Optional[Element] = shadow()
    upperLimit: Optional[float] = primitive("decimal")
    _upperLimit: Optional[Element] = shadow()
    dimensions: Optional[int] = primitive("positiveInt", required=True)
    _dimensions: Optional[Element] = shadow()
    data: Optional[str] = primitive("string")
    _data: Optional[Element] = shadow()


@registry.model
class Signature(Element):
    """A Signature - XML DigSig, JWS, Graphical image of signature, etc."""

    type: Optional[list[Coding]] = composite("Coding", many=True, required=True)
    when: Optional[str] = primitive("instant", required=True)
    _when: Optional[Element] = shadow()
    who: Optional[Reference] = composite("Reference", required=True)
    onBehalfOf: Optional[Reference] = composite("Reference")
    targetFormat: Optional[str] = primitive("code")
    _targetFormat: Optional[Element] = shadow()
    sigFormat: Optional[str] = primitive("code")
    _sigFormat: Optional[Element] = shadow()
    data: Optional[str] = primitive("base64Binary")
    _data: Optional[Element] = shadow()


@registry.model
class TimingRepeat(Element):
    """When the event is to occur."""

    boundsDuration: Optional[Duration] = composite("Duration", choice="bounds")
    boundsRange: Optional[Range] = composite("Range", choice="bounds")
    boundsPeriod: Optional[Period] = composite("Period", choice="bounds")
    count: Optional[int] = primitive("positiveInt")
    _count: Optional[Element] = shadow()
    countMax: Optional[int] = primitive("positiveInt")
    _countMax: Optional[Element] = shadow()
    duration: Optional[float] = primitive("decimal")
    _duration: Optional[Element] = shadow()
    durationMax: Optional[float] = primitive("decimal")
    _durationMax: Optional[Element] = shadow()
    durationUnit: Optional[str] = primitive("code")
    _durationUnit: Optional[Element] = shadow()
    frequency: Optional[int] = primitive("positiveInt")
    _frequency: Optional[Element] = shadow()
    frequencyMax: Optional[int] = primitive("positiveInt")
    _frequencyMax: Optional[Element] = shadow()
    period: Optional[float] = primitive("decimal")
    _period: Optional[Element] = shadow()
    periodMax: Optional[float] = primitive("decimal")
    _periodMax: Optional[Element] = shadow()
    periodUnit: Optional[str] = primitive("code")
    _periodUnit: Optional[Element] = shadow()
    dayOfWeek: Optional[list[str]] = primitive("code", many=True)
    _dayOfWeek: Optional[list[Optional[Element]]] = shadow()
    timeOfDay: Optional[list[str]] = primitive("time", many=True)
    _timeOfDay: Optional[list[Optional[Element]]] = shadow()
    when: Optional[list[str]] = primitive("code", many=True)
    _when: Optional[list[Optional[Element]]] = shadow()
    offset: Optional[int] = primitive("unsignedInt")
    _offset: Optional[Element] = shadow()


@registry.model
class Timing(Element):
    """A timing schedule that specifies an event that may occur multiple times."""

    event: Optional[list[str]] = primitive("dateTime", many=True)
    _event: Optional[list[Optional[Element]]] = shadow()
    repeat: Optional[TimingRepeat] = composite("TimingRepeat")
    code: Optional[CodeableConcept] = composite("CodeableConcept")


@registry.model
class Meta(Element):
    """Metadata about a resource."""

    versionId: Optional[str] = primitive("id")
    _versionId: Optional[Element] = shadow()
    lastUpdated: Optional[str] = primitive("instant")
    _lastUpdated: Optional[Element] = shadow()
    source: Optional[str] = primitive("uri")
    _source: Optional[Element] = shadow()
    profile: Optional[list[str]] = primitive("canonical", many=True)
    _profile: Optional[list[Optional[Element]]] = shadow()
    security: Optional[list[Coding]] = composite("Coding", many=True)
    tag: Optional[list[Coding]] = composite("Coding", many=True)


@registry.model
class Narrative(Element):
    """Human-readable summary of the resource."""

    status: Optional[str] = primitive("code", required=True)
    _status: Optional[Element] = shadow()
    # xhtml carries no extensions on the wire
    div: Optional[str] = primitive("xhtml", required=True)
