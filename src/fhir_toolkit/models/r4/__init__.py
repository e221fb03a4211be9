"""
FHIR R4 (4.0.1) models.

Importing this package populates the R4 :class:`~fhir_toolkit.registry.ModelRegistry`.
"""

from fhir_toolkit.base import BackboneElement, DomainResource, Element, Resource
from fhir_toolkit.models.r4._registry import registry
from fhir_toolkit.models.r4.datatypes import (
    Address,
    Age,
    Annotation,
    Attachment,
    CodeableConcept,
    Coding,
    ContactPoint,
    Count,
    Distance,
    Duration,
    Extension,
    HumanName,
    Identifier,
    Meta,
    Money,
    Narrative,
    Period,
    Quantity,
    Range,
    Ratio,
    Reference,
    SampledData,
    Signature,
    Timing,
    TimingRepeat,
)
from fhir_toolkit.models.r4.backbones import (
    BundleEntry,
    BundleEntryRequest,
    BundleEntryResponse,
    BundleEntrySearch,
    BundleLink,
    ConditionEvidence,
    ConditionStage,
    ObservationComponent,
    ObservationReferenceRange,
    PatientCommunication,
    PatientContact,
    PatientLink,
)
from fhir_toolkit.models.r4.resources import Bundle, Condition, Observation, Patient
from fhir_toolkit.models.r4.builders import (
    BundleBuilder,
    BundleEntryBuilder,
    BundleEntryRequestBuilder,
    BundleEntryResponseBuilder,
    BundleEntrySearchBuilder,
    BundleLinkBuilder,
    ConditionBuilder,
    ConditionEvidenceBuilder,
    ConditionStageBuilder,
    ObservationBuilder,
    ObservationComponentBuilder,
    ObservationReferenceRangeBuilder,
    PatientBuilder,
    PatientCommunicationBuilder,
    PatientContactBuilder,
    PatientLinkBuilder,
)

__all__ = [
    "registry",
    # Tiers
    "Element", "BackboneElement", "Resource", "DomainResource",
    # Datatypes
    "Address", "Age", "Annotation", "Attachment", "CodeableConcept", "Coding",
    "ContactPoint", "Count", "Distance", "Duration", "Extension", "HumanName",
    "Identifier", "Meta", "Money", "Narrative", "Period", "Quantity", "Range",
    "Ratio", "Reference", "SampledData", "Signature", "Timing", "TimingRepeat",
    # Backbones
    "BundleEntry", "BundleEntryRequest", "BundleEntryResponse",
    "BundleEntrySearch", "BundleLink", "ConditionEvidence", "ConditionStage",
    "ObservationComponent", "ObservationReferenceRange",
    "PatientCommunication", "PatientContact", "PatientLink",
    # Resources
    "Bundle", "Condition", "Observation", "Patient",
    # Builders
    "BundleBuilder", "BundleEntryBuilder", "BundleEntryRequestBuilder",
    "BundleEntryResponseBuilder", "BundleEntrySearchBuilder", "BundleLinkBuilder",
    "ConditionBuilder", "ConditionEvidenceBuilder", "ConditionStageBuilder",
    "ObservationBuilder", "ObservationComponentBuilder",
    "ObservationReferenceRangeBuilder", "PatientBuilder",
    "PatientCommunicationBuilder", "PatientContactBuilder", "PatientLinkBuilder",
]
