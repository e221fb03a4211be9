"""
FHIR R5 (5.0.0) models.

Only the types that changed shape are defined here; the registry falls
back to R4 for the rest, so ``from_json(data, fhir_version="R5")`` still
reads Patient, Condition and Bundle.
"""

from fhir_toolkit.models.r5._registry import registry
from fhir_toolkit.models.r5.datatypes import CodeableReference, SampledData
from fhir_toolkit.models.r5.resources import (
    Observation,
    ObservationComponent,
    ObservationReferenceRange,
    ObservationTriggeredBy,
)
from fhir_toolkit.models.r5.builders import (
    ObservationBuilder,
    ObservationComponentBuilder,
    ObservationReferenceRangeBuilder,
    ObservationTriggeredByBuilder,
)

__all__ = [
    "registry",
    "CodeableReference",
    "SampledData",
    "Observation",
    "ObservationComponent",
    "ObservationReferenceRange",
    "ObservationTriggeredBy",
    "ObservationBuilder",
    "ObservationComponentBuilder",
    "ObservationReferenceRangeBuilder",
    "ObservationTriggeredByBuilder",
]
