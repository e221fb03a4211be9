"""
Builders for the R5 Observation types.
"""

from __future__ import annotations

from fhir_toolkit.builder import ModelBuilder
from fhir_toolkit.models.r5 import resources


class ObservationBuilder(ModelBuilder):
    model = resources.Observation


class ObservationComponentBuilder(ModelBuilder):
    model = resources.ObservationComponent


class ObservationReferenceRangeBuilder(ModelBuilder):
    model = resources.ObservationReferenceRange


class ObservationTriggeredByBuilder(ModelBuilder):
    model = resources.ObservationTriggeredBy
