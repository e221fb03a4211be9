"""
Builders for the R4 resources and backbone elements.
"""

from __future__ import annotations

from fhir_toolkit.builder import ModelBuilder
from fhir_toolkit.models.r4 import backbones, resources


# ── Resources ──────────────────────────────────────────────────────


class PatientBuilder(ModelBuilder):
    model = resources.Patient


class ObservationBuilder(ModelBuilder):
    model = resources.Observation


class ConditionBuilder(ModelBuilder):
    model = resources.Condition


class BundleBuilder(ModelBuilder):
    model = resources.Bundle


# ── Backbone elements ──────────────────────────────────────────────


class ObservationReferenceRangeBuilder(ModelBuilder):
    model = backbones.ObservationReferenceRange


class ObservationComponentBuilder(ModelBuilder):
    model = backbones.ObservationComponent


class PatientContactBuilder(ModelBuilder):
    model = backbones.PatientContact


class PatientCommunicationBuilder(ModelBuilder):
    model = backbones.PatientCommunication


class PatientLinkBuilder(ModelBuilder):
    model = backbones.PatientLink


class ConditionStageBuilder(ModelBuilder):
    model = backbones.ConditionStage


class ConditionEvidenceBuilder(ModelBuilder):
    model = backbones.ConditionEvidence


class BundleLinkBuilder(ModelBuilder):
    model = backbones.BundleLink


class BundleEntryBuilder(ModelBuilder):
    model = backbones.BundleEntry


class BundleEntrySearchBuilder(ModelBuilder):
    model = backbones.BundleEntrySearch


class BundleEntryRequestBuilder(ModelBuilder):
    model = backbones.BundleEntryRequest


class BundleEntryResponseBuilder(ModelBuilder):
    model = backbones.BundleEntryResponse
