"""Tests for resource type guards."""

import pytest

from fhir_toolkit.guards import (
    is_bundle,
    is_condition,
    is_observation,
    is_patient,
    is_resource,
    is_resource_type,
    resource_type_of,
)
from fhir_toolkit.models import r5
from fhir_toolkit.models.r4 import Bundle, Coding, Condition, Observation, Patient


class TestGuards:
    def test_entities(self):
        assert is_patient(Patient())
        assert is_observation(Observation())
        assert is_condition(Condition())
        assert is_bundle(Bundle())

    def test_wire_dicts(self):
        assert is_patient({"resourceType": "Patient"})
        assert not is_patient({"resourceType": "Observation"})

    def test_cross_version(self):
        assert is_observation(r5.Observation())

    @pytest.mark.parametrize("obj", [
        Coding(code="x"),
        {"id": "x"},
        {"resourceType": ""},
        {"resourceType": 3},
        "Patient",
        None,
    ])
    def test_not_resources(self, obj):
        assert not is_resource(obj)
        assert resource_type_of(obj) is None

    def test_is_resource_type(self):
        assert is_resource_type({"resourceType": "Condition"}, "Condition")
        assert not is_resource_type(Patient(), "Condition")

    def test_resource_type_of(self):
        assert resource_type_of(Bundle()) == "Bundle"
        assert resource_type_of({"resourceType": "Encounter"}) == "Encounter"
