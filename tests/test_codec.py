"""Tests for the ordered wire-JSON codec.

Covers key ordering, ``_x`` shadow pairing, structural error reporting,
strict mode, polymorphic resource slots and version-specific loading.
"""

import json
import pytest

from fhir_toolkit import FhirStructureError
from fhir_toolkit.codec import (
    dumps,
    from_json,
    loads,
    primitive_extension,
    primitive_items,
    to_json,
)
from fhir_toolkit.models import r5
from fhir_toolkit.models.r4 import (
    Bundle,
    CodeableConcept,
    Element,
    Extension,
    HumanName,
    Narrative,
    Observation,
    Patient,
    Quantity,
)


# ── Test helpers ──────────────────────────────────────────────────


def _weight_code():
    return {
        "coding": [
            {"system": "http://loinc.org", "code": "29463-7", "display": "Body Weight"},
        ],
    }


def _observation(**overrides):
    """Minimal Observation wire dict."""
    data = {
        "resourceType": "Observation",
        "id": "obs-1",
        "status": "final",
        "code": _weight_code(),
    }
    data.update(overrides)
    return data


def _patient(**overrides):
    data = {
        "resourceType": "Patient",
        "id": "pat-1",
        "name": [{"family": "Smith", "given": ["John", "Michael"]}],
        "gender": "male",
        "birthDate": "1990-05-15",
    }
    data.update(overrides)
    return data


# ═══════════════════════════════════════════════════════════════════
# Key ordering
# ═══════════════════════════════════════════════════════════════════


class TestOrdering:
    def test_resource_type_first(self):
        obs = Observation(status="final", code={"text": "Weight"}, id="o1")
        assert list(obs.to_json())[0] == "resourceType"

    def test_declared_order_not_assignment_order(self):
        obs = Observation()
        obs.valueQuantity = Quantity(value=70.5, unit="kg")
        obs.code = CodeableConcept(text="Weight")
        obs.status = "final"
        obs.id = "o1"
        assert list(obs.to_json()) == [
            "resourceType", "id", "status", "code", "valueQuantity",
        ]

    def test_scrambled_input_is_normalized(self):
        data = {
            "valueQuantity": {"unit": "kg", "value": 70.5},
            "code": {"text": "Weight"},
            "status": "final",
            "id": "o1",
            "resourceType": "Observation",
        }
        out = from_json(data).to_json()
        assert list(out) == ["resourceType", "id", "status", "code", "valueQuantity"]
        assert list(out["valueQuantity"]) == ["value", "unit"]

    def test_envelope_tiers_precede_own_fields(self):
        patient = Patient.from_json({
            "resourceType": "Patient",
            "identifier": [{"value": "123"}],
            "extension": [{"url": "http://example.org/ext", "valueBoolean": True}],
            "text": {"status": "generated", "div": "<div>Smith</div>"},
            "meta": {"versionId": "2"},
            "id": "p1",
            "language": "en",
        })
        assert list(patient.to_json()) == [
            "resourceType", "id", "meta", "language", "text", "extension", "identifier",
        ]

    def test_element_fields_precede_datatype_fields(self):
        name = HumanName(family="Smith", id="n1", extension=[{"url": "http://x"}])
        assert list(to_json(name)) == ["id", "extension", "family"]

    def test_datatypes_have_no_resource_type(self):
        assert "resourceType" not in to_json(Quantity(value=1))

    def test_none_fields_omitted(self):
        assert Patient().to_json() == {"resourceType": "Patient"}

    def test_shadow_follows_its_primitive(self):
        data = _observation(_status={"id": "s1"})
        keys = list(from_json(data).to_json())
        assert keys.index("_status") == keys.index("status") + 1


# ═══════════════════════════════════════════════════════════════════
# Primitive extensions (_x)
# ═══════════════════════════════════════════════════════════════════


class TestPrimitiveExtensions:
    def test_status_shadow_round_trip(self):
        data = _observation(_status={
            "extension": [
                {"url": "http://example.org/status-reason", "valueString": "verified"},
            ],
        })
        obs = from_json(data)
        assert isinstance(obs._status, Element)
        assert isinstance(obs._status.extension[0], Extension)
        assert obs._status.extension[0].valueString == "verified"
        assert obs.to_json() == data

    def test_shadow_without_value(self):
        # An extension may stand in for a missing value.
        data = {"resourceType": "Patient", "_birthDate": {"id": "bd"}}
        patient = from_json(data)
        assert patient.birthDate is None
        assert patient._birthDate.id == "bd"
        assert patient.to_json() == data

    def test_array_shadow_with_holes(self):
        name = HumanName.from_json({
            "given": ["a", "b", "c"],
            "_given": [None, {"id": "x"}],
        })
        pairs = list(primitive_items(name, "given"))
        assert [value for value, _ in pairs] == ["a", "b", "c"]
        assert pairs[0][1] is None
        assert pairs[1][1].id == "x"
        assert pairs[2][1] is None

    def test_array_shadow_holes_serialized_as_null(self):
        data = {"given": ["a", "b"], "_given": [None, {"id": "x"}]}
        assert HumanName.from_json(data).to_json() == data

    def test_shadow_longer_than_values(self):
        name = HumanName.from_json({"given": ["a"], "_given": [None, {"id": "x"}]})
        pairs = list(primitive_items(name, "given"))
        assert len(pairs) == 2
        assert pairs[1][0] is None

    def test_shadow_absent(self):
        name = HumanName(given=["a", "b"])
        assert list(primitive_items(name, "given")) == [("a", None), ("b", None)]

    def test_empty_shadow_not_written(self):
        obs = Observation(status="final", _status=Element())
        assert obs.to_json() == {"resourceType": "Observation", "status": "final"}

    def test_shadow_array_without_content_not_written(self):
        name = HumanName(given=["a", "b"], _given=[None, Element()])
        assert name.to_json() == {"given": ["a", "b"]}

    def test_empty_shadow_in_array_becomes_null(self):
        name = HumanName(given=["a", "b"], _given=[Element(), Element(id="x")])
        assert name.to_json() == {"given": ["a", "b"], "_given": [None, {"id": "x"}]}

    def test_empty_array_not_written(self):
        patient = Patient(id="p1", name=[], identifier=[])
        assert patient.to_json() == {"resourceType": "Patient", "id": "p1"}

    def test_primitive_items_rejects_non_array(self):
        with pytest.raises(KeyError):
            list(primitive_items(HumanName(), "family"))

    def test_primitive_extension_single(self):
        obs = from_json(_observation(_status={"id": "s1"}))
        assert primitive_extension(obs, "status").id == "s1"
        assert primitive_extension(obs, "issued") is None

    def test_primitive_extension_indexed(self):
        name = HumanName.from_json({"given": ["a", "b"], "_given": [None, {"id": "x"}]})
        assert primitive_extension(name, "given", 1).id == "x"
        assert primitive_extension(name, "given", 0) is None
        assert primitive_extension(name, "given", 5) is None

    def test_primitive_extension_unknown_field(self):
        with pytest.raises(KeyError):
            primitive_extension(HumanName(), "period")

    def test_null_hole_outside_shadow_rejected(self):
        with pytest.raises(FhirStructureError) as exc:
            from_json(_patient(name=[None]))
        assert exc.value.field == "name"
        assert exc.value.path == "name[0]"


# ═══════════════════════════════════════════════════════════════════
# Structural errors
# ═══════════════════════════════════════════════════════════════════


class TestStructuralErrors:
    def test_single_object_where_array_declared(self):
        with pytest.raises(FhirStructureError) as exc:
            from_json(_patient(name={"family": "Smith"}))
        assert exc.value.field == "name"
        assert "array" in str(exc.value)

    def test_array_where_single_declared(self):
        with pytest.raises(FhirStructureError) as exc:
            from_json(_patient(gender=["male"]))
        assert exc.value.field == "gender"

    def test_object_where_primitive_declared(self):
        with pytest.raises(FhirStructureError) as exc:
            from_json(_patient(active={"value": True}))
        assert exc.value.field == "active"

    def test_primitive_where_object_declared(self):
        with pytest.raises(FhirStructureError) as exc:
            from_json(_observation(code="29463-7"))
        assert exc.value.field == "code"

    def test_nested_path_reported(self):
        with pytest.raises(FhirStructureError) as exc:
            from_json(_patient(name=[{"family": "Smith"}, {"given": "John"}]))
        assert exc.value.field == "given"
        assert exc.value.path == "name[1].given"

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            from_json(_patient(gender=["male"]))

    def test_missing_resource_type(self):
        with pytest.raises(FhirStructureError, match="must contain a 'resourceType'") as exc:
            from_json({"id": "x"})
        assert exc.value.field == "resourceType"

    def test_unknown_resource_type(self):
        with pytest.raises(FhirStructureError, match="Unknown resourceType 'Spaceship'"):
            from_json({"resourceType": "Spaceship"})

    def test_resource_type_mismatch(self):
        with pytest.raises(FhirStructureError, match="Expected resourceType 'Patient'"):
            Patient.from_json(_observation())

    def test_resource_type_optional_with_explicit_class(self):
        patient = Patient.from_json({"gender": "female"})
        assert patient.gender == "female"

    def test_two_choice_members(self):
        with pytest.raises(FhirStructureError) as exc:
            from_json(_observation(valueBoolean=True, valueString="yes"))
        assert exc.value.field == "value[x]"

    def test_two_choice_members_nested(self):
        data = _observation(component=[
            {"code": {"text": "a"}, "valueInteger": 1, "valueString": "1"},
        ])
        with pytest.raises(FhirStructureError) as exc:
            from_json(data)
        assert exc.value.path == "component[0].value[x]"

    def test_non_object_document(self):
        with pytest.raises(FhirStructureError):
            Patient.from_json(["not", "an", "object"])


# ═══════════════════════════════════════════════════════════════════
# Unknown keys
# ═══════════════════════════════════════════════════════════════════


class TestUnknownKeys:
    def test_dropped_by_default(self):
        patient = from_json(_patient(favouriteColour="blue"))
        assert "favouriteColour" not in patient.to_json()

    def test_dropped_nested(self):
        patient = from_json(_patient(name=[{"family": "Smith", "nickname": "Jo"}]))
        assert patient.name[0].to_json() == {"family": "Smith"}

    def test_strict_raises(self):
        with pytest.raises(FhirStructureError) as exc:
            from_json(_patient(favouriteColour="blue"), strict=True)
        assert exc.value.field == "favouriteColour"

    def test_strict_nested_path(self):
        with pytest.raises(FhirStructureError) as exc:
            Patient.from_json(_patient(name=[{"nickname": "Jo"}]), strict=True)
        assert exc.value.path == "name[0].nickname"

    def test_strict_accepts_declared_shadows(self):
        data = _observation(_status={"id": "s1"})
        assert from_json(data, strict=True).to_json() == data


# ═══════════════════════════════════════════════════════════════════
# Resource slots
# ═══════════════════════════════════════════════════════════════════


class TestResourceSlots:
    def test_contained_resources_resolved(self):
        patient = from_json(_patient(contained=[_observation(id="c1")]))
        assert isinstance(patient.contained[0], Observation)
        assert patient.contained[0].id == "c1"

    def test_contained_requires_resource_type(self):
        with pytest.raises(FhirStructureError) as exc:
            from_json(_patient(contained=[{"id": "c1"}]))
        assert exc.value.path == "contained[0].resourceType"

    def test_bundle_entries(self):
        data = {
            "resourceType": "Bundle",
            "id": "b1",
            "type": "collection",
            "entry": [
                {"fullUrl": "urn:uuid:1", "resource": _patient()},
                {"fullUrl": "urn:uuid:2", "resource": _observation()},
            ],
        }
        bundle = from_json(data)
        assert isinstance(bundle, Bundle)
        assert isinstance(bundle.entry[0].resource, Patient)
        assert isinstance(bundle.entry[1].resource, Observation)
        assert bundle.to_json() == data

    def test_bundle_is_not_a_domain_resource(self):
        assert "text" not in Bundle.__fhir_field_index__
        with pytest.raises(FhirStructureError):
            Bundle.from_json({"resourceType": "Bundle", "text": {}}, strict=True)


# ═══════════════════════════════════════════════════════════════════
# Text and versions
# ═══════════════════════════════════════════════════════════════════


class TestTextAndVersions:
    def test_dumps_loads(self):
        patient = from_json(_patient())
        text = dumps(patient)
        assert json.loads(text) == patient.to_json()
        assert loads(text) == patient

    def test_dumps_preserves_order(self):
        text = dumps(Observation(code={"text": "x"}, status="final", id="o"))
        assert text.index('"id"') < text.index('"status"') < text.index('"code"')

    def test_narrative_div_has_no_shadow(self):
        assert "_div" not in Narrative.__fhir_field_index__

    def test_r5_value_attachment(self):
        data = _observation(valueAttachment={"contentType": "image/png", "url": "http://x/img"})
        obs = from_json(data, fhir_version="R5")
        assert isinstance(obs, r5.Observation)
        assert obs.valueAttachment.contentType == "image/png"
        assert obs.to_json() == data

    def test_r5_extension_holds_r5_datatype(self):
        sampled = {"origin": {"value": 0}, "intervalUnit": "ms", "dimensions": 1, "data": "1 2 3"}
        data = _observation(extension=[
            {"url": "http://example.org/trace", "valueSampledData": sampled},
        ])
        obs = from_json(data, fhir_version="R5")
        assert isinstance(obs.extension[0], Extension)
        assert isinstance(obs.extension[0].valueSampledData, r5.SampledData)
        assert obs.to_json() == data

    def test_r5_datatype_in_inherited_class(self):
        sampled = r5.SampledData(origin={"value": 0}, intervalUnit="ms", dimensions=1)
        ext = Extension(url="http://example.org/trace", valueSampledData=sampled)
        assert ext.valueSampledData is sampled

    def test_r4_class_rejects_unrelated_type(self):
        with pytest.raises(FhirStructureError):
            Extension(url="http://x", valueSampledData=Quantity(value=1))

    def test_r4_drops_r5_only_member(self):
        data = _observation(valueAttachment={"url": "http://x/img"})
        obs = from_json(data)
        assert obs.get_choice("value") is None
        with pytest.raises(FhirStructureError):
            from_json(data, strict=True)

    def test_r4b_reads_r4_models(self):
        patient = from_json(_patient(), fhir_version="R4B")
        assert isinstance(patient, Patient)

    def test_unsupported_version(self):
        with pytest.raises(ValueError, match="Unsupported FHIR version"):
            from_json(_patient(), fhir_version="R6")

    def test_to_json_shares_no_state(self):
        patient = from_json(_patient())
        out = patient.to_json()
        out["name"][0]["given"].append("Extra")
        assert patient.name[0].given == ["John", "Michael"]
