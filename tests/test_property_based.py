"""
Property-based tests for the FHIR object model using Hypothesis.

Each test states one invariant and checks it against generated input:
choice families never hold two values, output key order ignores
assignment order, and serialized documents survive a round trip.
"""

import pytest
from hypothesis import given, settings, HealthCheck
from hypothesis import strategies as st

from fhir_toolkit.choice import choice_members, get_choice, set_choice
from fhir_toolkit.codec import from_json, primitive_items
from fhir_toolkit.models.r4 import HumanName, Observation, ObservationBuilder, Patient

# ═══════════════════════════════════════════════════════════════════
# Custom Hypothesis Strategies
# ═══════════════════════════════════════════════════════════════════

_text = st.text(min_size=1, max_size=12)
_element = st.builds(lambda i: {"id": i}, _text)
_finite = st.floats(allow_nan=False, allow_infinity=False)

# One generator per Observation.value[x] member.
_VALUE_STRATEGIES = {
    "Quantity": st.builds(lambda v, u: {"value": v, "unit": u}, _finite, _text),
    "CodeableConcept": st.builds(lambda t: {"text": t}, _text),
    "String": _text,
    "Boolean": st.booleans(),
    "Integer": st.integers(min_value=-(2**31), max_value=2**31 - 1),
    "Range": st.builds(lambda v: {"low": {"value": v}}, _finite),
    "Ratio": st.builds(lambda v: {"numerator": {"value": v}}, _finite),
    "Time": st.just("10:30:00"),
    "DateTime": st.just("2024-01-15T10:30:00Z"),
    "Period": st.builds(lambda s: {"start": s}, st.just("2024-01-01")),
}

_choice_writes = st.lists(
    st.sampled_from(sorted(_VALUE_STRATEGIES)).flatmap(
        lambda suffix: st.tuples(st.just(suffix), _VALUE_STRATEGIES[suffix])
    ),
    min_size=1,
    max_size=8,
)


@st.composite
def human_names(draw):
    data = {}
    if draw(st.booleans()):
        data["family"] = draw(_text)
    given_names = draw(st.lists(_text, max_size=4))
    if given_names:
        data["given"] = given_names
        shadows = draw(st.lists(st.one_of(st.none(), _element), max_size=6))
        # An all-null _given carries nothing and is not written back.
        if any(s is not None for s in shadows):
            data["_given"] = shadows
    return data


@st.composite
def patients(draw):
    data = {"resourceType": "Patient"}
    if draw(st.booleans()):
        data["id"] = draw(_text)
    if draw(st.booleans()):
        data["active"] = draw(st.booleans())
    if draw(st.booleans()):
        data["gender"] = draw(st.sampled_from(["male", "female", "other", "unknown"]))
        if draw(st.booleans()):
            data["_gender"] = draw(_element)
    names = draw(st.lists(human_names(), max_size=3))
    if names:
        data["name"] = names
    deceased = draw(st.sampled_from([None, "Boolean", "DateTime"]))
    if deceased == "Boolean":
        data["deceasedBoolean"] = draw(st.booleans())
    elif deceased == "DateTime":
        data["deceasedDateTime"] = "2020-02-29"
    return data


# ═══════════════════════════════════════════════════════════════════
# Choice exclusivity
# ═══════════════════════════════════════════════════════════════════


class TestChoiceProperties:
    @given(writes=_choice_writes)
    def test_at_most_one_member(self, writes):
        """After any sequence of writes exactly one member holds a value."""
        obs = Observation()
        for suffix, value in writes:
            set_choice(obs, "value", suffix, value)
            populated = [
                s for s in choice_members(Observation, "value")
                if getattr(obs, f"value{s}") is not None
            ]
            assert populated == [suffix]

    @given(writes=_choice_writes)
    def test_last_write_wins(self, writes):
        obs = Observation()
        for suffix, value in writes:
            set_choice(obs, "value", suffix, value)
        assert get_choice(obs, "value")[0] == writes[-1][0]

    @given(writes=_choice_writes)
    def test_wire_has_single_value_key(self, writes):
        obs = Observation()
        for suffix, value in writes:
            set_choice(obs, "value", suffix, value)
        keys = [k for k in obs.to_json() if k.startswith("value")]
        assert keys == [f"value{writes[-1][0]}"]


# ═══════════════════════════════════════════════════════════════════
# Ordering
# ═══════════════════════════════════════════════════════════════════


_SETTERS = [
    ("set_id", ("obs-1",)),
    ("set_status", ("final",)),
    ("set_code", ({"text": "Weight"},)),
    ("set_issued", ("2024-01-15T10:35:00Z",)),
    ("set_value", ("Integer", 5)),
    ("add_category", ({"text": "vital-signs"},)),
    ("set_subject", ({"reference": "Patient/1"},)),
]


class TestOrderingProperties:
    @given(order=st.permutations(_SETTERS))
    def test_builder_order_irrelevant(self, order):
        builder = ObservationBuilder()
        for name, args in order:
            getattr(builder, name)(*args)
        out = builder.build().to_json()
        assert list(out) == [
            "resourceType", "id", "status", "category", "code", "subject",
            "issued", "valueInteger",
        ]

    @given(data=patients())
    def test_output_follows_declaration(self, data):
        out = from_json(data).to_json()
        declared = ["resourceType"] + [s.name for s in Patient.__fhir_fields__]
        positions = [declared.index(k) for k in out]
        assert positions == sorted(positions)


# ═══════════════════════════════════════════════════════════════════
# Round trip and independence
# ═══════════════════════════════════════════════════════════════════


class TestRoundTripProperties:
    @given(data=patients())
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_wire_round_trip(self, data):
        assert from_json(data).to_json() == data

    @given(data=human_names())
    def test_zip_covers_longer_array(self, data):
        name = HumanName.from_json(data)
        pairs = list(primitive_items(name, "given"))
        assert len(pairs) == max(len(data.get("given", [])), len(data.get("_given", [])))

    @given(data=patients(), extra=_text)
    def test_clone_independent(self, data, extra):
        patient = from_json(data)
        before = patient.to_json()
        copy = patient.clone()
        copy.id = extra
        copy.name = (copy.name or []) + [HumanName(family=extra)]
        assert patient.to_json() == before

    @given(data=patients(), gender=st.sampled_from(["male", "female"]))
    def test_with_changes_does_not_mutate(self, data, gender):
        patient = from_json(data)
        before = patient.to_json()
        updated = patient.with_changes(gender=gender)
        assert patient.to_json() == before
        assert updated.gender == gender
