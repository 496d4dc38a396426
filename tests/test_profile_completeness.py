from __future__ import annotations

import pytest

from core.models.user import Role
from core.profile import ProfileCompletenessEvaluator

ev = ProfileCompletenessEvaluator()

EMPTY_PATIENT = dict(name="A", age=None, gender=None, health_conditions=[], profile_complete=False)
PROVIDER = dict(
    name="Dr. C",
    specialization=None,
    license_number="LIC-1",
    years_of_experience=3,
    bio="hi",
    profile_complete=False,
)


def test_patient_age_and_gender_complete():
    assert ev.evaluate("patient", EMPTY_PATIENT, {"age": 30, "gender": "f"}) is True


def test_patient_conditions_not_required():
    assert ev.evaluate(Role.patient, EMPTY_PATIENT, {"age": 30}) is False


def test_zero_age_does_not_overwrite():
    current = {**EMPTY_PATIENT, "age": 41}
    merged = ev.merge("patient", current, {"age": 0})
    assert merged["age"] == 41
    assert ev.evaluate("patient", EMPTY_PATIENT, {"age": 0}) is False


@pytest.mark.parametrize("falsy", [None, "", 0, []])
def test_falsy_incoming_keeps_current(falsy):
    current = {**EMPTY_PATIENT, "gender": "m", "health_conditions": ["flu"]}
    merged = ev.merge("patient", current, {"gender": falsy, "health_conditions": falsy})
    assert merged["gender"] == "m"
    assert merged["health_conditions"] == ["flu"]


def test_merge_ignores_fields_outside_role():
    merged = ev.merge("patient", EMPTY_PATIENT, {"specialization": "x", "role": "provider"})
    assert "specialization" not in merged
    assert "role" not in merged


def test_provider_needs_specialization_and_license():
    assert ev.evaluate("provider", PROVIDER, {"specialization": "Derm"}) is True
    no_license = {**PROVIDER, "license_number": None}
    assert ev.evaluate("provider", no_license, {"specialization": "Derm"}) is False


def test_provider_cannot_set_license_through_update():
    merged = ev.merge("provider", PROVIDER, {"license_number": "NEW"})
    assert "license_number" not in merged


def test_complete_never_goes_back():
    done = {**EMPTY_PATIENT, "profile_complete": True}
    assert ev.evaluate("patient", done, {}) is True


def test_apply_returns_changes_and_flag():
    out = ev.apply("patient", EMPTY_PATIENT, {"age": 30, "gender": "f", "name": ""})
    assert out == {
        "name": "A",
        "age": 30,
        "gender": "f",
        "health_conditions": [],
        "profile_complete": True,
    }


def test_merge_drops_repeated_conditions():
    merged = ev.merge(Role.patient, EMPTY_PATIENT, {"health_conditions": ["flu", "flu", "asthma"]})
    assert merged["health_conditions"] == ["flu", "asthma"]
