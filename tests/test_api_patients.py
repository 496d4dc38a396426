from __future__ import annotations

from conftest import bearer
from api.v1.deps import get_policy
from core.access import AccessPolicy, default_rules
from main import app


def test_add_illness_twice(client, patient, provider):
    h = bearer(provider)
    body = {"userId": patient["_id"], "illness": "asthma"}

    first = client.post("/api/data/addPatientIllness", json=body, headers=h)
    assert first.status_code == 200
    assert first.json() == {"message": "Illness added successfully", "healthConditions": ["asthma"]}

    second = client.post("/api/data/addPatientIllness", json=body, headers=h)
    assert second.status_code == 409
    assert second.json()["kind"] == "conflict"

    data = client.post("/api/data/getPatientData", json={"userId": patient["_id"]}, headers=h)
    assert data.json()["healthConditions"] == ["asthma"]


def test_illness_needs_both_fields(client, provider):
    r = client.post("/api/data/addPatientIllness", json={"illness": "flu"}, headers=bearer(provider))
    assert r.status_code == 400


def test_patient_data_includes_goals(client, patient, provider):
    client.post("/api/data/goals", json={"title": "Walk", "targetValue": 10},
                headers=bearer(patient))
    r = client.post("/api/data/getPatientData", json={"userId": patient["_id"]},
                    headers=bearer(provider))
    assert r.status_code == 200
    body = r.json()
    assert body["_id"] == patient["_id"]
    assert [g["title"] for g in body["goals"]] == ["Walk"]
    assert "passwordHash" not in body


def test_patient_data_rejects_provider_id(client, provider):
    r = client.post("/api/data/getPatientData", json={"userId": provider["_id"]},
                    headers=bearer(provider))
    assert r.status_code == 404
    assert r.json()["message"] == "Patient not found"


def test_assign_provider(client, patient, provider):
    r = client.post(
        "/api/data/assignProvider",
        json={"patientId": patient["_id"], "providerId": provider["_id"]},
        headers=bearer(provider),
    )
    assert r.status_code == 200
    assert r.json()["patient"] == {
        "_id": patient["_id"],
        "name": "A",
        "assignedProvider": provider["_id"],
        "assignedProviderName": "Dr. C",
    }
    me = client.get("/api/data/profile", headers=bearer(patient)).json()
    assert me["assignedProvider"] == provider["_id"]


def test_assign_unknown_provider(client, patient, other_patient):
    r = client.post(
        "/api/data/assignProvider",
        json={"patientId": patient["_id"], "providerId": other_patient["_id"]},
        headers=bearer(patient),
    )
    assert r.status_code == 404
    assert r.json()["message"] == "Provider not found"


def test_any_signed_in_user_may_manage_by_default(client, patient, other_patient):
    r = client.post(
        "/api/data/addPatientIllness",
        json={"userId": other_patient["_id"], "illness": "flu"},
        headers=bearer(patient),
    )
    assert r.status_code == 200


def test_restricted_policy_blocks_patients(client, patient, provider):
    app.dependency_overrides[get_policy] = lambda: AccessPolicy(default_rules(True))
    r = client.post("/api/data/getPatientData", json={"userId": patient["_id"]},
                    headers=bearer(patient))
    assert r.status_code == 403
    r = client.post("/api/data/getPatientData", json={"userId": patient["_id"]},
                    headers=bearer(provider))
    assert r.status_code == 200


def test_provider_listings(client, patient, provider):
    h = bearer(patient)
    full = client.get("/api/data/providers", headers=h).json()
    assert [p["_id"] for p in full] == [provider["_id"]]
    assert "passwordHash" not in full[0]

    one = client.get(f"/api/data/providers/{provider['_id']}", headers=h)
    assert one.json()["licenseNumber"] == "LIC-42"

    assert client.get(f"/api/data/providers/{patient['_id']}", headers=h).status_code == 404

    directory = client.get("/api/data/getProviders", headers=h).json()
    assert directory == [{"userId": provider["_id"], "name": "Dr. C"}]
