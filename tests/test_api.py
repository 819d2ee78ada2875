import pytest
from fastapi.testclient import TestClient

import main
from tests.utils import client_row, task_row, worker_row


@pytest.fixture
def client(monkeypatch) -> TestClient:
    monkeypatch.setattr(main, "API_KEY", None)
    return TestClient(main.app)


def _payload(**extra):
    payload = {
        "clients": [client_row("C1", priority=4, requested="T1")],
        "workers": [worker_row("W1"), worker_row("W2")],
        "tasks": [task_row("T1")],
    }
    payload.update(extra)
    return payload


def test_health_check_is_public(monkeypatch) -> None:
    monkeypatch.setattr(main, "API_KEY", "secret")
    response = TestClient(main.app).get("/api/health/check")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_api_key_required_when_configured(monkeypatch) -> None:
    monkeypatch.setattr(main, "API_KEY", "secret")
    api = TestClient(main.app)

    assert api.post("/api/validation/run", json=_payload()).status_code == 401
    ok = api.post("/api/validation/run", json=_payload(), headers={"x-api-key": "secret"})
    assert ok.status_code == 200


def test_oversized_body_is_rejected(monkeypatch, client) -> None:
    monkeypatch.setattr(main, "MAX_BODY_BYTES", 10)
    assert client.post("/api/validation/run", json=_payload()).status_code == 413


def test_validation_run(client) -> None:
    payload = _payload()
    payload["clients"][0]["PriorityLevel"] = 9

    response = client.post("/api/validation/run", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["totalErrors"] == 1
    assert data["failedValidations"] == ["out_of_range_values"]
    assert data["errors"][0]["column"] == "PriorityLevel"


def test_validation_run_with_rules(client) -> None:
    rules = [
        {"id": "R1", "naturalLanguage": "Run T1 and T2 together", "ruleType": "co_run", "tasks": ["T1", "T2"]},
        {"id": "R2", "description": "Run T2 and T1 together", "ruleType": "co_run", "tasks": ["T2", "T1"]},
    ]
    data = client.post("/api/validation/run", json=_payload(rules=rules)).json()
    assert "circular_corun_groups" in data["failedValidations"]


def test_unknown_rule_type_is_a_request_error(client) -> None:
    rules = [{"id": "R1", "naturalLanguage": "x", "ruleType": "teleport"}]
    assert client.post("/api/validation/run", json=_payload(rules=rules)).status_code == 422


def test_allocation_run(client) -> None:
    rules = [{"id": "R1", "name": "Seniors first", "naturalLanguage": "Prefer senior staff"}]
    priorities = [{"id": "P1", "name": "Speed", "weight": 0.4}]

    response = client.post("/api/allocation/run", json=_payload(rules=rules, priorities=priorities))

    assert response.status_code == 200
    data = response.json()
    assert data["assignedTasks"] == 1
    assert data["allocations"][0]["assignedWorkerIds"] == ["W1"]
    assert data["executedRules"] == ["Seniors first"]


def test_allocation_gate_blocks_on_errors(client) -> None:
    payload = _payload(gateOnErrors=True)
    payload["workers"].append(worker_row("W1"))

    response = client.post("/api/allocation/run", json=payload)

    assert response.status_code == 409
    assert "duplicate_ids" in response.json()["detail"]


def test_allocation_without_gate_ignores_findings(client) -> None:
    payload = _payload()
    payload["workers"].append(worker_row("W1"))
    assert client.post("/api/allocation/run", json=payload).status_code == 200


def test_rules_interpret(client) -> None:
    rules = [
        {"id": "R1", "naturalLanguage": "Balance the workload"},
        {"id": "R2", "naturalLanguage": "Something else", "isActive": False},
    ]

    response = client.post("/api/rules/interpret", json={"rules": rules})

    assert response.status_code == 200
    assert [(r["id"], r["effect"], r["isActive"]) for r in response.json()] == [
        ("R1", "utilization_balance", True),
        ("R2", "inert", False),
    ]


def test_openapi_documents_the_api_key_header(client) -> None:
    schema = client.get("/openapi.json").json()

    assert schema["components"]["securitySchemes"]["ApiKeyAuth"]["name"] == "x-api-key"
    assert schema["paths"]["/api/validation/run"]["post"]["security"] == [{"ApiKeyAuth": []}]
    assert schema["paths"]["/api/health/check"]["get"]["security"] == []
