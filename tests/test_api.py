import pytest


def _bill(**overrides):
    payload = {
        "amount": 1000,
        "minimumLimit": 0,
        "maximumLimit": 400,
        "participants": [
            {"name": "A", "incomeType": "salary", "annualSalary": 30000, "limited": True},
            {"name": "B", "incomeType": "hourly", "hourlyRate": 15.625, "hoursPerWeek": 40},
        ],
    }
    payload.update(overrides)
    return payload


def test_health_check(client):
    response = client.get("/api")

    assert response.status_code == 200
    assert response.get_json() == {"status": "healthy", "message": "Backend is running!"}


def test_defaults(client):
    data = client.get("/api/defaults").get_json()

    assert data["maximumLimit"] == 600
    assert data["minimumLimit"] == 200
    assert [p["name"] for p in data["participants"]] == ["Participant 1", "Participant 2"]


def test_calculate_returns_results_table(client):
    response = client.post("/api/calculate", json=_bill())

    assert response.status_code == 200
    data = response.get_json()
    assert data["totalGross"] == pytest.approx(5000)
    assert data["totalGrossFormatted"] == "$5,000.00"

    a, b = data["results"]
    assert a["name"] == "A"
    assert a["incomeType"] == "salary"
    assert a["percentageOfTotalFormatted"] == "50.00%"
    assert a["amountDue"] == pytest.approx(500)
    assert a["adjustedDue"] == pytest.approx(400)
    assert a["adjustedDueFormatted"] == "$400.00"
    assert b["incomeType"] == "hourly"
    assert b["grossMonthlyIncome"] == pytest.approx(2500)
    assert b["adjustedDue"] == pytest.approx(600)
    assert b["adjustedDueFormatted"] == "$600.00"


def test_validation_errors_are_listed_per_field(client):
    payload = _bill(amount="0")
    payload["participants"][1]["hoursPerWeek"] = 200

    response = client.post("/api/calculate", json=payload)

    assert response.status_code == 400
    data = response.get_json()
    assert data["error"] == "validation_failed"
    assert data["step"] == "settings"
    assert {e["field"] for e in data["errors"]} == {"amount", "participants.1.hoursPerWeek"}


def test_degenerate_input_is_a_single_failure(client):
    payload = _bill(maximumLimit=300)
    for participant in payload["participants"]:
        participant["limited"] = True

    response = client.post("/api/calculate", json=payload)

    assert response.status_code == 422
    data = response.get_json()
    assert data["error"] == "degenerate_input"
    assert "results" not in data


@pytest.mark.parametrize("body", ["not json", "[1, 2]"])
def test_body_must_be_a_json_object(client, body):
    response = client.post("/api/calculate", data=body, content_type="application/json")

    assert response.status_code == 400
    assert response.get_json() == {"error": "Request body must be a JSON object."}


def test_unexpected_errors_return_500(client, monkeypatch):
    def explode(bill, participants):
        raise RuntimeError("boom")

    monkeypatch.setattr("rentshares.app.calculate_shares", explode)

    response = client.post("/api/calculate", json=_bill())

    assert response.status_code == 500
    assert response.get_json() == {"error": "boom"}


def test_cors_headers_for_configured_origin(client):
    response = client.get("/api", headers={"Origin": "http://localhost:5173"})

    assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"



def test_overflowing_income_is_a_degenerate_failure(client):
    payload = _bill()
    payload["participants"][1]["hourlyRate"] = 1e306
    payload["participants"][1]["hoursPerWeek"] = 100

    response = client.post("/api/calculate", json=payload)

    assert response.status_code == 422
    assert response.get_json()["error"] == "degenerate_input"


def test_blank_participant_for_next_slot(client):
    response = client.get("/api/participants/new?index=2")

    assert response.status_code == 200
    assert response.get_json() == {
        "name": "Participant 3",
        "incomeType": "salary",
        "limited": False,
        "annualSalary": 0,
    }


def test_blank_participant_rejects_negative_index(client):
    response = client.get("/api/participants/new?index=-1")

    assert response.status_code == 400
