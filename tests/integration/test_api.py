"""Integration tests for API endpoints"""

from datetime import date, timedelta
import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["database"] == "ok"
    assert "X-Request-ID" in response.headers


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "corral-42"})
    assert response.headers["X-Request-ID"] == "corral-42"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "herdbook_transactions_total" in response.text


def test_forecast_endpoint(client: TestClient):
    """Test POST /v1/reproduction/forecast with a breeding date"""
    response = client.post("/v1/reproduction/forecast", json={"breeding_date": "2024-01-10"})

    assert response.status_code == 200
    assert response.json() == {
        "predicted_calving_date": "2024-10-26",
        "predicted_heat_date": "2024-01-31",
        "predicted_diagnosis_date": "2024-02-24",
        "suggested_status": "awaiting-diagnosis",
    }


def test_forecast_endpoint_without_dates(client: TestClient):
    response = client.post("/v1/reproduction/forecast", json={})

    assert response.status_code == 200
    data = response.json()
    assert data["suggested_status"] == "empty"
    assert data["predicted_heat_date"] is None


def test_forecast_endpoint_at_end_of_calendar(client: TestClient):
    response = client.post("/v1/reproduction/forecast", json={"breeding_date": "9999-06-01"})

    assert response.status_code == 200
    assert response.json()["predicted_calving_date"] is None
    assert response.json()["suggested_status"] == "awaiting-diagnosis"


def test_cycle_lifecycle(client: TestClient, cow):
    """Start, edit and replace a cycle through the API"""
    first = client.post(
        "/v1/reproduction/cycles",
        json={"animal_id": str(cow.id), "last_calving_date": "2024-01-01"},
    )
    assert first.status_code == 201
    assert first.json()["status"] == "postpartum-anestrus"
    assert first.json()["predicted_heat_date"] == "2024-03-01"

    edited = client.put(
        f"/v1/reproduction/cycles/{first.json()['id']}",
        json={
            "last_calving_date": "2024-01-01",
            "breeding_date": "2024-03-20",
            "breeding_method": "artificial-insemination",
        },
    )
    assert edited.status_code == 200
    assert edited.json()["id"] == first.json()["id"]
    assert edited.json()["status"] == "awaiting-diagnosis"

    second = client.post(
        "/v1/reproduction/cycles",
        json={"animal_id": str(cow.id), "last_heat_date": "2024-05-01"},
    )
    assert second.status_code == 201

    active = client.get(f"/v1/reproduction/cycles?animal_id={cow.id}")
    assert [c["id"] for c in active.json()] == [second.json()["id"]]


def test_cycle_for_male_is_rejected(client: TestClient, bull):
    response = client.post("/v1/reproduction/cycles", json={"animal_id": str(bull.id)})
    assert response.status_code == 422


def test_create_sale_endpoint(client: TestClient, cow, today: date):
    """Test POST /v1/transactions splits the total into 30-day installments"""
    response = client.post(
        "/v1/transactions",
        json={
            "kind": "sale",
            "negotiation_date": "2024-01-01",
            "installment_count": 3,
            "items": [{"unit_price": "1000.00", "animal_ids": [str(cow.id)]}],
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["total_cents"] == 100000
    assert data["animal_ids"] == [str(cow.id)]
    assert [i["amount_cents"] for i in data["installments"]] == [33333, 33333, 33334]
    assert [i["due_date"] for i in data["installments"]] == ["2024-01-31", "2024-03-01", "2024-03-31"]
    # Fixed today is 2024-06-01, so every unpaid installment reads overdue
    assert all(i["status"] == "overdue" for i in data["installments"])

    animal = client.get(f"/v1/animals/{cow.id}").json()
    assert animal["status"] == "sold"
    assert animal["status_date"] == "2024-01-01"


def test_create_transaction_rejects_zero_installments(client: TestClient, cow):
    response = client.post(
        "/v1/transactions",
        json={
            "kind": "sale",
            "negotiation_date": "2024-01-01",
            "installment_count": 0,
            "items": [{"unit_price": "1000.00", "animal_ids": [str(cow.id)]}],
        },
    )

    assert response.status_code == 422
    assert client.get(f"/v1/animals/{cow.id}").json()["status"] == "active"


def test_pay_installments_finalizes_transaction(client: TestClient, cow, today: date):
    created = client.post(
        "/v1/transactions",
        json={
            "kind": "sale",
            "negotiation_date": today.isoformat(),
            "installment_count": 2,
            "items": [{"unit_price": "800", "animal_ids": [str(cow.id)]}],
        },
    ).json()
    assert all(i["status"] == "pending" for i in created["installments"])

    for inst in created["installments"]:
        paid = client.post(f"/v1/installments/{inst['id']}/pay", json={})
        assert paid.status_code == 200
        assert paid.json()["status"] == "paid"
        assert paid.json()["paid_on"] == today.isoformat()

    transaction = client.get(f"/v1/transactions/{created['id']}").json()
    assert transaction["status"] == "finalized"


def test_list_installments_by_kind(client: TestClient, cow, bull, today: date):
    client.post(
        "/v1/transactions",
        json={
            "kind": "sale",
            "negotiation_date": today.isoformat(),
            "installment_count": 2,
            "items": [{"unit_price": "500", "animal_ids": [str(cow.id)]}],
        },
    )
    client.post(
        "/v1/transactions",
        json={
            "kind": "purchase",
            "negotiation_date": today.isoformat(),
            "installment_count": 1,
            "items": [{"unit_price": "9000", "animal_ids": [str(bull.id)]}],
        },
    )

    receivable = client.get("/v1/installments?kind=sale").json()["installments"]
    payable = client.get("/v1/installments?kind=purchase").json()["installments"]

    assert len(receivable) == 2
    assert len(payable) == 1
    assert payable[0]["amount_cents"] == 900000
    assert all(i["transaction_id"] != payable[0]["transaction_id"] for i in receivable)


def test_get_transaction_not_found(client: TestClient):
    fake_uuid = "00000000-0000-0000-0000-000000000000"
    response = client.get(f"/v1/transactions/{fake_uuid}")
    assert response.status_code == 404


def test_vaccination_flow(client: TestClient, cow, two_dose_vaccine, today: date):
    """Register a two-dose vaccine today, then apply the chained dose"""
    response = client.post(
        "/v1/vaccinations",
        json={
            "vaccine_type_id": str(two_dose_vaccine.id),
            "animal_ids": [str(cow.id)],
            "application_date": today.isoformat(),
        },
    )

    assert response.status_code == 201
    first, second = response.json()["records"]
    assert first["status"] == "applied"
    assert second["status"] == "pending"
    assert second["dose_number"] == 2
    assert second["scheduled_date"] == (today + timedelta(days=21)).isoformat()

    applied = client.post(f"/v1/vaccinations/{second['id']}/apply", json={})
    assert applied.status_code == 200
    assert applied.json()["applied"]["status"] == "applied"
    assert applied.json()["next_dose"] is None


def test_vaccination_agenda_flags_overdue(client: TestClient, cow, two_dose_vaccine, today: date):
    """A dose scheduled in the past but never applied reads overdue"""
    client.post(
        "/v1/vaccinations",
        json={
            "vaccine_type_id": str(two_dose_vaccine.id),
            "animal_ids": [str(cow.id)],
            "application_date": (today - timedelta(days=30)).isoformat(),
        },
    )

    records = client.get(f"/v1/vaccinations?animal_id={cow.id}").json()["records"]

    assert [r["status"] for r in records] == ["applied", "overdue"]


def test_future_vaccination_is_pending(client: TestClient, cow, single_dose_vaccine, today: date):
    response = client.post(
        "/v1/vaccinations",
        json={
            "vaccine_type_id": str(single_dose_vaccine.id),
            "animal_ids": [str(cow.id)],
            "application_date": (today + timedelta(days=1)).isoformat(),
        },
    )

    (record,) = response.json()["records"]
    assert record["status"] == "pending"
    assert record["applied_date"] is None


def test_female_only_vaccine_rejects_bull(client: TestClient, bull, brucellosis_vaccine, today: date):
    response = client.post(
        "/v1/vaccinations",
        json={
            "vaccine_type_id": str(brucellosis_vaccine.id),
            "animal_ids": [str(bull.id)],
            "application_date": today.isoformat(),
        },
    )
    assert response.status_code == 422


def test_register_animal_and_weight(client: TestClient):
    created = client.post("/v1/animals", json={"sex": "F", "tag_number": "BR-777"})
    assert created.status_code == 201
    animal_id = created.json()["id"]

    weight = client.post(f"/v1/animals/{animal_id}/weights", json={"weight_kg": 388.5, "weighed_on": "2024-05-30"})
    assert weight.status_code == 201

    animal = client.get(f"/v1/animals/{animal_id}").json()
    assert animal["current_weight_kg"] == 388.5
    assert animal["origin"] == "born"


def test_register_vaccine_type(client: TestClient):
    response = client.post(
        "/v1/vaccine-types",
        json={"name": "Leptospirosis", "doses_per_year": 2, "days_between_doses": 30, "female_only": False},
    )
    assert response.status_code == 201
    assert response.json()["doses_per_year"] == 2


def test_edit_unknown_cycle_returns_404(client: TestClient):
    response = client.put(
        "/v1/reproduction/cycles/00000000-0000-0000-0000-000000000000",
        json={"last_heat_date": "2024-05-01"},
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "Cycle 00000000-0000-0000-0000-000000000000 not found"
