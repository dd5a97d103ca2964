# tests/test_trips_api.py

import uuid

import pytest

USER = {"X-User-Id": "traveler-1"}
OTHER_USER = {"X-User-Id": "traveler-2"}


@pytest.fixture
def trip(client, recommendation):
    response = client.post(
        "/api/v1/trips",
        json={
            "destination": "Kyoto",
            "startDate": "2024-03-01",
            "endDate": "2024-03-05",
            "totalBudget": 1000,
            "currency": "USD",
            "recommendations": recommendation,
        },
        headers=USER,
    )
    assert response.status_code == 201
    return response.json()


def add_expense(client, trip_id, category, amount, **extra):
    response = client.post(
        f"/api/v1/trips/{trip_id}/expenses",
        json={"category": category, "amount": amount, **extra},
        headers=USER,
    )
    assert response.status_code == 201
    return response.json()


def test_saved_trip_keeps_the_verdict(client, trip):
    assert trip["destination"] == "Kyoto"
    assert trip["budgetFeasibility"] == "too_low"
    assert trip["status"] == "planning"
    assert trip["aiRecommendations"]["budgetAnalysis"]["estimatedTotalCost"] == 1200

    listed = client.get("/api/v1/trips", headers=USER).json()
    assert [row["id"] for row in listed] == [trip["id"]]


def test_trips_are_private_to_their_owner(client, trip):
    assert client.get("/api/v1/trips", headers=OTHER_USER).json() == []
    assert client.get(f"/api/v1/trips/{trip['id']}", headers=OTHER_USER).status_code == 404
    assert client.delete(f"/api/v1/trips/{trip['id']}", headers=OTHER_USER).status_code == 404


def test_user_header_is_required(client):
    assert client.get("/api/v1/trips").status_code == 422


def test_trip_dates_must_be_ordered(client):
    response = client.post(
        "/api/v1/trips",
        json={"destination": "Kyoto", "startDate": "2024-03-05", "endDate": "2024-03-01", "totalBudget": 500},
        headers=USER,
    )
    assert response.status_code == 422


def test_delete_trip(client, trip):
    add_expense(client, trip["id"], "food", 10)
    assert client.delete(f"/api/v1/trips/{trip['id']}", headers=USER).status_code == 204
    assert client.get(f"/api/v1/trips/{trip['id']}", headers=USER).status_code == 404


def test_expenses_are_listed_in_insertion_order(client, trip):
    add_expense(client, trip["id"], "food", 50, description="Ramen", expenseDate="2024-03-02")
    add_expense(client, trip["id"], "transport", 20)
    add_expense(client, trip["id"], "food", 30)

    expenses = client.get(f"/api/v1/trips/{trip['id']}/expenses", headers=USER).json()
    assert [(row["category"], row["amount"]) for row in expenses] == [
        ("food", 50), ("transport", 20), ("food", 30),
    ]
    assert expenses[0]["description"] == "Ramen"
    assert expenses[0]["expenseDate"] == "2024-03-02"
    assert expenses[1]["description"] == "Transport"


@pytest.mark.parametrize("body", [
    {"category": "food", "amount": 0},
    {"category": "food", "amount": -3},
    {"category": "food", "amount": 0.001},
    {"category": "food", "amount": 12.345},
    {"category": "souvenirs", "amount": 10},
])
def test_invalid_expenses_are_rejected(client, trip, body):
    response = client.post(f"/api/v1/trips/{trip['id']}/expenses", json=body, headers=USER)
    assert response.status_code == 422
    assert client.get(f"/api/v1/trips/{trip['id']}/expenses", headers=USER).json() == []


def test_removing_an_expense_twice_succeeds(client, trip):
    expense = add_expense(client, trip["id"], "activities", 15)
    url = f"/api/v1/trips/{trip['id']}/expenses/{expense['id']}"

    assert client.delete(url, headers=USER).status_code == 204
    assert client.delete(url, headers=USER).status_code == 204
    assert client.delete(f"/api/v1/trips/{trip['id']}/expenses/{uuid.uuid4()}", headers=USER).status_code == 204
    assert client.get(f"/api/v1/trips/{trip['id']}/expenses", headers=USER).json() == []


def test_budget_summary_against_the_suggestion(client, trip):
    add_expense(client, trip["id"], "food", 50)
    add_expense(client, trip["id"], "transport", 20)
    add_expense(client, trip["id"], "food", 30)

    budget = client.get(f"/api/v1/trips/{trip['id']}/budget", headers=USER).json()
    ledger = budget["ledger"]

    assert ledger["totalBudget"] == 1000
    assert ledger["totalSpent"] == 100
    assert ledger["remaining"] == 900
    assert ledger["percentSpent"] == 10
    assert ledger["status"] == "on_track"
    assert ledger["amountsByCategory"]["food"] == 80
    assert ledger["amountsByCategory"]["accommodation"] == 0
    assert [row["category"] for row in ledger["spendingByCategory"]] == ["food", "transport"]
    assert [row["amount"] for row in ledger["recentExpenses"]] == [30, 20, 50]

    comparison = {row["category"]: row for row in ledger["comparison"]}
    assert len(comparison) == 5
    assert comparison["food"] == {"category": "food", "label": "Food", "suggested": 250.5, "actual": 80}
    assert comparison["miscellaneous"]["label"] == "Misc"

    presentation = budget["presentation"]
    assert presentation["tier"] == "too_low_warning"
    assert presentation["delta"] == -200


def test_budget_of_a_trip_without_recommendations(client):
    trip = client.post(
        "/api/v1/trips", json={"destination": "Hanoi", "totalBudget": 100}, headers=USER
    ).json()
    add_expense(client, trip["id"], "accommodation", 120)

    budget = client.get(f"/api/v1/trips/{trip['id']}/budget", headers=USER).json()
    assert budget["presentation"] is None
    assert budget["ledger"]["status"] == "over_budget"
    assert budget["ledger"]["remaining"] == -20
    assert all(row["suggested"] == 0 for row in budget["ledger"]["comparison"])


def test_cent_amounts_are_kept_exactly(client, trip):
    add_expense(client, trip["id"], "food", 12.34)
    expenses = client.get(f"/api/v1/trips/{trip['id']}/expenses", headers=USER).json()
    assert [row["amount"] for row in expenses] == [12.34]


@pytest.mark.parametrize("total_budget", [0.004, 999.999])
def test_trip_budget_must_be_whole_cents(client, total_budget):
    response = client.post(
        "/api/v1/trips", json={"destination": "Kyoto", "totalBudget": total_budget}, headers=USER
    )
    assert response.status_code == 422
    assert client.get("/api/v1/trips", headers=USER).json() == []
