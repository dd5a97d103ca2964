# tests/test_ai_endpoints.py

import json

from google.api_core.exceptions import ResourceExhausted
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from main import app
from trip_planner.agent import llm as llm_module
from trip_planner.api.deps import get_menu_model, get_recommendation_model
from trip_planner.core.config import settings

TRIP = {
    "travelerName": "Aiko",
    "destination": "Kyoto",
    "startDate": "2024-03-01",
    "endDate": "2024-03-05",
    "budget": 1000,
    "currency": "USD",
    "travelers": 2,
    "interests": ["culture", "food"],
}


class ExhaustedModel:
    """Stands in for a chat model whose calls are refused by the API."""

    def __init__(self, message):
        self.message = message

    def invoke(self, messages):
        raise ResourceExhausted(self.message)


def test_recommendations_with_budget_presentation(client):
    response = client.post("/api/v1/travel-recommendations", json=TRIP)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["tripDetails"]["tripDays"] == 5
    assert body["tripDetails"]["destination"] == "Kyoto"
    assert body["data"]["budgetAnalysis"]["feasibility"] == "too_low"
    assert body["data"]["suggestedBudgetBreakdown"]["food"] == 250.5
    assert body["data"]["recommendations"]["nearbyPlaces"][0]["name"] == "Nara"

    presentation = body["budgetPresentation"]
    assert presentation["tier"] == "too_low_warning"
    assert presentation["label"] == "Budget Too Low"
    assert presentation["delta"] == -200
    assert presentation["hasSurplus"] is False
    assert presentation["suggestions"] == ["Raise the budget to 1200 USD", "Stay in a guesthouse"]


def test_invalid_trip_never_reaches_the_model(client):
    calls = []

    class RecordingModel:
        def invoke(self, messages):
            calls.append(messages)

    app.dependency_overrides[get_recommendation_model] = RecordingModel
    response = client.post("/api/v1/travel-recommendations", json={**TRIP, "endDate": "2024-02-01"})

    assert response.status_code == 422
    assert calls == []


def test_malformed_reply_is_a_single_error(client):
    app.dependency_overrides[get_recommendation_model] = lambda: FakeListChatModel(
        responses=[json.dumps({"budgetAnalysis": {"feasibility": "maybe"}})]
    )
    response = client.post("/api/v1/travel-recommendations", json=TRIP)

    assert response.status_code == 502
    assert response.json() == {"success": False, "error": "Failed to parse travel recommendations"}


def test_reply_without_json(client):
    app.dependency_overrides[get_recommendation_model] = lambda: FakeListChatModel(
        responses=["Sorry, I cannot help with that."]
    )
    response = client.post("/api/v1/travel-recommendations", json=TRIP)

    assert response.status_code == 502
    assert response.json()["success"] is False


def test_rate_limit_and_quota_map_to_distinct_statuses(client):
    app.dependency_overrides[get_recommendation_model] = lambda: ExhaustedModel("Too many requests")
    response = client.post("/api/v1/travel-recommendations", json=TRIP)
    assert response.status_code == 429
    assert response.json()["error"] == "Rate limit exceeded. Please try again in a moment."

    app.dependency_overrides[get_recommendation_model] = lambda: ExhaustedModel("Quota exceeded for project")
    response = client.post("/api/v1/travel-recommendations", json=TRIP)
    assert response.status_code == 402
    assert response.json()["error"] == "AI service quota exceeded. Please try again later."


def test_missing_api_key_is_reported(client, monkeypatch):
    monkeypatch.setattr(settings, "GOOGLE_API_KEY", "")
    llm_module.get_recommendation_llm.cache_clear()
    app.dependency_overrides.pop(get_recommendation_model)

    response = client.post("/api/v1/travel-recommendations", json=TRIP)

    assert response.status_code == 502
    assert response.json() == {"success": False, "error": "GOOGLE_API_KEY is not configured"}


def test_menu_translation(client):
    response = client.post(
        "/api/v1/menu-translations",
        json={"image": "aGVsbG8=", "dietaryPreferences": ["vegetarian", "nutAllergy"]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["menuLanguage"] == "Japanese"
    dish = body["dishes"][0]
    assert dish["translatedName"] == "Grilled chicken skewers"
    assert dish["price"] == "480"
    assert dish["isCompatible"] is False


def test_menu_translation_requires_an_image(client):
    response = client.post("/api/v1/menu-translations", json={"image": "", "dietaryPreferences": []})
    assert response.status_code == 422


def test_menu_translation_rejects_unknown_preferences(client):
    response = client.post("/api/v1/menu-translations", json={"image": "aGVsbG8=", "dietaryPreferences": ["keto"]})
    assert response.status_code == 422


def test_menu_translation_failure_keeps_an_empty_dish_list(client):
    app.dependency_overrides[get_menu_model] = lambda: ExhaustedModel("Too many requests")
    response = client.post("/api/v1/menu-translations", json={"image": "aGVsbG8="})

    assert response.status_code == 429
    assert response.json() == {"error": "Rate limit exceeded. Please try again in a moment.", "dishes": []}


def test_health(client):
    assert client.get("/").json()["status"] == "ok"
