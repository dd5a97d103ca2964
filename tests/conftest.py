# tests/conftest.py

import copy
import json

import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from trip_planner.api.deps import get_db, get_menu_model, get_recommendation_model
from trip_planner.db.session import init_db

USER = {"X-User-Id": "traveler-1"}
OTHER_USER = {"X-User-Id": "traveler-2"}

RECOMMENDATION = {
    "budgetAnalysis": {
        "feasibility": "too_low",
        "dailyBudgetPerPerson": 100,
        "estimatedTotalCost": 1200,
        "message": "Kyoto in cherry blossom season needs a little more.",
        "adjustmentSuggestions": ["Raise the budget to 1200 USD", "Stay in a guesthouse"],
    },
    "recommendations": {
        "attractions": [{"name": "Fushimi Inari", "description": "Torii gates", "estimatedCost": 0}],
        "restaurants": [{"name": "Nishiki Market", "cuisine": "Street food", "priceRange": "budget"}],
        "activities": [],
        "accommodations": [{"type": "Ryokan", "priceRange": "$$", "amenities": ["onsen"]}],
        "localExperiences": [],
        "nearbyPlaces": [{"name": "Nara", "distanceFromDestination": "45 km"}],
    },
    "suggestedBudgetBreakdown": {
        "accommodation": 400,
        "food": 250.5,
        "activities": 150,
        "transport": 100,
        "miscellaneous": 100,
    },
    "travelTips": ["Buy an ICOCA card"],
}


@pytest.fixture
def recommendation_reply():
    return "```json\n" + json.dumps(RECOMMENDATION) + "\n```"


@pytest.fixture
def recommendation():
    return copy.deepcopy(RECOMMENDATION)


@pytest.fixture
def session_factory():
    # One shared in-memory connection so every request sees the same tables.
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    init_db(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory, recommendation_reply):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_recommendation_model] = lambda: FakeListChatModel(responses=[recommendation_reply])
    app.dependency_overrides[get_menu_model] = lambda: FakeListChatModel(responses=[json.dumps({
        "menuLanguage": "Japanese",
        "restaurantType": "Izakaya",
        "dishes": [
            {
                "originalName": "焼き鳥",
                "translatedName": "Grilled chicken skewers",
                "description": "Chicken grilled over charcoal",
                "dietaryTags": ["non-vegetarian"],
                "spiceLevel": "mild",
                "price": 480,
                "isCompatible": False,
                "warnings": ["Contains meat"],
            }
        ],
    })])
    # Not used as a context manager: the lifespan would create the default database file.
    yield TestClient(app)
    app.dependency_overrides.clear()
