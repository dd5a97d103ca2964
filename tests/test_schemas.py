# tests/test_schemas.py

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from trip_planner.agent.nodes import extract_json
from trip_planner.core.errors import OracleMalformedResponse
from trip_planner.schemas.menu import Dish, MenuTranslationRequest
from trip_planner.schemas.store import FavoriteCreate
from trip_planner.schemas.trip import TripDetails, TripRequest
from trip_planner.schemas.workspace import WorkspaceSuggestionCreate


def trip_payload(**overrides):
    payload = {
        "travelerName": "Aiko",
        "fromLocation": "Delhi",
        "destination": "Kyoto",
        "startDate": "2024-03-01",
        "endDate": "2024-03-05",
        "budget": 1000,
        "currency": "USD",
        "travelers": 2,
        "interests": ["culture", "food"],
    }
    payload.update(overrides)
    return payload


def test_trip_days_are_inclusive():
    request = TripRequest.model_validate(trip_payload())
    assert request.trip_days == 5
    assert TripDetails.from_request(request).trip_days == 5


def test_single_day_trip():
    request = TripRequest.model_validate(trip_payload(endDate="2024-03-01"))
    assert request.trip_days == 1


@pytest.mark.parametrize("overrides", [
    {"destination": "   "},
    {"budget": 0},
    {"budget": -10},
    {"travelers": 0},
    {"interests": []},
    {"interests": ["gambling"]},
    {"currency": "BTC"},
    {"endDate": "2024-02-28"},
])
def test_invalid_trips_are_rejected(overrides):
    with pytest.raises(ValidationError):
        TripRequest.model_validate(trip_payload(**overrides))


def test_blank_optional_fields_become_none_and_interests_dedupe():
    request = TripRequest.model_validate(
        trip_payload(travelerName="  ", fromLocation="", interests=["food", "culture", "food"])
    )
    assert request.traveler_name is None
    assert request.from_location is None
    assert [interest.value for interest in request.interests] == ["food", "culture"]


def test_budget_stays_decimal_and_serializes_as_number():
    request = TripRequest.model_validate(trip_payload(budget=1234.56))
    assert request.budget == Decimal("1234.56")
    assert request.model_dump(mode="json", by_alias=True)["budget"] == 1234.56
    assert request.start_date == date(2024, 3, 1)


def test_extract_json_strips_fences_and_keeps_decimals():
    parsed = extract_json('```json\n{"cost": 12.10}\n```')
    assert parsed == {"cost": Decimal("12.10")}


def test_extract_json_finds_object_inside_prose():
    assert extract_json('Here you go: {"ok": true} Enjoy!') == {"ok": True}


@pytest.mark.parametrize("reply", ["no json here", "[1, 2, 3]", "{broken"])
def test_extract_json_rejects_non_objects(reply):
    with pytest.raises(OracleMalformedResponse):
        extract_json(reply)


def test_menu_request_requires_an_image():
    with pytest.raises(ValidationError, match="No image provided"):
        MenuTranslationRequest(image="  ")


def test_bare_base64_becomes_a_data_url():
    assert MenuTranslationRequest(image="aGVsbG8=").image_url == "data:image/jpeg;base64,aGVsbG8="
    assert MenuTranslationRequest(image="data:image/png;base64,aGVsbG8=").image_url.startswith("data:image/png")


def test_dish_price_is_kept_as_text():
    dish = Dish.model_validate({"originalName": "Pho", "translatedName": "Noodle soup", "price": 45000})
    assert dish.price == "45000"


def test_suggestion_requires_name_city_and_country():
    with pytest.raises(ValidationError, match="Please fill in name, city, and country."):
        WorkspaceSuggestionCreate(name="Dojo", city=" ", country="Indonesia")


def test_favorite_targets_exactly_one_thing():
    with pytest.raises(ValidationError):
        FavoriteCreate()
    with pytest.raises(ValidationError):
        FavoriteCreate(trip_id="6f1c2b9e-7d55-4b43-9d8f-8c5d54b1b0a1", workspace_id="0b0a6b4d-3a6e-4bd1-8a56-2f5e0fd2a4d1")
