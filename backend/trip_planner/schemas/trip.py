from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator, model_validator

from trip_planner.schemas.base import CamelModel, Money


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    INR = "INR"
    JPY = "JPY"


class Interest(str, Enum):
    CULTURE = "culture"
    FOOD = "food"
    ADVENTURE = "adventure"
    NATURE = "nature"
    NIGHTLIFE = "nightlife"
    SHOPPING = "shopping"
    RELAXATION = "relaxation"
    PHOTOGRAPHY = "photography"
    ART = "art"
    LOCAL = "local"


def trip_days(start_date: date, end_date: date) -> int:
    """Inclusive number of calendar days between two dates."""
    return (end_date - start_date).days + 1


class TripRequest(CamelModel):
    """
    The input model for the /travel-recommendations endpoint.
    Frozen: a submitted request is consumed once by the oracle call and never edited.
    """
    model_config = ConfigDict(frozen=True)

    traveler_name: Optional[str] = None
    from_location: Optional[str] = None
    destination: str = Field(min_length=1)
    start_date: date
    end_date: date
    budget: Money = Field(gt=0)
    currency: Currency = Currency.USD
    travelers: int = Field(default=1, ge=1)
    interests: List[Interest] = Field(min_length=1)

    @field_validator("destination")
    @classmethod
    def destination_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Destination is required.")
        return value

    @field_validator("traveler_name", "from_location")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value.strip() if value else value

    @field_validator("interests")
    @classmethod
    def dedupe_interests(cls, value: List[Interest]) -> List[Interest]:
        # Interests behave as a set; keep the order the traveler picked them in.
        return list(dict.fromkeys(value))

    @model_validator(mode="after")
    def check_date_order(self) -> "TripRequest":
        if self.end_date < self.start_date:
            raise ValueError("End date must be on or after the start date.")
        return self

    @property
    def trip_days(self) -> int:
        return trip_days(self.start_date, self.end_date)


class TripDetails(CamelModel):
    """Trip parameters echoed back alongside the recommendations."""
    traveler_name: Optional[str] = None
    from_location: Optional[str] = None
    destination: str
    start_date: date
    end_date: date
    trip_days: int
    travelers: int
    budget: Money
    currency: Currency

    @classmethod
    def from_request(cls, request: TripRequest) -> "TripDetails":
        return cls(
            traveler_name=request.traveler_name,
            from_location=request.from_location,
            destination=request.destination,
            start_date=request.start_date,
            end_date=request.end_date,
            trip_days=request.trip_days,
            travelers=request.travelers,
            budget=Decimal(request.budget),
            currency=request.currency,
        )
