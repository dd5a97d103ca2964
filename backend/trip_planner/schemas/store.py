import uuid
from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import ConfigDict, Field, model_validator

from trip_planner.schemas.base import CamelModel, Money
from trip_planner.schemas.expense import LedgerSummary
from trip_planner.schemas.recommendation import BudgetPresentation, TravelRecommendation
from trip_planner.schemas.trip import Currency


class TripCreate(CamelModel):
    destination: str = Field(min_length=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_budget: Money = Field(gt=0, max_digits=12, decimal_places=2)
    currency: Currency = Currency.USD
    status: str = "planning"
    recommendations: Optional[TravelRecommendation] = None

    @model_validator(mode="after")
    def check_date_order(self) -> "TripCreate":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must be on or after the start date.")
        return self


class TripOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    destination: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_budget: Optional[Money] = None
    currency: Optional[str] = None
    budget_feasibility: Optional[str] = None
    ai_recommendations: Optional[Dict[str, Any]] = None
    status: Optional[str] = None
    created_at: datetime


class TripBudget(CamelModel):
    """Ledger summary for a saved trip, reconciled against the suggestion it was planned with."""
    trip_id: uuid.UUID
    currency: Optional[str] = None
    ledger: LedgerSummary
    presentation: Optional[BudgetPresentation] = None


class FavoriteCreate(CamelModel):
    trip_id: Optional[uuid.UUID] = None
    workspace_id: Optional[uuid.UUID] = None

    @model_validator(mode="after")
    def exactly_one_target(self) -> "FavoriteCreate":
        if (self.trip_id is None) == (self.workspace_id is None):
            raise ValueError("A favorite points at exactly one trip or one workspace.")
        return self


class Favorite(FavoriteCreate):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime
