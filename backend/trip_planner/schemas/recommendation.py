from decimal import Decimal
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import ConfigDict, Field

from trip_planner.schemas.base import CamelModel, Money
from trip_planner.schemas.expense import BudgetCategory
from trip_planner.schemas.trip import TripDetails

OptionalMoney = Optional[Money]


class Feasibility(str, Enum):
    FEASIBLE = "feasible"
    TOO_LOW = "too_low"
    TOO_HIGH = "too_high"


class OracleRecord(CamelModel):
    """
    Base for everything decoded from the model's reply.
    Unknown keys are dropped; missing required keys or wrong types reject the whole reply.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")


class BudgetAnalysis(OracleRecord):
    feasibility: Feasibility
    daily_budget_per_person: Money = Field(ge=0)
    estimated_total_cost: Money = Field(ge=0)
    estimated_transport_from_origin: Optional[Money] = None
    message: str
    adjustment_suggestions: List[str] = Field(default_factory=list)


class SuggestedBudgetBreakdown(OracleRecord):
    accommodation: Money = Field(default=Decimal("0"), ge=0)
    food: Money = Field(default=Decimal("0"), ge=0)
    activities: Money = Field(default=Decimal("0"), ge=0)
    transport: Money = Field(default=Decimal("0"), ge=0)
    miscellaneous: Money = Field(default=Decimal("0"), ge=0)
    # Reported by the model when an origin is given; not an expense category.
    flights: Optional[Money] = Field(default=None, ge=0)

    def by_category(self) -> Dict[BudgetCategory, Decimal]:
        return {category: getattr(self, category.value) for category in BudgetCategory}


class Attraction(OracleRecord):
    name: str
    description: str = ""
    estimated_cost: OptionalMoney = None
    duration: Optional[str] = None
    best_time: Optional[str] = None
    image_url: Optional[str] = None


class Restaurant(OracleRecord):
    name: str
    cuisine: Optional[str] = None
    price_range: Optional[Literal["budget", "moderate", "upscale"]] = None
    average_meal_cost: OptionalMoney = None
    specialty: Optional[str] = None


class Activity(OracleRecord):
    name: str
    description: str = ""
    estimated_cost: OptionalMoney = None
    duration: Optional[str] = None
    difficulty: Optional[Literal["easy", "moderate", "challenging"]] = None
    image_url: Optional[str] = None


class Accommodation(OracleRecord):
    type: str
    price_range: Optional[str] = None
    description: str = ""
    amenities: List[str] = Field(default_factory=list)


class LocalExperience(OracleRecord):
    name: str
    description: str = ""
    estimated_cost: OptionalMoney = None
    cultural_note: Optional[str] = None
    image_url: Optional[str] = None


class NearbyPlace(OracleRecord):
    name: str
    distance_from_destination: Optional[str] = None
    description: str = ""
    estimated_day_trip_cost: OptionalMoney = None
    recommended_duration: Optional[str] = None
    transport_from_destination: Optional[str] = None
    image_url: Optional[str] = None


class Recommendations(OracleRecord):
    attractions: List[Attraction] = Field(default_factory=list)
    restaurants: List[Restaurant] = Field(default_factory=list)
    activities: List[Activity] = Field(default_factory=list)
    accommodations: List[Accommodation] = Field(default_factory=list)
    local_experiences: List[LocalExperience] = Field(default_factory=list)
    nearby_places: List[NearbyPlace] = Field(default_factory=list)


class FlightOption(OracleRecord):
    airline: str
    route: str
    estimated_price: OptionalMoney = None
    flight_duration: Optional[str] = None
    flight_type: Optional[Literal["direct", "1-stop", "2-stop"]] = None
    class_recommendation: Optional[Literal["economy", "premium-economy", "business"]] = None
    booking_tip: Optional[str] = None
    budget_friendly: Optional[bool] = None


class AlternativeTransport(OracleRecord):
    mode: str
    route: Optional[str] = None
    estimated_price: OptionalMoney = None
    duration: Optional[str] = None
    notes: Optional[str] = None


class FlightDetails(OracleRecord):
    available: bool = False
    flights: List[FlightOption] = Field(default_factory=list)
    alternative_transport: List[AlternativeTransport] = Field(default_factory=list)
    best_time_to_book: Optional[str] = None
    price_note: Optional[str] = None


class TravelRecommendation(OracleRecord):
    """The full structured reply of the recommendation model."""
    budget_analysis: BudgetAnalysis
    recommendations: Recommendations
    suggested_budget_breakdown: SuggestedBudgetBreakdown
    travel_tips: List[str] = Field(default_factory=list)
    flight_details: Optional[FlightDetails] = None


class PresentationTier(str, Enum):
    APPROVED = "approved"
    TOO_LOW_WARNING = "too_low_warning"
    TOO_HIGH_NOTICE = "too_high_notice"


class BudgetPresentation(CamelModel):
    """What the budget card shows, derived from the verdict and the raw figures."""
    model_config = ConfigDict(frozen=True)

    tier: PresentationTier
    label: str
    feasibility: Feasibility
    total_budget: Money
    estimated_total_cost: Money
    daily_budget_per_person: Money
    delta: Money
    has_surplus: bool
    cost_exceeds_budget: bool
    verdict_disagrees: bool
    message: str
    suggestions: List[str]


class TravelRecommendationResponse(CamelModel):
    success: bool = True
    data: TravelRecommendation
    trip_details: TripDetails
    budget_presentation: BudgetPresentation


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
