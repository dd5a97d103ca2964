from typing import TypedDict, List, Optional

from trip_planner.core.errors import OracleError
from trip_planner.schemas.recommendation import BudgetPresentation, TravelRecommendation
from trip_planner.schemas.trip import TripRequest


class PlannerState(TypedDict, total=False):
    """
    State passed between the nodes of the recommendation pipeline.
    Each node reads what earlier steps produced and returns only the keys it sets.
    """
    request: TripRequest  # Already validated at the HTTP boundary
    prompt: str
    raw_response: Optional[str]
    recommendation: Optional[TravelRecommendation]
    presentation: Optional[BudgetPresentation]
    error: Optional[OracleError]  # Set by the first failing node; later nodes are skipped
    steps: List[str]  # Log of completed steps
