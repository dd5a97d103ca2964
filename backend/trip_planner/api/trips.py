import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from trip_planner.api.deps import get_db, get_user_id
from trip_planner.core.config import logger
from trip_planner.db.models import Trip
from trip_planner.schemas.expense import ExpenseCreate, StoredExpense
from trip_planner.schemas.recommendation import BudgetPresentation, TravelRecommendation
from trip_planner.schemas.store import TripBudget, TripCreate, TripOut
from trip_planner.services import budget_analyzer, store

router = APIRouter(prefix="/trips", tags=["Trips"])


def _get_trip_or_404(db: Session, trip_id: uuid.UUID, user_id: str) -> Trip:
    trip = store.get_trip(db, trip_id, user_id)
    if trip is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")
    return trip


def _stored_recommendation(trip: Trip):
    if not trip.ai_recommendations:
        return None
    try:
        return TravelRecommendation.model_validate(trip.ai_recommendations)
    except ValidationError as e:
        # Rows written before the current schema keep working without a suggestion.
        logger.warning(f"Stored recommendations for trip {trip.id} no longer validate: {e}")
        return None


@router.post("", response_model=TripOut, status_code=status.HTTP_201_CREATED)
def create_trip(payload: TripCreate, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    return store.create_trip(db, user_id, payload)


@router.get("", response_model=List[TripOut])
def list_trips(db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    return store.list_trips(db, user_id)


@router.get("/{trip_id}", response_model=TripOut)
def get_trip(trip_id: uuid.UUID, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    return _get_trip_or_404(db, trip_id, user_id)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_trip(trip_id: uuid.UUID, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    store.delete_trip(db, _get_trip_or_404(db, trip_id, user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{trip_id}/expenses", response_model=List[StoredExpense])
def list_expenses(trip_id: uuid.UUID, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    return store.list_trip_expenses(db, _get_trip_or_404(db, trip_id, user_id))


@router.post("/{trip_id}/expenses", response_model=StoredExpense, status_code=status.HTTP_201_CREATED)
def add_expense(
    trip_id: uuid.UUID,
    payload: ExpenseCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    return store.add_trip_expense(db, _get_trip_or_404(db, trip_id, user_id), payload)


@router.delete("/{trip_id}/expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_expense(
    trip_id: uuid.UUID,
    expense_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    """Idempotent: deleting an expense that is already gone still succeeds."""
    store.remove_trip_expense(db, _get_trip_or_404(db, trip_id, user_id), expense_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{trip_id}/budget", response_model=TripBudget)
def trip_budget(trip_id: uuid.UUID, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    """Spend so far against the trip budget and the suggested per-category breakdown."""
    trip = _get_trip_or_404(db, trip_id, user_id)
    recommendation = _stored_recommendation(trip)
    ledger = store.load_ledger(db, trip)
    total_budget = trip.total_budget or 0

    presentation: Optional[BudgetPresentation] = None
    if recommendation is not None:
        presentation = budget_analyzer.analyze(recommendation.budget_analysis, total_budget)

    return TripBudget(
        trip_id=trip.id,
        currency=trip.currency,
        ledger=ledger.summary(
            total_budget, recommendation.suggested_budget_breakdown if recommendation else None
        ),
        presentation=presentation,
    )
