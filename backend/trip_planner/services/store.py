"""Relational store access for trips, expenses, workspaces, reviews, suggestions and favorites."""
import uuid
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from trip_planner.core.config import logger
from trip_planner.db.models import (
    Trip, TripExpense, UserFavorite, Workspace, WorkspaceReview, WorkspaceSuggestion,
)
from trip_planner.schemas.expense import Expense, ExpenseCreate
from trip_planner.schemas.store import FavoriteCreate, TripCreate
from trip_planner.schemas.workspace import WorkspaceReviewCreate, WorkspaceSuggestionCreate
from trip_planner.services.expense_ledger import ExpenseLedger


# --- Trips ---

def create_trip(db: Session, user_id: str, payload: TripCreate) -> Trip:
    recommendation = payload.recommendations
    trip = Trip(
        user_id=user_id,
        destination=payload.destination,
        start_date=payload.start_date,
        end_date=payload.end_date,
        total_budget=payload.total_budget,
        currency=payload.currency.value,
        budget_feasibility=recommendation.budget_analysis.feasibility.value if recommendation else None,
        ai_recommendations=recommendation.model_dump(mode="json", by_alias=True) if recommendation else None,
        status=payload.status,
    )
    db.add(trip)
    db.commit()
    db.refresh(trip)
    logger.info(f"Saved trip {trip.id} to {trip.destination} for user {user_id}")
    return trip


def list_trips(db: Session, user_id: str) -> List[Trip]:
    stmt = select(Trip).where(Trip.user_id == user_id).order_by(Trip.created_at.desc())
    return list(db.scalars(stmt))


def get_trip(db: Session, trip_id: uuid.UUID, user_id: str) -> Optional[Trip]:
    trip = db.get(Trip, trip_id)
    if trip is None or trip.user_id != user_id:
        return None
    return trip


def delete_trip(db: Session, trip: Trip) -> None:
    db.delete(trip)
    db.commit()


# --- Trip expenses ---

def add_trip_expense(db: Session, trip: Trip, payload: ExpenseCreate) -> TripExpense:
    last_seq = db.scalar(select(func.max(TripExpense.seq)).where(TripExpense.trip_id == trip.id))
    description = (payload.description or "").strip() or payload.category.label
    expense = TripExpense(
        trip_id=trip.id,
        category=payload.category.value,
        description=description,
        amount=payload.amount,
        expense_date=payload.expense_date,
        seq=(last_seq or 0) + 1,
    )
    db.add(expense)
    db.commit()
    db.refresh(expense)
    return expense


def list_trip_expenses(db: Session, trip: Trip) -> List[TripExpense]:
    stmt = select(TripExpense).where(TripExpense.trip_id == trip.id).order_by(TripExpense.seq)
    return list(db.scalars(stmt))


def remove_trip_expense(db: Session, trip: Trip, expense_id: uuid.UUID) -> bool:
    """Delete an expense of this trip. Returns False when there was nothing to delete."""
    expense = db.get(TripExpense, expense_id)
    if expense is None or expense.trip_id != trip.id:
        return False
    db.delete(expense)
    db.commit()
    return True


def load_ledger(db: Session, trip: Trip) -> ExpenseLedger:
    return ExpenseLedger.from_expenses(
        Expense(
            id=str(row.id),
            category=row.category,
            description=row.description or "",
            amount=row.amount,
        )
        for row in list_trip_expenses(db, trip)
    )


# --- Workspaces ---

def list_workspaces(db: Session) -> List[Workspace]:
    stmt = select(Workspace).order_by(Workspace.average_rating.desc().nulls_last(), Workspace.name)
    return list(db.scalars(stmt))


def get_workspace(db: Session, workspace_id: uuid.UUID) -> Optional[Workspace]:
    return db.get(Workspace, workspace_id)


def list_reviews(db: Session, workspace: Workspace) -> List[WorkspaceReview]:
    stmt = (
        select(WorkspaceReview)
        .where(WorkspaceReview.workspace_id == workspace.id)
        .order_by(WorkspaceReview.created_at.desc())
    )
    return list(db.scalars(stmt))


def add_review(db: Session, workspace: Workspace, user_id: str, payload: WorkspaceReviewCreate) -> WorkspaceReview:
    review = WorkspaceReview(workspace_id=workspace.id, user_id=user_id, **payload.model_dump())
    db.add(review)
    db.flush()

    average, count = db.execute(
        select(func.avg(WorkspaceReview.rating), func.count(WorkspaceReview.id))
        .where(WorkspaceReview.workspace_id == workspace.id)
    ).one()
    workspace.average_rating = round(float(average), 2) if average is not None else None
    workspace.review_count = count

    db.commit()
    db.refresh(review)
    logger.info(f"Review added to workspace {workspace.id}; rating now {workspace.average_rating} ({count})")
    return review


def add_suggestion(db: Session, user_id: Optional[str], payload: WorkspaceSuggestionCreate) -> WorkspaceSuggestion:
    suggestion = WorkspaceSuggestion(user_id=user_id, status="pending", **payload.model_dump())
    db.add(suggestion)
    db.commit()
    db.refresh(suggestion)
    return suggestion


# --- Favorites ---

def list_favorites(db: Session, user_id: str) -> List[UserFavorite]:
    stmt = select(UserFavorite).where(UserFavorite.user_id == user_id).order_by(UserFavorite.created_at.desc())
    return list(db.scalars(stmt))


def add_favorite(db: Session, user_id: str, payload: FavoriteCreate) -> UserFavorite:
    existing = db.scalar(
        select(UserFavorite).where(
            UserFavorite.user_id == user_id,
            UserFavorite.trip_id == payload.trip_id,
            UserFavorite.workspace_id == payload.workspace_id,
        )
    )
    if existing is not None:
        return existing

    favorite = UserFavorite(user_id=user_id, trip_id=payload.trip_id, workspace_id=payload.workspace_id)
    db.add(favorite)
    db.commit()
    db.refresh(favorite)
    return favorite


def remove_favorite(db: Session, user_id: str, favorite_id: uuid.UUID) -> None:
    favorite = db.get(UserFavorite, favorite_id)
    if favorite is not None and favorite.user_id == user_id:
        db.delete(favorite)
        db.commit()
