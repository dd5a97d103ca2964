import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from trip_planner.api.deps import get_db, get_optional_user_id, get_user_id
from trip_planner.core.config import logger
from trip_planner.schemas.workspace import (
    NoiseLevel, WifiQuality, Workspace, WorkspaceDirectory, WorkspaceFilters, WorkspaceReview,
    WorkspaceReviewCreate, WorkspaceSuggestion, WorkspaceSuggestionCreate,
)
from trip_planner.services import store, workspace_filter

router = APIRouter(tags=["Workspaces"])


def _get_workspace_or_404(db: Session, workspace_id: uuid.UUID):
    workspace = store.get_workspace(db, workspace_id)
    if workspace is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workspace not found")
    return workspace


def get_filters(
    search: str = "",
    wifi_quality: Optional[WifiQuality] = Query(default=None, alias="wifiQuality"),
    noise_level: Optional[NoiseLevel] = Query(default=None, alias="noiseLevel"),
    has_power_outlets: Optional[bool] = Query(default=None, alias="hasPowerOutlets"),
    has_quiet_zones: Optional[bool] = Query(default=None, alias="hasQuietZones"),
    country: Optional[str] = None,
) -> WorkspaceFilters:
    return WorkspaceFilters(
        search=search,
        wifi_quality=wifi_quality,
        noise_level=noise_level,
        has_power_outlets=has_power_outlets,
        has_quiet_zones=has_quiet_zones,
        country=country,
    )


@router.get("/workspaces", response_model=WorkspaceDirectory)
def list_workspaces(filters: WorkspaceFilters = Depends(get_filters), db: Session = Depends(get_db)):
    """The workspace directory, filtered and grouped by country (best rated first)."""
    workspaces = [Workspace.model_validate(row) for row in store.list_workspaces(db)]
    survivors = workspace_filter.filter_workspaces(workspaces, filters)
    logger.info(f"Workspace directory: {len(survivors)} of {len(workspaces)} match {filters.active_count} filter(s)")
    return WorkspaceDirectory.from_groups(workspace_filter.group_by_country(survivors), filters.active_count)


@router.get("/workspaces/{workspace_id}", response_model=Workspace)
def get_workspace(workspace_id: uuid.UUID, db: Session = Depends(get_db)):
    return _get_workspace_or_404(db, workspace_id)


@router.get("/workspaces/{workspace_id}/reviews", response_model=List[WorkspaceReview])
def list_reviews(workspace_id: uuid.UUID, db: Session = Depends(get_db)):
    return store.list_reviews(db, _get_workspace_or_404(db, workspace_id))


@router.post(
    "/workspaces/{workspace_id}/reviews",
    response_model=WorkspaceReview,
    status_code=status.HTTP_201_CREATED,
)
def add_review(
    workspace_id: uuid.UUID,
    payload: WorkspaceReviewCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    return store.add_review(db, _get_workspace_or_404(db, workspace_id), user_id, payload)


@router.post("/workspace-suggestions", response_model=WorkspaceSuggestion, status_code=status.HTTP_201_CREATED)
def suggest_workspace(
    payload: WorkspaceSuggestionCreate,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_optional_user_id),
):
    """Queue a new workspace for review. Anonymous suggestions are accepted."""
    return store.add_suggestion(db, user_id, payload)
