import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from trip_planner.api.deps import get_db, get_user_id
from trip_planner.schemas.store import Favorite, FavoriteCreate
from trip_planner.services import store

router = APIRouter(prefix="/favorites", tags=["Favorites"])


@router.get("", response_model=List[Favorite])
def list_favorites(db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    return store.list_favorites(db, user_id)


@router.post("", response_model=Favorite, status_code=status.HTTP_201_CREATED)
def add_favorite(payload: FavoriteCreate, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    if payload.trip_id is not None and store.get_trip(db, payload.trip_id, user_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")
    if payload.workspace_id is not None and store.get_workspace(db, payload.workspace_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workspace not found")
    return store.add_favorite(db, user_id, payload)


@router.delete("/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_favorite(favorite_id: uuid.UUID, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    store.remove_favorite(db, user_id, favorite_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
