from fastapi import APIRouter

from trip_planner.api import favorites, menu, planner, trips, workspaces

router = APIRouter()

router.include_router(planner.router)
router.include_router(menu.router)
router.include_router(trips.router)
router.include_router(workspaces.router)
router.include_router(favorites.router)
