from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from trip_planner.api.router import router as api_router
from trip_planner.core.config import settings, logger
from trip_planner.core.errors import OracleError
from trip_planner.db.session import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up Sakura Trip Planner API...")
    init_db()
    yield


# Initialize the FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0",
    description="Trip recommendations, budget tracking and a nomad workspace directory, powered by Gemini and FastAPI.",
    lifespan=lifespan,
)

# Set up CORS so the web client can call the API from its own origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include the API router
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.exception_handler(OracleError)
async def oracle_error_handler(request: Request, exc: OracleError):
    """A failed model call becomes one user-visible message; nothing stored is touched."""
    logger.error(f"AI request to {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})


@app.get("/", tags=["Root"])
def read_root():
    """A simple health check endpoint to confirm the API is running."""
    return {"status": "ok", "message": f"Welcome to the {settings.PROJECT_NAME} API!"}
