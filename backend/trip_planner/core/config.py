import logging
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """
    Application settings.
    """
    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Sakura Trip Planner API"

    # CORS Settings
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    # Database Settings
    DATABASE_URL: str = "sqlite:///./app.db"

    # LLM Settings
    GOOGLE_API_KEY: str = ""
    RECOMMENDATION_MODEL: str = "gemini-2.0-flash"
    RECOMMENDATION_TEMPERATURE: float = 0.7
    MENU_MODEL: str = "gemini-2.0-flash"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")


# Create settings instance
settings = Settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("trip_planner")

# The oracle endpoints report the missing key per request; the rest of the API still works.
if not settings.GOOGLE_API_KEY:
    logger.warning("GOOGLE_API_KEY is not set. Recommendation and menu translation calls will fail.")

logger.info("Application settings loaded.")
