from functools import lru_cache

from google.api_core.exceptions import ResourceExhausted
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from trip_planner.core.config import settings, logger
from trip_planner.core.errors import (
    OracleError, OracleQuotaExceeded, OracleRateLimited, OracleUnavailable,
)


def _build_llm(model: str, temperature: float, **kwargs) -> ChatGoogleGenerativeAI:
    if not settings.GOOGLE_API_KEY:
        raise OracleUnavailable("GOOGLE_API_KEY is not configured")
    return ChatGoogleGenerativeAI(
        model=model,
        google_api_key=settings.GOOGLE_API_KEY,
        temperature=temperature,
        # stop after the first attempt; the traveler retries by resubmitting
        max_retries=1,
        **kwargs,
    )


@lru_cache
def get_recommendation_llm() -> BaseChatModel:
    """The Gemini model that writes trip recommendations and the budget verdict."""
    return _build_llm(settings.RECOMMENDATION_MODEL, settings.RECOMMENDATION_TEMPERATURE)


@lru_cache
def get_menu_llm() -> BaseChatModel:
    """The multimodal Gemini model that reads menu photos."""
    return _build_llm(settings.MENU_MODEL, 0, response_mime_type="application/json")


def invoke_llm(llm: BaseChatModel, messages, purpose: str) -> str:
    """
    Single call to the model, returning the raw text of its reply.
    Every failure is translated into an OracleError with a message fit for the user.
    """
    try:
        response = llm.invoke(messages)
    except ResourceExhausted as e:
        if "quota" in str(e).lower():
            logger.error(f"Google API quota exhausted during {purpose}: {e}")
            raise OracleQuotaExceeded("AI service quota exceeded. Please try again later.") from e
        logger.error(f"Google API rate limit exceeded during {purpose}: {e}")
        raise OracleRateLimited("Rate limit exceeded. Please try again in a moment.") from e
    except OracleError:
        raise
    except Exception as e:
        logger.error(f"An unexpected error occurred during {purpose}: {e}", exc_info=True)
        raise OracleUnavailable(f"The AI service could not complete the {purpose}.") from e

    content = response.content
    if isinstance(content, list):
        # Multimodal replies arrive as content blocks.
        content = "".join(
            block.get("text", "") if isinstance(block, dict) else str(block) for block in content
        )
    if not content or not content.strip():
        raise OracleUnavailable("No content in AI response")
    return content
