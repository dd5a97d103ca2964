from typing import Optional

from fastapi import Header
from langchain_core.language_models.chat_models import BaseChatModel

from trip_planner.agent.llm import get_menu_llm, get_recommendation_llm
from trip_planner.db.session import get_db  # noqa: F401  re-exported for the routers


def get_user_id(x_user_id: str = Header(min_length=1, max_length=64)) -> str:
    """Identity of the caller for user-owned rows, taken from the X-User-Id header."""
    return x_user_id


def get_optional_user_id(x_user_id: Optional[str] = Header(default=None, max_length=64)) -> Optional[str]:
    return x_user_id or None


def get_recommendation_model() -> BaseChatModel:
    return get_recommendation_llm()


def get_menu_model() -> BaseChatModel:
    return get_menu_llm()
