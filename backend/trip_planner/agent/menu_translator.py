from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import ValidationError

from trip_planner.agent.llm import get_menu_llm, invoke_llm
from trip_planner.agent.nodes import extract_json
from trip_planner.agent.prompts import build_menu_system_prompt
from trip_planner.core.config import logger
from trip_planner.core.errors import OracleMalformedResponse
from trip_planner.schemas.menu import MenuTranslation, MenuTranslationRequest


def translate_menu(request: MenuTranslationRequest, llm: Optional[BaseChatModel] = None) -> MenuTranslation:
    """
    Send a menu photo to the multimodal model and decode the dishes it finds.
    Compatibility with the dietary preferences is judged by the model.
    """
    logger.info(
        f"Translating menu image with preferences {[p.value for p in request.dietary_preferences]}"
    )
    if llm is None:
        llm = get_menu_llm()
    messages = [
        SystemMessage(content=build_menu_system_prompt(request.dietary_preferences)),
        HumanMessage(content=[
            {"type": "text", "text": "Please analyze this menu image and translate all dishes:"},
            {"type": "image_url", "image_url": {"url": request.image_url}},
        ]),
    ]
    raw = invoke_llm(llm, messages, purpose="menu translation")

    try:
        translation = MenuTranslation.model_validate(extract_json(raw))
    except ValidationError as e:
        logger.error(f"Menu translation failed schema validation: {e}")
        raise OracleMalformedResponse("Failed to parse menu translation") from e

    logger.info(f"Menu translated: {len(translation.dishes)} dishes ({translation.menu_language or 'unknown language'})")
    return translation
