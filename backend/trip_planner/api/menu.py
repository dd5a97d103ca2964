from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from langchain_core.language_models.chat_models import BaseChatModel

from trip_planner.agent.menu_translator import translate_menu
from trip_planner.api.deps import get_menu_model
from trip_planner.core.errors import OracleError
from trip_planner.schemas.menu import MenuTranslation, MenuTranslationError, MenuTranslationRequest

router = APIRouter()


@router.post(
    "/menu-translations",
    response_model=MenuTranslation,
    responses={402: {"model": MenuTranslationError}, 429: {"model": MenuTranslationError}, 502: {"model": MenuTranslationError}},
    tags=["Tools"],
)
def menu_translation_endpoint(request: MenuTranslationRequest, llm: BaseChatModel = Depends(get_menu_model)):
    """Translates a photographed menu and flags dishes against the dietary preferences."""
    try:
        return translate_menu(request, llm)
    except OracleError as e:
        # The menu screen expects an empty dish list alongside the message.
        body = MenuTranslationError(error=e.message)
        return JSONResponse(status_code=e.status_code, content=body.model_dump(mode="json", by_alias=True))
