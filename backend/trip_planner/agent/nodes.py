import json
import re
from decimal import Decimal

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_core.runnables import RunnableConfig
from pydantic import ValidationError

from trip_planner.agent.graph import PlannerState
from trip_planner.agent.llm import get_recommendation_llm, invoke_llm
from trip_planner.agent.prompts import RECOMMENDATION_SYSTEM_PROMPT, build_recommendation_prompt
from trip_planner.core.config import logger
from trip_planner.core.errors import OracleError, OracleMalformedResponse
from trip_planner.schemas.recommendation import TravelRecommendation
from trip_planner.services import budget_analyzer


def extract_json(content: str) -> dict:
    """
    Parse the JSON object in a model reply.
    Markdown code fences are stripped; numbers with a fraction become Decimal so money stays exact.
    """
    cleaned = content.strip()
    cleaned = re.sub(r"^```(?:json)?\s*", "", cleaned)
    cleaned = re.sub(r"\s*```$", "", cleaned)

    try:
        parsed = json.loads(cleaned, parse_float=Decimal)
    except json.JSONDecodeError:
        # Fall back to the outermost {...} when the model wrapped the JSON in prose.
        json_match = re.search(r"\{.*\}", cleaned, re.DOTALL)
        if not json_match:
            logger.error(f"No JSON object found in response: {content[:500]}")
            raise OracleMalformedResponse("Failed to parse the AI response")
        try:
            parsed = json.loads(json_match.group(), parse_float=Decimal)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON from extracted content: {e}")
            raise OracleMalformedResponse("Failed to parse the AI response") from e

    if not isinstance(parsed, dict):
        raise OracleMalformedResponse("The AI response was not a JSON object")
    return parsed


# --- Pipeline nodes: each function is one step of the recommendation graph ---

def build_prompt_node(state: PlannerState) -> dict:
    logger.info("Executing Node: build_prompt")
    request = state["request"]
    logger.info(
        f"Generating travel recommendations for {request.destination} "
        f"(from {request.from_location or 'not specified'}, {request.budget} {request.currency.value}, "
        f"{request.trip_days} days, interests: {[i.value for i in request.interests]})"
    )
    return {
        "prompt": build_recommendation_prompt(request),
        "steps": state.get("steps", []) + ["Built trip prompt."],
    }


def call_oracle_node(state: PlannerState, config: RunnableConfig) -> dict:
    """Send the prompt to the model. The model can be swapped through the run config."""
    logger.info("Executing Node: call_oracle")
    llm = config.get("configurable", {}).get("llm")
    try:
        if llm is None:
            llm = get_recommendation_llm()
        raw = invoke_llm(
            llm,
            [SystemMessage(content=RECOMMENDATION_SYSTEM_PROMPT), HumanMessage(content=state["prompt"])],
            purpose="trip recommendation",
        )
    except OracleError as e:
        return {"error": e}

    logger.info("AI response received, parsing...")
    return {
        "raw_response": raw,
        "steps": state["steps"] + ["Received recommendations from the AI model."],
    }


def parse_response_node(state: PlannerState) -> dict:
    logger.info("Executing Node: parse_response")
    try:
        payload = extract_json(state["raw_response"])
        recommendation = TravelRecommendation.model_validate(payload)
    except OracleMalformedResponse as e:
        return {"error": e}
    except ValidationError as e:
        logger.error(f"AI response failed schema validation: {e}")
        return {"error": OracleMalformedResponse("Failed to parse travel recommendations")}

    return {
        "recommendation": recommendation,
        "steps": state["steps"] + ["Validated the recommendation structure."],
    }


def analyze_budget_node(state: PlannerState) -> dict:
    logger.info("Executing Node: analyze_budget")
    recommendation = state["recommendation"]
    presentation = budget_analyzer.analyze(recommendation.budget_analysis, state["request"].budget)
    return {
        "presentation": presentation,
        "steps": state["steps"] + [f"Budget analysis: {presentation.label}."],
    }
