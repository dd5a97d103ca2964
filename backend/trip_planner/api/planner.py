from fastapi import APIRouter, Depends
from langchain_core.language_models.chat_models import BaseChatModel
from langgraph.graph import StateGraph, END

from trip_planner.agent.graph import PlannerState
from trip_planner.agent.nodes import (
    analyze_budget_node, build_prompt_node, call_oracle_node, parse_response_node,
)
from trip_planner.api.deps import get_recommendation_model
from trip_planner.core.config import logger
from trip_planner.schemas.recommendation import ErrorResponse, TravelRecommendationResponse
from trip_planner.schemas.trip import TripDetails, TripRequest

router = APIRouter()


# --- Define the Conditional Logic for the Graph ---
def should_continue(state: PlannerState) -> str:
    """
    Stops the pipeline at the first failed step so that nothing after it runs on partial data.
    """
    if state.get("error"):
        logger.warning(f"Error detected in planner state: '{state['error']}'. Routing to end.")
        return "end_with_error"
    return "continue_to_next_step"


# --- Build the Recommendation Graph ---
workflow = StateGraph(PlannerState)

workflow.add_node("build_prompt", build_prompt_node)
workflow.add_node("call_oracle", call_oracle_node)
workflow.add_node("parse_response", parse_response_node)
workflow.add_node("analyze_budget", analyze_budget_node)

workflow.set_entry_point("build_prompt")
workflow.add_edge("build_prompt", "call_oracle")
workflow.add_conditional_edges(
    "call_oracle",
    should_continue,
    {"continue_to_next_step": "parse_response", "end_with_error": END}
)
workflow.add_conditional_edges(
    "parse_response",
    should_continue,
    {"continue_to_next_step": "analyze_budget", "end_with_error": END}
)
workflow.add_edge("analyze_budget", END)

planner_graph = workflow.compile()


def run_planner(request: TripRequest, llm: BaseChatModel) -> PlannerState:
    """Run the whole pipeline for one trip request and return the final state."""
    return planner_graph.invoke({"request": request, "steps": []}, {"configurable": {"llm": llm}})


@router.post(
    "/travel-recommendations",
    response_model=TravelRecommendationResponse,
    responses={402: {"model": ErrorResponse}, 429: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    tags=["Planner"],
)
def travel_recommendations_endpoint(request: TripRequest, llm: BaseChatModel = Depends(get_recommendation_model)):
    """
    Validates the trip, asks the AI model for recommendations and a budget verdict,
    and returns them with the derived budget presentation.
    """
    final_state = run_planner(request, llm)
    if final_state.get("error"):
        raise final_state["error"]

    logger.info("Recommendations generated successfully")
    return TravelRecommendationResponse(
        data=final_state["recommendation"],
        trip_details=TripDetails.from_request(request),
        budget_presentation=final_state["presentation"],
    )
