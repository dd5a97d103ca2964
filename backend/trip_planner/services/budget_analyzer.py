"""
Budget analysis presentation.

Turns the model's budget verdict into what the budget card shows and computes the
arithmetic the model does not hand back. The verdict and the raw figures can
disagree; both signals are surfaced and neither is corrected.
"""
from decimal import Decimal
from typing import Dict, Union

from trip_planner.core.config import logger
from trip_planner.core.errors import ContractViolation, check_exhaustive
from trip_planner.schemas.base import to_decimal
from trip_planner.schemas.recommendation import (
    BudgetAnalysis, BudgetPresentation, Feasibility, PresentationTier,
)

_TIERS: Dict[Feasibility, PresentationTier] = {
    Feasibility.FEASIBLE: PresentationTier.APPROVED,
    Feasibility.TOO_LOW: PresentationTier.TOO_LOW_WARNING,
    Feasibility.TOO_HIGH: PresentationTier.TOO_HIGH_NOTICE,
}

TIER_LABELS: Dict[PresentationTier, str] = {
    PresentationTier.APPROVED: "Budget Approved",
    PresentationTier.TOO_LOW_WARNING: "Budget Too Low",
    PresentationTier.TOO_HIGH_NOTICE: "High Budget",
}

# Adding a feasibility value or a tier without wiring it here must fail at import.
check_exhaustive(_TIERS, Feasibility, "presentation tiers")
check_exhaustive(TIER_LABELS, PresentationTier, "tier labels")


def compute_delta(total_budget: Decimal, estimated_total_cost: Decimal) -> Decimal:
    """Budget minus estimated cost. Positive is a surplus, negative a shortfall."""
    return to_decimal(total_budget) - to_decimal(estimated_total_cost)


def classify(feasibility: Union[Feasibility, str]) -> PresentationTier:
    """
    Map a feasibility verdict to its presentation tier.

    Raises ContractViolation for anything outside the known verdicts.
    """
    try:
        return _TIERS[Feasibility(feasibility)]
    except (KeyError, ValueError):
        raise ContractViolation(f"Unrecognized budget feasibility: {feasibility!r}") from None


def analyze(analysis: BudgetAnalysis, total_budget: Decimal) -> BudgetPresentation:
    tier = classify(analysis.feasibility)
    delta = compute_delta(total_budget, analysis.estimated_total_cost)
    cost_exceeds_budget = analysis.estimated_total_cost > to_decimal(total_budget)

    # Over budget only fits "too_low"; within budget fits "feasible" or "too_high".
    verdict_disagrees = (
        (analysis.feasibility == Feasibility.FEASIBLE and cost_exceeds_budget)
        or (analysis.feasibility == Feasibility.TOO_HIGH and cost_exceeds_budget)
        or (analysis.feasibility == Feasibility.TOO_LOW and not cost_exceeds_budget)
    )
    if verdict_disagrees:
        logger.warning(
            f"Budget verdict '{analysis.feasibility.value}' disagrees with figures: "
            f"budget={total_budget} estimated={analysis.estimated_total_cost}"
        )

    suggestions = [] if analysis.feasibility == Feasibility.FEASIBLE else list(analysis.adjustment_suggestions)

    return BudgetPresentation(
        tier=tier,
        label=TIER_LABELS[tier],
        feasibility=analysis.feasibility,
        total_budget=to_decimal(total_budget),
        estimated_total_cost=analysis.estimated_total_cost,
        daily_budget_per_person=analysis.daily_budget_per_person,
        delta=delta,
        has_surplus=delta >= 0,
        cost_exceeds_budget=cost_exceeds_budget,
        verdict_disagrees=verdict_disagrees,
        message=analysis.message,
        suggestions=suggestions,
    )
