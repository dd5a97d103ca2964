import uuid
import datetime as dt
from enum import Enum
from typing import Dict, List, Optional

from pydantic import ConfigDict, Field

from trip_planner.core.errors import check_exhaustive
from trip_planner.schemas.base import CamelModel, Money


class BudgetCategory(str, Enum):
    ACCOMMODATION = "accommodation"
    FOOD = "food"
    ACTIVITIES = "activities"
    TRANSPORT = "transport"
    MISCELLANEOUS = "miscellaneous"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS: Dict[BudgetCategory, str] = {
    BudgetCategory.ACCOMMODATION: "Accommodation",
    BudgetCategory.FOOD: "Food",
    BudgetCategory.ACTIVITIES: "Activities",
    BudgetCategory.TRANSPORT: "Transport",
    BudgetCategory.MISCELLANEOUS: "Misc",
}
check_exhaustive(CATEGORY_LABELS, BudgetCategory, "category labels")


class SpendStatus(str, Enum):
    ON_TRACK = "on_track"
    WARNING = "warning"
    OVER_BUDGET = "over_budget"


class Expense(CamelModel):
    """One logged expense. Never edited in place, only removed."""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    category: BudgetCategory
    description: str
    amount: Money


class ExpenseCreate(CamelModel):
    category: BudgetCategory
    description: Optional[str] = None
    amount: Money = Field(gt=0, max_digits=12, decimal_places=2)
    expense_date: Optional[dt.date] = None


class StoredExpense(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    trip_id: uuid.UUID
    category: BudgetCategory
    description: Optional[str]
    amount: Money
    expense_date: Optional[dt.date] = None


class CategorySpend(CamelModel):
    category: BudgetCategory
    label: str
    amount: Money


class CategoryComparison(CamelModel):
    category: BudgetCategory
    label: str
    suggested: Money
    actual: Money


class LedgerSummary(CamelModel):
    total_budget: Money
    total_spent: Money
    remaining: Money
    percent_spent: Money
    status: SpendStatus
    amounts_by_category: Dict[BudgetCategory, Money]
    spending_by_category: List[CategorySpend]
    comparison: List[CategoryComparison]
    recent_expenses: List[Expense]
