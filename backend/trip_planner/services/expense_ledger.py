"""
Expense ledger for one trip view.

A ledger is constructed explicitly for the trip being shown and handed to whatever
needs it; it is never module-level state. Input is validated before it gets here
(ExpenseCreate), so the ledger only guards the one rule it owns: amounts must be positive.
"""
import itertools
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from trip_planner.core.config import logger
from trip_planner.schemas.base import to_decimal
from trip_planner.schemas.expense import (
    BudgetCategory, CategoryComparison, CategorySpend, Expense, LedgerSummary, SpendStatus,
)
from trip_planner.schemas.recommendation import SuggestedBudgetBreakdown

ZERO = Decimal("0")
HUNDRED = Decimal("100")
WARNING_PERCENT = Decimal("80")


class ExpenseLedger:
    """Append/remove-only log of expenses. Insertion order is the canonical order."""

    def __init__(self):
        self._expenses: Dict[str, Expense] = {}
        self._ids = itertools.count(1)

    @classmethod
    def from_expenses(cls, expenses: Iterable[Expense]) -> "ExpenseLedger":
        """Rebuild a ledger from already-identified expenses, e.g. rows loaded from the store."""
        ledger = cls()
        for expense in expenses:
            ledger._expenses[expense.id] = expense
        return ledger

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self):
        return iter(self._expenses.values())

    def __contains__(self, expense_id: str) -> bool:
        return expense_id in self._expenses

    def next_id(self) -> str:
        expense_id = str(next(self._ids))
        # Rehydrated ledgers may already hold small numeric ids.
        while expense_id in self._expenses:
            expense_id = str(next(self._ids))
        return expense_id

    def add_expense(self, category: BudgetCategory, amount, description: Optional[str] = None) -> Optional[str]:
        """
        Log an expense and return its id.
        Non-positive amounts are ignored and None is returned; the ledger is unchanged.
        """
        category = BudgetCategory(category)
        amount = to_decimal(amount)
        if amount <= ZERO:
            logger.info(f"Ignoring non-positive expense amount {amount} for '{category.value}'")
            return None

        if not description or not description.strip():
            description = category.label

        expense_id = self.next_id()
        self._expenses[expense_id] = Expense(
            id=expense_id, category=category, description=description.strip(), amount=amount,
        )
        return expense_id

    def remove_expense(self, expense_id: str) -> None:
        """Remove an expense. Unknown ids are ignored."""
        self._expenses.pop(expense_id, None)

    def expenses(self) -> List[Expense]:
        return list(self._expenses.values())

    def recent(self) -> List[Expense]:
        """Most recent first."""
        return list(reversed(self._expenses.values()))

    def total_spent(self) -> Decimal:
        return sum((expense.amount for expense in self._expenses.values()), ZERO)

    def remaining(self, total_budget) -> Decimal:
        return to_decimal(total_budget) - self.total_spent()

    def percent_spent(self, total_budget) -> Decimal:
        """
        Share of the budget spent, in percent.
        Returns 0 when the budget is zero or negative instead of dividing by it.
        """
        total_budget = to_decimal(total_budget)
        if total_budget <= ZERO:
            return ZERO
        return self.total_spent() / total_budget * HUNDRED

    def spend_status(self, total_budget) -> SpendStatus:
        percent = self.percent_spent(total_budget)
        if percent > HUNDRED:
            return SpendStatus.OVER_BUDGET
        if percent > WARNING_PERCENT:
            return SpendStatus.WARNING
        return SpendStatus.ON_TRACK

    def amounts_by_category(self) -> Dict[BudgetCategory, Decimal]:
        """Total per category; every category is present, unused ones as zero."""
        totals = {category: ZERO for category in BudgetCategory}
        for expense in self._expenses.values():
            totals[expense.category] += expense.amount
        return totals

    def spending_by_category(self) -> List[CategorySpend]:
        """Chart-ready totals; categories with nothing spent are left out."""
        return [
            CategorySpend(category=category, label=category.label, amount=amount)
            for category, amount in self.amounts_by_category().items()
            if amount > ZERO
        ]

    def compare_to_suggested(self, suggested: Optional[SuggestedBudgetBreakdown]) -> List[CategoryComparison]:
        """One (suggested, actual) row for every category, zero-filled on either side."""
        planned = suggested.by_category() if suggested is not None else {}
        actual = self.amounts_by_category()
        return [
            CategoryComparison(
                category=category,
                label=category.label,
                suggested=planned.get(category, ZERO),
                actual=actual[category],
            )
            for category in BudgetCategory
        ]

    def summary(self, total_budget, suggested: Optional[SuggestedBudgetBreakdown] = None) -> LedgerSummary:
        total_budget = to_decimal(total_budget)
        return LedgerSummary(
            total_budget=total_budget,
            total_spent=self.total_spent(),
            remaining=self.remaining(total_budget),
            percent_spent=self.percent_spent(total_budget),
            status=self.spend_status(total_budget),
            amounts_by_category=self.amounts_by_category(),
            spending_by_category=self.spending_by_category(),
            comparison=self.compare_to_suggested(suggested),
            recent_expenses=self.recent(),
        )
