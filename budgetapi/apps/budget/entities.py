from decimal import Decimal
from typing import Optional, TypedDict

import pydantic


class BudgetFields(TypedDict, total=False):
    project_id: int
    project_name: str
    year: int
    currency: str
    initial_budget_local: Optional[Decimal]
    budget_usd: Optional[Decimal]
    initial_schedule_estimate_months: Optional[int]
    adjusted_schedule_estimate_months: Optional[int]
    contingency_rate: Optional[Decimal]
    escalation_rate: Optional[Decimal]
    final_budget_usd: Optional[Decimal]


class ProjectBudgetModel(pydantic.BaseModel):
    """Read-only snapshot of a stored project budget."""

    model_config = pydantic.ConfigDict(from_attributes=True, frozen=True)

    project_id: int
    project_name: str
    year: int
    currency: str
    initial_budget_local: Optional[Decimal] = None
    budget_usd: Optional[Decimal] = None
    initial_schedule_estimate_months: Optional[int] = None
    adjusted_schedule_estimate_months: Optional[int] = None
    contingency_rate: Optional[Decimal] = None
    escalation_rate: Optional[Decimal] = None
    final_budget_usd: Optional[Decimal] = None


class ConvertedProjectBudgetModel(ProjectBudgetModel):
    final_budget_ttd: Decimal

    @classmethod
    def init(
        cls, budget: ProjectBudgetModel, final_budget_ttd: Decimal
    ) -> "ConvertedProjectBudgetModel":
        return cls(**budget.model_dump(), final_budget_ttd=final_budget_ttd)
