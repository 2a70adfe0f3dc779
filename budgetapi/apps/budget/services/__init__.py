"""Budget services module.

This package contains the services behind the project budget API:
- BudgetService: CRUD operations and the currency conversion lookup
- BudgetConversionService: Converts a budget to TTD using a live rate
"""

from budget.services.budget_service import BudgetService, build_budget_service
from budget.services.conversion_service import (
    BudgetConversionService,
    RateProvider,
    convert_amount,
)

__all__ = [
    "BudgetService",
    "BudgetConversionService",
    "RateProvider",
    "build_budget_service",
    "convert_amount",
]
