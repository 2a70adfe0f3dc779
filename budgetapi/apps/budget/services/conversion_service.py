"""Budget Conversion Service.

Converts a stored USD budget into the target currency using a live rate.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

import structlog

from budget.constants import BASE_CURRENCY, CENT, TARGET_CURRENCY
from budget.entities import ConvertedProjectBudgetModel, ProjectBudgetModel
from budget.exceptions import ConversionFailedError
from rates.exceptions import RateProviderError

logger = structlog.get_logger()


class RateProvider(Protocol):
    def get_rate(self, base_currency: str, target_currency: str) -> Decimal: ...


def convert_amount(amount: Decimal, rate: Decimal) -> Decimal:
    """Multiply and round half away from zero to exactly two decimal places."""
    return (Decimal(amount) * Decimal(rate)).quantize(CENT, rounding=ROUND_HALF_UP)


class BudgetConversionService:
    """Service for converting budgets into the target currency."""

    def __init__(self, rate_provider: RateProvider) -> None:
        self.rate_provider = rate_provider

    def convert(self, budget: ProjectBudgetModel) -> ConvertedProjectBudgetModel:
        """Attach ``final_budget_ttd`` to a copy of ``budget``.

        Args:
            budget: Stored budget, left unchanged

        Returns:
            New model carrying the converted final budget

        Raises:
            ConversionFailedError: the rate could not be obtained. The
                provider error is kept as ``__cause__`` and never shown to
                the caller.
        """
        try:
            rate = self.rate_provider.get_rate(
                BASE_CURRENCY.value, TARGET_CURRENCY.value
            )
        except RateProviderError as exc:
            logger.warning(
                "budget.services.convert.rate_failed",
                project_id=budget.project_id,
                reason=type(exc).__name__,
                error=str(exc),
            )
            raise ConversionFailedError() from exc

        # a budget without a final amount converts to zero
        amount = budget.final_budget_usd or Decimal("0")
        converted = ConvertedProjectBudgetModel.init(
            budget, final_budget_ttd=convert_amount(amount, rate)
        )
        logger.info(
            "budget.services.convert.done",
            project_id=budget.project_id,
            rate=str(rate),
            final_budget_ttd=str(converted.final_budget_ttd),
        )
        return converted
