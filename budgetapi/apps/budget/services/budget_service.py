from typing import Any, Optional

import structlog

from budget import utils
from budget.constants import (
    REQUIRED_ADD_FIELDS,
    REQUIRED_UPDATE_FIELDS,
    TARGET_CURRENCY,
)
from budget.entities import ProjectBudgetModel
from budget.exceptions import ConflictError, InvalidInputError, ProjectNotFoundError
from budget.repository import BudgetRepository
from budget.serializers import (
    BudgetFieldsSerializer,
    CreateBudgetSerializer,
    CurrencyConversionSerializer,
)
from budget.services.conversion_service import BudgetConversionService, RateProvider
from rates.client import ExchangeRateClient

logger = structlog.get_logger()


class BudgetService:
    """Project budget operations.

    Every method either returns its success value or raises one
    ``BudgetServiceError`` subclass describing the failure.
    """

    def __init__(
        self, repository: BudgetRepository, rate_provider: RateProvider
    ) -> None:
        self.repository = repository
        self.conversion = BudgetConversionService(rate_provider)

    def convert_budget(
        self, year: Any, project_name: Any, currency_code: Any
    ) -> list[ProjectBudgetModel]:
        """Look a budget up by name and year, converting it to TTD on request.

        Any currency other than TTD returns the stored budget as is.

        Returns:
            A single-element list with the (possibly converted) budget
        """
        request = {
            "year": year,
            "project_name": project_name,
            "currency": currency_code,
        }
        if utils.missing_fields(request, request.keys()):
            raise InvalidInputError()
        data = utils.validated_data(CurrencyConversionSerializer, request)

        budget = self.repository.find_by_name_and_year(
            data["project_name"], data["year"]
        )
        if budget is None:
            logger.info(
                "budget.services.convert.not_found",
                project_name=data["project_name"],
                year=data["year"],
            )
            raise ProjectNotFoundError()

        if data["currency"].upper() != TARGET_CURRENCY.value:
            return [budget]
        return [self.conversion.convert(budget)]

    def get_by_id(self, project_id: Any) -> list[ProjectBudgetModel]:
        budgets = []
        if (parsed_id := utils.parse_project_id(project_id)) is not None:
            budgets = self.repository.find_by_id(parsed_id)
        if not budgets:
            raise ProjectNotFoundError()
        return budgets

    def add_budget(self, fields: dict) -> int:
        """Create a budget and return its project id.

        Raises:
            InvalidInputError: required fields missing or malformed
            ConflictError: the project id is already taken
        """
        if utils.missing_fields(fields, REQUIRED_ADD_FIELDS):
            raise InvalidInputError()
        data = utils.validated_data(CreateBudgetSerializer, fields)

        if self.repository.exists(data["project_id"]):
            raise ConflictError(
                f"Project with ID {data['project_id']} already exists"
            )

        budget = self.repository.insert(data)
        logger.info(
            "budget.services.add_budget.created", project_id=budget.project_id
        )
        return budget.project_id

    def update_budget(self, project_id: Any, fields: dict) -> None:
        """Replace every field of an existing budget except its id.

        Fields left out of ``fields`` are cleared. Never creates a budget.
        """
        if utils.is_blank(project_id) or utils.missing_fields(
            fields, REQUIRED_UPDATE_FIELDS
        ):
            raise InvalidInputError()
        data = utils.validated_data(BudgetFieldsSerializer, fields)

        updated = 0
        if (parsed_id := utils.parse_project_id(project_id)) is not None:
            updated = self.repository.update(parsed_id, data)
        if updated == 0:
            raise ProjectNotFoundError()
        logger.info("budget.services.update_budget.updated", project_id=parsed_id)

    def delete_budget(self, project_id: Any) -> None:
        deleted = 0
        if (parsed_id := utils.parse_project_id(project_id)) is not None:
            deleted = self.repository.delete(parsed_id)
        if deleted == 0:
            raise ProjectNotFoundError()
        logger.info("budget.services.delete_budget.deleted", project_id=parsed_id)


def build_budget_service(
    repository: Optional[BudgetRepository] = None,
    rate_provider: Optional[RateProvider] = None,
) -> BudgetService:
    return BudgetService(
        repository=repository or BudgetRepository(),
        rate_provider=rate_provider or ExchangeRateClient.from_settings(),
    )
