"""Storage access for project budgets.

Every read and write of ``ProjectBudget`` rows goes through here. Values reach
the database only as ORM lookups, which the backend binds as query
parameters. Database failures surface as ``StorageError``.
"""

import contextlib
from typing import Iterator, Optional

import structlog
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import QuerySet

from budget.entities import BudgetFields, ProjectBudgetModel
from budget.exceptions import ConflictError, StorageError
from budget.models import ProjectBudget

logger = structlog.get_logger()

UPDATABLE_FIELDS = (
    "project_name",
    "year",
    "currency",
    "initial_budget_local",
    "budget_usd",
    "initial_schedule_estimate_months",
    "adjusted_schedule_estimate_months",
    "contingency_rate",
    "escalation_rate",
    "final_budget_usd",
)


@contextlib.contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except DatabaseError as exc:
        logger.error(
            "budget.repository.storage_error", operation=operation, error=str(exc)
        )
        raise StorageError() from exc


class BudgetRepository:
    def __init__(self, queryset: Optional[QuerySet] = None) -> None:
        self._queryset = (
            queryset if queryset is not None else ProjectBudget.objects.all()
        )

    def find_by_id(self, project_id: int) -> list[ProjectBudgetModel]:
        with storage_errors("find_by_id"):
            rows = list(self._queryset.filter(project_id=project_id))
        return [ProjectBudgetModel.model_validate(row) for row in rows]

    def find_by_name_and_year(
        self, project_name: str, year: int
    ) -> Optional[ProjectBudgetModel]:
        with storage_errors("find_by_name_and_year"):
            row = (
                self._queryset.filter(project_name=project_name, year=year)
                .order_by("project_id")
                .first()
            )
        return ProjectBudgetModel.model_validate(row) if row is not None else None

    def exists(self, project_id: int) -> bool:
        with storage_errors("exists"):
            return self._queryset.filter(project_id=project_id).exists()

    def insert(self, fields: BudgetFields) -> ProjectBudgetModel:
        """Store a new budget.

        Raises:
            ConflictError: a row with the same ``project_id`` already exists
            StorageError: any other database failure
        """
        with storage_errors("insert"):
            try:
                with transaction.atomic():
                    row = self._queryset.create(**fields)
            except IntegrityError as exc:
                if not self.exists(fields["project_id"]):
                    raise
                raise ConflictError(
                    f"Project with ID {fields['project_id']} already exists"
                ) from exc
        return ProjectBudgetModel.model_validate(row)

    def update(self, project_id: int, fields: BudgetFields) -> int:
        values = {name: fields.get(name) for name in UPDATABLE_FIELDS}
        with storage_errors("update"):
            return self._queryset.filter(project_id=project_id).update(**values)

    def delete(self, project_id: int) -> int:
        with storage_errors("delete"):
            deleted, _ = self._queryset.filter(project_id=project_id).delete()
        return deleted
