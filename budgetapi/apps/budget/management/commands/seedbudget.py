import csv

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from budget.exceptions import InvalidInputError
from budget.repository import BudgetRepository
from budget.serializers import CreateBudgetSerializer
from budget.utils import validated_data

# Column order of the projects CSV export
COLUMNS = (
    "project_id",
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

NULL_VALUES = ("", "NULL")


def parse_row(row: list[str]) -> dict:
    if len(row) != len(COLUMNS):
        raise ValueError(f"expected {len(COLUMNS)} columns, got {len(row)}")
    raw = {
        name: None if value.strip() in NULL_VALUES else value.strip()
        for name, value in zip(COLUMNS, row)
    }
    return validated_data(CreateBudgetSerializer, raw)


class Command(BaseCommand):
    help = "Load project budgets from a CSV file"

    def add_arguments(self, parser):
        parser.add_argument("file_path", type=str)
        parser.add_argument(
            "--replace",
            action="store_true",
            help="Overwrite budgets whose project id already exists",
        )

    def handle(self, *args, **kwargs):
        file_path = kwargs["file_path"]
        repository = BudgetRepository()
        inserted = updated = skipped = 0

        try:
            with open(file_path, newline="") as file:
                rows = list(csv.reader(file, delimiter=","))
        except OSError as exc:
            raise CommandError(f"Cannot read {file_path}: {exc}") from exc

        with transaction.atomic():
            # Line 1 is the header
            for line_number, row in enumerate(rows[1:], start=2):
                if not any(value.strip() for value in row):
                    continue
                try:
                    fields = parse_row(row)
                except ValueError as exc:
                    raise CommandError(f"Line {line_number}: {exc}") from exc
                except InvalidInputError as exc:
                    raise CommandError(f"Line {line_number}: {exc.message}") from exc

                project_id = fields["project_id"]
                if repository.exists(project_id):
                    if not kwargs["replace"]:
                        self.stderr.write(
                            f"Skipped existing Project ID: {project_id}"
                        )
                        skipped += 1
                        continue
                    repository.update(project_id, fields)
                    updated += 1
                    continue

                repository.insert(fields)
                inserted += 1
                self.stdout.write(f"Inserted Project ID: {project_id}")

        self.stdout.write(
            self.style.SUCCESS(
                f"Done: {inserted} inserted, {updated} updated, {skipped} skipped"
            )
        )
