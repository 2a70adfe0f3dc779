from django.db import models


class ProjectBudget(models.Model):
    project_id = models.BigIntegerField(primary_key=True, db_column="projectId")
    project_name = models.CharField(max_length=255, db_column="projectName")
    year = models.IntegerField()
    currency = models.CharField(max_length=3)
    initial_budget_local = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, db_column="initialBudgetLocal"
    )
    budget_usd = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, db_column="budgetUsd"
    )
    initial_schedule_estimate_months = models.IntegerField(
        null=True, db_column="initialScheduleEstimateMonths"
    )
    adjusted_schedule_estimate_months = models.IntegerField(
        null=True, db_column="adjustedScheduleEstimateMonths"
    )
    contingency_rate = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, db_column="contingencyRate"
    )
    escalation_rate = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, db_column="escalationRate"
    )
    final_budget_usd = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, db_column="finalBudgetUsd"
    )

    class Meta:
        db_table = "project"
        indexes = [
            models.Index(fields=["project_name", "year"], name="project_name_year_idx")
        ]

    def __repr__(self) -> str:
        return f"({self.project_id} / {self.project_name} / {self.year})"
