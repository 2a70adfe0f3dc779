from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ProjectBudget",
            fields=[
                (
                    "project_id",
                    models.BigIntegerField(
                        db_column="projectId", primary_key=True, serialize=False
                    ),
                ),
                (
                    "project_name",
                    models.CharField(db_column="projectName", max_length=255),
                ),
                ("year", models.IntegerField()),
                ("currency", models.CharField(max_length=3)),
                (
                    "initial_budget_local",
                    models.DecimalField(
                        db_column="initialBudgetLocal",
                        decimal_places=2,
                        max_digits=12,
                        null=True,
                    ),
                ),
                (
                    "budget_usd",
                    models.DecimalField(
                        db_column="budgetUsd",
                        decimal_places=2,
                        max_digits=12,
                        null=True,
                    ),
                ),
                (
                    "initial_schedule_estimate_months",
                    models.IntegerField(
                        db_column="initialScheduleEstimateMonths", null=True
                    ),
                ),
                (
                    "adjusted_schedule_estimate_months",
                    models.IntegerField(
                        db_column="adjustedScheduleEstimateMonths", null=True
                    ),
                ),
                (
                    "contingency_rate",
                    models.DecimalField(
                        db_column="contingencyRate",
                        decimal_places=2,
                        max_digits=5,
                        null=True,
                    ),
                ),
                (
                    "escalation_rate",
                    models.DecimalField(
                        db_column="escalationRate",
                        decimal_places=2,
                        max_digits=5,
                        null=True,
                    ),
                ),
                (
                    "final_budget_usd",
                    models.DecimalField(
                        db_column="finalBudgetUsd",
                        decimal_places=2,
                        max_digits=12,
                        null=True,
                    ),
                ),
            ],
            options={
                "db_table": "project",
                "indexes": [
                    models.Index(
                        fields=["project_name", "year"],
                        name="project_name_year_idx",
                    )
                ],
            },
        ),
    ]
