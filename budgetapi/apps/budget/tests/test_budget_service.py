"""Tests for BudgetService operations.

Runs against the test database with the rate provider stubbed out.
"""

from decimal import Decimal
from unittest.mock import Mock, patch

from django.test import TestCase
from parameterized import parameterized

from budget.entities import ConvertedProjectBudgetModel
from budget.exceptions import (
    ConflictError,
    ConversionFailedError,
    InvalidInputError,
    ProjectNotFoundError,
    StorageError,
)
from budget.models import ProjectBudget
from budget.repository import BudgetRepository
from budget.services import BudgetService, build_budget_service
from budget.tests.factories import budget_fields
from rates.client import ExchangeRateClient
from rates.exceptions import (
    RateParseError,
    RateProviderNetworkError,
    RateProviderResponseError,
    RateProviderTimeout,
    RateUnavailableError,
)

NEW_BUDGET = {
    "project_id": 99999,
    "project_name": "Test Project",
    "year": 2025,
    "currency": "USD",
    "initial_budget_local": 100000,
    "budget_usd": 100000,
    "initial_schedule_estimate_months": 12,
    "adjusted_schedule_estimate_months": 12,
    "contingency_rate": 5.0,
    "escalation_rate": 3.0,
    "final_budget_usd": 108000,
}


class BudgetServiceTestCase(TestCase):
    @classmethod
    def setUpTestData(cls):
        ProjectBudget.objects.create(**budget_fields())

    def setUp(self):
        self.rate_provider = Mock(spec=ExchangeRateClient)
        self.rate_provider.get_rate.return_value = Decimal("6.7812")
        self.service = BudgetService(
            repository=BudgetRepository(), rate_provider=self.rate_provider
        )


class TestConvertBudget(BudgetServiceTestCase):
    @parameterized.expand(
        [
            ("missing_year", None, "Sopaipillas Land Rover", "TTD"),
            ("missing_name", 2021, None, "TTD"),
            ("missing_currency", 2021, "Sopaipillas Land Rover", None),
            ("blank_name", 2021, "  ", "TTD"),
            ("blank_currency", 2021, "Sopaipillas Land Rover", ""),
            ("all_missing", None, None, None),
        ]
    )
    def test_missing_input_is_invalid(self, _, year, project_name, currency):
        with self.assertRaises(InvalidInputError):
            self.service.convert_budget(year, project_name, currency)

        self.rate_provider.get_rate.assert_not_called()

    def test_non_numeric_year_is_invalid(self):
        with self.assertRaises(InvalidInputError) as ctx:
            self.service.convert_budget("twenty", "Sopaipillas Land Rover", "TTD")

        self.assertIn("year", ctx.exception.errors)

    def test_other_currency_returns_stored_budget(self):
        budgets = self.service.convert_budget(2021, "Sopaipillas Land Rover", "USD")

        self.assertEqual(len(budgets), 1)
        self.assertNotIsInstance(budgets[0], ConvertedProjectBudgetModel)
        self.assertNotIn("final_budget_ttd", budgets[0].model_dump())
        self.assertEqual(budgets[0].model_dump(), budget_fields())
        self.rate_provider.get_rate.assert_not_called()

    def test_lowercase_ttd_converts_final_budget(self):
        budgets = self.service.convert_budget("2021", "Sopaipillas Land Rover", "ttd")

        self.assertEqual(len(budgets), 1)
        # 247106.75 * 6.7812 = 1675680.2931
        self.assertEqual(budgets[0].final_budget_ttd, Decimal("1675680.29"))
        self.assertEqual(budgets[0].final_budget_usd, Decimal("247106.75"))
        self.rate_provider.get_rate.assert_called_once_with("USD", "TTD")

    def test_conversion_leaves_stored_budget_untouched(self):
        self.service.convert_budget(2021, "Sopaipillas Land Rover", "TTD")

        stored = self.service.get_by_id(1)[0]
        self.assertEqual(stored.model_dump(), budget_fields())

    @parameterized.expand([("USD",), ("TTD",), ("ttd",), ("EUR",)])
    def test_unknown_project_is_not_found(self, currency):
        with self.assertRaises(ProjectNotFoundError):
            self.service.convert_budget(2021, "Nonexistent Project", currency)

        self.rate_provider.get_rate.assert_not_called()

    @parameterized.expand(
        [
            ("timeout", RateProviderTimeout(5.0)),
            ("status", RateProviderResponseError(500, "Internal Server Error")),
            ("parse", RateParseError("bad body")),
            ("unavailable", RateUnavailableError("TTD")),
            ("network", RateProviderNetworkError("connection refused")),
        ]
    )
    def test_rate_failure_is_conversion_failed(self, _, error):
        self.rate_provider.get_rate.side_effect = error

        with self.assertRaises(ConversionFailedError) as ctx:
            self.service.convert_budget(2021, "Sopaipillas Land Rover", "TTD")

        self.assertEqual(ctx.exception.message, "Currency conversion failed")
        self.assertIs(ctx.exception.__cause__, error)

    def test_budget_without_final_amount_converts_to_zero(self):
        ProjectBudget.objects.create(
            **budget_fields(project_id=2, project_name="Empty", final_budget_usd=None)
        )

        budgets = self.service.convert_budget(2021, "Empty", "TTD")

        self.assertEqual(budgets[0].final_budget_ttd, Decimal("0.00"))
        self.assertIsNone(budgets[0].final_budget_usd)
        self.rate_provider.get_rate.assert_called_once_with("USD", "TTD")

    def test_budget_without_final_amount_still_needs_a_rate(self):
        ProjectBudget.objects.create(
            **budget_fields(project_id=2, project_name="Empty", final_budget_usd=None)
        )
        self.rate_provider.get_rate.side_effect = RateProviderTimeout(5.0)

        with self.assertRaises(ConversionFailedError):
            self.service.convert_budget(2021, "Empty", "TTD")

    def test_storage_error_propagates(self):
        repository = Mock(spec=BudgetRepository)
        repository.find_by_name_and_year.side_effect = StorageError()
        service = BudgetService(repository=repository, rate_provider=self.rate_provider)

        with self.assertRaises(StorageError):
            service.convert_budget(2021, "Sopaipillas Land Rover", "TTD")


class TestGetById(BudgetServiceTestCase):
    def test_returns_list_with_budget(self):
        budgets = self.service.get_by_id(1)

        self.assertEqual([budget.project_id for budget in budgets], [1])

    @parameterized.expand(
        [("unknown", 2), ("too_large", "999992578963145988889"), ("text", "abc")]
    )
    def test_not_found(self, _, project_id):
        with self.assertRaises(ProjectNotFoundError):
            self.service.get_by_id(project_id)


class TestAddBudget(BudgetServiceTestCase):
    def test_add_then_get_returns_same_fields(self):
        project_id = self.service.add_budget(NEW_BUDGET)

        self.assertEqual(project_id, 99999)
        stored = self.service.get_by_id(project_id)[0].model_dump()
        for name, value in NEW_BUDGET.items():
            self.assertEqual(stored[name], value, name)

    def test_optional_fields_default_to_null(self):
        self.service.add_budget(
            {"project_id": 5, "project_name": "Bare", "year": 2024, "currency": "eur"}
        )

        stored = self.service.get_by_id(5)[0]
        self.assertEqual(stored.currency, "EUR")
        self.assertIsNone(stored.final_budget_usd)

    def test_existing_id_is_conflict(self):
        with self.assertRaises(ConflictError) as ctx:
            self.service.add_budget({**NEW_BUDGET, "project_id": 1})

        self.assertEqual(ctx.exception.message, "Project with ID 1 already exists")
        self.assertEqual(self.service.get_by_id(1)[0].model_dump(), budget_fields())

    def test_adding_twice_is_conflict(self):
        self.service.add_budget(NEW_BUDGET)

        with self.assertRaises(ConflictError):
            self.service.add_budget(NEW_BUDGET)

    @parameterized.expand(
        [("project_id",), ("project_name",), ("year",), ("currency",)]
    )
    def test_missing_required_field_is_invalid(self, field):
        fields = {**NEW_BUDGET}
        del fields[field]

        with self.assertRaises(InvalidInputError):
            self.service.add_budget(fields)

        self.assertFalse(ProjectBudget.objects.filter(project_id=99999).exists())

    @parameterized.expand(
        [
            ("year", "soon"),
            ("currency", "DOLLARS"),
            ("budget_usd", "lots"),
            ("final_budget_usd", "12345678901.00"),
            ("contingency_rate", "999.995"),
            ("project_id", -4),
        ]
    )
    def test_malformed_field_is_invalid(self, field, value):
        with self.assertRaises(InvalidInputError) as ctx:
            self.service.add_budget({**NEW_BUDGET, field: value})

        self.assertIn(field, ctx.exception.errors)

    def test_invalid_fields_are_named_in_camel_case(self):
        with self.assertRaises(InvalidInputError) as ctx:
            self.service.add_budget({**NEW_BUDGET, "budget_usd": "lots"})

        self.assertEqual(ctx.exception.message, "Invalid fields: budgetUsd")

    @parameterized.expand(
        [
            ("final_budget_usd", 108000.125, Decimal("108000.13")),
            ("final_budget_usd", "1.005", Decimal("1.01")),
            ("budget_usd", 0.30000000000000004, Decimal("0.30")),
            ("contingency_rate", "2.194", Decimal("2.19")),
            ("escalation_rate", "-3.465", Decimal("-3.47")),
        ]
    )
    def test_extra_decimal_places_are_rounded_half_up(self, field, value, expected):
        self.service.add_budget({**NEW_BUDGET, field: value})

        stored = self.service.get_by_id(99999)[0].model_dump()
        self.assertEqual(stored[field], expected)

    def test_non_mapping_payload_is_invalid(self):
        with self.assertRaises(InvalidInputError):
            self.service.add_budget([NEW_BUDGET])

    @parameterized.expand([("exists",), ("insert",)])
    def test_storage_error_propagates(self, operation):
        repository = Mock(spec=BudgetRepository)
        repository.exists.return_value = False
        getattr(repository, operation).side_effect = StorageError()
        service = BudgetService(repository=repository, rate_provider=self.rate_provider)

        with self.assertRaises(StorageError):
            service.add_budget(NEW_BUDGET)


class TestUpdateBudget(BudgetServiceTestCase):
    def test_updates_existing_budget(self):
        self.service.update_budget(
            1,
            {
                "project_name": "Updated Test Project",
                "year": 2026,
                "currency": "USD",
                "final_budget_usd": 165000,
            },
        )

        stored = self.service.get_by_id(1)[0]
        self.assertEqual(stored.project_name, "Updated Test Project")
        self.assertEqual(stored.year, 2026)
        self.assertEqual(stored.final_budget_usd, Decimal("165000"))
        self.assertIsNone(stored.budget_usd)

    def test_unknown_id_is_not_found_and_creates_nothing(self):
        with self.assertRaises(ProjectNotFoundError):
            self.service.update_budget(
                "23467676767676767",
                {"project_name": "Humitas", "year": 2025, "currency": "EUR"},
            )

        self.assertEqual(ProjectBudget.objects.count(), 1)

    @parameterized.expand(
        [
            ("no_id", None, {"project_name": "A", "year": 2025, "currency": "USD"}),
            ("no_name", 1, {"year": 2025, "currency": "USD"}),
            ("no_year", 1, {"project_name": "A", "currency": "USD"}),
            ("no_currency", 1, {"project_name": "A", "year": 2025}),
        ]
    )
    def test_missing_fields_are_invalid(self, _, project_id, fields):
        with self.assertRaises(InvalidInputError):
            self.service.update_budget(project_id, fields)

    def test_storage_error_propagates(self):
        repository = Mock(spec=BudgetRepository)
        repository.update.side_effect = StorageError()
        service = BudgetService(repository=repository, rate_provider=self.rate_provider)

        with self.assertRaises(StorageError):
            service.update_budget(
                1, {"project_name": "A", "year": 2025, "currency": "USD"}
            )


class TestDeleteBudget(BudgetServiceTestCase):
    def test_delete_twice_succeeds_once(self):
        self.service.delete_budget(1)

        with self.assertRaises(ProjectNotFoundError):
            self.service.delete_budget(1)

        self.assertFalse(ProjectBudget.objects.exists())

    def test_unknown_id_is_not_found(self):
        with self.assertRaises(ProjectNotFoundError):
            self.service.delete_budget(99998)

    def test_storage_error_propagates(self):
        repository = Mock(spec=BudgetRepository)
        repository.delete.side_effect = StorageError()
        service = BudgetService(repository=repository, rate_provider=self.rate_provider)

        with self.assertRaises(StorageError):
            service.delete_budget(1)


class TestBuildBudgetService(TestCase):
    def test_wires_default_collaborators(self):
        with patch.object(ExchangeRateClient, "from_settings") as from_settings:
            service = build_budget_service()

        self.assertIsInstance(service.repository, BudgetRepository)
        self.assertIs(service.conversion.rate_provider, from_settings.return_value)
