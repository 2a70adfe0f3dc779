from decimal import ROUND_HALF_UP

from rest_framework import serializers

from budget.constants import CENT, MAX_PROJECT_ID


class RoundedDecimalField(serializers.DecimalField):
    """Decimal rounded half-up to cents before precision is checked."""

    def validate_precision(self, value):
        # values this large fail max_digits anyway
        if value.adjusted() < self.max_digits:
            value = value.quantize(CENT, rounding=ROUND_HALF_UP)
        return super().validate_precision(value)


def decimal_field(max_digits: int) -> serializers.DecimalField:
    return RoundedDecimalField(
        max_digits=max_digits, decimal_places=2, required=False, allow_null=True
    )


class BudgetFieldsSerializer(serializers.Serializer):
    project_name = serializers.CharField(max_length=255)
    year = serializers.IntegerField(min_value=1, max_value=9999)
    currency = serializers.CharField(min_length=3, max_length=3)
    initial_budget_local = decimal_field(12)
    budget_usd = decimal_field(12)
    initial_schedule_estimate_months = serializers.IntegerField(
        required=False, allow_null=True, min_value=0
    )
    adjusted_schedule_estimate_months = serializers.IntegerField(
        required=False, allow_null=True, min_value=0
    )
    contingency_rate = decimal_field(5)
    escalation_rate = decimal_field(5)
    final_budget_usd = decimal_field(12)

    def validate_currency(self, value):
        if not value.isalpha():
            raise serializers.ValidationError("Currency must be a 3-letter code.")
        return value.upper()


class CreateBudgetSerializer(BudgetFieldsSerializer):
    project_id = serializers.IntegerField(min_value=1, max_value=MAX_PROJECT_ID)


class CurrencyConversionSerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=1, max_value=9999)
    project_name = serializers.CharField(max_length=255)
    currency = serializers.CharField()
