"""
Serializers for reports app.

The query serializer validates the time range; the row serializers
describe the report payloads. Report rows are built by the services
layer as plain dictionaries.
"""

from rest_framework import serializers

from .services import months_ago


class ReportPeriodQuerySerializer(serializers.Serializer):
    """
    Validate the time range query parameter of report endpoints.

    Query Parameters:
        months (int): Only include purchases from the last N months.
            Omit for all time.

    Note:
        A valid 'months' is converted to a 'since' cutoff date.
    """

    months = serializers.IntegerField(
        min_value=1,
        max_value=120,
        required=False,
        help_text='Number of months to look back'
    )

    def validate(self, attrs):
        months = attrs.get('months')
        attrs['since'] = months_ago(months) if months else None
        return attrs


class UnitCostDisplaySerializer(serializers.Serializer):
    budget = serializers.CharField()
    actual_cost = serializers.CharField()
    cost_percentage = serializers.CharField()
    status = serializers.ChoiceField(choices=['on_track', 'warning', 'over_budget'])
    status_label = serializers.CharField()


class UnitCostRowSerializer(serializers.Serializer):
    """Unit cost report row."""
    unit_id = serializers.UUIDField()
    unit_name = serializers.CharField()
    unit_type = serializers.CharField()
    budget = serializers.DecimalField(max_digits=12, decimal_places=2)
    actual_cost = serializers.DecimalField(max_digits=18, decimal_places=2)
    cost_percentage = serializers.DecimalField(max_digits=20, decimal_places=2)
    display = UnitCostDisplaySerializer()


class CategorySpendingDisplaySerializer(serializers.Serializer):
    total_spent = serializers.CharField()
    average_purchase = serializers.CharField()


class CategorySpendingRowSerializer(serializers.Serializer):
    """Category spending report row."""
    category = serializers.CharField()
    total_spent = serializers.DecimalField(max_digits=18, decimal_places=2)
    purchase_count = serializers.IntegerField()
    average_purchase = serializers.DecimalField(max_digits=18, decimal_places=2)
    display = CategorySpendingDisplaySerializer()


class BudgetPlanDisplaySerializer(serializers.Serializer):
    fraction = serializers.CharField()
    budget_amount = serializers.CharField()
    spent_amount = serializers.CharField()
    remaining = serializers.CharField()


class BudgetPlanRowSerializer(serializers.Serializer):
    """Category budget plan row."""
    category = serializers.CharField()
    fraction = serializers.DecimalField(max_digits=5, decimal_places=4)
    budget_amount = serializers.DecimalField(max_digits=18, decimal_places=2)
    spent_amount = serializers.DecimalField(max_digits=18, decimal_places=2)
    remaining = serializers.DecimalField(max_digits=18, decimal_places=2)
    display = BudgetPlanDisplaySerializer()


class MonthlyTrendRowSerializer(serializers.Serializer):
    """Spending in one calendar month."""
    month = serializers.CharField()
    label = serializers.CharField()
    total_spent = serializers.DecimalField(max_digits=18, decimal_places=2)
    purchase_count = serializers.IntegerField()
    display = serializers.DictField(child=serializers.CharField())


class ProjectSummarySerializer(serializers.Serializer):
    """Project dashboard summary."""
    total_budget = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_spent = serializers.DecimalField(max_digits=18, decimal_places=2)
    remaining_budget = serializers.DecimalField(max_digits=18, decimal_places=2)
    spent_percentage = serializers.DecimalField(max_digits=20, decimal_places=2)
    general_spent = serializers.DecimalField(max_digits=18, decimal_places=2)
    partner_count = serializers.IntegerField()
    unit_count = serializers.IntegerField()
    purchase_count = serializers.IntegerField()
    active_units = serializers.IntegerField()
    completed_units = serializers.IntegerField()
    display = serializers.DictField(child=serializers.CharField())


class PartnerBalanceSerializer(serializers.Serializer):
    """Partner contribution against spending."""
    partner_id = serializers.UUIDField()
    partner_name = serializers.CharField()
    status = serializers.CharField()
    total_contribution = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_spent = serializers.DecimalField(max_digits=18, decimal_places=2)
    balance = serializers.DecimalField(max_digits=18, decimal_places=2)


class BudgetAlertSerializer(serializers.Serializer):
    """Budget alert."""
    type = serializers.ChoiceField(choices=['warning', 'info'])
    code = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField()
    action = serializers.CharField()


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
