from decimal import ROUND_HALF_UP

from rest_framework import serializers
from .models import Transaction


def naira_field(help_text, **kwargs):
    """
    Monetary output field, rounded to kobo
    """
    return serializers.DecimalField(
        max_digits=18, decimal_places=2,
        rounding=ROUND_HALF_UP,
        help_text=help_text,
        **kwargs
    )


# ======================================================
# Transaction serializers
class TransactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Transaction
        fields = [
            'id', 'transaction_type', 'category', 'amount', 'description',
            'transaction_date', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            'transaction_date': {'required': False},
        }

    def validate(self, data):
        """
        Category must belong to the transaction type
        """
        instance = getattr(self, 'instance', None)
        tx_type = data.get('transaction_type', getattr(instance, 'transaction_type', None))
        category = data.get('category', getattr(instance, 'category', None))

        if category not in Transaction.categories_for(tx_type):
            raise serializers.ValidationError({
                'category': f"'{category}' is not a valid {tx_type} category."
            })
        return data

    def create(self, validated_data):
        # Automatically set user from request context
        validated_data['user'] = self.context['request'].user
        return super().create(validated_data)


class TransactionListSerializer(serializers.ModelSerializer):
    class Meta:
        model = Transaction
        fields = [
            'id',
            'transaction_type',
            'category',
            'amount',
            'transaction_date',
        ]


# ======================================================
# Summary serializers
class AggregateSerializer(serializers.Serializer):
    currency = serializers.CharField(default='NGN')
    total_income = naira_field("Sum of income amounts in Naira")
    total_expenses = naira_field("Sum of expense amounts in Naira")
    net_income = naira_field("Income minus expenses in Naira, may be negative")
    income_count = serializers.IntegerField()
    expense_count = serializers.IntegerField()
    total_transactions = serializers.IntegerField()


class DailySummarySerializer(AggregateSerializer):
    date = serializers.DateField()


class DateRangeSummarySerializer(AggregateSerializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()


# very important serializer below
class TaxSummarySerializer(serializers.Serializer):
    """
    Serializer for the tax estimate response.

    Individual accounts use the simplified step bands (0% up to
    ₦800,000, then 7% to 21% on the entire net income).
    Business accounts use a flat 21% rate.
    """
    classification = serializers.ChoiceField(
        choices=['individual', 'business'],
        help_text="Account type the estimate was computed for"
    )
    currency = serializers.CharField(default='NGN')
    total_income = naira_field("Total income in Naira")
    total_expenses = naira_field("Total expenses in Naira")
    net_income = naira_field("Net income (income - expenses) in Naira")
    applied_rate = serializers.FloatField(
        help_text="Rate applied to the entire net income (0-1)"
    )
    estimated_tax = naira_field("Estimated tax liability in Naira")
    is_exempt = serializers.BooleanField(
        help_text="True for individuals below the ₦800,000 threshold"
    )
    exemption_threshold = naira_field("Annual exemption threshold for individuals")
    tax_regime = serializers.CharField()
    calculation_method = serializers.CharField(
        help_text="Tax calculation approach used"
    )
    disclaimer = serializers.CharField(
        help_text="Legal disclaimer - not an official tax filing"
    )
    period_start = serializers.DateField(
        required=False, allow_null=True,
        help_text="Start date of reporting period"
    )
    period_end = serializers.DateField(
        required=False, allow_null=True,
        help_text="End date of reporting period"
    )
