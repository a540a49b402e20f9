"""
Summary calculation services for bookkeeping API.

All calculations are performed dynamically from Transaction data.
No summary data is stored in the database.
All queries are filtered by authenticated user for data isolation.
"""
from datetime import date

from bookkeeping.models import Transaction
from .aggregation import aggregate
from .tax.estimator import build_tax_summary


def user_transactions(user, start_date: date = None, end_date: date = None, tx_type=None):
    """
    Active (not soft-deleted) transactions of a user, optionally filtered
    by an inclusive date range and by type.
    """
    queryset = Transaction.objects.filter(user=user, is_deleted=False)

    if tx_type in ['income', 'expense']:
        queryset = queryset.filter(transaction_type=tx_type)
    if start_date:
        queryset = queryset.filter(transaction_date__gte=start_date)
    if end_date:
        queryset = queryset.filter(transaction_date__lte=end_date)

    return queryset


def daily_summary(user, target_date: date):
    """
    Calculate daily income, expense, and net cash for a specific date.

    Returns:
        dict with date, currency, total_income, total_expenses, net_income
        and transaction counts
    """
    queryset = user_transactions(user, start_date=target_date, end_date=target_date)
    result = aggregate(queryset.only('transaction_type', 'amount'))

    return {
        'date': target_date,
        'currency': 'NGN',
        **result.as_dict(),
    }


def date_range_summary(user, start_date: date, end_date: date):
    """
    Calculate total income, expense, and net income for a date range.

    Args:
        user: Authenticated user
        start_date: Start of date range
        end_date: End of date range (inclusive)
    """
    queryset = user_transactions(user, start_date=start_date, end_date=end_date)
    result = aggregate(queryset.only('transaction_type', 'amount'))

    return {
        'start_date': start_date,
        'end_date': end_date,
        'currency': 'NGN',
        **result.as_dict(),
    }


def tax_summary(user, classification, start_date: date = None, end_date: date = None):
    """
    Aggregate the user's transactions for the period and estimate tax
    under the given account classification.

    Without a period, every active transaction is used.
    """
    queryset = user_transactions(user, start_date=start_date, end_date=end_date)
    result = aggregate(queryset.only('transaction_type', 'amount'))

    summary = build_tax_summary(result, classification)
    summary['currency'] = 'NGN'
    summary['period_start'] = start_date
    summary['period_end'] = end_date
    return summary
