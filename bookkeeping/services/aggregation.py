"""
Pure aggregation over transaction records.

Nothing here touches the database. Callers load the records
(a queryset, a list of dicts, anything iterable) and pass them in.
"""
from dataclasses import dataclass
from decimal import Decimal
from collections.abc import Mapping

INCOME = 'income'
EXPENSE = 'expense'


@dataclass(frozen=True)
class AggregateResult:
    total_income: Decimal = Decimal('0.00')
    total_expenses: Decimal = Decimal('0.00')
    income_count: int = 0
    expense_count: int = 0

    @property
    def net_income(self):
        return self.total_income - self.total_expenses

    @property
    def total_transactions(self):
        return self.income_count + self.expense_count

    def as_dict(self):
        return {
            'total_income': self.total_income,
            'total_expenses': self.total_expenses,
            'net_income': self.net_income,
            'income_count': self.income_count,
            'expense_count': self.expense_count,
            'total_transactions': self.total_transactions,
        }


def _read(record):
    """
    Return (type, amount) from either the wire form
    {'type': ..., 'amount': ...} or a Transaction model instance.
    """
    if isinstance(record, Mapping):
        tx_type = record.get('type', record.get('transaction_type'))
        amount = record['amount']
    else:
        tx_type = record.transaction_type
        amount = record.amount

    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return tx_type, amount


def aggregate(transactions):
    """
    Reduce transaction records into income, expense and net totals.

    The sign of each contribution comes from the record type only.
    Empty input gives an all-zero result.
    """
    total_income = Decimal('0.00')
    total_expenses = Decimal('0.00')
    income_count = 0
    expense_count = 0

    for record in transactions:
        tx_type, amount = _read(record)
        if tx_type == INCOME:
            total_income += amount
            income_count += 1
        elif tx_type == EXPENSE:
            total_expenses += amount
            expense_count += 1

    return AggregateResult(
        total_income=total_income,
        total_expenses=total_expenses,
        income_count=income_count,
        expense_count=expense_count,
    )
