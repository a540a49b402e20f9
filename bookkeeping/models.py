import uuid
from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal

from account.models import User


class Transaction(models.Model):
    """
    Transaction model - can be income or expense
    The category must belong to the transaction type
    """
    TRANSACTION_TYPES = [
        ('income', 'Income'),
        ('expense', 'Expense'),
    ]

    INCOME_CATEGORIES = [
        ('salary', 'Salary'),
        ('business_revenue', 'Business Revenue'),
        ('freelance', 'Freelance'),
        ('investment', 'Investment'),
        ('other_income', 'Other Income'),
    ]

    EXPENSE_CATEGORIES = [
        ('rent', 'Rent'),
        ('utilities', 'Utilities'),
        ('transportation', 'Transportation'),
        ('food', 'Food'),
        ('office_supplies', 'Office Supplies'),
        ('marketing', 'Marketing'),
        ('professional_services', 'Professional Services'),
        ('equipment', 'Equipment'),
        ('other_expense', 'Other Expense'),
    ]

    CATEGORIES = INCOME_CATEGORIES + EXPENSE_CATEGORIES

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='transactions')
    transaction_type = models.CharField(max_length=10, choices=TRANSACTION_TYPES)
    category = models.CharField(max_length=50, choices=CATEGORIES)
    amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    description = models.TextField(blank=True, null=True)
    transaction_date = models.DateField(default=timezone.localdate)
    is_deleted = models.BooleanField(default=False)  # Soft delete
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-transaction_date', '-created_at']
        indexes = [
            models.Index(fields=['user', 'transaction_date'], name='bk_tx_user_date_idx'),
            models.Index(fields=['user', 'is_deleted'], name='bk_tx_user_deleted_idx'),
            models.Index(fields=['transaction_type'], name='bk_tx_type_idx'),
        ]

    def __str__(self):
        return f"{self.transaction_type.title()} - {self.transaction_date} - {self.amount}"

    @classmethod
    def categories_for(cls, transaction_type):
        """
        Valid category values for a transaction type
        """
        if transaction_type == 'income':
            return [value for value, _ in cls.INCOME_CATEGORIES]
        if transaction_type == 'expense':
            return [value for value, _ in cls.EXPENSE_CATEGORIES]
        return []
