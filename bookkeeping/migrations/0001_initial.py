import decimal
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Transaction',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('transaction_type', models.CharField(choices=[('income', 'Income'), ('expense', 'Expense')], max_length=10)),
                ('category', models.CharField(choices=[('salary', 'Salary'), ('business_revenue', 'Business Revenue'), ('freelance', 'Freelance'), ('investment', 'Investment'), ('other_income', 'Other Income'), ('rent', 'Rent'), ('utilities', 'Utilities'), ('transportation', 'Transportation'), ('food', 'Food'), ('office_supplies', 'Office Supplies'), ('marketing', 'Marketing'), ('professional_services', 'Professional Services'), ('equipment', 'Equipment'), ('other_expense', 'Other Expense')], max_length=50)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('description', models.TextField(blank=True, null=True)),
                ('transaction_date', models.DateField(default=django.utils.timezone.localdate)),
                ('is_deleted', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='transactions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-transaction_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'transaction_date'], name='bk_tx_user_date_idx'),
                    models.Index(fields=['user', 'is_deleted'], name='bk_tx_user_deleted_idx'),
                    models.Index(fields=['transaction_type'], name='bk_tx_type_idx'),
                ],
            },
        ),
    ]
