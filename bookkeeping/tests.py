from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase, TestCase
from rest_framework.test import APITestCase
from rest_framework import status

from account.models import Profile, User
from .models import Transaction
from .services.aggregation import AggregateResult, aggregate
from .services.tax.estimator import (
    applicable_rate,
    build_tax_summary,
    estimate,
    is_tax_exempt,
)


class AggregateTest(SimpleTestCase):
    """Test the pure transaction aggregation"""

    def test_empty_input(self):
        """Test that no transactions give an all-zero result"""
        result = aggregate([])
        self.assertEqual(result.total_income, Decimal('0'))
        self.assertEqual(result.total_expenses, Decimal('0'))
        self.assertEqual(result.net_income, Decimal('0'))
        self.assertEqual(result.total_transactions, 0)

    def test_totals_per_type(self):
        """Test that totals are the per-type sums of amount"""
        transactions = [
            {'type': 'income', 'amount': 1000},
            {'type': 'income', 'amount': '250.50'},
            {'type': 'expense', 'amount': Decimal('300.25')},
            {'type': 'expense', 'amount': 0},
        ]
        result = aggregate(transactions)
        self.assertEqual(result.total_income, Decimal('1250.50'))
        self.assertEqual(result.total_expenses, Decimal('300.25'))
        self.assertEqual(result.net_income, Decimal('950.25'))
        self.assertEqual(result.income_count, 2)
        self.assertEqual(result.expense_count, 2)

    def test_net_income_can_be_negative(self):
        """Test that expenses above income give a negative net income"""
        result = aggregate([
            {'type': 'income', 'amount': 100},
            {'type': 'expense', 'amount': 400},
        ])
        self.assertEqual(result.net_income, Decimal('-300'))

    def test_order_does_not_matter(self):
        """Test that reordering the input leaves the result unchanged"""
        transactions = [
            {'type': 'expense', 'amount': '10.10'},
            {'type': 'income', 'amount': '99.99'},
            {'type': 'expense', 'amount': '0.01'},
            {'type': 'income', 'amount': '5000'},
        ]
        self.assertEqual(aggregate(transactions), aggregate(list(reversed(transactions))))
        self.assertEqual(aggregate(transactions), aggregate(transactions))

    def test_float_amounts_stay_exact(self):
        """Test that float amounts are summed without binary drift"""
        result = aggregate([
            {'type': 'income', 'amount': 0.1},
            {'type': 'income', 'amount': 0.2},
        ])
        self.assertEqual(result.total_income, Decimal('0.3'))

    def test_model_instances(self):
        """Test aggregating unsaved Transaction instances"""
        transactions = [
            Transaction(transaction_type='income', category='salary', amount=Decimal('500.00')),
            Transaction(transaction_type='expense', category='rent', amount=Decimal('200.00')),
        ]
        result = aggregate(transactions)
        self.assertEqual(result.net_income, Decimal('300.00'))

    def test_unknown_type_is_ignored(self):
        """Test that a record with an unknown type counts towards neither total"""
        result = aggregate([
            {'type': 'income', 'amount': 100},
            {'type': 'transfer', 'amount': 50},
        ])
        self.assertEqual(result, AggregateResult(total_income=Decimal('100'), income_count=1))


class EstimateTest(SimpleTestCase):
    """Test the tax estimate for both account types"""

    def test_individual_exempt_band(self):
        """Test that income up to and including 800,000 is not taxed"""
        self.assertEqual(estimate(0, 'individual'), Decimal('0'))
        self.assertEqual(estimate(800000, 'individual'), Decimal('0'))
        self.assertEqual(estimate(-50000, 'individual'), Decimal('0'))

    def test_individual_loss_is_unsigned_zero(self):
        """Test that a net loss gives 0, not -0"""
        tax = estimate(Decimal('-500.00'), 'individual')
        self.assertFalse(tax.is_signed())
        self.assertEqual(str(tax), '0')

    def test_individual_just_above_exemption(self):
        """Test that 800,000.01 falls into the 7% band"""
        self.assertEqual(
            estimate(800000.01, 'individual'),
            Decimal('800000.01') * Decimal('0.07')
        )
        self.assertAlmostEqual(float(estimate(800000.01, 'individual')), 800000.01 * 0.07, places=6)

    def test_individual_band_boundaries(self):
        """Test that each upper limit is inclusive of the lower rate"""
        cases = [
            ('3200000', '0.07'),
            ('3200000.01', '0.11'),
            ('5000000', '0.11'),
            ('5000000.01', '0.15'),
            ('16000000', '0.15'),
            ('16000000.01', '0.19'),
            ('32000000', '0.19'),
            ('32000000.01', '0.21'),
            ('100000000', '0.21'),
        ]
        for income, rate in cases:
            with self.subTest(income=income):
                self.assertEqual(applicable_rate(income, 'individual'), Decimal(rate))
                self.assertEqual(estimate(income, 'individual'), Decimal(income) * Decimal(rate))

    def test_rate_applies_to_entire_income(self):
        """Test the step schedule taxes the whole amount, not the slice above the limit"""
        self.assertEqual(estimate(5000000, 'individual'), Decimal('550000'))
        self.assertEqual(estimate(Decimal('5000000.01'), 'individual'), Decimal('5000000.01') * Decimal('0.15'))

    def test_business_flat_rate(self):
        """Test that business accounts pay 21% of any net income, including losses"""
        for income in ['0', '1', '800000', '50000000', '-1000', '-0.01']:
            with self.subTest(income=income):
                self.assertEqual(estimate(income, 'business'), Decimal(income) * Decimal('0.21'))
        self.assertEqual(estimate(-1000, 'business'), Decimal('-210'))

    def test_exemption_flag(self):
        """Test the compliance banner threshold"""
        self.assertTrue(is_tax_exempt(799999.99, 'individual'))
        self.assertFalse(is_tax_exempt(800000, 'individual'))
        self.assertFalse(is_tax_exempt(0, 'business'))

    def test_exempt_boundary_scenario(self):
        """Test income 1,000,000 and expense 200,000 lands exactly on the exemption"""
        result = aggregate([
            {'type': 'income', 'amount': 1000000},
            {'type': 'expense', 'amount': 200000},
        ])
        self.assertEqual(result.total_income, Decimal('1000000'))
        self.assertEqual(result.total_expenses, Decimal('200000'))
        self.assertEqual(result.net_income, Decimal('800000'))
        self.assertEqual(estimate(result.net_income, 'individual'), Decimal('0'))

    def test_eleven_percent_scenario(self):
        """Test income 4,000,000 with no expenses falls in the 11% band"""
        result = aggregate([
            {'type': 'income', 'amount': 4000000},
            {'type': 'expense', 'amount': 0},
        ])
        self.assertEqual(result.net_income, Decimal('4000000'))
        self.assertEqual(estimate(result.net_income, 'individual'), Decimal('440000'))

    def test_build_tax_summary(self):
        """Test the summary combines totals and the estimate"""
        result = aggregate([{'type': 'income', 'amount': 2000000}])
        summary = build_tax_summary(result, 'individual')
        self.assertEqual(summary['net_income'], Decimal('2000000'))
        self.assertEqual(summary['estimated_tax'], Decimal('140000'))
        self.assertEqual(summary['applied_rate'], 0.07)
        self.assertFalse(summary['is_exempt'])
        self.assertIn('disclaimer', summary)


class TransactionModelTest(TestCase):
    """Test Transaction model"""

    def setUp(self):
        self.user = User.objects.create_user(
            email='test@example.com',
            password='testpass123'
        )

    def test_create_transaction(self):
        """Test creating a transaction with a default date"""
        transaction = Transaction.objects.create(
            user=self.user,
            transaction_type='income',
            category='salary',
            amount=Decimal('150000.00')
        )
        self.assertIsNotNone(transaction.id)
        self.assertFalse(transaction.is_deleted)
        self.assertIsNotNone(transaction.transaction_date)

    def test_categories_for(self):
        """Test category lists per type"""
        self.assertIn('freelance', Transaction.categories_for('income'))
        self.assertNotIn('rent', Transaction.categories_for('income'))
        self.assertIn('rent', Transaction.categories_for('expense'))
        self.assertEqual(Transaction.categories_for('transfer'), [])


class TransactionAPITest(APITestCase):
    """Test Transaction API endpoints"""

    def setUp(self):
        self.user = User.objects.create_user(
            email='test@example.com',
            password='testpass123'
        )
        self.client.force_authenticate(user=self.user)

    def create_transaction(self, tx_type, category, amount, tx_date='2025-06-15', user=None):
        return Transaction.objects.create(
            user=user or self.user,
            transaction_type=tx_type,
            category=category,
            amount=Decimal(amount),
            transaction_date=tx_date
        )

    def test_create_transaction(self):
        """Test creating a transaction via API"""
        data = {
            'transaction_type': 'expense',
            'category': 'office_supplies',
            'amount': '40500.00',
            'description': 'Paper and pens',
            'transaction_date': '2025-12-21',
        }

        response = self.client.post('/api/transactions/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['amount'], '40500.00')
        self.assertEqual(Transaction.objects.get(id=response.data['id']).user, self.user)

    def test_create_transaction_without_date(self):
        """Test that the date defaults to today"""
        response = self.client.post('/api/transactions/', {
            'transaction_type': 'income',
            'category': 'salary',
            'amount': '1000.00',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNotNone(response.data['transaction_date'])

    def test_category_must_match_type(self):
        """Test that an expense category is rejected for income"""
        response = self.client.post('/api/transactions/', {
            'transaction_type': 'income',
            'category': 'rent',
            'amount': '1000.00',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('category', response.data)

    def test_negative_amount_rejected(self):
        """Test that amounts must not be negative"""
        response = self.client.post('/api/transactions/', {
            'transaction_type': 'expense',
            'category': 'food',
            'amount': '-5.00',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('amount', response.data)

    def test_missing_required_fields(self):
        """Test that category and amount are required"""
        response = self.client.post('/api/transactions/', {
            'transaction_type': 'expense',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('category', response.data)
        self.assertIn('amount', response.data)

    def test_partial_update(self):
        """Test updating only the amount keeps type and category"""
        transaction = self.create_transaction('income', 'freelance', '100.00')
        response = self.client.patch(
            f'/api/transactions/{transaction.id}/', {'amount': '250.00'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        transaction.refresh_from_db()
        self.assertEqual(transaction.amount, Decimal('250.00'))
        self.assertEqual(transaction.category, 'freelance')

    def test_list_transactions(self):
        """Test listing transactions"""
        self.create_transaction('income', 'salary', '100.00')

        response = self.client.get('/api/transactions/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['results']), 1)

    def test_filter_by_type(self):
        """Test filtering transactions by type"""
        self.create_transaction('income', 'salary', '100.00')
        self.create_transaction('expense', 'rent', '50.00')

        response = self.client.get('/api/transactions/?type=income')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['results']), 1)
        self.assertEqual(response.data['results'][0]['transaction_type'], 'income')

    def test_filter_by_date_range(self):
        """Test filtering transactions by an inclusive date range"""
        self.create_transaction('income', 'salary', '100.00', tx_date='2025-01-10')
        self.create_transaction('income', 'salary', '200.00', tx_date='2025-02-10')
        self.create_transaction('income', 'salary', '300.00', tx_date='2025-03-10')

        response = self.client.get('/api/transactions/?start_date=2025-02-10&end_date=2025-03-01')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['results']), 1)
        self.assertEqual(response.data['results'][0]['amount'], '200.00')

    def test_invalid_date_filter(self):
        """Test that a malformed date filter is a bad request"""
        response = self.client.get('/api/transactions/?start_date=15-06-2025')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_soft_delete(self):
        """Test soft delete functionality"""
        transaction = self.create_transaction('income', 'salary', '100.00')

        response = self.client.delete(f'/api/transactions/{transaction.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        # Verify it's not in normal list
        response = self.client.get('/api/transactions/')
        self.assertEqual(len(response.data['results']), 0)

        # Verify it still exists in database
        transaction.refresh_from_db()
        self.assertTrue(transaction.is_deleted)

        response = self.client.get('/api/transactions/deleted/')
        self.assertEqual(len(response.data), 1)

    def test_restore(self):
        """Test restoring a soft-deleted transaction"""
        transaction = self.create_transaction('expense', 'rent', '100.00')
        self.client.delete(f'/api/transactions/{transaction.id}/')

        response = self.client.post(f'/api/transactions/{transaction.id}/restore/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        transaction.refresh_from_db()
        self.assertFalse(transaction.is_deleted)

        # Restoring an active transaction is rejected
        response = self.client.post(f'/api/transactions/{transaction.id}/restore/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_user_isolation(self):
        """Test that users can only see their own transactions"""
        other_user = User.objects.create_user(
            email='other@example.com',
            password='otherpass123'
        )
        other_transaction = self.create_transaction('income', 'salary', '1000.00', user=other_user)

        response = self.client.get('/api/transactions/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['results']), 0)

        response = self.client.get(f'/api/transactions/{other_transaction.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.post(f'/api/transactions/{other_transaction.id}/restore/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_transaction_summary(self):
        """Test transaction summary endpoint"""
        self.create_transaction('income', 'salary', '1000.00')
        self.create_transaction('expense', 'rent', '300.00')
        deleted = self.create_transaction('expense', 'food', '999.00')
        deleted.is_deleted = True
        deleted.save()

        response = self.client.get('/api/transactions/summary/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_income'], '1000.00')
        self.assertEqual(response.data['total_expenses'], '300.00')
        self.assertEqual(response.data['net_income'], '700.00')
        self.assertEqual(response.data['total_transactions'], 2)

    def test_unauthenticated(self):
        """Test that transactions require authentication"""
        self.client.force_authenticate(user=None)
        response = self.client.get('/api/transactions/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class SummaryAPITest(APITestCase):
    """Test daily and date range summaries"""

    def setUp(self):
        self.user = User.objects.create_user(
            email='test@example.com',
            password='testpass123'
        )
        self.client.force_authenticate(user=self.user)
        for tx_type, category, amount, tx_date in [
            ('income', 'salary', '500.00', '2025-03-01'),
            ('expense', 'transportation', '120.00', '2025-03-01'),
            ('income', 'investment', '80.00', '2025-03-02'),
        ]:
            Transaction.objects.create(
                user=self.user,
                transaction_type=tx_type,
                category=category,
                amount=Decimal(amount),
                transaction_date=tx_date
            )

    def test_daily_summary(self):
        response = self.client.get('/api/summary/daily/?date=2025-03-01')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_income'], '500.00')
        self.assertEqual(response.data['total_expenses'], '120.00')
        self.assertEqual(response.data['net_income'], '380.00')
        self.assertEqual(response.data['currency'], 'NGN')

    def test_daily_summary_requires_date(self):
        response = self.client.get('/api/summary/daily/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_daily_summary_invalid_date(self):
        for value in ['01-03-2025', '2025-02-30']:
            with self.subTest(date=value):
                response = self.client.get(f'/api/summary/daily/?date={value}')
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertIn('error', response.data)

    def test_range_summary_invalid_date(self):
        response = self.client.get('/api/summary/range/?start_date=2025-03-01&end_date=soon')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

    def test_range_summary(self):
        response = self.client.get('/api/summary/range/?start_date=2025-03-01&end_date=2025-03-02')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_income'], '580.00')
        self.assertEqual(response.data['net_income'], '460.00')
        self.assertEqual(response.data['total_transactions'], 3)

    def test_range_summary_rejects_reversed_dates(self):
        response = self.client.get('/api/summary/range/?start_date=2025-03-02&end_date=2025-03-01')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class TaxAPITest(APITestCase):
    """Test tax estimate endpoint"""

    def setUp(self):
        self.user = User.objects.create_user(
            email='test@example.com',
            password='testpass123'
        )
        self.client.force_authenticate(user=self.user)

    def onboard(self, user_type):
        Profile.objects.create(
            user=self.user,
            user_type=user_type,
            full_name='Ada Obi',
            business_name='Ada Fabrics' if user_type == 'business' else None
        )

    def add(self, tx_type, category, amount, tx_date='2025-06-15'):
        Transaction.objects.create(
            user=self.user,
            transaction_type=tx_type,
            category=category,
            amount=Decimal(amount),
            transaction_date=tx_date
        )

    def test_requires_onboarding(self):
        """Test that tax cannot be estimated without an account type"""
        response = self.client.get('/api/tax/summary/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(response.data['onboarding_required'])

    def test_individual_exempt_boundary(self):
        """Test net income of exactly 800,000 owes nothing"""
        self.onboard('individual')
        self.add('income', 'salary', '1000000.00')
        self.add('expense', 'rent', '200000.00')

        response = self.client.get('/api/tax/summary/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['classification'], 'individual')
        self.assertEqual(response.data['total_income'], '1000000.00')
        self.assertEqual(response.data['total_expenses'], '200000.00')
        self.assertEqual(response.data['net_income'], '800000.00')
        self.assertEqual(response.data['estimated_tax'], '0.00')
        self.assertEqual(response.data['applied_rate'], 0.0)

    def test_individual_eleven_percent(self):
        """Test 4,000,000 net income owes 440,000"""
        self.onboard('individual')
        self.add('income', 'business_revenue', '4000000.00')
        self.add('expense', 'equipment', '0.00')

        response = self.client.get('/api/tax/summary/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['net_income'], '4000000.00')
        self.assertEqual(response.data['estimated_tax'], '440000.00')
        self.assertEqual(response.data['applied_rate'], 0.11)
        self.assertFalse(response.data['is_exempt'])

    def test_individual_loss_shows_zero_tax(self):
        """Test that an individual with only expenses owes 0.00, not -0.00"""
        self.onboard('individual')
        self.add('expense', 'rent', '500.00')

        response = self.client.get('/api/tax/summary/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['net_income'], '-500.00')
        self.assertEqual(response.data['estimated_tax'], '0.00')

    def test_business_loss_is_not_clamped(self):
        """Test that a business net loss gives a negative estimate"""
        self.onboard('business')
        self.add('income', 'business_revenue', '100.00')
        self.add('expense', 'marketing', '1100.00')

        response = self.client.get('/api/tax/summary/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['classification'], 'business')
        self.assertEqual(response.data['net_income'], '-1000.00')
        self.assertEqual(response.data['estimated_tax'], '-210.00')

    def test_year_filter(self):
        """Test that ?year limits the transactions used"""
        self.onboard('individual')
        self.add('income', 'salary', '5000000.00', tx_date='2024-12-31')
        self.add('income', 'salary', '900000.00', tx_date='2025-01-01')

        response = self.client.get('/api/tax/summary/?year=2025')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['net_income'], '900000.00')
        self.assertEqual(response.data['estimated_tax'], '63000.00')
        self.assertEqual(str(response.data['period_start']), '2025-01-01')
        self.assertEqual(str(response.data['period_end']), '2025-12-31')

    def test_month_filter(self):
        """Test that ?month covers the whole calendar month"""
        self.onboard('individual')
        self.add('income', 'salary', '100.00', tx_date='2025-02-28')
        self.add('income', 'salary', '100.00', tx_date='2025-03-01')

        response = self.client.get('/api/tax/summary/?month=2025-02')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_income'], '100.00')
        self.assertEqual(str(response.data['period_end']), '2025-02-28')

    def test_invalid_period(self):
        self.onboard('individual')
        response = self.client.get('/api/tax/summary/?year=twenty')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.get('/api/tax/summary/?month=2025-13')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class DashboardAPITest(APITestCase):
    """Test dashboard endpoint and its cache"""

    def setUp(self):
        self.user = User.objects.create_user(
            email='test@example.com',
            password='testpass123'
        )
        Profile.objects.create(user=self.user, user_type='individual', full_name='Ada Obi')
        self.client.force_authenticate(user=self.user)

    def test_dashboard(self):
        Transaction.objects.create(
            user=self.user, transaction_type='income', category='salary',
            amount=Decimal('500000.00'), transaction_date=date(2025, 1, 5)
        )

        response = self.client.get('/api/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_income'], '500000.00')
        self.assertEqual(response.data['estimated_tax'], '0.00')
        self.assertTrue(response.data['tax_status']['is_exempt'])
        self.assertEqual(response.data['transaction_count'], 1)
        self.assertEqual(len(response.data['recent_transactions']), 1)
        self.assertEqual(response.data['profile']['user_type'], 'individual')

    def test_dashboard_loss_shows_zero_tax(self):
        Transaction.objects.create(
            user=self.user, transaction_type='expense', category='rent',
            amount=Decimal('500.00')
        )

        response = self.client.get('/api/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['net_income'], '-500.00')
        self.assertEqual(response.data['estimated_tax'], '0.00')

    def test_dashboard_refreshes_after_new_transaction(self):
        """Test that saving a transaction invalidates the cached dashboard"""
        response = self.client.get('/api/dashboard/')
        self.assertEqual(response.data['total_income'], '0.00')

        Transaction.objects.create(
            user=self.user, transaction_type='income', category='freelance',
            amount=Decimal('1000000.00')
        )

        response = self.client.get('/api/dashboard/')
        self.assertEqual(response.data['total_income'], '1000000.00')
        self.assertEqual(response.data['estimated_tax'], '70000.00')
        self.assertFalse(response.data['tax_status']['is_exempt'])

    def test_dashboard_refreshes_after_account_type_change(self):
        """Test that switching to business changes the estimate"""
        Transaction.objects.create(
            user=self.user, transaction_type='income', category='salary',
            amount=Decimal('100000.00')
        )
        response = self.client.get('/api/dashboard/')
        self.assertEqual(response.data['estimated_tax'], '0.00')

        response = self.client.patch('/api/auth/profile/', {
            'user_type': 'business',
            'business_name': 'Ada Fabrics',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.get('/api/dashboard/')
        self.assertEqual(response.data['estimated_tax'], '21000.00')

    def test_recent_transactions_are_limited(self):
        for day in range(1, 13):
            Transaction.objects.create(
                user=self.user, transaction_type='expense', category='food',
                amount=Decimal('10.00'), transaction_date=date(2025, 1, day)
            )

        response = self.client.get('/api/dashboard/')
        self.assertEqual(response.data['transaction_count'], 12)
        self.assertEqual(len(response.data['recent_transactions']), 10)
        self.assertEqual(response.data['recent_transactions'][0]['transaction_date'], '2025-01-12')


class TransactionPDFExportTest(APITestCase):
    """Test PDF report export"""

    def setUp(self):
        self.user = User.objects.create_user(
            email='test@example.com',
            password='testpass123'
        )
        Profile.objects.create(
            user=self.user, user_type='business',
            full_name='Ada Obi', business_name='Ada & Sons'
        )
        self.client.force_authenticate(user=self.user)
        Transaction.objects.create(
            user=self.user, transaction_type='income', category='business_revenue',
            amount=Decimal('250000.00'), description='Fabric sales'
        )

    def test_export_pdf(self):
        response = self.client.get('/api/reports/transactions/pdf/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], 'application/pdf')
        content = b''.join(response.streaming_content)
        self.assertTrue(content.startswith(b'%PDF'))

    def test_export_pdf_invalid_filter(self):
        response = self.client.get('/api/reports/transactions/pdf/?end_date=yesterday')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
