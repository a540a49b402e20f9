from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter, OpenApiExample
from drf_spectacular.types import OpenApiTypes
from .models import Transaction
from .serializers import (
    TransactionSerializer,
    TransactionListSerializer,
    AggregateSerializer,
    DailySummarySerializer,
    DateRangeSummarySerializer,
    TaxSummarySerializer
)
from .permissions import IsOwner
from .services.aggregation import aggregate
from .services.summaries import daily_summary, date_range_summary, tax_summary, user_transactions
from .utils import parse_date_param, parse_tax_period, onboarding_required_response


@extend_schema_view(
    list=extend_schema(
        summary="List transactions",
        description="Get a paginated list of transactions with filtering options.",
        tags=["Transactions"],
        parameters=[
            OpenApiParameter(
                name='type',
                type=OpenApiTypes.STR,
                enum=['income', 'expense'],
                description='Filter by transaction type'
            ),
            OpenApiParameter(
                name='start_date',
                type=OpenApiTypes.DATE,
                description='Filter transactions from this date (YYYY-MM-DD)'
            ),
            OpenApiParameter(
                name='end_date',
                type=OpenApiTypes.DATE,
                description='Filter transactions until this date (YYYY-MM-DD)'
            ),
        ]
    ),
    create=extend_schema(
        summary="Create transaction",
        description="Record an income or expense. The category must belong to the transaction type.",
        tags=["Transactions"],
        examples=[
            OpenApiExample(
                'Transaction Example',
                value={
                    'transaction_type': 'expense',
                    'category': 'office_supplies',
                    'amount': '40500.00',
                    'description': 'Printer paper and pens',
                    'transaction_date': '2025-12-21',
                },
                request_only=True
            )
        ]
    ),
    retrieve=extend_schema(
        summary="Get transaction details",
        description="Retrieve a specific transaction.",
        tags=["Transactions"]
    ),
    update=extend_schema(
        summary="Update transaction",
        description="Update a transaction.",
        tags=["Transactions"]
    ),
    partial_update=extend_schema(
        summary="Partial update transaction",
        description="Partially update a transaction.",
        tags=["Transactions"]
    ),
    destroy=extend_schema(
        summary="Delete transaction (soft delete)",
        description="Soft delete a transaction. It will be marked as deleted but not removed from database.",
        tags=["Transactions"]
    ),
)
class TransactionViewSet(viewsets.ModelViewSet):
    """
    ViewSet for managing Transactions
    Supports CRUD operations with proper user scoping
    """
    permission_classes = [IsAuthenticated, IsOwner]

    def get_serializer_class(self):
        """
        Use different serializers for list and detail views
        """
        if self.action == 'list':
            return TransactionListSerializer
        return TransactionSerializer

    def get_queryset(self):
        """
        Filter transactions to only those owned by the authenticated user
        Exclude soft-deleted transactions, except when restoring one
        """
        if self.action == 'restore':
            return Transaction.objects.filter(user=self.request.user)

        params = self.request.query_params
        return user_transactions(
            self.request.user,
            start_date=parse_date_param(params, 'start_date'),
            end_date=parse_date_param(params, 'end_date'),
            tx_type=params.get('type'),
        )

    def perform_destroy(self, instance):
        """
        Soft delete - set is_deleted to True instead of actually deleting
        """
        instance.is_deleted = True
        instance.save()

    @extend_schema(
        summary="Get transaction summary",
        description="Get aggregated totals of income, expenses and net income, honouring the list filters.",
        tags=["Transactions"],
        responses={200: AggregateSerializer}
    )
    @action(detail=False, methods=['get'])
    def summary(self, request):
        """
        Get summary statistics for user's transactions
        """
        result = aggregate(self.get_queryset().only('transaction_type', 'amount'))
        serializer = AggregateSerializer(result.as_dict())
        return Response(serializer.data)

    @extend_schema(
        summary="List deleted transactions",
        description="Get a list of soft-deleted transactions.",
        tags=["Transactions"]
    )
    @action(detail=False, methods=['get'])
    def deleted(self, request):
        """
        List soft-deleted transactions
        """
        deleted_transactions = Transaction.objects.filter(
            user=request.user,
            is_deleted=True
        )

        serializer = TransactionListSerializer(deleted_transactions, many=True)
        return Response(serializer.data)

    @extend_schema(
        summary="Restore deleted transaction",
        description="Restore a soft-deleted transaction back to active state.",
        tags=["Transactions"]
    )
    @action(detail=True, methods=['post'])
    def restore(self, request, pk=None):
        """
        Restore a soft-deleted transaction
        """
        transaction = self.get_object()

        if not transaction.is_deleted:
            return Response(
                {'error': 'Transaction is not deleted'},
                status=status.HTTP_400_BAD_REQUEST
            )

        transaction.is_deleted = False
        transaction.save()

        serializer = TransactionSerializer(transaction)
        return Response(serializer.data)


class SummaryViewSet(viewsets.ViewSet):
    """
    ViewSet for summary endpoints.
    All calculations are performed dynamically from transaction data.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get daily summary",
        description="Calculate total income, expense, and net income for a specific date. All amounts are in Naira (NGN).",
        parameters=[
            OpenApiParameter(
                name='date',
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                required=True,
                description='Date to calculate summary for (YYYY-MM-DD)'
            ),
        ],
        responses={200: DailySummarySerializer},
        tags=["Summaries"]
    )
    @action(detail=False, methods=['get'], url_path='daily')
    def daily(self, request):
        """
        GET /api/summary/daily/?date=YYYY-MM-DD
        """
        target_date = parse_date_param(request.query_params, 'date')
        if not target_date:
            return Response(
                {'error': 'date parameter is required (YYYY-MM-DD)'},
                status=status.HTTP_400_BAD_REQUEST
            )

        summary = daily_summary(user=request.user, target_date=target_date)

        serializer = DailySummarySerializer(summary)
        return Response(serializer.data)

    @extend_schema(
        summary="Get date range summary",
        description="Calculate total income, expense, and net income for a date range. All amounts are in Naira (NGN).",
        parameters=[
            OpenApiParameter(
                name='start_date',
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                required=True,
                description='Start date (YYYY-MM-DD)'
            ),
            OpenApiParameter(
                name='end_date',
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                required=True,
                description='End date (YYYY-MM-DD)'
            ),
        ],
        responses={200: DateRangeSummarySerializer},
        tags=["Summaries"]
    )
    @action(detail=False, methods=['get'], url_path='range')
    def range(self, request):
        """
        GET /api/summary/range/?start_date=YYYY-MM-DD&end_date=YYYY-MM-DD
        """
        start_date = parse_date_param(request.query_params, 'start_date')
        end_date = parse_date_param(request.query_params, 'end_date')

        if not start_date or not end_date:
            return Response(
                {'error': 'start_date and end_date parameters are required (YYYY-MM-DD)'},
                status=status.HTTP_400_BAD_REQUEST
            )

        if start_date > end_date:
            return Response(
                {'error': 'start_date must be before or equal to end_date'},
                status=status.HTTP_400_BAD_REQUEST
            )

        summary = date_range_summary(
            user=request.user,
            start_date=start_date,
            end_date=end_date
        )

        serializer = DateRangeSummarySerializer(summary)
        return Response(serializer.data)


class TaxViewSet(viewsets.ViewSet):
    """
    ViewSet for Nigerian tax estimates.

    Individuals are taxed on simplified step bands, small businesses at a
    flat 21%. The account type comes from the user's profile.

    All calculations are performed dynamically from transaction data.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get tax estimate",
        description=(
            "Estimate tax for the authenticated user's account type. Returns income, "
            "expenses, net income, applied rate, estimated tax and exemption status. "
            "Without year or month, all transactions are used. "
            "All amounts in Naira (NGN)."
        ),
        parameters=[
            OpenApiParameter(
                name='year',
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description='Tax year (e.g., 2025)'
            ),
            OpenApiParameter(
                name='month',
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description='Single month (YYYY-MM); takes precedence over year'
            ),
        ],
        responses={200: TaxSummarySerializer},
        tags=["Tax"]
    )
    @action(detail=False, methods=['get'], url_path='summary')
    def summary(self, request):
        """
        GET /api/tax/summary/?year=2025
        GET /api/tax/summary/?month=2025-06
        """
        if not request.user.is_onboarded:
            return onboarding_required_response()

        start_date, end_date = parse_tax_period(request.query_params)

        summary = tax_summary(
            user=request.user,
            classification=request.user.profile.user_type,
            start_date=start_date,
            end_date=end_date
        )

        serializer = TaxSummarySerializer(summary)
        return Response(serializer.data)
