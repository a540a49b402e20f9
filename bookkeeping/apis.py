import logging
from decimal import Decimal, ROUND_HALF_UP
from io import BytesIO
from datetime import datetime

from django.core.cache import cache
from django.http import FileResponse
from django.utils.html import escape
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from reportlab.platypus import (
            SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
        )
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.pagesizes import A4
from reportlab.lib import colors

from account.serializers import ProfileSerializer
from .serializers import TransactionListSerializer
from .services.aggregation import aggregate
from .services.summaries import user_transactions
from .services.tax.config import TAX_DISCLAIMER, TAX_REGIME
from .services.tax.estimator import estimate, is_tax_exempt
from .utils import parse_date_param, onboarding_required_response

# prepare logging handler for this file
logger = logging.getLogger(__name__)

RECENT_TRANSACTIONS = 10


def get_user_cache_version(user_id):
    """
    Get the current cache version for a user, initializing it if it doesn't exist.
    """
    version_key = f'user_cache_version:{user_id}'
    version = cache.get(version_key)
    if version is None:
        version = 1
        cache.set(version_key, version, timeout=None)
    return version


def to_kobo(value):
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_naira(value):
    return f"{to_kobo(value):,.2f}"


class DashboardView(APIView):
    """
    Everything the dashboard screen shows in one response:
    totals, estimated tax, compliance status and recent transactions.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get dashboard",
        description=(
            "Total income, total expenses, net income and estimated tax for the "
            "authenticated user, with compliance status and the ten most recent "
            "transactions. Cached until the user's data changes."
        ),
        tags=["Dashboard"],
        responses={200: {'type': 'object'}},
    )
    def get(self, request):
        user = request.user
        if not user.is_onboarded:
            return onboarding_required_response()

        version = get_user_cache_version(user.id)
        cache_key = f'dashboard:{user.id}:v{version}'
        cached_data = cache.get(cache_key)
        if cached_data:
            return Response(cached_data)

        profile = user.profile
        classification = profile.user_type
        queryset = user_transactions(user)

        result = aggregate(queryset.only('transaction_type', 'amount'))
        net_income = result.net_income
        estimated_tax = estimate(net_income, classification)
        exempt = is_tax_exempt(net_income, classification)

        if exempt:
            status_message = "Your income is below ₦800,000 annual threshold"
        else:
            status_message = "Based on current net income"

        data = {
            'profile': ProfileSerializer(profile).data,
            'currency': 'NGN',
            'total_income': str(to_kobo(result.total_income)),
            'total_expenses': str(to_kobo(result.total_expenses)),
            'net_income': str(to_kobo(net_income)),
            'estimated_tax': str(to_kobo(estimated_tax)),
            'tax_status': {
                'is_exempt': exempt,
                'message': status_message,
                'tax_regime': TAX_REGIME,
            },
            'transaction_count': result.total_transactions,
            'recent_transactions': TransactionListSerializer(
                queryset[:RECENT_TRANSACTIONS], many=True
            ).data,
        }
        cache.set(cache_key, data, timeout=300)
        return Response(data)


class TransactionPDFExportView(APIView):
    """
    Export filtered transactions as a PDF report for the logged-in user.
    Filters: type, start_date, end_date (YYYY-MM-DD)
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Export transactions as PDF",
        description="Download a PDF report with totals, estimated tax and the filtered transactions.",
        tags=["Reports"],
        parameters=[
            OpenApiParameter(name='type', type=OpenApiTypes.STR, enum=['income', 'expense']),
            OpenApiParameter(name='start_date', type=OpenApiTypes.DATE),
            OpenApiParameter(name='end_date', type=OpenApiTypes.DATE),
        ],
        responses={(200, 'application/pdf'): OpenApiTypes.BINARY},
    )
    def get(self, request):
        params = request.query_params
        user = request.user

        queryset = user_transactions(
            user,
            start_date=parse_date_param(params, 'start_date'),
            end_date=parse_date_param(params, 'end_date'),
            tx_type=params.get('type'),
        )
        result = aggregate(queryset)

        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=40,
            leftMargin=40,
            topMargin=40,
            bottomMargin=40
        )

        styles = getSampleStyleSheet()
        elements = []

        # Title
        elements.append(Paragraph("<b>TaxBuddy Transactions Report</b>", styles["Heading1"]))
        elements.append(Spacer(1, 10))

        name = user.profile.display_name if user.is_onboarded else user.email
        elements.append(Paragraph(
            f"Account: {escape(name)}<br/>"
            f"Email: {escape(user.email)}<br/>"
            f"Exported: {datetime.now().strftime('%Y-%m-%d %H:%M')}",
            styles["Normal"]
        ))
        elements.append(Spacer(1, 20))

        # ================= SUMMARY TABLE =================
        summary_data = [
            ["Metric", "Amount (NGN)"],
            ["Total Income", format_naira(result.total_income)],
            ["Total Expenses", format_naira(result.total_expenses)],
            ["Net Income", format_naira(result.net_income)],
        ]

        if user.is_onboarded:
            classification = user.profile.user_type
            estimated_tax = estimate(result.net_income, classification)
            summary_data.append([
                f"Estimated Tax ({classification})",
                format_naira(estimated_tax),
            ])

        summary_table = Table(summary_data, colWidths=[200, 200])
        summary_table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
            ("GRID", (0, 0), (-1, -1), 1, colors.grey),
            ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
        ]))

        elements.append(Paragraph("<b>Summary</b>", styles["Heading2"]))
        elements.append(summary_table)
        elements.append(Spacer(1, 10))
        elements.append(Paragraph(TAX_DISCLAIMER, styles["Italic"]))
        elements.append(Spacer(1, 20))

        # ================= TRANSACTIONS =================
        elements.append(Paragraph("<b>Detailed Transactions</b>", styles["Heading2"]))
        elements.append(Spacer(1, 10))

        tx_table_data = [
            ["Date", "Type", "Category", "Description", "Amount (NGN)"]
        ]

        for tx in queryset:
            tx_table_data.append([
                tx.transaction_date.strftime("%Y-%m-%d"),
                tx.get_transaction_type_display(),
                tx.get_category_display(),
                tx.description or "-",
                format_naira(tx.amount)
            ])

        tx_table = Table(tx_table_data, colWidths=[65, 55, 110, 160, 85])
        tx_table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("ALIGN", (4, 1), (-1, -1), "RIGHT"),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ]))

        elements.append(tx_table)

        doc.build(elements)
        buffer.seek(0)

        logger.info(f"PDF report exported for {user.email} ({result.total_transactions} transactions)")
        return FileResponse(
            buffer,
            as_attachment=True,
            filename=f"taxbuddy_report_{datetime.now().strftime('%Y%m%d')}.pdf",
            content_type="application/pdf"
        )
