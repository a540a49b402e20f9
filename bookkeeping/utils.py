import calendar
from datetime import date, datetime

from django.utils.dateparse import parse_date
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response


def parse_date_param(params, name):
    """
    Read an optional YYYY-MM-DD query parameter.
    Raises ValidationError (400) on a malformed value.
    """
    value = params.get(name)
    if not value:
        return None
    try:
        parsed = parse_date(value)
    except ValueError:
        parsed = None
    if not parsed:
        raise ValidationError({'error': f'Invalid {name} format. Use YYYY-MM-DD'})
    return parsed


def parse_tax_period(params):
    """
    Resolve ?month=YYYY-MM or ?year=YYYY into an inclusive (start, end) pair.
    Month wins over year. No parameter means no period: (None, None).
    """
    month_str = params.get('month')
    year_str = params.get('year')

    if month_str:
        try:
            period_date = datetime.strptime(month_str, '%Y-%m')
        except ValueError:
            raise ValidationError({'error': 'Invalid month format. Use YYYY-MM'})
        year, month = period_date.year, period_date.month
        last_day = calendar.monthrange(year, month)[1]
        return date(year, month, 1), date(year, month, last_day)

    if year_str:
        try:
            year = int(year_str)
            return date(year, 1, 1), date(year, 12, 31)
        except ValueError:
            raise ValidationError({'error': 'Invalid year format. Use YYYY'})

    return None, None


def onboarding_required_response():
    return Response(
        {
            'error': 'Complete onboarding to set your account type.',
            'onboarding_required': True,
        },
        status=status.HTTP_403_FORBIDDEN
    )
