from decimal import Decimal
from typing import Dict, Union

from .config import (
    BUSINESS,
    BUSINESS_FLAT_RATE,
    INDIVIDUAL,
    INDIVIDUAL_TAX_BANDS,
    INDIVIDUAL_TOP_RATE,
    PIT_EXEMPT_THRESHOLD,
    TAX_DISCLAIMER,
    TAX_REGIME,
)

Number = Union[int, float, str, Decimal]


def to_decimal(value: Number) -> Decimal:
    """
    Coerce a number to Decimal through its string form,
    so that floats like 800000.01 stay exact.
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


# =========================
# RATES
# =========================
def applicable_rate(net_income: Number, classification: str) -> Decimal:
    """
    Return the single rate applied to the entire net income.

    Business accounts always get the flat rate. Individual accounts walk
    the inclusive upper limits in ascending order; the first limit that
    is not exceeded selects the rate.
    """
    if classification == BUSINESS:
        return BUSINESS_FLAT_RATE

    income = to_decimal(net_income)
    for upper_limit, rate in INDIVIDUAL_TAX_BANDS:
        if income <= upper_limit:
            return rate
    return INDIVIDUAL_TOP_RATE


def estimate(net_income: Number, classification: str) -> Decimal:
    """
    Estimate tax liability for a net income figure.

    Args:
        net_income: Net income in Naira, may be zero or negative
        classification: 'individual' or 'business'

    Returns:
        Unrounded tax estimate in Naira. Negative for a business
        with a net loss, since the flat rate is not clamped.
    """
    income = to_decimal(net_income)
    rate = applicable_rate(income, classification)
    if not rate:
        # a zero rate must not carry the sign of a loss (-0.00)
        return Decimal("0")
    return income * rate


def is_tax_exempt(net_income: Number, classification: str) -> bool:
    """
    Individuals below the ₦800,000 threshold are shown as exempt.
    Business accounts never are.
    """
    if classification != INDIVIDUAL:
        return False
    return to_decimal(net_income) < PIT_EXEMPT_THRESHOLD


# =========================
# SUMMARY
# =========================
def build_tax_summary(result, classification: str) -> Dict:
    """
    Combine an AggregateResult with its estimate for API output.
    """
    net_income = result.net_income
    rate = applicable_rate(net_income, classification)

    if classification == BUSINESS:
        method = "Simplified small business flat rate (21%)"
    else:
        method = (
            "Progressive individual bands (7% to 21%), "
            "single rate applied to entire net income"
        )

    return {
        "classification": classification,
        "total_income": result.total_income,
        "total_expenses": result.total_expenses,
        "net_income": net_income,
        "applied_rate": float(rate),
        "estimated_tax": estimate(net_income, classification),
        "is_exempt": is_tax_exempt(net_income, classification),
        "exemption_threshold": PIT_EXEMPT_THRESHOLD,
        "tax_regime": TAX_REGIME,
        "calculation_method": method,
        "disclaimer": TAX_DISCLAIMER,
    }
