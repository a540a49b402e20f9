"""
Tax configuration for the simplified Nigerian Tax Reform 2024 bands.

Target:
- Individuals tracking personal income
- Small businesses on a simplified flat rate

IMPORTANT:
- Individual bands are a STEP schedule, not a marginal one.
  Once net income crosses a threshold, that band's single rate
  applies to the ENTIRE net income.
- Upper limits are inclusive (net income <= limit).
- The business rate has no floor and no exemption.
"""

from decimal import Decimal

# =========================
# ACCOUNT CLASSIFICATIONS
# =========================
INDIVIDUAL = "individual"
BUSINESS = "business"


# =========================
# EXEMPTION THRESHOLD
# =========================
PIT_EXEMPT_THRESHOLD = Decimal("800000")  # ₦800,000


# =========================
# INDIVIDUAL TAX BANDS (step schedule)
# =========================
# Evaluated in ascending order, first match wins.

INDIVIDUAL_TAX_BANDS = [
    # (inclusive_upper_limit_ngn, rate_on_entire_income)
    (PIT_EXEMPT_THRESHOLD, Decimal("0.00")),  # Exempt
    (Decimal("3200000"), Decimal("0.07")),
    (Decimal("5000000"), Decimal("0.11")),
    (Decimal("16000000"), Decimal("0.15")),
    (Decimal("32000000"), Decimal("0.19")),
]

# Applied above the last band
INDIVIDUAL_TOP_RATE = Decimal("0.21")


# =========================
# SMALL BUSINESS
# =========================
BUSINESS_FLAT_RATE = Decimal("0.21")  # 21%


# =========================
# METADATA
# =========================
TAX_REGIME = "Nigerian Tax Reform 2024"

TAX_DISCLAIMER = (
    "These are estimates only, based on simplified tax bands, and do not "
    "constitute an official tax filing. Consult a licensed tax professional "
    "for accurate tax computation and filing."
)
