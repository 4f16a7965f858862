"""Currency — pure conversions between decimal dollars, integer cents and display strings.

Invariants:
    - Amounts are handled as Decimal, never float
    - to_cents rounds half-to-even at the cent boundary ("10.005" -> 1000, "10.015" -> 1002)
    - format_currency renders en-US dollars: "$1,234.56", "-$5.00"
"""

from decimal import Decimal, ROUND_HALF_EVEN

from app.core.domain_types import Cents

_ONE = Decimal("1")
_HUNDRED = Decimal("100")


def to_cents(amount: Decimal) -> Cents:
    """Convert a dollar amount to integer cents with banker's rounding."""
    return Cents(int((amount * _HUNDRED).quantize(_ONE, rounding=ROUND_HALF_EVEN)))


def from_cents(cents: int) -> Decimal:
    """Convert stored cents back to dollars for form pre-population."""
    return (Decimal(cents) / _HUNDRED).quantize(Decimal("0.01"))


def format_currency(cents: int | None) -> str:
    """Format cents as a display string. None is treated as zero."""
    dollars = from_cents(cents or 0)
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"
