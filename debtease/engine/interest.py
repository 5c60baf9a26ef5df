"""Monthly interest arithmetic shared by amortization and validation."""

from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal("0.01")


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return annual_rate_percent / 100 / 12


def interest_due(balance: Decimal, annual_rate_percent: Decimal) -> Decimal:
    """One month of interest on ``balance``, rounded to cents."""
    return (balance * monthly_rate(annual_rate_percent)).quantize(TWO_PLACES, ROUND_HALF_UP)


def payoff_amount(balance: Decimal, annual_rate_percent: Decimal) -> Decimal:
    """Amount that clears the debt this month: balance plus this month's interest."""
    return balance + interest_due(balance, annual_rate_percent)
