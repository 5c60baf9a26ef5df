"""Shared fixtures.

Two-debt household: a small card at 20% and a larger loan at 10%.
"""

import pytest
from decimal import Decimal

from debtease.models.debt import Debt


@pytest.fixture
def card() -> Debt:
    """$500 at 20% APR, $50 minimum."""
    return Debt(
        id="A",
        current_balance=Decimal("500"),
        annual_rate_percent=Decimal("20"),
        minimum_payment=Decimal("50"),
        name="Store card",
    )


@pytest.fixture
def loan() -> Debt:
    """$2,000 at 10% APR, $100 minimum."""
    return Debt(
        id="B",
        current_balance=Decimal("2000"),
        annual_rate_percent=Decimal("10"),
        minimum_payment=Decimal("100"),
        name="Personal loan",
    )


@pytest.fixture
def household(card, loan) -> list[Debt]:
    return [card, loan]


@pytest.fixture
def credit_card() -> Debt:
    """$1,000 at 24% APR, $20 minimum: the minimum exactly covers interest."""
    return Debt(
        id="cc",
        current_balance=Decimal("1000"),
        annual_rate_percent=Decimal("24"),
        minimum_payment=Decimal("20"),
    )
