from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class Strategy(Enum):
    AVALANCHE = "avalanche"  # Highest rate first
    SNOWBALL = "snowball"  # Smallest balance first
    MINIMUM = "minimum"  # Minimum payments only
    CUSTOM = "custom"  # Caller-supplied priority order


class PaymentFrequency(Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


@dataclass(frozen=True)
class Debt:
    id: str
    current_balance: Decimal
    annual_rate_percent: Decimal  # e.g. Decimal("18.5") for 18.5% APR
    minimum_payment: Decimal  # Contractual monthly payment

    name: str = ""
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    is_high_priority: bool = False
    is_active: bool = True
