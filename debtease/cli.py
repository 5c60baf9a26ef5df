"""CLI for running payoff plans against a JSON file of debts.

Usage:
    python -m debtease.cli compare debts.json --extra 200
    python -m debtease.cli timeline debts.json --strategy snowball --months 24
    python -m debtease.cli scenarios debts.json

The file holds a list of objects with ``id``, ``current_balance``,
``annual_rate_percent`` and ``minimum_payment`` (``name`` optional).
"""

import argparse
import logging
import sys
from decimal import Decimal
from pathlib import Path

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from debtease.api.schemas import DebtInput
from debtease.config import settings
from debtease.engine.projection import (
    compare_strategies,
    generate_projection_timeline,
    payoff_scenarios,
)
from debtease.engine.validation import ValidationError
from debtease.models.debt import Debt, Strategy

_debt_list = TypeAdapter(list[DebtInput])


def load_debts(path: str) -> list[Debt]:
    return [d.to_debt() for d in _debt_list.validate_json(Path(path).read_text())]


def _months(result) -> str:
    return f"{result.total_months} months" if result.completed else "never"


def _money(amount: Decimal) -> str:
    return f"${amount:,.2f}" if amount.is_finite() else "n/a"


def print_comparison(cmp) -> None:
    print(f"\n{'=' * 60}")
    print(f"  Avalanche vs Snowball")
    print(f"{'=' * 60}")
    for result in (cmp.avalanche, cmp.snowball):
        print(f"  [{result.strategy.value.upper():>9}]  {_months(result):>12}  "
              f"interest {_money(result.total_interest_paid)}")
        if result.payoff_order:
            print(f"               order: {' -> '.join(result.payoff_order)}")
    print()
    print(f"  Recommended:  {cmp.recommended.value}")
    print(f"  Savings:      {_money(cmp.savings)}")
    print()


def print_timeline(timeline) -> None:
    print(f"\n  {'Month':>5}  {'Balance':>14}  {'Payment':>12}  {'Interest':>10}")
    for p in timeline:
        print(f"  {p.month:>5}  {_money(p.total_balance):>14}  "
              f"{_money(p.total_payment):>12}  {_money(p.total_interest):>10}")
    print()
    if timeline.completed:
        print(f"  Debt-free in {len(timeline)} months")
    else:
        print(f"  Not debt-free within {len(timeline)} months")
    print()


def print_scenarios(scenarios) -> None:
    print(f"\n{'=' * 60}")
    print(f"  Payoff Scenarios")
    print(f"{'=' * 60}")
    for s in scenarios:
        print(f"  {s.id:<18} {_months(s.result):>12}  "
              f"interest {_money(s.result.total_interest_paid):>14}  "
              f"saved {_money(s.interest_saved)}")
    print()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Debt payoff planning CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    compare = sub.add_parser("compare", help="Compare avalanche and snowball")
    compare.add_argument("debts", help="Path to a JSON file of debts")
    compare.add_argument("--extra", type=Decimal, default=Decimal("0"), help="Extra monthly payment (default: 0)")

    timeline = sub.add_parser("timeline", help="Month-by-month projection")
    timeline.add_argument("debts", help="Path to a JSON file of debts")
    timeline.add_argument("--extra", type=Decimal, default=Decimal("0"), help="Extra monthly payment (default: 0)")
    timeline.add_argument("--strategy", choices=[s.value for s in Strategy], default="avalanche")
    timeline.add_argument("--months", type=int, default=60, help="Months to project (default: 60)")
    timeline.add_argument("--priority", nargs="+", help="Debt ids in payoff order (custom strategy)")

    scenarios = sub.add_parser("scenarios", help="Scenario cards at several extra amounts")
    scenarios.add_argument("debts", help="Path to a JSON file of debts")
    scenarios.add_argument("--amounts", type=Decimal, nargs="+", help="Extra amounts to try")

    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level)

    try:
        debts = load_debts(args.debts)
    except (OSError, SchemaError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        if args.command == "compare":
            print_comparison(compare_strategies(debts, args.extra))
        elif args.command == "timeline":
            print_timeline(generate_projection_timeline(
                debts, args.extra, Strategy(args.strategy), args.months, args.priority,
            ))
        else:
            print_scenarios(payoff_scenarios(debts, args.amounts))
    except ValidationError as e:
        for error in e.errors:
            print(f"error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
