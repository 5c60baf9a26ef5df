import copy
import random
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from debtease.config import settings
from debtease.engine.projection import (
    compare_strategies,
    generate_projection_timeline,
    payoff_scenarios,
    simulate_strategy,
)
from debtease.engine.validation import ValidationError
from debtease.models.debt import Debt, Strategy
from debtease.models.results import NEVER


@pytest.fixture
def diverging() -> list[Debt]:
    """Cheap small debt vs expensive large debt: avalanche and snowball disagree."""
    return [
        Debt(id="X", current_balance=Decimal("300"), annual_rate_percent=Decimal("5"),
             minimum_payment=Decimal("25")),
        Debt(id="Y", current_balance=Decimal("3000"), annual_rate_percent=Decimal("25"),
             minimum_payment=Decimal("90")),
    ]


def random_households(seed: int, count: int):
    """Seeded debt sets of 2-4 debts with distinct rates and amortizing minimums."""
    rng = random.Random(seed)
    for _ in range(count):
        size = rng.randint(2, 4)
        debts = []
        for i, rate in enumerate(rng.sample(range(1, 30), size)):
            balance = Decimal(rng.randint(100, 5000))
            # At least 10 a month of principal from the first month on
            minimum = (balance * rate / 1200 + 10).quantize(Decimal("0.01"))
            debts.append(Debt(id=f"d{i}", current_balance=balance,
                              annual_rate_percent=Decimal(rate), minimum_payment=minimum))
        yield debts, Decimal(rng.randint(0, 500))


HOUSEHOLDS = [
    pytest.param(debts, extra, id=f"household{i}")
    for i, (debts, extra) in enumerate(random_households(20240601, 40))
]


# ── Timeline ──


class TestProjectionTimeline:
    def test_first_month(self, household):
        timeline = generate_projection_timeline(household, Decimal("200"), Strategy.AVALANCHE, 12)
        first = timeline[0]
        # A: 8.33 interest, 50 min + 200 extra. B: 16.67 interest, 100 min.
        assert first.month == 1
        assert first.total_payment == Decimal("350")
        assert first.total_interest == Decimal("25.00")
        assert first.total_principal == Decimal("325.00")
        assert first.total_balance == Decimal("2175.00")
        assert first.cumulative_payments == Decimal("350")

    def test_months_are_consecutive(self, household):
        timeline = generate_projection_timeline(household, Decimal("0"), Strategy.SNOWBALL, 12)
        assert [p.month for p in timeline] == list(range(1, 13))

    def test_balance_never_rises(self, household):
        timeline = generate_projection_timeline(household, Decimal("50"), Strategy.AVALANCHE, 60)
        for prev, cur in zip(timeline.points, timeline.points[1:]):
            assert cur.total_balance <= prev.total_balance

    def test_cumulative_is_running_total(self, household):
        timeline = generate_projection_timeline(household, Decimal("50"), Strategy.AVALANCHE, 24)
        running = Decimal("0")
        for p in timeline:
            running += p.total_payment
            assert p.cumulative_payments == running

    def test_zero_months(self, household):
        timeline = generate_projection_timeline(household, Decimal("100"), Strategy.AVALANCHE, 0)
        assert len(timeline) == 0
        assert not timeline.completed

    def test_no_debts(self):
        timeline = generate_projection_timeline([], Decimal("100"), Strategy.AVALANCHE, 12)
        assert len(timeline) == 0
        assert timeline.completed

    def test_ends_early_when_debt_free(self, household):
        timeline = generate_projection_timeline(household, Decimal("5000"), Strategy.AVALANCHE, 24)
        assert len(timeline) == 1
        assert timeline.completed
        assert timeline[-1].total_balance == Decimal("0")

    def test_incomplete_when_months_run_out(self, household):
        timeline = generate_projection_timeline(household, Decimal("0"), Strategy.AVALANCHE, 2)
        assert len(timeline) == 2
        assert not timeline.completed

    def test_capped_at_max_months(self, credit_card):
        timeline = generate_projection_timeline([credit_card], Decimal("0"), Strategy.MINIMUM, 5000)
        assert len(timeline) == settings.max_simulation_months
        assert not timeline.completed

    def test_closed_minimum_rolls_over(self, household):
        timeline = generate_projection_timeline(household, Decimal("0"), Strategy.AVALANCHE, 60)
        assert timeline.completed
        assert all(p.total_payment == Decimal("150") for p in timeline.points[:-1])

    def test_minimum_only_does_not_roll_over(self, household):
        timeline = generate_projection_timeline(household, Decimal("0"), Strategy.MINIMUM, 60)
        assert any(p.total_payment == Decimal("100") for p in timeline)

    def test_custom_needs_priority(self, household):
        with pytest.raises(ValidationError):
            generate_projection_timeline(household, Decimal("100"), Strategy.CUSTOM, 12)

    def test_custom_priority(self, household):
        result = simulate_strategy(household, Decimal("200"), Strategy.CUSTOM, priority=["B", "A"])
        assert result.payoff_order == ["B", "A"]

    def test_negative_extra_rejected(self, household):
        with pytest.raises(ValidationError):
            generate_projection_timeline(household, Decimal("-1"), Strategy.AVALANCHE, 12)

    def test_negative_months_rejected(self, household):
        with pytest.raises(ValidationError):
            generate_projection_timeline(household, Decimal("0"), Strategy.AVALANCHE, -1)

    def test_input_untouched(self, household):
        before = copy.deepcopy(household)
        generate_projection_timeline(household, Decimal("200"), Strategy.SNOWBALL, 24)
        assert household == before


# ── Strategy runs ──


class TestSimulateStrategy:
    def test_completes(self, household):
        result = simulate_strategy(household, Decimal("0"), Strategy.AVALANCHE)
        assert result.completed
        assert result.payoff_order == ["A", "B"]
        principal = result.total_payments - result.total_interest_paid
        assert Decimal("2498") <= principal <= Decimal("2500")

    def test_one_month_with_large_extra(self, household):
        result = simulate_strategy(household, Decimal("5000"), Strategy.SNOWBALL)
        assert result.total_months == 1
        assert result.total_interest_paid == Decimal("25.00")

    def test_stall_reports_never(self, credit_card):
        result = simulate_strategy([credit_card], Decimal("0"), Strategy.MINIMUM)
        assert not result.completed
        assert result.total_months == NEVER
        assert result.total_interest_paid.is_infinite()
        assert result.total_payments.is_infinite()

    def test_no_debts(self):
        result = simulate_strategy([], Decimal("100"), Strategy.AVALANCHE)
        assert result.completed
        assert result.total_months == 0
        assert result.total_interest_paid == Decimal("0")

    def test_extra_shortens_payoff(self, household):
        slow = simulate_strategy(household, Decimal("0"), Strategy.AVALANCHE)
        fast = simulate_strategy(household, Decimal("200"), Strategy.AVALANCHE)
        assert fast.total_months < slow.total_months
        assert fast.total_interest_paid < slow.total_interest_paid


class TestCompareStrategies:
    def test_same_target_means_no_savings(self, household):
        # A is both the highest rate and the smallest balance
        cmp = compare_strategies(household, Decimal("100"))
        assert cmp.savings == Decimal("0")
        assert cmp.recommended is Strategy.AVALANCHE

    def test_avalanche_cheaper_when_targets_differ(self, diverging):
        cmp = compare_strategies(diverging, Decimal("100"))
        assert cmp.savings > 0
        assert cmp.recommended is Strategy.AVALANCHE

    @pytest.mark.parametrize("extra", ["0", "25", "150", "1000"])
    def test_avalanche_never_worse(self, diverging, extra):
        cmp = compare_strategies(diverging, Decimal(extra))
        assert cmp.savings >= 0

    @pytest.mark.parametrize("debts,extra", HOUSEHOLDS)
    def test_avalanche_never_worse_across_households(self, debts, extra):
        cmp = compare_strategies(debts, extra)
        assert cmp.avalanche.completed
        assert cmp.snowball.completed
        assert cmp.savings >= 0

    def test_neither_finishes(self, credit_card):
        cmp = compare_strategies([credit_card], Decimal("0"))
        assert not cmp.avalanche.completed
        assert not cmp.snowball.completed
        assert cmp.savings == Decimal("0")
        assert cmp.recommended is Strategy.AVALANCHE

    def test_runs_are_independent(self, diverging):
        first = compare_strategies(diverging, Decimal("100"))
        second = compare_strategies(diverging, Decimal("100"))
        assert first == second

    def test_concurrent_calls_agree(self, diverging, household):
        jobs = [diverging, household] * 4
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda d: compare_strategies(d, Decimal("100")), jobs))
        assert all(r == results[0] for r in results[0::2])
        assert all(r == results[1] for r in results[1::2])


class TestPayoffScenarios:
    def test_ids_and_order(self, household):
        scenarios = payoff_scenarios(household, [Decimal("100"), Decimal("200")])
        assert [s.id for s in scenarios] == [
            "minimum", "snowball_100", "avalanche_100", "snowball_200", "avalanche_200",
        ]

    def test_interest_saved_against_minimum(self, household):
        scenarios = payoff_scenarios(household, [Decimal("100")])
        baseline = scenarios[0]
        assert baseline.interest_saved == Decimal("0")
        for s in scenarios[1:]:
            assert s.interest_saved == baseline.result.total_interest_paid - s.result.total_interest_paid
            assert s.interest_saved > 0

    def test_default_amounts(self, household):
        scenarios = payoff_scenarios(household)
        assert len(scenarios) == 1 + 2 * len(settings.scenario_extra_amounts)

    def test_unfinished_scenarios_dropped(self, credit_card):
        scenarios = payoff_scenarios([credit_card], [Decimal("100")])
        assert [s.id for s in scenarios] == ["snowball_100", "avalanche_100"]
        assert all(s.interest_saved.is_infinite() for s in scenarios)

    def test_negative_amount_rejected(self, household):
        with pytest.raises(ValidationError):
            payoff_scenarios(household, [Decimal("-100")])
