"""Strategy routes: full runs, avalanche vs snowball, scenario cards."""

from fastapi import APIRouter, Depends, HTTPException

from debtease.api.deps import get_settings
from debtease.api.schemas import (
    CompareRequest,
    ComparisonResponse,
    ScenarioResponse,
    ScenariosRequest,
    SimulateRequest,
    StrategyResultResponse,
    finite,
    strategy_response,
)
from debtease.config import Settings
from debtease.engine.projection import compare_strategies, payoff_scenarios, simulate_strategy
from debtease.engine.validation import ValidationError

router = APIRouter(prefix="/api/v1/strategies", tags=["strategies"])


@router.post("/simulate", response_model=StrategyResultResponse)
async def simulate(req: SimulateRequest):
    try:
        result = simulate_strategy(
            [d.to_debt() for d in req.debts], req.extra_payment, req.strategy, req.priority
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)
    return strategy_response(result)


@router.post("/compare", response_model=ComparisonResponse)
async def compare(req: CompareRequest):
    """Avalanche vs snowball on the same debts and budget."""
    try:
        result = compare_strategies([d.to_debt() for d in req.debts], req.extra_payment)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)

    return ComparisonResponse(
        avalanche=strategy_response(result.avalanche),
        snowball=strategy_response(result.snowball),
        recommended=result.recommended,
        savings=finite(result.savings),
    )


@router.post("/scenarios", response_model=list[ScenarioResponse])
async def scenarios(req: ScenariosRequest, config: Settings = Depends(get_settings)):
    """Minimum-only plus snowball and avalanche at each extra amount."""
    amounts = req.extra_amounts if req.extra_amounts is not None else config.scenario_extra_amounts
    try:
        results = payoff_scenarios([d.to_debt() for d in req.debts], amounts)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)

    return [
        ScenarioResponse(
            id=s.id,
            strategy=s.strategy,
            extra_payment=s.extra_payment,
            result=strategy_response(s.result),
            interest_saved=finite(s.interest_saved),
        )
        for s in results
    ]
