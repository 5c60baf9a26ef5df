"""Payment dialog routes: breakdown preview and quick-pick suggestions."""

from fastapi import APIRouter, HTTPException

from debtease.api.schemas import (
    BreakdownRequest,
    BreakdownResponse,
    SuggestionResponse,
    SuggestionsRequest,
    estimate_response,
)
from debtease.engine.amortization import compute_breakdown, payment_suggestions
from debtease.engine.validation import ValidationError, validate_debt, validate_payment

router = APIRouter(prefix="/api/v1/payments", tags=["payments"])


@router.post("/breakdown", response_model=BreakdownResponse)
async def payment_breakdown(req: BreakdownRequest):
    """Validate a payment against the debt and split it into interest and principal."""
    debt = req.debt.to_debt()
    try:
        validate_debt(debt)
        warnings = validate_payment(debt, req.payment_amount)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)

    b = compute_breakdown(debt.current_balance, debt.annual_rate_percent, req.payment_amount)
    return BreakdownResponse(
        interest_portion=b.interest_portion,
        principal_portion=b.principal_portion,
        new_balance=b.new_balance,
        is_full_payoff=b.is_full_payoff,
        monthly_interest_amount=b.monthly_interest_amount,
        effective_monthly_rate_percent=b.effective_monthly_rate_percent,
        warnings=warnings,
    )


@router.post("/suggestions", response_model=list[SuggestionResponse])
async def suggestions(req: SuggestionsRequest):
    debt = req.debt.to_debt()
    try:
        validate_debt(debt)
        picks = payment_suggestions(debt)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)

    return [
        SuggestionResponse(kind=s.kind, amount=s.amount, payoff=estimate_response(s.payoff))
        for s in picks
    ]
