"""Dashboard summary route."""

from fastapi import APIRouter

from debtease.api.schemas import DTIResponse, SummaryRequest, SummaryResponse
from debtease.engine.summary import calculate_dti, debt_summary

router = APIRouter(prefix="/api/v1", tags=["summary"])


@router.post("/summary", response_model=SummaryResponse)
async def summary(req: SummaryRequest):
    """Totals for the dashboard cards, plus DTI when income is given."""
    debts = [d.to_debt() for d in req.debts]
    s = debt_summary(debts)

    dti = None
    if req.monthly_income is not None:
        m = calculate_dti(debts, req.monthly_income)
        dti = DTIResponse(
            total_monthly_debt_payments=m.total_monthly_debt_payments,
            monthly_income=m.monthly_income,
            dti_ratio=m.dti_ratio,
            is_healthy=m.is_healthy,
        )

    return SummaryResponse(
        total_debt=s.total_debt,
        total_minimum_payments=s.total_minimum_payments,
        average_interest_rate=s.average_interest_rate,
        debt_count=s.debt_count,
        high_priority_count=s.high_priority_count,
        dti=dti,
    )
