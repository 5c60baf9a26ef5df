"""Projection chart routes."""

from fastapi import APIRouter, HTTPException

from debtease.api.schemas import TimelineRequest, TimelineResponse, timeline_response
from debtease.engine.projection import generate_projection_timeline
from debtease.engine.validation import ValidationError

router = APIRouter(prefix="/api/v1/projection", tags=["projection"])


@router.post("/timeline", response_model=TimelineResponse)
async def timeline(req: TimelineRequest):
    """Month-by-month combined balances under one strategy."""
    try:
        result = generate_projection_timeline(
            [d.to_debt() for d in req.debts],
            req.extra_payment,
            req.strategy,
            req.months,
            req.priority,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)
    return timeline_response(result)
