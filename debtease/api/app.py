"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from debtease.api.routes import payments, payoff, projection, strategies, summary
from debtease.config import settings

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="DebtEase",
    description="Debt payoff planning engine",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(payments.router)
app.include_router(payoff.router)
app.include_router(projection.router)
app.include_router(strategies.router)
app.include_router(summary.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
