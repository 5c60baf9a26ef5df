"""Async client for the remote DebtEase server (auth, debts, payments)."""

import asyncio
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Awaitable, Callable

import httpx

from debtease.client.errors import (
    ApiError,
    AuthenticationError,
    NetworkError,
    RateLimitError,
    ServerError,
)
from debtease.client.retry import RetryPolicy
from debtease.client.session import Session
from debtease.config import settings
from debtease.models.debt import Debt, PaymentFrequency

logger = logging.getLogger(__name__)

# A 401 on these is retried once before the session is dropped
CRITICAL_ENDPOINTS = ("/debts/", "/auth/me", "/onboarding/")

# 401 details the server sends when its session cache is corrupt rather than expired
SESSION_CORRUPTION_MARKERS = ("Expected unicode, got Delete", "cache", "session")
MAX_CORRUPTION_RETRIES = 2
CORRUPTION_RETRY_DELAY = 1.0
CRITICAL_RETRY_DELAY = 0.5


def debt_from_api(row: dict[str, Any]) -> Debt:
    """Map a server debt record onto the engine's Debt."""
    return Debt(
        id=str(row["id"]),
        current_balance=Decimal(str(row.get("current_balance", 0))),
        annual_rate_percent=Decimal(str(row.get("interest_rate", 0))),
        minimum_payment=Decimal(str(row.get("minimum_payment", 0))),
        name=row.get("name", ""),
        payment_frequency=PaymentFrequency(row.get("payment_frequency") or "monthly"),
        is_high_priority=bool(row.get("is_high_priority", False)),
        is_active=row.get("is_active") is not False,
    )


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return ""
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return ""


def _is_session_corruption(detail: str) -> bool:
    return any(marker in detail for marker in SESSION_CORRUPTION_MARKERS)


class DebtEaseClient:
    def __init__(
        self,
        session: Session,
        base_url: str | None = None,
        retry: RetryPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.session = session
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.retry = retry or RetryPolicy.from_settings()
        self._transport = transport
        self._sleep = sleep
        self._request_id = 0

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=settings.request_timeout,
            transport=self._transport,
        )

    def _retry_delay(self, status: int, endpoint: str, detail: str, attempt: int) -> float | None:
        """Seconds to wait before retrying a failed response, or None to give up."""
        if status == 401:
            if _is_session_corruption(detail) and attempt < MAX_CORRUPTION_RETRIES:
                return CORRUPTION_RETRY_DELAY
            if attempt == 0 and any(p in endpoint for p in CRITICAL_ENDPOINTS):
                return CRITICAL_RETRY_DELAY
            return None
        if status == 429 and self.retry.can_retry(attempt):
            return self.retry.delay_for(attempt, max_delay=settings.rate_limit_max_delay)
        if status >= 500 and self.retry.can_retry(attempt):
            return self.retry.delay_for(attempt)
        return None

    def _error_for(self, status: int, detail: str) -> ApiError:
        if status == 401:
            self.session.clear()
            if _is_session_corruption(detail):
                return AuthenticationError(
                    "Session was corrupted on server. Please log in again.", status
                )
            return AuthenticationError("Your session has expired. Please log in again.", status)
        if status == 429:
            return RateLimitError("Rate limited. Please try again later.", status)
        if status >= 500:
            return ServerError(detail or f"HTTP {status}", status)
        return ApiError(detail or f"HTTP {status}", status)

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict | None = None,
        json: Any = None,
        auth: bool = True,
    ) -> Any:
        """Send a request, retrying per the retry policy and 401 rules."""
        self._request_id += 1
        request_id = self._request_id
        attempt = 0

        while True:
            headers = {"X-Request-ID": str(request_id)}
            if auth:
                headers.update(self.session.auth_headers())

            try:
                async with self._client() as client:
                    resp = await client.request(
                        method, endpoint, params=params, json=json, headers=headers
                    )
            except httpx.TransportError as e:
                logger.warning("Request %d %s %s failed: %s", request_id, method, endpoint, e)
                if self.retry.can_retry(attempt):
                    await self._sleep(self.retry.delay_for(attempt))
                    attempt += 1
                    continue
                raise NetworkError(
                    "Network error. Please check your connection and try again."
                ) from e

            if resp.is_success:
                return resp.json()

            detail = _error_detail(resp)
            logger.warning(
                "Request %d %s %s returned %d (attempt %d): %s",
                request_id, method, endpoint, resp.status_code, attempt + 1, detail,
            )
            delay = self._retry_delay(resp.status_code, endpoint, detail, attempt)
            if delay is None:
                raise self._error_for(resp.status_code, detail)
            await self._sleep(delay)
            attempt += 1

    def _ensure_valid_token(self, operation: str) -> None:
        if not self.session.has_valid_token():
            logger.warning("No valid token for %s", operation)
            raise AuthenticationError("Authentication required. Please log in again.")

    # ---- Auth ----

    async def login(self, email: str, password: str) -> dict:
        """Log in with the form endpoint and start the session. Not retried."""
        async with self._client() as client:
            resp = await client.post(
                "/api/auth/login/form",
                data={"username": email, "password": password},
            )
        if not resp.is_success:
            logger.warning("Login failed with status %d", resp.status_code)
            raise AuthenticationError("Invalid email or password", resp.status_code)

        data = resp.json()
        self.session.start(data["access_token"], data.get("expires_at"))
        return data

    async def get_current_user(self) -> dict:
        self._ensure_valid_token("get_current_user")
        return await self._request("GET", "/api/auth/me")

    # ---- Debts ----

    async def get_debts(self, active_only: bool = True) -> list[Debt]:
        self._ensure_valid_token("get_debts")
        rows = await self._request(
            "GET", "/api/debts/", params={"active_only": str(active_only).lower()}
        )
        return [debt_from_api(row) for row in rows]

    async def get_debt(self, debt_id: str) -> Debt:
        self._ensure_valid_token("get_debt")
        return debt_from_api(await self._request("GET", f"/api/debts/{debt_id}"))

    # ---- Payments ----

    async def record_payment(
        self,
        debt_id: str,
        amount: Decimal,
        payment_date: date | None = None,
        notes: str | None = None,
    ) -> dict:
        payload = {
            "amount": float(amount),
            "payment_date": payment_date.isoformat() if payment_date else None,
            "notes": notes,
        }
        return await self._request("POST", f"/api/payments/{debt_id}/record", json=payload)

    async def get_payment_history(self, debt_id: str | None = None) -> list[dict]:
        params = {"debt_id": debt_id} if debt_id else None
        return await self._request("GET", "/api/payments/history", params=params)

    # ---- Utility ----

    async def health_check(self) -> dict:
        async with self._client() as client:
            resp = await client.get("/health")
        if not resp.is_success:
            raise ApiError(f"Health check failed: {resp.status_code}", resp.status_code)
        return resp.json()
