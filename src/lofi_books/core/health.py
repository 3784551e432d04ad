"""Health endpoints for the lofi-books service.

Provides:

- **Response models** — ``HealthResponse``, ``CheckResult``, ``LivenessResponse``.
- **``HealthCheck``** — a named dependency check (database, image storage)
  with ``required`` / ``timeout_s`` knobs.
- **``create_health_router()``** — ``/health``, ``/health/ready``,
  ``/health/live``.

Quick start::

    router = create_health_router(
        service_name="lofi-books",
        version="0.3.0",
        checks=[HealthCheck("database", check_db)],
    )
    app.include_router(router)
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

_START_TIME = time.monotonic()

Status = Literal["healthy", "degraded", "unhealthy"]


class CheckResult(BaseModel):
    """Result of a single dependency health check."""

    status: Status
    latency_ms: float | None = None
    error: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Body of ``GET /health`` and ``GET /health/ready``."""

    status: Status = "healthy"
    service: str = ""
    version: str = ""
    uptime_s: float = Field(default_factory=lambda: round(time.monotonic() - _START_TIME, 1))
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    checks: dict[str, CheckResult] = Field(default_factory=dict)


class LivenessResponse(BaseModel):
    """Response for liveness probes — always ``{"status": "alive"}``."""

    status: str = "alive"


@dataclass
class HealthCheck:
    """A dependency check.

    ``check_fn`` returns ``True`` or raises.  A failing ``required``
    check makes the service ``unhealthy``; an optional one makes it
    ``degraded``.
    """

    name: str
    check_fn: Callable[[], Awaitable[bool]]
    required: bool = True
    timeout_s: float = 5.0


async def _run_checks(checks: list[HealthCheck]) -> dict[str, CheckResult]:
    async def _one(hc: HealthCheck) -> tuple[str, CheckResult]:
        start = time.monotonic()
        try:
            await asyncio.wait_for(hc.check_fn(), timeout=hc.timeout_s)
            elapsed = (time.monotonic() - start) * 1000
            return hc.name, CheckResult(status="healthy", latency_ms=round(elapsed, 2))
        except TimeoutError:
            return hc.name, CheckResult(status="unhealthy", error="timeout")
        except Exception as exc:  # noqa: BLE001
            elapsed = (time.monotonic() - start) * 1000
            return hc.name, CheckResult(status="unhealthy", latency_ms=round(elapsed, 2), error=str(exc)[:200])

    pairs = await asyncio.gather(*[_one(hc) for hc in checks])
    return dict(pairs)


def _compute_status(results: dict[str, CheckResult], checks: list[HealthCheck]) -> Status:
    required = {hc.name for hc in checks if hc.required}
    down = {name for name, result in results.items() if result.status != "healthy"}
    if down & required:
        return "unhealthy"
    if down:
        return "degraded"
    return "healthy"


def create_health_router(
    service_name: str,
    version: str,
    checks: list[HealthCheck] | None = None,
    prefix: str = "/health",
) -> APIRouter:
    """Build the health router.  Mounted without the API prefix."""
    router = APIRouter(tags=["health"])
    _checks: list[HealthCheck] = checks or []

    async def _evaluate(*, strict: bool) -> JSONResponse:
        results = await _run_checks(_checks)
        status = _compute_status(results, _checks)
        failing = status != "healthy" if strict else status == "unhealthy"
        body = HealthResponse(status=status, service=service_name, version=version, checks=results)
        return JSONResponse(content=body.model_dump(), status_code=503 if failing else 200)

    @router.get(prefix, response_model=HealthResponse)
    async def health() -> JSONResponse:
        """Runs every check; 503 only when a required one fails."""
        return await _evaluate(strict=False)

    @router.get(f"{prefix}/ready", response_model=HealthResponse)
    async def readiness() -> JSONResponse:
        """Readiness probe: 503 unless every check passes."""
        return await _evaluate(strict=True)

    @router.get(f"{prefix}/live", response_model=LivenessResponse)
    async def liveness() -> LivenessResponse:
        """Liveness probe — always 200 if the process is running."""
        return LivenessResponse()

    return router


__all__ = ["CheckResult", "HealthCheck", "HealthResponse", "LivenessResponse", "create_health_router"]
