"""Health check endpoint with database validation and caching."""

import time
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from src.portfolio.core.db import get_session

HEALTH_CACHE_TTL = 10  # seconds


class HealthCache:
    """Last health result of one application, reused for `ttl` seconds."""

    def __init__(self, ttl: float = HEALTH_CACHE_TTL):
        self.ttl = ttl
        self.result: dict[str, Any] | None = None
        self.checked_at: float = 0

    def get(self, now: float) -> dict[str, Any] | None:
        if self.result is None or (now - self.checked_at) >= self.ttl:
            return None
        cached = self.result.copy()
        cached["cached"] = True
        cached["cache_age_seconds"] = round(now - self.checked_at, 1)
        return cached

    def store(self, result: dict[str, Any], now: float) -> None:
        self.result = result
        self.checked_at = now


def setup_health_endpoint(app: FastAPI) -> None:
    """Configure the health check endpoint and its per-app cache."""
    app.state.health_cache = HealthCache()

    @app.get("/health", include_in_schema=False)
    async def health(request: Request) -> JSONResponse:
        """Health check with dependency validation and caching."""
        cache: HealthCache = request.app.state.health_cache
        now = time.time()

        cached = cache.get(now)
        if cached is not None:
            status_code = 200 if cached["status"] == "healthy" else 503
            return JSONResponse(content=cached, status_code=status_code)

        context = request.app.state.context
        health_status: dict[str, Any] = {
            "status": "healthy",
            "database": "unknown",
            "media_backend": context.settings.media_backend,
            "cached": False,
            "timestamp": now,
        }

        try:
            async with get_session(context.session_factory) as session:
                await session.execute(text("SELECT 1"))
            health_status["database"] = "healthy"
        except Exception as e:
            health_status["database"] = f"unhealthy: {str(e)}"
            health_status["status"] = "unhealthy"

        cache.store(health_status, now)

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)
