"""
Liveness probe for the calculation engine.

The probe is advisory: every failure mode (non-2xx status, timeout,
connection or DNS error, malformed address) is reported as unhealthy and
never raised to the caller.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import httpx

from shared.logging import get_logger
from shared.metrics import MetricsCollector


DEFAULT_PROBE_TIMEOUT = 3.0


class HealthProbe:
    """Single-attempt, bounded-timeout health check against ``{base}/health``."""

    def __init__(
        self,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self.timeout = timeout
        self.metrics = metrics
        self.logger = get_logger("proposals.health_probe")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def check(self, engine_base_address: str) -> bool:
        """Return True only when the engine answers its health endpoint with 2xx."""
        url = f"{engine_base_address.rstrip('/')}/health"

        try:
            # httpx timeouts are per phase; wait_for bounds the whole exchange
            response = await asyncio.wait_for(self._client.get(url), timeout=self.timeout)
        except Exception as e:
            # anyio can surface bad addresses as ExceptionGroup or OverflowError
            self.logger.warning(
                "Engine health check failed, contingency mode available",
                url=url,
                error=str(e) or type(e).__name__
            )
            self._record("unreachable")
            return False

        if response.is_success:
            self.logger.info("Engine is online", url=url, status_code=response.status_code)
            self._record("healthy")
            return True

        self.logger.warning("Engine reported unhealthy status", url=url, status_code=response.status_code)
        self._record("unhealthy")
        return False

    def _record(self, outcome: str) -> None:
        if self.metrics:
            self.metrics.increment_counter("engine_probes_total", outcome=outcome)
