# src/services/health_checker.py

"""Connectivity probe for the sources of a country's catalog."""

import asyncio
import logging
import time
from dataclasses import dataclass

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.config.sources import sources_for
from src.models.source import SourceDefinition

logger = logging.getLogger("price_aggregator.health")

_SLOW_THRESHOLD_MS = 5000


@dataclass
class HealthResult:
    """Result of a single source health check."""

    source: str
    status: str  # "ok", "slow", "down", "unsupported"
    latency_ms: float
    message: str


def probe_source(source: SourceDefinition) -> HealthResult:
    """GET the source's homepage and classify the response."""
    if not source.supported:
        return HealthResult(
            source=source.name,
            status="unsupported",
            latency_ms=0.0,
            message=f"No extractor for {source.kind.value}",
        )

    start = time.monotonic()
    try:
        with curl_requests.Session(
            impersonate=Settings.IMPERSONATE_BROWSER
        ) as session:
            resp = session.get(
                source.base_url,
                headers=Settings.DEFAULT_HEADERS,
                timeout=Settings.HTTP_TIMEOUT,
            )
        elapsed_ms = (time.monotonic() - start) * 1000

        if resp.status_code != 200:
            return HealthResult(
                source=source.name,
                status="down",
                latency_ms=elapsed_ms,
                message=f"HTTP {resp.status_code}",
            )
        if elapsed_ms > _SLOW_THRESHOLD_MS:
            return HealthResult(
                source=source.name,
                status="slow",
                latency_ms=elapsed_ms,
                message="High latency",
            )
        return HealthResult(
            source=source.name,
            status="ok",
            latency_ms=elapsed_ms,
            message="",
        )
    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        return HealthResult(
            source=source.name,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )


class HealthChecker:
    """Runs concurrent health probes against one country's sources."""

    def __init__(self, country: str | None = None) -> None:
        self.sources = sources_for(country)

    async def check_all(self) -> list[HealthResult]:
        """Probe every source concurrently."""
        results: list[HealthResult] = list(
            await asyncio.gather(
                *(
                    asyncio.to_thread(probe_source, src)
                    for src in self.sources
                )
            )
        )
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.source,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
