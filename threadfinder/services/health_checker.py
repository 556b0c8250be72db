# threadfinder/services/health_checker.py

"""Homepage reachability probes for every configured store."""

import asyncio
import logging
import random
import time
from dataclasses import dataclass
from typing import Any

from curl_cffi import requests as curl_requests

from threadfinder.config.settings import Settings
from threadfinder.models.store import StoreConfig, StoreDirectory

logger = logging.getLogger("threadfinder.health")

_PROBE_TIMEOUT = 10  # seconds per store
_SLOW_MS = 5000


@dataclass
class HealthResult:
    """How one store's homepage answered."""

    store_id: str
    status: str  # ok | slow | down
    latency_ms: float
    message: str = ""


def _classify(status_code: int, elapsed_ms: float) -> tuple[str, str]:
    if status_code >= 400:
        return "down", f"HTTP {status_code}"
    if elapsed_ms > _SLOW_MS:
        return "slow", "High latency"
    return "ok", ""


async def probe_store(store: StoreConfig, session: Any) -> HealthResult:
    """GET ``<base_url>/`` and classify the outcome; never raises."""
    started = time.monotonic()
    headers = {
        "User-Agent": random.choice(Settings.USER_AGENTS),
        "Accept": Settings.HTML_ACCEPT,
        "Accept-Language": Settings.ACCEPT_LANGUAGE,
    }
    try:
        resp = await session.get(
            f"{store.base_url}/", headers=headers, timeout=_PROBE_TIMEOUT
        )
    except Exception as exc:
        status, message = "down", str(exc)[:80]
    else:
        status, message = _classify(
            resp.status_code, (time.monotonic() - started) * 1000
        )

    return HealthResult(
        store_id=store.id,
        status=status,
        latency_ms=(time.monotonic() - started) * 1000,
        message=message,
    )


class HealthChecker:
    """Probes all stores in a directory over one shared session."""

    def __init__(self, directory: StoreDirectory) -> None:
        self.directory = directory

    async def check_all(self) -> list[HealthResult]:
        session = curl_requests.AsyncSession(
            impersonate=Settings.IMPERSONATE_BROWSER
        )
        try:
            results = await asyncio.gather(
                *(probe_store(store, session) for store in self.directory)
            )
        finally:
            await session.close()

        down = [r.store_id for r in results if r.status == "down"]
        for result in results:
            logger.info(
                "[%s] %s in %.0fms %s",
                result.store_id,
                result.status,
                result.latency_ms,
                result.message,
            )
        if down:
            logger.warning("Stores down: %s", ", ".join(down))
        return list(results)
