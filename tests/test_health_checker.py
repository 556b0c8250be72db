# tests/test_health_checker.py

"""Tests for the store health checker service."""

import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from threadfinder.models.store import StoreConfig, StoreDirectory
from threadfinder.services.health_checker import (
    HealthChecker,
    probe_store,
)

STORE = StoreConfig(
    id="whitefox",
    name="White Fox",
    tier=1,
    adapter="unused",
    domain="www.whitefoxboutique.com",
)


def _session(status_code: int = 200) -> AsyncMock:
    mock_resp = MagicMock()
    mock_resp.status_code = status_code
    session = AsyncMock()
    session.get.return_value = mock_resp
    return session


class TestProbeStore(unittest.IsolatedAsyncioTestCase):
    """Tests for the per-store health probe function."""

    async def test_ok_status(self) -> None:
        """A fast 200 response should return 'ok' status."""
        session = _session(200)

        result = await probe_store(STORE, session)

        self.assertEqual(result.status, "ok")
        self.assertEqual(result.store_id, "whitefox")
        self.assertGreaterEqual(result.latency_ms, 0)
        self.assertEqual(
            session.get.call_args.args[0],
            "https://www.whitefoxboutique.com/",
        )

    async def test_down_on_http_error(self) -> None:
        """A 4xx/5xx response should return 'down' status."""
        result = await probe_store(STORE, _session(403))

        self.assertEqual(result.status, "down")
        self.assertIn("403", result.message)

    async def test_down_on_exception(self) -> None:
        """A network error should return 'down' status."""
        session = AsyncMock()
        session.get.side_effect = ConnectionError("Connection refused")

        result = await probe_store(STORE, session)

        self.assertEqual(result.status, "down")
        self.assertIn("Connection refused", result.message)

    @patch("threadfinder.services.health_checker._SLOW_MS", -1)
    async def test_slow_response(self) -> None:
        """A response over the latency threshold is reported as 'slow'."""
        result = await probe_store(STORE, _session(200))

        self.assertEqual(result.status, "slow")
        self.assertEqual(result.message, "High latency")


class TestHealthChecker(unittest.IsolatedAsyncioTestCase):
    """Tests for HealthChecker.check_all."""

    @patch("threadfinder.services.health_checker.curl_requests.AsyncSession")
    async def test_checks_every_store(
        self, mock_session_cls: MagicMock
    ) -> None:
        """One result per store, and the shared session is closed."""
        session = _session(200)
        mock_session_cls.return_value = session
        directory = StoreDirectory([
            STORE,
            StoreConfig(
                id="asos", name="ASOS", tier=2, adapter="unused",
                domain="www.asos.com",
            ),
        ])

        results = await HealthChecker(directory).check_all()

        self.assertEqual([r.store_id for r in results], ["whitefox", "asos"])
        self.assertTrue(all(r.status == "ok" for r in results))
        session.close.assert_awaited_once()


if __name__ == "__main__":
    unittest.main()
