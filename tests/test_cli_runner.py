# tests/test_cli_runner.py

"""Tests for the headless CLI runner and the main entry point."""

import io
import json
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

import main
from threadfinder.cli.runner import (
    _price_sort_key,
    cli_search,
    list_stores,
    resolve_stores,
)
from threadfinder.models.product import Product
from threadfinder.models.search import SearchResponse, StoreResult
from threadfinder.models.store import StoreDirectory


def _response(with_results: bool = True) -> SearchResponse:
    results = [
        Product(
            id="prod_1_abc",
            store="asos",
            store_name="ASOS",
            title="Satin Slip Dress",
            price="$40.00",
            image="https://images.example.com/1.jpg",
            link="https://www.asos.com/prd/1",
        )
    ] if with_results else []
    return SearchResponse(
        query="slip dress",
        timestamp="2024-06-01T12:00:00.000Z",
        stores=[
            StoreResult(id="asos", name="ASOS", results=results),
            StoreResult(id="hm", name="H&M", error="HTTP 403"),
        ],
    )


class TestResolveStores(unittest.TestCase):
    """resolve_stores unit tests."""

    def setUp(self) -> None:
        self.directory = StoreDirectory.from_settings()

    def test_none_means_all(self) -> None:
        """No --stores flag selects every store."""
        self.assertEqual(len(resolve_stores(None, self.directory)), 13)

    def test_csv_order_kept(self) -> None:
        """Stores are returned in the order given."""
        stores = resolve_stores(" hm, asos ,", self.directory)
        self.assertEqual([s.id for s in stores], ["hm", "asos"])

    def test_unknown_store_exits(self) -> None:
        """Unknown ids abort with exit code 1."""
        with self.assertRaises(SystemExit) as ctx:
            resolve_stores("asos,bogus", self.directory)
        self.assertEqual(ctx.exception.code, 1)


class TestCliSearch(unittest.IsolatedAsyncioTestCase):
    """cli_search end-to-end with a stubbed aggregator."""

    def setUp(self) -> None:
        self.directory = StoreDirectory.from_settings()

    @patch("sys.stdout", new_callable=io.StringIO)
    @patch("threadfinder.cli.runner.SearchAggregator")
    async def test_json_output(
        self, mock_aggregator_cls: MagicMock, mock_stdout: io.StringIO
    ) -> None:
        """Results are printed to stdout as the API's JSON body."""
        mock_aggregator_cls.return_value.search = AsyncMock(
            return_value=_response()
        )

        code = await cli_search(
            "slip dress", "asos,hm", "dresses", "json", self.directory
        )

        self.assertEqual(code, 0)
        body = json.loads(mock_stdout.getvalue())
        self.assertEqual(body["query"], "slip dress")
        self.assertEqual(body["stores"][0]["results"][0]["storeName"], "ASOS")
        mock_aggregator_cls.return_value.search.assert_awaited_once_with(
            "slip dress", ["asos", "hm"], "dresses"
        )

    @patch("threadfinder.cli.runner.SearchAggregator")
    async def test_no_results_exit_code(
        self, mock_aggregator_cls: MagicMock
    ) -> None:
        """A search with no products exits with 1."""
        mock_aggregator_cls.return_value.search = AsyncMock(
            return_value=_response(with_results=False)
        )

        code = await cli_search(
            "slip dress", None, None, "json", self.directory
        )

        self.assertEqual(code, 1)

    @patch("threadfinder.cli.runner.Console")
    @patch("threadfinder.cli.runner.SearchAggregator")
    async def test_table_output(
        self, mock_aggregator_cls: MagicMock, mock_console_cls: MagicMock
    ) -> None:
        """Table format renders through rich."""
        mock_aggregator_cls.return_value.search = AsyncMock(
            return_value=_response()
        )

        code = await cli_search(
            "slip dress", "asos", None, "table", self.directory
        )

        self.assertEqual(code, 0)
        mock_console_cls.return_value.print.assert_called_once()


class TestCliHelpers(unittest.TestCase):
    """Smaller runner helpers."""

    def test_price_sort_key(self) -> None:
        """Parsed prices sort numerically; unknown prices sort last."""
        self.assertEqual(_price_sort_key("$40.00"), 40.0)
        self.assertEqual(_price_sort_key("£1,200"), 1200.0)
        self.assertEqual(_price_sort_key("See price"), float("inf"))

    @patch("threadfinder.cli.runner.Console")
    def test_list_stores(self, mock_console_cls: MagicMock) -> None:
        """The directory is printed as a table."""
        code = list_stores(StoreDirectory.from_settings())

        self.assertEqual(code, 0)
        table = mock_console_cls.return_value.print.call_args.args[0]
        self.assertEqual(table.row_count, 13)


class TestMainEntryPoint(unittest.TestCase):
    """Routing in main.main()."""

    @patch("main.setup_logging")
    def test_no_query_prints_help(self, mock_setup: MagicMock) -> None:
        """Without a query or mode flag the CLI exits with 2."""
        with patch("sys.argv", ["threadfinder"]), \
                patch("sys.stdout", new_callable=io.StringIO):
            with self.assertRaises(SystemExit) as ctx:
                main.main()
        self.assertEqual(ctx.exception.code, 2)

    @patch("main._run_server")
    @patch("main.setup_logging")
    def test_serve_flag(
        self, mock_setup: MagicMock, mock_run_server: MagicMock
    ) -> None:
        """--serve starts the API with the requested port."""
        with patch("sys.argv", ["threadfinder", "--serve", "--port", "9001"]):
            main.main()
        args = mock_run_server.call_args.args[0]
        self.assertEqual(args.port, 9001)

    @patch("main._run_cli")
    @patch("main.setup_logging")
    def test_query_runs_cli(
        self, mock_setup: MagicMock, mock_run_cli: MagicMock
    ) -> None:
        """A positional query dispatches to the CLI search."""
        with patch(
            "sys.argv", ["threadfinder", "linen dress", "-s", "asos", "-f", "table"]
        ):
            main.main()
        args = mock_run_cli.call_args.args[0]
        self.assertEqual(args.query, "linen dress")
        self.assertEqual(args.stores, "asos")
        self.assertEqual(args.output_format, "table")


if __name__ == "__main__":
    unittest.main()
