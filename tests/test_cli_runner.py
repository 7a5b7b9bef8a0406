# tests/test_cli_runner.py

"""Tests for the headless CLI runner."""

import io
import json
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from src.cli.runner import cli_search, run_health_check
from src.models.offer import RankedResult
from src.models.query import SearchQuery
from src.services.health_checker import HealthResult
from src.services.price_aggregator import AggregationResult


def _aggregator(results: list[RankedResult]) -> MagicMock:
    outcome = AggregationResult(
        query=SearchQuery("iphone", "US"),
        results=results,
        total_candidates=len(results) + 1,
        excluded_count=1,
        skipped_sources=["Walmart"],
    )
    aggregator = MagicMock()
    aggregator.search = AsyncMock(return_value=outcome)
    return aggregator


OFFER = RankedResult(
    product_name="Apple iPhone 13 Mini 128GB Pink",
    price_text="$350.00",
    currency="USD",
    link="https://www.ebay.com/itm/333333333333",
    source="eBay",
    price=350.0,
)


class TestCliSearch(unittest.IsolatedAsyncioTestCase):

    async def test_json_output(self) -> None:
        aggregator = _aggregator([OFFER])
        stdout = io.StringIO()
        with patch("sys.stdout", stdout):
            code = await cli_search("iphone", "US", "json", aggregator)

        self.assertEqual(code, 0)
        payload = json.loads(stdout.getvalue())
        self.assertEqual(payload, [OFFER.to_response()])
        aggregator.search.assert_awaited_once_with(
            SearchQuery(query="iphone", country="US")
        )
        aggregator.interpreter.client.aclose.assert_not_called()

    async def test_table_output(self) -> None:
        with patch("src.cli.runner._print_table") as print_table:
            code = await cli_search(
                "iphone", "US", "table", _aggregator([OFFER])
            )
        self.assertEqual(code, 0)
        print_table.assert_called_once_with([OFFER])

    async def test_no_results_exit_code(self) -> None:
        stdout = io.StringIO()
        with patch("sys.stdout", stdout):
            code = await cli_search("zzz", "US", "json", _aggregator([]))
        self.assertEqual(code, 1)
        self.assertEqual(stdout.getvalue(), "")


class TestRunHealthCheck(unittest.IsolatedAsyncioTestCase):

    def _patch_checker(self, results: list[HealthResult]) -> MagicMock:
        checker = MagicMock()
        checker.return_value.check_all = AsyncMock(return_value=results)
        patcher = patch("src.services.health_checker.HealthChecker", checker)
        patcher.start()
        self.addCleanup(patcher.stop)
        return checker

    async def test_all_reachable(self) -> None:
        checker = self._patch_checker([
            HealthResult("Amazon", "ok", 120.0, ""),
            HealthResult("Walmart", "unsupported", 0.0, "No extractor"),
        ])
        self.assertEqual(await run_health_check("US"), 0)
        checker.assert_called_once_with("US")

    async def test_down_source_fails(self) -> None:
        self._patch_checker([
            HealthResult("Amazon", "ok", 120.0, ""),
            HealthResult("eBay", "down", 80.0, "HTTP 503"),
        ])
        self.assertEqual(await run_health_check("US"), 1)


if __name__ == "__main__":
    unittest.main()
