# src/cli/runner.py

"""Headless CLI search runner — reuses the async aggregator."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from src.models.offer import RankedResult
from src.models.query import SearchQuery
from src.services.price_aggregator import PriceAggregator

logger = logging.getLogger("price_aggregator.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _print_table(results: list[RankedResult]) -> None:
    """Render a Rich table of ranked offers to stdout."""
    table = Table(
        title="Cheapest Offers",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Product", max_width=60)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Matched", justify="center")
    table.add_column("Source", style="magenta")
    table.add_column("Link", overflow="fold", style="dim")

    for idx, r in enumerate(results, 1):
        table.add_row(
            str(idx),
            r.product_name[:60],
            f"{r.currency} {r.price:,.2f}",
            ", ".join(r.matched_parameters) or "—",
            r.source,
            r.link,
        )

    Console().print(table)


async def cli_search(
    query: str,
    country: str,
    output_format: str,
    aggregator: PriceAggregator | None = None,
) -> int:
    """Run a headless search and return an exit code (0=ok, 1=none)."""
    owned = aggregator is None
    aggregator = aggregator or PriceAggregator()
    _err.print(
        f"[bold]Searching:[/bold] {query}  [dim]country={country}[/dim]"
    )

    try:
        result = await aggregator.search(
            SearchQuery(query=query, country=country)
        )
    finally:
        if owned:
            await aggregator.interpreter.client.aclose()

    for name in result.skipped_sources:
        _err.print(f"[dim]Skipped {name} (unsupported)[/dim]")
    for error_msg in result.errors:
        _err.print(f"[red]Error: {error_msg}[/red]")

    if not result.results:
        _err.print("[yellow]No products found.[/yellow]")
        return 1

    _err.print(
        f"[green]{len(result.results)} offers[/green] from "
        f"{result.total_candidates} listings [dim]"
        f"(unpriced={result.invalid_count} "
        f"irrelevant={result.excluded_count} "
        f"duplicates={result.deduplicated_count})[/dim]"
    )

    if output_format == "table":
        _print_table(result.results)
    else:
        json.dump(
            [r.to_response() for r in result.results],
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return 0


_STATUS_LABELS: dict[str, str] = {
    "ok": "[green]reachable[/green]",
    "slow": "[yellow]slow[/yellow]",
    "unsupported": "[dim]no extractor[/dim]",
    "down": "[red]unreachable[/red]",
}


async def run_health_check(country: str | None = None) -> int:
    """Probe the homepage of every source for *country*.

    Returns 1 when at least one supported source is unreachable.
    """
    from src.services.health_checker import HealthChecker

    checker = HealthChecker(country)
    _err.print(
        f"[bold]Probing {len(checker.sources)} sources"
        f"[/bold] [dim]country={country or '-'}[/dim]"
    )
    probes = await checker.check_all()

    table = Table(title="Source Reachability", title_style="bold cyan")
    table.add_column("Source", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency (ms)", justify="right")
    table.add_column("Detail", style="dim", overflow="fold")

    for probe in probes:
        table.add_row(
            probe.source,
            _STATUS_LABELS.get(probe.status, probe.status),
            f"{probe.latency_ms:.0f}" if probe.latency_ms else "-",
            probe.message,
        )
    Console().print(table)

    return 1 if any(p.status == "down" for p in probes) else 0
