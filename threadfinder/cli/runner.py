# threadfinder/cli/runner.py

"""Terminal front-end over the same aggregator the API uses."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from threadfinder.models.search import SearchResponse
from threadfinder.models.store import StoreConfig, StoreDirectory
from threadfinder.normalizers.fields import normalize_price
from threadfinder.services.search_aggregator import SearchAggregator

logger = logging.getLogger("threadfinder.cli")

# Progress and errors go to stderr; stdout carries only the JSON body
_err = Console(stderr=True)

_HEALTH_LABELS = {
    "ok": "[green]OK[/green]",
    "slow": "[yellow]SLOW[/yellow]",
    "down": "[red]DOWN[/red]",
}


def resolve_stores(
    store_csv: str | None,
    directory: StoreDirectory,
) -> list[StoreConfig]:
    """Turn ``-s asos,hm`` into store configs, keeping the given order.

    ``None`` selects the whole directory.  Unknown ids print the valid
    choices and raise ``SystemExit(1)``.
    """
    if store_csv is None:
        return list(directory)

    wanted = [part.strip() for part in store_csv.split(",")]
    wanted = [store_id for store_id in wanted if store_id]
    bad = [store_id for store_id in wanted if store_id not in directory]
    if bad:
        _err.print(f"[red]Unknown store(s): {', '.join(bad)}[/red]")
        _err.print(
            f"[dim]Choose from: {', '.join(sorted(directory.ids()))}[/dim]"
        )
        raise SystemExit(1)

    return [s for store_id in wanted if (s := directory.get(store_id))]


def _price_sort_key(price: str) -> float:
    """Numeric value of a display price; ``inf`` for 'See price'."""
    normalized = normalize_price(price)
    if normalized is None:
        return float("inf")
    return float(normalized.lstrip("$£€"))


def _print_table(response: SearchResponse) -> None:
    """One table for the whole search, cheapest product first."""
    rows = sorted(
        (p for store in response.stores for p in store.results),
        key=lambda p: _price_sort_key(p.price),
    )
    table = Table(
        title=f"{len(rows)} results for '{response.query}'",
        title_style="bold magenta",
        show_lines=False,
    )
    table.add_column("Store", style="magenta", no_wrap=True)
    table.add_column("Product", max_width=60)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Link", overflow="fold", style="dim")
    for product in rows:
        table.add_row(
            product.store_name, product.title, product.price, product.link
        )
    Console().print(table)


async def cli_search(
    query: str,
    store_csv: str | None,
    category: str | None,
    output_format: str,
    directory: StoreDirectory,
) -> int:
    """Search from the terminal; 0 when anything was found, else 1."""
    stores = resolve_stores(store_csv, directory)
    _err.print(
        f"[bold]'{query}'[/bold] across {len(stores)} stores "
        f"[dim]({', '.join(s.id for s in stores)})[/dim]"
    )

    response = await SearchAggregator(directory).search(
        query, [s.id for s in stores], category
    )
    failed = [s for s in response.stores if s.error]
    for store in failed:
        _err.print(f"[red]✗ {store.name}: {store.error}[/red]")

    if response.total_results == 0:
        _err.print("[yellow]Nothing found.[/yellow]")
        return 1
    _err.print(
        f"[green]✓ {response.total_results} products, "
        f"{len(response.stores) - len(failed)}/{len(response.stores)} "
        f"stores answered[/green]"
    )

    if output_format == "table":
        _print_table(response)
        return 0

    sys.stdout.write(
        json.dumps(response.to_dict(), ensure_ascii=False, indent=2)
    )
    sys.stdout.write("\n")
    return 0


def list_stores(directory: StoreDirectory) -> int:
    """Print the store directory."""
    table = Table(title="Stores", title_style="bold magenta")
    for column in ("ID", "Name", "Tier", "Category", "Domain"):
        table.add_column(column)
    for store in directory:
        table.add_row(
            store.id, store.name, str(store.tier), store.category, store.domain
        )
    Console().print(table)
    return 0


async def run_health_check(directory: StoreDirectory) -> int:
    """Probe every store homepage; exit code 1 if any store is down."""
    from threadfinder.services.health_checker import HealthChecker

    _err.print(f"[bold]Probing {len(directory)} stores...[/bold]")
    results = await HealthChecker(directory).check_all()

    table = Table(title="Store health", title_style="bold magenta")
    table.add_column("Store", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Detail", style="dim")
    for result in results:
        table.add_row(
            result.store_id,
            _HEALTH_LABELS.get(result.status, result.status),
            f"{result.latency_ms:.0f}ms",
            result.message,
        )
    Console().print(table)

    return 1 if any(r.status == "down" for r in results) else 0
