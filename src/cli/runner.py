# src/cli/runner.py

"""Headless CLI runners for price fetching and basket management."""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.config.settings import StoreConfig
from src.errors import PriceTrackerError
from src.scrapers.emmsa_scraper import EmmsaScraper
from src.services.price_tracker import PriceTracker
from src.storage.file_manager import FileManager
from src.storage.pantry_client import BasketManager

logger = logging.getLogger("price_tracker.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _fail(context: str, exc: Exception) -> int:
    """Log and report a fatal error, returning the failure exit code."""
    logger.error("%s: %s", context, exc, exc_info=True)
    _err.print(f"[red]{escape(context)}: {escape(str(exc))}[/red]")
    return 1


def _basket_manager() -> BasketManager:
    """Build a BasketManager from the environment (fails fast on no key)."""
    return BasketManager(StoreConfig.from_env())


def run_fetch(
    target_date: date,
    output_path: str | None,
    enable_pantry: bool,
) -> int:
    """Fetch prices for a date, emit JSON, and optionally store in Pantry.

    Returns an exit code (0=ok, 1=fail).
    """
    manager: BasketManager | None = None
    try:
        # Config is validated before any request goes out
        if enable_pantry:
            manager = _basket_manager()

        with EmmsaScraper() as scraper:
            tracker = PriceTracker(scraper, manager)
            _err.print(
                f"[bold]Fetching EMMSA prices:[/bold] "
                f"{target_date.isoformat()}"
            )
            batch = tracker.collect(target_date)

            if not batch.prices:
                _err.print(
                    "[yellow]No trading data for this date.[/yellow]"
                )

            if enable_pantry:
                name = tracker.save_to_pantry(batch)
                _err.print(f"[dim]Stored in Pantry basket {name}[/dim]")

        path = FileManager().write_batch(batch, output_path)
    except PriceTrackerError as exc:
        return _fail("Failed to fetch prices", exc)
    except OSError as exc:
        return _fail("Failed to write output", exc)
    finally:
        if manager is not None:
            manager.close()

    if path is not None:
        _err.print(
            f"[green]✓ Saved {len(batch.prices)} prices to "
            f"{escape(str(path))}[/green]"
        )
    return 0


def run_list_baskets() -> int:
    """Print every basket in the pantry as a table."""
    try:
        with _basket_manager() as manager:
            names = manager.list_baskets()
    except PriceTrackerError as exc:
        return _fail("Failed to list baskets", exc)

    table = Table(
        title="Pantry Baskets",
        show_lines=False,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Basket", style="magenta")
    for idx, name in enumerate(names, 1):
        table.add_row(str(idx), name)

    Console().print(table)
    _err.print(f"[green]✓ {len(names)} baskets[/green]")
    return 0


def run_get_basket(name: str, output_path: str | None) -> int:
    """Download a basket's JSON content to stdout or a file."""
    try:
        with _basket_manager() as manager:
            content = manager.get(name)
        FileManager().write_json(content, output_path)
    except PriceTrackerError as exc:
        return _fail(f"Failed to get basket {name}", exc)
    except OSError as exc:
        return _fail("Failed to write output", exc)
    return 0


def run_create_basket(name: str) -> int:
    """Create a basket unless it already exists."""
    try:
        with _basket_manager() as manager:
            if manager.exists(name):
                _err.print(
                    f"[yellow]Basket {escape(name)} already exists[/yellow]"
                )
                return 0
            manager.create(name)
    except PriceTrackerError as exc:
        return _fail(f"Failed to create basket {name}", exc)

    _err.print(f"[green]✓ Created basket {escape(name)}[/green]")
    return 0


def _load_json_file(path: str) -> Any:
    with open(Path(path), encoding="utf-8") as f:
        return json.load(f)


def run_update_basket(name: str, data_path: str) -> int:
    """Replace a basket's content with the JSON document in ``data_path``."""
    try:
        payload = _load_json_file(data_path)
    except (OSError, ValueError) as exc:
        return _fail(f"Failed to read {data_path}", exc)

    try:
        with _basket_manager() as manager:
            manager.update(name, payload)
    except PriceTrackerError as exc:
        return _fail(f"Failed to update basket {name}", exc)

    _err.print(f"[green]✓ Updated basket {escape(name)}[/green]")
    return 0
