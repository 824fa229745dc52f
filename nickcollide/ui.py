#!/usr/bin/env python3
"""
Console Output
==============
Rich-based logging and result tables.

Usage:
    from nickcollide.ui import configure_logging, log_results, render_results

    configure_logging("INFO")
    log_catalog_summary(catalog)
    ...
    log_results(results)
    render_results(results)
"""

import logging
from typing import Optional, Sequence, Union

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from nickcollide.catalog import WordCatalog
from nickcollide.experiment import CollisionResult
from nickcollide.settings import get_setting

logger = logging.getLogger(__name__)


def configure_logging(level: Union[str, int, None] = None,
                      console: Optional[Console] = None) -> None:
    """Route all logging through a single RichHandler on the root logger."""
    if level is None:
        level = get_setting("logging.level", "INFO")
    if isinstance(level, str):
        level = level.upper()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(
        get_setting("logging.format", "%(message)s"),
        datefmt=get_setting("logging.date_format", "[%X]"),
    ))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)


def log_catalog_summary(catalog: WordCatalog) -> None:
    """Log candidate counts per word length."""
    logger.info(catalog.describe())


def format_result(result: CollisionResult) -> str:
    return (f"[{result.label}] collision rate = {result.collision_rate_percent}% "
            f"({result.num_collisions}/{result.num_tries})")


def log_results(results: Sequence[CollisionResult]) -> None:
    """Log one line per strategy, in the order given."""
    for result in results:
        logger.info(format_result(result))


def render_results(results: Sequence[CollisionResult],
                   console: Optional[Console] = None) -> Table:
    """Print a summary table of the results and return it."""
    table = Table(title="Nickname collisions by PRNG strategy", box=box.SIMPLE_HEAVY)
    table.add_column("Strategy", style="bold")
    table.add_column("Population", justify="right")
    table.add_column("Collisions", justify="right")
    table.add_column("Tries", justify="right")
    table.add_column("Rate %", justify="right", style="cyan")
    table.add_column("Population s", justify="right", style="dim")
    table.add_column("Measurement s", justify="right", style="dim")

    for r in results:
        seconds = r.phase_seconds or {}
        table.add_row(
            r.label,
            f"{r.population_size:,}",
            f"{r.num_collisions:,}",
            f"{r.num_tries:,}",
            f"{r.collision_rate_percent:.6f}",
            f"{seconds['population']:.1f}" if 'population' in seconds else "-",
            f"{seconds['measurement']:.1f}" if 'measurement' in seconds else "-",
        )

    (console or Console()).print(table)
    return table


def render_catalog(catalog: WordCatalog,
                   console: Optional[Console] = None) -> Table:
    """Print candidate counts per word length as a table and return it."""
    table = Table(title="Word catalog", box=box.SIMPLE)
    table.add_column("Length", justify="right")
    table.add_column("Words", justify="right")
    for length, size in catalog.counts().items():
        table.add_row(str(length), f"{size:,}")
    table.add_row("total", f"{len(catalog):,}", style="bold")

    (console or Console()).print(table)
    return table


__all__ = [
    'configure_logging',
    'log_catalog_summary',
    'format_result',
    'log_results',
    'render_results',
    'render_catalog',
]
