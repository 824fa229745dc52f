"""
Tests for Console Output
========================
Tests log lines and rich tables for catalog and results.
"""

import logging

import pytest
import sys
from pathlib import Path

from rich.console import Console

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nickcollide.catalog import WordCatalog
from nickcollide.experiment import CollisionResult
from nickcollide.ui import (
    format_result,
    log_catalog_summary,
    log_results,
    render_catalog,
    render_results,
)


@pytest.fixture
def results():
    return [
        CollisionResult.from_counts("REUSE/32BIT", 200, 3, population_size=100,
                                    phase_seconds={'population': 1.5, 'measurement': 2.0}),
        CollisionResult.from_counts("RECREATE/64BIT", 200, 0, population_size=100),
    ]


def test_format_result(results):
    assert format_result(results[0]) == "[REUSE/32BIT] collision rate = 1.5% (3/200)"


def test_log_results_in_order(results, caplog):
    caplog.set_level(logging.INFO)
    log_results(results)
    messages = [r.getMessage() for r in caplog.records]
    assert messages == [
        "[REUSE/32BIT] collision rate = 1.5% (3/200)",
        "[RECREATE/64BIT] collision rate = 0.0% (0/200)",
    ]


def test_log_catalog_summary(caplog):
    caplog.set_level(logging.INFO)
    log_catalog_summary(WordCatalog.from_words(['cat', 'dog'], max_len=3))
    assert caplog.records[-1].getMessage() == "ENV: WORD DB { [1]=0, [2]=0, [3]=2 }"


def test_render_results(results):
    console = Console(record=True, width=160)
    table = render_results(results, console=console)
    text = console.export_text()
    assert table.row_count == 2
    assert "REUSE/32BIT" in text
    assert "RECREATE/64BIT" in text
    assert "1.500000" in text


def test_render_catalog():
    console = Console(record=True, width=80)
    table = render_catalog(WordCatalog.from_words(['cat', 'bird'], max_len=4), console=console)
    assert table.row_count == 5
    assert "total" in console.export_text()
