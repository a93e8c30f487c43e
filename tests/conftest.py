"""
Pytest fixtures for the receipt tax engine test suite.

Provides:
- The reference basket (book, imported calculator, imported medicine)
- A structured-log capture fixture
- Logging state reset between tests
"""

import json
import logging
from io import StringIO

import pytest

from receipt_engines import ItemBuilder, PricedItem, Receipt
from receipt_kernel.logging_config import (
    LogContext,
    configure_logging,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Each test starts with unconfigured logging and an empty context."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


class LogCapture:
    """Collects JSON log lines written by the structured formatter."""

    def __init__(self, stream: StringIO):
        self._stream = stream

    @property
    def records(self) -> list[dict]:
        lines = self._stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    def messages(self) -> list[str]:
        return [r["message"] for r in self.records]

    def find(self, message: str) -> list[dict]:
        return [r for r in self.records if r["message"] == message]


@pytest.fixture
def log_capture() -> LogCapture:
    """Configure receipt_kernel logging at DEBUG into an in-memory stream."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    configure_logging(level=logging.DEBUG, handler=handler)
    return LogCapture(stream)


@pytest.fixture
def book() -> PricedItem:
    return ItemBuilder("Book", "48.50").build()


@pytest.fixture
def imported_calculator() -> PricedItem:
    return ItemBuilder("Imported Calculator", "12.25").add_all_standard_taxes().build()


@pytest.fixture
def imported_medicine() -> PricedItem:
    return ItemBuilder("Imported Medicine", "8.40").add_import_tax().build()


@pytest.fixture
def basket(book, imported_calculator, imported_medicine) -> Receipt:
    receipt = Receipt()
    receipt.add(book)
    receipt.add(imported_calculator)
    receipt.add(imported_medicine)
    return receipt
