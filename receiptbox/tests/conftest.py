"""Shared pytest fixtures for receiptbox tests."""

from __future__ import annotations

import io
from collections.abc import Iterator
from pathlib import Path

import pytest

from receiptbox.runtime.paths import reset_paths

COSTCO_RECEIPT = """COSTCO
WHOLESALE
Oak Brook #388
1901 West 22nd Street
Oak Brook, IL 60523
Member 111855127510
1935001 HUG PU 3T-4T
39.99 A
0000366341 / 1935001
8.00-A
1954841 IRIS BIN
11.99 A
1954841 IRIS BIN
11.99 A
7654321 ORGANIC EGGS 8.99 E
SUBTOTAL
64.96
TAX
0.00
**** TOTAL
XXXXXXXXXXXX5089
64.96
CHANGE
0.00
12/09/2025 13:35 388 11 109 630
"""


@pytest.fixture
def costco_receipt_text() -> str:
    return COSTCO_RECEIPT


@pytest.fixture
def receipt_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point RECEIPTBOX_HOME at a temporary directory."""
    monkeypatch.setenv("RECEIPTBOX_HOME", str(tmp_path))
    reset_paths()
    yield tmp_path
    reset_paths()


@pytest.fixture
def png_bytes() -> bytes:
    """A small real image, so Pillow-based preprocessing has something to decode."""
    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGB", (40, 20), "white").save(buffer, format="PNG")
    return buffer.getvalue()
