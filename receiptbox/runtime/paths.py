"""Centralized path management for receiptbox.

This module provides a single source of truth for where scanned receipts
and their images are kept.

Environment variables:
    RECEIPTBOX_HOME: Data root directory. Default: current working directory
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_data_root() -> Path:
    """Determine the data root directory."""
    return Path(os.environ.get("RECEIPTBOX_HOME") or Path.cwd())


@dataclass
class ProjectPaths:
    """Container for all data paths.

    All paths are computed relative to the data root, ensuring consistency
    across the CLI, the upload server and the tests.
    """

    root: Path = field(default_factory=_get_data_root)

    def __post_init__(self) -> None:
        # Ensure root is resolved to absolute path
        self.root = Path(self.root).expanduser().resolve()

    # --- Receipt paths ---
    @property
    def receipts(self) -> Path:
        """Root receipts directory."""
        return self.root / "receipts"

    @property
    def receipts_images(self) -> Path:
        """Uploaded receipt photos/images."""
        return self.receipts / "images"

    @property
    def receipts_scanned(self) -> Path:
        """Parsed receipts (JSON) awaiting manual review."""
        return self.receipts / "scanned"

    def ensure_receipt_directories(self) -> None:
        """Create all receipt-related directories if they don't exist."""
        self.receipts_images.mkdir(parents=True, exist_ok=True)
        self.receipts_scanned.mkdir(parents=True, exist_ok=True)


# Module-level singleton
_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance.

    Returns:
        The global ProjectPaths instance.
    """
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Forget the cached paths so the next get_paths() re-reads RECEIPTBOX_HOME."""
    global _paths
    _paths = None
