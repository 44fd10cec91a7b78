"""Centralized path and service configuration for resibo.

Environment variables:
    RESIBO_HOME: Root directory for working files. Default: current directory
    OCR_SERVICE_URL: Recognition service base URL. Default: http://localhost:8001
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_OCR_SERVICE_URL = "http://localhost:8001"


def _get_project_root() -> Path:
    """Determine the working root directory."""
    return Path(os.environ.get("RESIBO_HOME") or Path.cwd())


def get_ocr_service_url() -> str:
    return os.environ.get("OCR_SERVICE_URL") or DEFAULT_OCR_SERVICE_URL


@dataclass
class ProjectPaths:
    """Container for all working paths.

    All paths are computed relative to the root, so modules agree on
    locations regardless of the current working directory.
    """

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        self.root = Path(self.root).expanduser().resolve()

    @property
    def receipts(self) -> Path:
        """Root receipts directory."""
        return self.root / "receipts"

    @property
    def receipts_images(self) -> Path:
        """Uploaded receipt photos."""
        return self.receipts / "images"

    @property
    def receipts_ocr_text(self) -> Path:
        """Raw recognized text, kept for debugging."""
        return self.receipts / "ocr_text"

    @property
    def receipts_extracted(self) -> Path:
        """Extraction records written by JsonDirectorySink."""
        return self.receipts / "extracted"

    def ensure_receipt_directories(self) -> None:
        """Create all receipt-related directories if they don't exist."""
        self.receipts_images.mkdir(parents=True, exist_ok=True)
        self.receipts_ocr_text.mkdir(parents=True, exist_ok=True)
        self.receipts_extracted.mkdir(parents=True, exist_ok=True)


# Module-level singleton
_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Drop the singleton so the next get_paths() re-reads RESIBO_HOME."""
    global _paths
    _paths = None
