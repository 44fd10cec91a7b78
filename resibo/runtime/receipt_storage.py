"""Storage of extracted receipts.

The extraction engine owns no storage format. This module defines the
collaborator contract the scan workflow hands rows to, plus a local JSON
implementation used by the CLI:

    receipts/
    ├── images/     - Uploaded receipt photos
    ├── ocr_text/   - Raw recognized text
    └── extracted/  - <receipt_id>.json item rows
"""

import json
from decimal import Decimal
from pathlib import Path
from typing import Any, Protocol

from resibo.runtime.logging import get_logger
from resibo.runtime.paths import get_paths

logger = get_logger(__name__)


class ReceiptSink(Protocol):
    """Persistence collaborator: accepts item rows for one receipt."""

    def save(self, receipt_id: str, rows: list[dict[str, Any]]) -> None: ...


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JsonDirectorySink:
    """Write each receipt's rows to ``<directory>/<receipt_id>.json``."""

    def __init__(self, directory: Path | None = None) -> None:
        self.directory = directory if directory is not None else get_paths().receipts_extracted

    def path_for(self, receipt_id: str) -> Path:
        return self.directory / f"{receipt_id}.json"

    def save(self, receipt_id: str, rows: list[dict[str, Any]]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        filepath = self.path_for(receipt_id)
        filepath.write_text(json.dumps(rows, indent=2, default=_json_default), encoding="utf-8")
        logger.info("Saved %d item rows to %s", len(rows), filepath)
