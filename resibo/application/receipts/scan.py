"""Receipt scan workflow orchestration."""

from __future__ import annotations

import hashlib
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from resibo.domain.receipt import ExtractionResult
from resibo.receipt.formatter import build_item_rows
from resibo.receipt.ocr_result_parser import extract_receipt_items
from resibo.runtime import get_logger
from resibo.runtime.receipt_pipeline import RecognitionFailure, call_ocr_service, save_ocr_text
from resibo.runtime.receipt_storage import ReceiptSink

logger = get_logger(__name__)

ScanStatus = Literal[
    "file_not_found",
    "ocr_failed",
    "no_items",
    "extracted",
    "saved",
]


@dataclass(frozen=True)
class ReceiptScanRequest:
    """Inputs for running receipt scan workflow.

    Several image paths describe one receipt photographed in parts; their
    items are concatenated in the given order.
    """

    image_paths: Sequence[Path]
    ocr_url: str
    sink: ReceiptSink | None = None
    receipt_id: str | None = None
    keep_ocr_text: bool = True
    # Defaults to call_ocr_service.
    recognize: Callable[[Path, str], str] | None = None


@dataclass(frozen=True)
class ReceiptScanResult:
    """Outcome from receipt scan workflow."""

    status: ScanStatus
    extraction: ExtractionResult = field(default_factory=ExtractionResult.empty)
    receipt_id: str | None = None
    error: str | None = None


def compute_receipt_id(image_paths: Sequence[Path]) -> str:
    """SHA-256 over the concatenated image bytes."""
    digest = hashlib.sha256()
    for path in image_paths:
        digest.update(path.read_bytes())
    return digest.hexdigest()


def run_receipt_scan(request: ReceiptScanRequest) -> ReceiptScanResult:
    """Run scan flow: OCR each image -> extract -> merge -> optional save."""
    if not request.image_paths:
        return ReceiptScanResult(status="file_not_found", error="No receipt images given")

    for image_path in request.image_paths:
        if not image_path.exists():
            return ReceiptScanResult(
                status="file_not_found",
                error=f"Receipt file not found: {image_path}",
            )

    recognize = request.recognize or call_ocr_service
    texts: list[str] = []
    for image_path in request.image_paths:
        try:
            text = recognize(image_path, request.ocr_url)
        except RecognitionFailure as exc:
            # One failure voids the whole receipt; no partial item list is returned.
            logger.error("Recognition failed for %s: %s", image_path, exc)
            return ReceiptScanResult(
                status="ocr_failed",
                error=f"Failed to extract text from {image_path.name}: {exc}",
            )
        if request.keep_ocr_text:
            save_ocr_text(text, image_path)
        texts.append(text)

    extraction = ExtractionResult.merge(extract_receipt_items(text) for text in texts)
    receipt_id = request.receipt_id or compute_receipt_id(request.image_paths)

    if not extraction.has_items:
        logger.warning("No valid items found in %d image(s)", len(texts))
        return ReceiptScanResult(status="no_items", extraction=extraction, receipt_id=receipt_id)

    if request.sink is None:
        return ReceiptScanResult(status="extracted", extraction=extraction, receipt_id=receipt_id)

    request.sink.save(receipt_id, build_item_rows(extraction, receipt_id))
    return ReceiptScanResult(status="saved", extraction=extraction, receipt_id=receipt_id)
