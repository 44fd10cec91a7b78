"""Parse raw OCR text into an ExtractionResult."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from resibo.domain.receipt import ExtractionResult, LineItem, NormalizedLine, sum_amounts

from .line_filter import filter_candidate_lines
from .normalizer import normalize_lines
from .ocr_parser import _extract_items

logger = logging.getLogger(__name__)


def aggregate_items(
    items: Iterable[LineItem],
    normalized_text: str = "",
    skipped_lines: Iterable[NormalizedLine] = (),
) -> ExtractionResult:
    """Sum item amounts into a total, keeping items in extraction order."""
    items = tuple(items)
    return ExtractionResult(
        items=items,
        total=sum_amounts(item.amount for item in items),
        normalized_text=normalized_text,
        skipped_lines=tuple(line.content for line in skipped_lines),
    )


def extract_receipt_items(raw_text: str) -> ExtractionResult:
    """
    Extract line items and their total from one receipt's OCR text.

    Pure and deterministic: the same text always yields an equal result.
    The total is the sum of item amounts; printed TOTAL lines are never read.

    Args:
        raw_text: Text returned by the recognition service for one image

    Returns:
        ExtractionResult, with no items when nothing matched
    """
    lines = normalize_lines(raw_text)
    normalized_text = "\n".join(line.content for line in lines)
    candidates = filter_candidate_lines(lines)

    items, skipped = _extract_items(candidates)
    result = aggregate_items(items, normalized_text=normalized_text, skipped_lines=skipped)

    logger.info(
        "Extracted %d items (total %s) from %d lines; %d filtered, %d unmatched",
        len(result.items),
        result.total,
        len(lines),
        len(lines) - len(candidates),
        len(skipped),
    )
    return result
