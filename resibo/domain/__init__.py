"""Core domain models for resibo.

This module provides the data models shared by the extraction engine and its callers:
- NormalizedLine: one cleaned OCR line
- LineItem: one extracted purchase line
- ExtractionResult: items, total and normalized text for one receipt

Usage:
    from resibo.domain import ExtractionResult, LineItem
"""

from resibo.domain.receipt import ExtractionResult, LineItem, NormalizedLine

__all__ = [
    "ExtractionResult",
    "LineItem",
    "NormalizedLine",
]
