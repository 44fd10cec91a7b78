"""Composable OCR receipt parser components."""

from .common import ITEM_PATTERNS, ItemPattern, compute_amount
from .items_text_parser import _extract_items

__all__ = [
    "ITEM_PATTERNS",
    "ItemPattern",
    "_extract_items",
    "compute_amount",
]
