"""Text-line based receipt item extraction."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from resibo.domain.receipt import LineItem, NormalizedLine

from .common import ITEM_PATTERNS, ItemPattern

logger = logging.getLogger(__name__)


def _match_at(
    lines: Sequence[NormalizedLine],
    i: int,
    patterns: Sequence[ItemPattern],
) -> tuple[LineItem, ItemPattern] | None:
    """Try each pattern in priority order against ``lines[i]`` (and ``lines[i + 1]``)."""
    current = lines[i].content
    following = lines[i + 1].content if i + 1 < len(lines) else None

    for pattern in patterns:
        target = following if pattern.lookahead else current
        if target is None:
            continue
        match = pattern.regex.fullmatch(target)
        if not match:
            continue
        item = pattern.build_item(match, current)
        if item is not None:
            return item, pattern
    return None


def _extract_items(
    lines: Sequence[NormalizedLine],
    patterns: Sequence[ItemPattern] = ITEM_PATTERNS,
) -> tuple[list[LineItem], list[NormalizedLine]]:
    """
    Walk candidate lines and extract line items.

    Greedy and non-backtracking: the first matching pattern wins and the cursor
    skips the lines it consumed. Lines no pattern accepts are returned as skipped.

    Args:
        lines: Candidate lines, already normalized and filtered
        patterns: Item patterns in priority order

    Returns:
        Tuple of (items in source order, skipped lines)
    """
    items: list[LineItem] = []
    skipped: list[NormalizedLine] = []

    i = 0
    while i < len(lines):
        matched = _match_at(lines, i, patterns)
        if matched is None:
            logger.debug("Skipped line %d (no match): %s", lines[i].source_index, lines[i].content)
            skipped.append(lines[i])
            i += 1
            continue

        item, pattern = matched
        logger.debug("Line %d matched %s: %s", lines[i].source_index, pattern.key, item)
        items.append(item)
        i += pattern.span

    return items, skipped
