"""Pre-pass that drops lines which cannot be purchased items."""

from resibo.domain.receipt import NormalizedLine

# Summary, tax and payment markers. Matched as plain substrings of the normalized line.
NON_ITEM_MARKERS = ("total", "vat", "sales", "exempt", "change")

# Shorter lines are stray OCR fragments.
MIN_ITEM_LINE_LENGTH = 5


def is_candidate_line(line: NormalizedLine) -> bool:
    """Return True if the line may describe a purchased item."""
    content = line.content
    if len(content) < MIN_ITEM_LINE_LENGTH:
        return False
    return not any(marker in content for marker in NON_ITEM_MARKERS)


def filter_candidate_lines(lines: list[NormalizedLine]) -> list[NormalizedLine]:
    return [line for line in lines if is_candidate_line(line)]
