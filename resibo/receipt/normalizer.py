"""Clean raw OCR text into a canonical sequence of lines.

Each physical line goes through the same fixed steps:

1. trim and lower-case
2. drop the line when nothing is left
3. map OCR confusables (``O`` -> ``0``, ``S`` -> ``5``)
4. ``,`` -> ``.`` (decimal separator)
5. collapse whitespace runs
6. strip characters outside the allow-set

The output of :func:`normalize_text` is stable under re-normalization.
"""

from __future__ import annotations

import re

from resibo.domain.receipt import NormalizedLine

# Runs after lower-casing; only upper-case glyphs are mapped.
OCR_CONFUSABLES = {"O": "0", "S": "5"}

CURRENCY_SYMBOL = "₱"

_MULTI_SPACE = re.compile(r"\s{2,}")
_ANY_SPACE = re.compile(r"\s+")
_DISALLOWED_CHARS = re.compile(rf"[^a-z0-9{CURRENCY_SYMBOL}.:/@\s-]")


def normalize_line(line: str) -> str:
    """Normalize one physical line. Returns "" when nothing survives."""
    cleaned = line.strip().lower()
    if not cleaned:
        return ""
    for confusable, replacement in OCR_CONFUSABLES.items():
        cleaned = cleaned.replace(confusable, replacement)
    cleaned = cleaned.replace(",", ".")
    cleaned = _MULTI_SPACE.sub(" ", cleaned)
    cleaned = _DISALLOWED_CHARS.sub("", cleaned)
    # Stripping can leave doubled or edge spaces behind ("milk * 5.00").
    return _ANY_SPACE.sub(" ", cleaned).strip()


def normalize_lines(raw_text: str) -> list[NormalizedLine]:
    """Split raw OCR text into non-empty normalized lines, keeping source positions."""
    lines: list[NormalizedLine] = []
    for index, raw_line in enumerate(raw_text.split("\n")):
        content = normalize_line(raw_line)
        if content:
            lines.append(NormalizedLine(content=content, source_index=index))
    return lines


def normalize_text(raw_text: str) -> str:
    """Return the normalized lines joined with newlines."""
    return "\n".join(line.content for line in normalize_lines(raw_text))
