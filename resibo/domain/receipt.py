"""Data models for receipt item extraction."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import MAX_PREC, Decimal, localcontext


def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    """Exact sum, unbounded by the default 28-digit context precision."""
    total = Decimal("0")
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        for amount in amounts:
            total += amount
    return total


@dataclass(frozen=True)
class NormalizedLine:
    """One cleaned OCR line and its position in the raw text."""

    content: str
    source_index: int


@dataclass(frozen=True)
class LineItem:
    """A single purchased line on a receipt."""

    name: str
    unit_price: Decimal
    amount: Decimal
    quantity: int = 1


@dataclass(frozen=True)
class ExtractionResult:
    """Items extracted from one OCR text blob."""

    items: tuple[LineItem, ...] = ()
    total: Decimal = Decimal("0")
    normalized_text: str = ""
    # Candidate lines that no pattern matched. Diagnostic only.
    skipped_lines: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> ExtractionResult:
        return cls()

    @property
    def has_items(self) -> bool:
        return bool(self.items)

    @classmethod
    def merge(cls, results: Iterable[ExtractionResult]) -> ExtractionResult:
        """Concatenate results in order, e.g. several photos of one long receipt."""
        results = list(results)
        if not results:
            return cls.empty()
        items = tuple(item for result in results for item in result.items)
        return cls(
            items=items,
            total=sum_amounts(item.amount for item in items),
            normalized_text="\n".join(r.normalized_text for r in results if r.normalized_text),
            skipped_lines=tuple(line for r in results for line in r.skipped_lines),
        )
