"""Format ExtractionResult data for display, JSON output and persistence rows."""

from decimal import Decimal
from typing import Any

from resibo.domain.receipt import ExtractionResult, LineItem

CURRENCY_SYMBOL = "₱"


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


def item_to_dict(item: LineItem) -> dict[str, Any]:
    return {
        "name": item.name,
        "quantity": item.quantity,
        "unit_price": _money(item.unit_price),
        "amount": _money(item.amount),
    }


def result_to_dict(result: ExtractionResult) -> dict[str, Any]:
    """Render an ExtractionResult as JSON-ready data (money as two-decimal strings)."""
    return {
        "items": [item_to_dict(item) for item in result.items],
        "total": _money(result.total),
        "normalized_text": result.normalized_text,
        "skipped_lines": list(result.skipped_lines),
    }


def build_item_rows(result: ExtractionResult, receipt_id: str) -> list[dict[str, Any]]:
    """
    Map extracted items to the row shape the persistence collaborator stores.

    Raises:
        ValueError: If the result has no items
    """
    if not result.has_items:
        raise ValueError("No items to upload")
    return [
        {
            "receipt_id": receipt_id,
            "item_name": item.name,
            "quantity": item.quantity,
            "unit_price": item.unit_price,
            "total_amount": item.amount,
        }
        for item in result.items
    ]


def _format_rows_aligned(rows: list[tuple[str, str, str, str]], indent: str = "  ") -> list[str]:
    """Left-align the name column and right-align the numeric columns."""
    if not rows:
        return []
    widths = [max(len(row[col]) for row in rows) for col in range(4)]
    lines = []
    for name, qty, price, amount in rows:
        lines.append(
            f"{indent}{name.ljust(widths[0])}  {qty.rjust(widths[1])}  "
            f"{price.rjust(widths[2])}  {amount.rjust(widths[3])}".rstrip()
        )
    return lines


def format_items_table(result: ExtractionResult) -> str:
    """
    Format extracted items as a plain-text table followed by the total.

    Item names are shown upper-case, amounts with the peso sign.
    """
    if not result.has_items:
        return "No valid items found."

    rows = [("ITEM NAME", "QTY", "PRICE", "AMOUNT")]
    for item in result.items:
        rows.append(
            (
                item.name.upper(),
                str(item.quantity),
                f"{CURRENCY_SYMBOL}{_money(item.unit_price)}",
                f"{CURRENCY_SYMBOL}{_money(item.amount)}",
            )
        )
    lines = _format_rows_aligned(rows)
    lines.append("")
    lines.append(f"  Total: {CURRENCY_SYMBOL}{_money(result.total)} ({len(result.items)} items)")
    return "\n".join(lines)
