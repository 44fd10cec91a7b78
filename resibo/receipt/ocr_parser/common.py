"""Shared constants and helpers for OCR receipt parsing."""

import re
from dataclasses import dataclass
from decimal import MAX_PREC, ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from resibo.domain.receipt import LineItem

CENT = Decimal("0.01")

# Currency amounts always carry exactly two decimals; the peso sign is optional.
MONEY = r"₱?(\d+\.\d{2})"
# Integer quantity.
QTY = r"(\d+)"


@dataclass(frozen=True)
class ItemPattern:
    """One receipt layout, described as a regex plus a capture-group mapping.

    Group fields hold 1-based group numbers. ``name=None`` takes the name from
    the current line (lookahead patterns match the *next* line). ``quantity=None``
    means a quantity of 1. ``amount=None`` (or an unmatched amount group) means
    the amount is computed as ``quantity * unit_price``.
    """

    key: str
    regex: re.Pattern[str]
    price: int
    name: int | None = None
    quantity: int | None = None
    amount: int | None = None
    lookahead: bool = False

    @property
    def span(self) -> int:
        """Number of lines consumed on a match."""
        return 2 if self.lookahead else 1

    def build_item(self, match: re.Match[str], current_line: str) -> LineItem | None:
        """Build the item for a match, or None when the captures cannot form one."""
        name = match.group(self.name) if self.name is not None else current_line
        name = name.strip()
        if not name:
            return None
        try:
            quantity = int(match.group(self.quantity)) if self.quantity is not None else 1
            unit_price = Decimal(match.group(self.price))
            amount_text = match.group(self.amount) if self.amount is not None else None
            if amount_text is not None:
                amount = Decimal(amount_text)
            else:
                amount = compute_amount(quantity, unit_price)
        except (ValueError, InvalidOperation):
            # Digit runs past int conversion limits, e.g. merged barcode noise.
            return None
        return LineItem(name=name, quantity=quantity, unit_price=unit_price, amount=amount)


def _pattern(
    key: str,
    regex: str,
    *,
    price: int,
    name: int | None = None,
    quantity: int | None = None,
    amount: int | None = None,
    lookahead: bool = False,
) -> ItemPattern:
    return ItemPattern(
        key=key,
        regex=re.compile(regex),
        price=price,
        name=name,
        quantity=quantity,
        amount=amount,
        lookahead=lookahead,
    )


def compute_amount(quantity: int, unit_price: Decimal) -> Decimal:
    """Extended amount rounded half-up to cents."""
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        return (quantity * unit_price).quantize(CENT, rounding=ROUND_HALF_UP)


# Ordered by priority; the first pattern whose regex fully matches wins.
# Names are lower-case because lines are normalized before matching.
ITEM_PATTERNS: tuple[ItemPattern, ...] = (
    # "milk 45.50"
    _pattern("name_price", rf"([a-z\s]+)\s+{MONEY}", name=1, price=2, amount=2),
    # "2 coke 50.00". The captured amount is also reported as the unit price.
    _pattern("qty_name_amount", rf"{QTY}\s+(.+?)\s+{MONEY}", quantity=1, name=2, price=3, amount=3),
    # "2 coke @ 25.00 50.00"
    _pattern(
        "qty_name_at_price_amount",
        rf"{QTY}\s+(.+?)\s+@\s*{MONEY}\s+{MONEY}",
        quantity=1,
        name=2,
        price=3,
        amount=4,
    ),
    # "coke 2 25.00 50.00"
    _pattern(
        "name_qty_price_amount",
        rf"(.+?)\s+{QTY}\s+{MONEY}\s+{MONEY}",
        name=1,
        quantity=2,
        price=3,
        amount=4,
    ),
    # "coke - 2 @ 25.00 = 50.00"
    _pattern(
        "name_dash_qty_at_price_eq_amount",
        rf"(.+?)\s*-\s*{QTY}\s*@\s*{MONEY}\s*=\s*{MONEY}",
        name=1,
        quantity=2,
        price=3,
        amount=4,
    ),
    # "sardines" / "3 x 15.00 45.00" (amount optional)
    _pattern(
        "next_qty_x_price_opt_amount",
        rf"{QTY}\s*x\s*{MONEY}\s*(?:{MONEY})?",
        quantity=1,
        price=2,
        amount=3,
        lookahead=True,
    ),
    # "sardines" / "15.00 15.00"
    _pattern("next_price_amount", rf"{MONEY}\s+{MONEY}", price=1, amount=2, lookahead=True),
    # "2 coke 25.00"
    _pattern("qty_name_price", rf"{QTY}\s+([a-z\s]+)\s+{MONEY}", quantity=1, name=2, price=3),
    # "sardines" / "3 x 15.00"
    _pattern("next_qty_x_price", rf"{QTY}\s*x\s*{MONEY}", quantity=1, price=2, lookahead=True),
    # "sardines" / "3 x 15.00 = 45.00"
    _pattern(
        "next_qty_x_price_eq_amount",
        rf"{QTY}\s*x\s*{MONEY}\s*=\s*{MONEY}",
        quantity=1,
        price=2,
        amount=3,
        lookahead=True,
    ),
    # "coke 2@25.00"
    _pattern("name_qty_at_price", rf"(.+?)\s+{QTY}@{MONEY}", name=1, quantity=2, price=3),
    # "2 coke 25.00v"
    _pattern("qty_name_price_flag", rf"{QTY}\s+(.+?)\s+{MONEY}v?", quantity=1, name=2, price=3),
)
