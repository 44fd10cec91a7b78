"""End-to-end extraction over raw OCR text."""

from decimal import Decimal

from resibo.domain.receipt import ExtractionResult, LineItem
from resibo.receipt.ocr_parser.common import compute_amount
from resibo.receipt.ocr_result_parser import aggregate_items, extract_receipt_items

SUPERMARKET_RECEIPT = """\
SM SUPERMARKET
Milk 45.50
2 Coke 50.00
Sardines
3 x 15.00
Bread Loaf
25.00 25.00
3 Eggs 8.50v
SUBTOTAL 191.00
VAT 12% 20.46
TOTAL 191.00
CHANGE 9.00
"""


def _item(name: str, qty: int, price: str, amount: str) -> LineItem:
    return LineItem(name=name, quantity=qty, unit_price=Decimal(price), amount=Decimal(amount))


def test_name_price_lines_and_total_line_ignored() -> None:
    result = extract_receipt_items("milk 45.50\nbread 25.00\ntotal 70.50")

    assert result.items == (
        _item("milk", 1, "45.50", "45.50"),
        _item("bread", 1, "25.00", "25.00"),
    )
    assert result.total == Decimal("70.50")
    assert result.normalized_text == "milk 45.50\nbread 25.00\ntotal 70.50"


def test_qty_name_amount_keeps_amount_as_unit_price() -> None:
    result = extract_receipt_items("2 coke 50.00\n")

    assert result.items == (_item("coke", 2, "50.00", "50.00"),)
    assert result.total == Decimal("50.00")


def test_name_then_qty_x_price_line() -> None:
    result = extract_receipt_items("sardines\n3 x 15.00\n")

    assert result.items == (_item("sardines", 3, "15.00", "45.00"),)
    assert result.skipped_lines == ()


def test_empty_input_returns_empty_result() -> None:
    result = extract_receipt_items("")

    assert result == ExtractionResult(items=(), total=Decimal("0"), normalized_text="")
    assert result == ExtractionResult.empty()
    assert not result.has_items


def test_full_receipt() -> None:
    result = extract_receipt_items(SUPERMARKET_RECEIPT)

    assert result.items == (
        _item("milk", 1, "45.50", "45.50"),
        _item("coke", 2, "50.00", "50.00"),
        _item("sardines", 3, "15.00", "45.00"),
        _item("bread loaf", 1, "25.00", "25.00"),
        _item("eggs", 3, "8.50", "25.50"),
    )
    assert result.total == Decimal("191.00")
    assert result.skipped_lines == ("sm supermarket",)


def test_total_is_exact_sum_of_item_amounts() -> None:
    result = extract_receipt_items(SUPERMARKET_RECEIPT)

    assert result.total == sum((item.amount for item in result.items), Decimal("0"))


def test_computed_amounts_match_quantity_times_price() -> None:
    result = extract_receipt_items("sardines\n3 x 15.25\n4 eggs 8.75v\ncoke 6@12.35")

    assert [item.amount for item in result.items] == [Decimal("45.75"), Decimal("35.00"), Decimal("74.10")]
    for item in result.items:
        assert item.amount == compute_amount(item.quantity, item.unit_price)


def test_extraction_is_deterministic() -> None:
    assert extract_receipt_items(SUPERMARKET_RECEIPT) == extract_receipt_items(SUPERMARKET_RECEIPT)


def test_summary_lines_never_produce_items() -> None:
    result = extract_receipt_items("total 70.50\nvat 8.46\nsales 62.04\nexempt 0.00\nchange 29.50\n2 total 5.00")

    assert result.items == ()
    assert result.skipped_lines == ()
    assert result.total == Decimal("0")


def test_filtered_line_does_not_break_name_and_detail_pair() -> None:
    result = extract_receipt_items("sardines\nvat\n3 x 15.00")

    assert result.items == (_item("sardines", 3, "15.00", "45.00"),)


def test_peso_sign_and_comma_decimals() -> None:
    result = extract_receipt_items("RICE ₱120,00\nnoodles\n₱15.00 ₱30.00")

    assert result.items == (
        _item("rice", 1, "120.00", "120.00"),
        _item("noodles", 1, "15.00", "30.00"),
    )
    assert result.total == Decimal("150.00")


def test_unsupported_layout_returns_no_items() -> None:
    result = extract_receipt_items("welcome to the store\nthank you\nplease come again")

    assert not result.has_items
    assert result.skipped_lines == ("welcome to the store", "thank you", "please come again")


def test_aggregate_items_sums_in_order() -> None:
    items = [_item("a item", 1, "1.10", "1.10"), _item("b item", 2, "2.20", "4.40")]

    result = aggregate_items(items)

    assert result.items == tuple(items)
    assert result.total == Decimal("5.50")


def test_merge_concatenates_results_in_order() -> None:
    first = extract_receipt_items("milk 45.50")
    second = extract_receipt_items("bread 25.00\nfooter text")

    merged = ExtractionResult.merge([first, second])

    assert [item.name for item in merged.items] == ["milk", "bread"]
    assert merged.total == Decimal("70.50")
    assert merged.normalized_text == "milk 45.50\nbread 25.00\nfooter text"
    assert merged.skipped_lines == ("footer text",)
    assert ExtractionResult.merge([]) == ExtractionResult.empty()


def test_long_quantity_run_computes_exact_amount() -> None:
    quantity = "1" * 27

    result = extract_receipt_items(f"sardines\n{quantity} x 15.00")

    expected = Decimal("1" + "6" * 26 + "5.00")
    assert result.items == (
        LineItem(name="sardines", quantity=int(quantity), unit_price=Decimal("15.00"), amount=expected),
    )
    assert result.total == expected


def test_quantity_beyond_int_conversion_limit_does_not_raise() -> None:
    result = extract_receipt_items("1" * 5000 + " coke 50.00\nmilk 45.50")

    # Python 3.11+ refuses the conversion and the line is skipped; older versions keep it.
    assert result.items[-1] == _item("milk", 1, "45.50", "45.50")
    assert len(result.items) + len(result.skipped_lines) == 2


def test_total_of_long_amounts_is_not_rounded() -> None:
    result = extract_receipt_items("milk " + "1" * 30 + ".11\neggs 1.00")

    assert result.total == Decimal("1" * 29 + "2.11")


def test_merge_total_is_not_rounded() -> None:
    first = aggregate_items([_item("milk", 1, "1" * 30 + ".11", "1" * 30 + ".11")])
    second = aggregate_items([_item("eggs", 1, "1.00", "1.00")])

    assert ExtractionResult.merge([first, second]).total == Decimal("1" * 29 + "2.11")
