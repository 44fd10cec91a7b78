"""Receipt command handlers used by the unified CLI."""

import argparse
import json
import sys
from pathlib import Path

from resibo.receipt.formatter import format_items_table, result_to_dict
from resibo.receipt.ocr_result_parser import extract_receipt_items
from resibo.runtime import get_logger

logger = get_logger(__name__)


def _read_text(source: str | None) -> str:
    if source is None or source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def cmd_extract(args: argparse.Namespace) -> int:
    """Extract items from OCR text in a file (or stdin)."""
    try:
        raw_text = _read_text(args.file)
    except OSError as e:
        logger.error("Cannot read OCR text: %s", e)
        print(f"Error: cannot read {args.file}: {e}")
        return 1

    result = extract_receipt_items(raw_text)
    if args.json:
        print(json.dumps(result_to_dict(result), indent=2, ensure_ascii=False))
    else:
        print(format_items_table(result))
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    """Recognize receipt images through the OCR service and extract their items."""
    from resibo.application.receipts.scan import ReceiptScanRequest, run_receipt_scan
    from resibo.runtime.receipt_storage import JsonDirectorySink

    sink = JsonDirectorySink() if args.save else None
    result = run_receipt_scan(
        ReceiptScanRequest(
            image_paths=[Path(p) for p in args.images],
            ocr_url=args.ocr_url,
            sink=sink,
        )
    )

    if result.status == "file_not_found":
        print(f"Error: {result.error}")
        return 1

    if result.status == "ocr_failed":
        print(f"OCR failed: {result.error}")
        print("Make sure the OCR service is running before scanning receipts.")
        return 1

    if args.json:
        payload = {"status": result.status, "receipt_id": result.receipt_id, **result_to_dict(result.extraction)}
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(format_items_table(result.extraction))

    if result.status == "saved" and sink is not None and result.receipt_id is not None:
        print(f"\nSaved items to: {sink.path_for(result.receipt_id)}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the FastAPI server for receipt uploads."""
    import uvicorn

    from resibo.runtime import receipt_server as server

    print(f"Starting receipt server on {args.host}:{args.port}")
    print(f"Endpoints: http://{args.host}:{args.port}/upload | /extract | /health")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)
    return 0
