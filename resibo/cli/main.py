#!/usr/bin/env python3

import argparse
import logging
from collections.abc import Sequence

from resibo.runtime import configure_logging, get_ocr_service_url, set_log_level


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Receipt line-item extraction CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  extract [file]             Extract items from OCR text (stdin if omitted)
  scan <image> [image ...]   OCR receipt image(s) and extract items
  serve [--host] [--port]    Start receipt upload server

Environment:
  OCR_SERVICE_URL            Default OCR service URL for scan
  RESIBO_HOME                Root for receipts/ working files
  RESIBO_LOG_LEVEL           DEBUG, INFO, WARNING or ERROR
""",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output, including unmatched lines")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    extract_parser = subparsers.add_parser("extract", help="Extract items from OCR text")
    extract_parser.add_argument("file", nargs="?", default=None, help="OCR text file ('-' or omitted for stdin)")
    extract_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    scan_parser = subparsers.add_parser("scan", help="Scan receipt image(s)")
    scan_parser.add_argument("images", nargs="+", help="Receipt image path(s), in reading order")
    scan_parser.add_argument(
        "--ocr-url",
        default=get_ocr_service_url(),
        help="OCR service URL (default: $OCR_SERVICE_URL or http://localhost:8001)",
    )
    scan_parser.add_argument("--save", action="store_true", help="Save item rows to receipts/extracted/")
    scan_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    serve_parser = subparsers.add_parser("serve", help="Start receipt upload server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    args = parser.parse_args(argv)

    if args.verbose:
        configure_logging()
        set_log_level(logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "extract":
        from resibo.cli.receipt import cmd_extract

        return cmd_extract(args)
    elif args.command == "scan":
        from resibo.cli.receipt import cmd_scan

        return cmd_scan(args)
    elif args.command == "serve":
        from resibo.cli.receipt import cmd_serve

        return cmd_serve(args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
