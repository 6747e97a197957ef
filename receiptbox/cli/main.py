#!/usr/bin/env python3

import argparse
from collections.abc import Callable, Sequence


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Run a command handler that may call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="receiptbox",
        description="Receipt OCR parsing CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <text-file> [--save] [--json]
                             Parse OCR text saved in a file
  scan <image> [--no-save] [--json]
                             OCR a receipt image and parse it
  serve [--host] [--port]    Start receipt upload server
  list-scanned               List scanned receipts
  show <file> [--json]       Show a scanned receipt
  delete <file>              Delete a reviewed scanned receipt

Notes:
  receipts/scanned/ = OCR+parser output, not reviewed
  GOOGLE_VISION_API_KEY must be set for scan/serve uploads
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Parse OCR text saved in a file")
    parse_parser.add_argument("text_file", help="Path to a text file with OCR output")
    parse_parser.add_argument("--save", action="store_true", help="Save the result to receipts/scanned/")
    parse_parser.add_argument("--json", action="store_true", help="Print JSON instead of a summary")

    scan_parser = subparsers.add_parser("scan", help="Scan a receipt image")
    scan_parser.add_argument("image", help="Path to receipt image")
    scan_parser.add_argument("--no-save", action="store_true", help="Do not save the result to receipts/scanned/")
    scan_parser.add_argument("--json", action="store_true", help="Print JSON instead of a summary")

    serve_parser = subparsers.add_parser("serve", help="Start receipt upload server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    subparsers.add_parser("list-scanned", help="List scanned receipts")

    show_parser = subparsers.add_parser("show", help="Show a scanned receipt")
    show_parser.add_argument("file", help="Receipt JSON file (path or name in receipts/scanned/)")
    show_parser.add_argument("--json", action="store_true", help="Print JSON instead of a summary")

    delete_parser = subparsers.add_parser("delete", help="Delete a reviewed scanned receipt")
    delete_parser.add_argument("file", help="Receipt JSON file (path or name in receipts/scanned/)")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    from receiptbox.cli import receipt as commands

    handlers: dict[str, Callable[[argparse.Namespace], None]] = {
        "parse": commands.cmd_parse,
        "scan": commands.cmd_scan,
        "serve": commands.cmd_serve,
        "list-scanned": commands.cmd_list_scanned,
        "show": commands.cmd_show,
        "delete": commands.cmd_delete,
    }
    return _run_command(handlers[args.command], args)


if __name__ == "__main__":
    raise SystemExit(main())
