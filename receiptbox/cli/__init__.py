"""Unified command-line interface for receiptbox.

Usage:
    receiptbox parse <text-file> [--save] [--json]
    receiptbox scan <image> [--no-save] [--json]
    receiptbox serve [--host] [--port]
    receiptbox list-scanned
    receiptbox show <file> [--json]
    receiptbox delete <file>
"""
