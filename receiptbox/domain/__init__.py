"""Core domain models for receiptbox.

This module provides the data models shared by the parser and the runtime:
- RawLine, CandidateItem: transient parser state
- ResolvedItem, ParsedReceipt: parsed receipt output

Usage:
    from receiptbox.domain import ParsedReceipt, ResolvedItem
"""

from receiptbox.domain.receipt import (
    CandidateItem,
    ParsedReceipt,
    RawLine,
    ResolvedItem,
    empty_receipt,
    round2,
)

__all__ = [
    "CandidateItem",
    "ParsedReceipt",
    "RawLine",
    "ResolvedItem",
    "empty_receipt",
    "round2",
]
