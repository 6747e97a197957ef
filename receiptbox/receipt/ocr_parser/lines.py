"""Split raw OCR text into ordered receipt lines."""

from receiptbox.domain.receipt import RawLine


def _normalize_lines(text: str | None) -> list[RawLine]:
    """
    Split OCR text into trimmed, non-empty lines.

    The position of a line in the returned list is its ``order``; every
    proximity heuristic downstream compares these positions.
    """
    if not text:
        return []
    stripped = (line.strip() for line in text.splitlines())
    return [RawLine(text=line, order=i) for i, line in enumerate(line for line in stripped if line)]
