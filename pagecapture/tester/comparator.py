"""Exact bitmap comparison.

Captures are compared by their raw byte sequences: no tolerance, no
perceptual distance.  A single differing byte is a mismatch.
"""

from __future__ import annotations

from .bitmap import Bitmap
from .results import ComparisonOutcome


def _describe(actual: Bitmap, expected: Bitmap) -> str:
    """Summarise what differs between two bitmaps."""
    if actual.size != expected.size:
        return (
            f"size {actual.width}x{actual.height} differs from "
            f"reference {expected.width}x{expected.height}"
        )
    a, b = actual.raw_bytes(), expected.raw_bytes()
    differing = sum(1 for x, y in zip(a, b) if x != y) + abs(len(a) - len(b))
    first = next((i for i, (x, y) in enumerate(zip(a, b)) if x != y), min(len(a), len(b)))
    return (
        f"{differing} of {max(len(a), len(b))} bytes differ "
        f"(first at offset {first}) in {actual.width}x{actual.height} capture"
    )


def compare_bitmaps(actual: Bitmap, expected: Bitmap) -> ComparisonOutcome:
    """Compare *actual* against *expected* byte-for-byte."""
    if actual.raw_bytes() == expected.raw_bytes():
        return ComparisonOutcome.match(
            f"{actual.width}x{actual.height} capture matches reference"
        )
    return ComparisonOutcome.mismatch(actual, _describe(actual, expected))
