"""Numeric literal parsing for merged digit runs."""

from __future__ import annotations


def parse_number(text: str) -> int | float:
    """Parse a run of digits with at most one decimal point.

    Text without a point becomes an ``int``; ``"5."`` and ``".5"`` are floats.
    """

    if "." in text:
        return float(text)
    return int(text)
