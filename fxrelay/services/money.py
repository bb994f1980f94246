"""Amount text helpers.

Centralized so the converter state, the CLI and future front ends use
identical sanitizing and display rules.
"""

from __future__ import annotations
import math
import re

_NOT_AMOUNT = re.compile(r"[^0-9.,]")


def sanitize_amount(value: str) -> str:
    return _NOT_AMOUNT.sub("", value)


def parse_amount(value: str) -> float:
    """Parse user text; ``,`` works as a decimal mark, blank is zero, junk is NaN."""
    text = value.replace(",", ".", 1).strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return math.nan


def format_amount(value: float) -> str:
    if not math.isfinite(value):
        return "0.00"
    return f"{value:.2f}"
