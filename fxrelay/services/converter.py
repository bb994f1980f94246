"""Two-sided converter state.

The user types into either amount; the other side follows through the
current cross rate. ``active`` records which side was typed last, so a rate
or pair change re-derives the passive side and never overwrites user input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal

from fxrelay.models.constants import CURRENCY_SYMBOLS
from fxrelay.models.rates import CurrencyCatalog
from fxrelay.services.money import format_amount, parse_amount, sanitize_amount

Side = Literal["from", "to"]


@dataclass
class ConversionState:
    source: str = "EUR"
    target: str = "USD"
    amount_from: str = "0"
    amount_to: str = "0.00"
    active: Side = "from"

    def recompute(self, rate: float) -> None:
        if self.active == "from":
            self.amount_to = format_amount(parse_amount(self.amount_from) * rate)
        else:
            self.amount_from = format_amount(parse_amount(self.amount_to) / rate)

    def set_from(self, text: str, rate: float) -> None:
        self.active = "from"
        self.amount_from = sanitize_amount(text)
        self.recompute(rate)

    def set_to(self, text: str, rate: float) -> None:
        self.active = "to"
        self.amount_to = sanitize_amount(text)
        self.recompute(rate)

    def press_key(self, key: str, rate: float) -> None:
        """Apply one keypad press ("0"-"9", "." or "backspace") to the active side."""
        current = self.amount_from if self.active == "from" else self.amount_to
        if key == "backspace":
            text = current[:-1]
        elif key == ".":
            if "." in current:
                return
            text = f"{current}." if current else "0."
        else:
            text = key if current == "0" else f"{current}{key}"

        if self.active == "from":
            self.set_from(text, rate)
        else:
            self.set_to(text, rate)

    def swap(self) -> None:
        """Flip the pair; the old result becomes the new input."""
        self.source, self.target = self.target, self.source
        self.amount_from = self.amount_to
        self.active = "from"

    def select(self, side: Side, code: str) -> None:
        if side == "from":
            self.source = code
        else:
            self.target = code


def filter_currencies(catalog: CurrencyCatalog, term: str) -> List[str]:
    term = term.strip().lower()
    if not term:
        return list(catalog.codes)
    return [
        code
        for code in catalog.codes
        if term in code.lower() or term in (catalog.name_of(code) or "").lower()
    ]


def currency_symbol(code: str) -> str:
    return CURRENCY_SYMBOLS.get(code, code)
