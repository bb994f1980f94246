from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from fxrelay.services.money import format_amount

"""Cross-rate conversion over a common-base rate table.

Both entries of a pair are quoted against the same numeraire, so the factor
from source to target is ``table[target] / table[source]``. A pair with a
missing side converts at identity rather than failing.
"""


def cross_rate(table: Mapping[str, float], source: str, target: str) -> float:
    src = table.get(source)
    dst = table.get(target)
    if not src or not dst:
        return 1.0
    return dst / src


@dataclass(frozen=True)
class ConversionResult:
    amount: float
    source: str
    target: str
    rate: float
    converted: float

    def display(self) -> str:
        return f"{format_amount(self.amount)} {self.source} = {format_amount(self.converted)} {self.target}"


def convert(
    amount: float, source: str, target: str, table: Mapping[str, float]
) -> ConversionResult:
    source = source.upper()
    target = target.upper()
    rate = cross_rate(table, source, target)
    return ConversionResult(
        amount=amount,
        source=source,
        target=target,
        rate=rate,
        converted=amount * rate,
    )
