from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, field_validator


class FreshnessStatus(str, Enum):
    LOADING = "loading"
    FALLBACK = "fallback"
    LIVE = "live"


class CodesPayload(BaseModel):
    """Successful catalog body: ``{"result": "success", "supported_codes": [[code, name], ...]}``."""

    result: Literal["success"]
    supported_codes: List[Tuple[str, str]]


class RatesPayload(BaseModel):
    """Successful latest-rates body. Extra upstream fields are ignored."""

    result: Literal["success"]
    base_code: Optional[str] = None
    conversion_rates: Dict[str, float]

    @field_validator("conversion_rates")
    @classmethod
    def not_empty(cls, v: Dict[str, float]) -> Dict[str, float]:
        if not v:
            raise ValueError("conversion_rates is empty")
        return v


@dataclass(frozen=True)
class CurrencyCatalog:
    codes: Tuple[str, ...]
    names: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # read-only view over a private copy
        object.__setattr__(self, "names", MappingProxyType(dict(self.names)))

    @classmethod
    def from_pairs(cls, pairs: List[Tuple[str, str]]) -> "CurrencyCatalog":
        names = dict(pairs)
        return cls(codes=tuple(sorted(names)), names=names)

    def name_of(self, code: str) -> Optional[str]:
        return self.names.get(code)

    def __len__(self) -> int:
        return len(self.codes)


@dataclass(frozen=True)
class RateSnapshot:
    """Catalog, rate table and status from one fetch cycle, installed together."""

    catalog: CurrencyCatalog
    rates: Mapping[str, float]
    status: FreshnessStatus

    def __post_init__(self) -> None:
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))
