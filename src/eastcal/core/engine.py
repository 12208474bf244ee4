from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Protocol

from .errors import UnknownVariantError
from .types import DayInfo, EastAsianDate

class CalendarVariantLike(Protocol):
    def info(self) -> Dict[str, Any]: ...
    def day_info(self, d: date, *, debug: bool = False) -> DayInfo: ...
    def from_civil(self, d: date) -> EastAsianDate: ...
    def to_civil(self, d: EastAsianDate) -> date: ...

@dataclass
class VariantRegistry:
    _variants: Dict[str, CalendarVariantLike]

    def get(self, name: str) -> CalendarVariantLike:
        if name not in self._variants:
            raise UnknownVariantError(f"Unknown variant '{name}'. Available: {sorted(self._variants)}")
        return self._variants[name]

    def list(self) -> List[str]:
        return sorted(self._variants.keys())

    def register(self, name: str, variant: CalendarVariantLike, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._variants):
            raise KeyError(f"Variant '{name}' already exists. Use overwrite=True to replace.")
        self._variants[name] = variant
