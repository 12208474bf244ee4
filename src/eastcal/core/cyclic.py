"""
eastcal.core.cyclic
-------------------
Sexagenary year numbering shared by all East-Asian calendar variants.

A year is stored as the count of elapsed cyclic years since the traditional
epoch, which lies 2637 years before the Gregorian era. The count is a pure
bijection with the related Gregorian year (the Gregorian year containing the
East-Asian New Year's Day); bounds are left to the calendar systems.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Gregorian year 1 corresponds to elapsed cyclic year 2638.
EPOCH_OFFSET = 2637
CYCLE_LENGTH = 60

STEMS: Tuple[str, ...] = ("jia", "yi", "bing", "ding", "wu", "ji", "geng", "xin", "ren", "gui")
BRANCHES: Tuple[str, ...] = (
    "zi", "chou", "yin", "mao", "chen", "si", "wu", "wei", "shen", "you", "xu", "hai",
)
ZODIAC: Tuple[str, ...] = (
    "rat", "ox", "tiger", "rabbit", "dragon", "snake",
    "horse", "goat", "monkey", "rooster", "dog", "pig",
)
ELEMENTS: Tuple[str, ...] = ("wood", "fire", "earth", "metal", "water")


def sexagenary_name(index: int) -> str:
    """Romanized stem-branch name for a 0-based position in the 60-cycle."""
    i = index % CYCLE_LENGTH
    return f"{STEMS[i % 10]}-{BRANCHES[i % 12]}"


@dataclass(frozen=True, order=True)
class CyclicYear:
    elapsed_cyclic_years: int

    @classmethod
    def for_gregorian(cls, related_gregorian_year: int) -> "CyclicYear":
        return cls(related_gregorian_year + EPOCH_OFFSET)

    @classmethod
    def in_cycle(cls, cycle: int, year_of_cycle: int) -> "CyclicYear":
        if cycle < 1:
            raise ValueError(f"Cycle number must not be smaller than 1: {cycle}")
        if not (1 <= year_of_cycle <= CYCLE_LENGTH):
            raise ValueError(f"Year of cycle out of range: {year_of_cycle}")
        return cls((cycle - 1) * CYCLE_LENGTH + year_of_cycle)

    def get_elapsed_cyclic_years(self) -> int:
        return self.elapsed_cyclic_years

    @property
    def related_gregorian_year(self) -> int:
        return self.elapsed_cyclic_years - EPOCH_OFFSET

    @property
    def cycle(self) -> int:
        return (self.elapsed_cyclic_years - 1) // CYCLE_LENGTH + 1

    @property
    def year_of_cycle(self) -> int:
        """1..60, where 1 is jia-zi."""
        return (self.elapsed_cyclic_years - 1) % CYCLE_LENGTH + 1

    @property
    def stem(self) -> str:
        return STEMS[(self.year_of_cycle - 1) % 10]

    @property
    def branch(self) -> str:
        return BRANCHES[(self.year_of_cycle - 1) % 12]

    @property
    def zodiac(self) -> str:
        return ZODIAC[(self.year_of_cycle - 1) % 12]

    @property
    def element(self) -> str:
        return ELEMENTS[((self.year_of_cycle - 1) % 10) // 2]

    @property
    def display_name(self) -> str:
        return sexagenary_name(self.year_of_cycle - 1)

    def roll(self, amount: int) -> "CyclicYear":
        """Move within the current 60-year cycle, wrapping around its ends."""
        yoc = (self.year_of_cycle - 1 + amount) % CYCLE_LENGTH + 1
        return CyclicYear(self.elapsed_cyclic_years - self.year_of_cycle + yoc)

    def __str__(self) -> str:
        return f"{self.display_name}({self.related_gregorian_year})"
