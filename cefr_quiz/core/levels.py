"""
CEFR proficiency levels and question types.

ProficiencyLevel is a closed, ordered scale. All "one step up/down" arithmetic
goes through a fixed ordinal table and clamps at the two ends.
"""

from __future__ import annotations

from enum import Enum


class ProficiencyLevel(str, Enum):
    """
    Six-tier CEFR scale, A1 (lowest) to C2 (highest).

    Ordering is defined by ``ordinal``; comparison operators follow it.
    """

    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"

    @property
    def ordinal(self) -> int:
        """Position on the scale (A1 = 0)."""
        return _ORDER.index(self)

    @classmethod
    def lowest(cls) -> ProficiencyLevel:
        return _ORDER[0]

    @classmethod
    def highest(cls) -> ProficiencyLevel:
        return _ORDER[-1]

    def step_up(self) -> ProficiencyLevel:
        """Next level up, clamped at C2."""
        return _ORDER[min(self.ordinal + 1, len(_ORDER) - 1)]

    def step_down(self) -> ProficiencyLevel:
        """Next level down, clamped at A1."""
        return _ORDER[max(self.ordinal - 1, 0)]

    @property
    def display_name(self) -> str:
        return _DETAILS[self][0]

    @property
    def description(self) -> str:
        return _DETAILS[self][1]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ProficiencyLevel):
            return NotImplemented
        return self.ordinal < other.ordinal

    def __le__(self, other: object) -> bool:
        if not isinstance(other, ProficiencyLevel):
            return NotImplemented
        return self.ordinal <= other.ordinal

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ProficiencyLevel):
            return NotImplemented
        return self.ordinal > other.ordinal

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, ProficiencyLevel):
            return NotImplemented
        return self.ordinal >= other.ordinal


_ORDER: tuple[ProficiencyLevel, ...] = (
    ProficiencyLevel.A1,
    ProficiencyLevel.A2,
    ProficiencyLevel.B1,
    ProficiencyLevel.B2,
    ProficiencyLevel.C1,
    ProficiencyLevel.C2,
)

_DETAILS: dict[ProficiencyLevel, tuple[str, str]] = {
    ProficiencyLevel.A1: ("Beginner", "Basic phrases and simple conversations"),
    ProficiencyLevel.A2: ("Elementary", "Simple daily interactions"),
    ProficiencyLevel.B1: ("Intermediate", "Can handle most travel situations"),
    ProficiencyLevel.B2: ("Upper-Intermediate", "Effective communication in work settings"),
    ProficiencyLevel.C1: ("Advanced", "Fluent and spontaneous expression"),
    ProficiencyLevel.C2: ("Proficient", "Near-native proficiency"),
}


class QuestionType(str, Enum):
    """Supported question formats. Used only as a sampling filter."""

    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    FILL_IN_BLANK = "FILL_IN_BLANK"
