"""Genome and decoded trait dataclasses.

A genome is three strands of 60 base-7 digits:
- personality: 7 personality axes, one contiguous section each
- appearance: positions 0-14 hold appearance fields, the rest is padding
- abilities: count of 6s sets rarity, 0-9 power ids, 10-16 seasonal affinities
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import StrEnum

from companion_genetics.exceptions import InvalidDigitError

BASE = 7
MIN_DIGIT = 0
MAX_DIGIT = BASE - 1
STRAND_LENGTH = 60
STRAND_NAMES = ("personality", "appearance", "abilities")

Strand = list[int]


class PersonalityAxis(StrEnum):
    """Personality axes in strand order (0 = first pole, 6 = second pole)."""

    SHYNESS = "shyness"  # 0=shy, 6=outgoing
    EMOTIONALITY = "emotionality"  # 0=logical, 6=emotional
    ENERGY = "energy"  # 0=calm, 6=energetic
    SOCIABILITY = "sociability"  # 0=solitary, 6=social
    BRAVERY = "bravery"  # 0=cautious, 6=brave
    CREATIVITY = "creativity"  # 0=practical, 6=creative
    OPENNESS = "openness"  # 0=conservative, 6=open


def clamp_digit(value: int) -> int:
    """Clamp an integer into the base-7 digit range."""
    return max(MIN_DIGIT, min(MAX_DIGIT, value))


def validate_strand(strand: list[int], name: str = "strand") -> None:
    """Check that a strand has exactly 60 digits, each in [0, 6].

    Raises:
        InvalidDigitError: If the length or any digit is out of range.
    """
    if len(strand) != STRAND_LENGTH:
        msg = f"{name} must have exactly {STRAND_LENGTH} digits, got {len(strand)}"
        raise InvalidDigitError(msg)
    for index, digit in enumerate(strand):
        if isinstance(digit, bool) or not isinstance(digit, int):
            msg = f"{name}[{index}] is not an integer digit: {digit!r}"
            raise InvalidDigitError(msg)
        if not MIN_DIGIT <= digit <= MAX_DIGIT:
            msg = f"{name}[{index}] is outside base-7 range: {digit}"
            raise InvalidDigitError(msg)


@dataclass
class Genome:
    """Genetic makeup of a companion.

    Always holds three strands of exactly 60 base-7 digits. Construction
    validates every strand so an invalid genome can never exist.
    """

    personality: Strand
    appearance: Strand
    abilities: Strand

    def __post_init__(self) -> None:
        for name in STRAND_NAMES:
            strand = list(getattr(self, name))
            validate_strand(strand, name)
            setattr(self, name, strand)

    def strands(self) -> tuple[Strand, Strand, Strand]:
        """Return the three strands in canonical order."""
        return (self.personality, self.appearance, self.abilities)


@dataclass(frozen=True)
class PersonalityScores:
    """One base-7 score per personality axis."""

    shyness: int = 3
    emotionality: int = 3
    energy: int = 3
    sociability: int = 3
    bravery: int = 3
    creativity: int = 3
    openness: int = 3

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"Personality score '{f.name}' is not an integer: {value!r}"
                raise ValueError(msg)
            if not MIN_DIGIT <= value <= MAX_DIGIT:
                msg = f"Personality score '{f.name}' outside 0-6: {value}"
                raise ValueError(msg)

    def __getitem__(self, axis: PersonalityAxis | str) -> int:
        return getattr(self, PersonalityAxis(axis).value)

    def as_dict(self) -> dict[str, int]:
        return {axis.value: self[axis] for axis in PersonalityAxis}

    @classmethod
    def from_mapping(cls, scores: Mapping[PersonalityAxis | str, int]) -> PersonalityScores:
        """Build scores from an axis -> score mapping. Missing axes are an error."""
        # StrEnum members hash like their values, so either key type matches
        values = {}
        for axis in PersonalityAxis:
            if axis not in scores:
                msg = f"Missing personality axis: {axis.value}"
                raise KeyError(msg)
            values[axis.value] = scores[axis]
        return cls(**values)


@dataclass
class AppearanceTraits:
    """Physical appearance decoded from the appearance strand."""

    body_shape: int  # spherical to elongated
    size: int  # tiny to large
    primary_color: int  # palette index
    secondary_color: int
    pattern: int  # solid, gradient, spots, stripes, ...
    features: list[int] = field(default_factory=list)  # feature ids


@dataclass
class SpecialAbilities:
    """Special abilities decoded from the ability strand."""

    rarity: int  # 0 common .. 6 eternal
    special_powers: list[int] = field(default_factory=list)
    affinities: list[int] = field(default_factory=list)  # one per season
