"""Strand codec: conversions between base-7 strands and decoded traits.

Personality strand layout: 7 contiguous sections laid end to end, one per
axis. Sections are 60 // 7 = 8 digits long and the first 60 % 7 = 4 get one
extra digit, so the lengths are 9, 9, 9, 9, 8, 8, 8.
"""

from __future__ import annotations

import copy
import logging
import math

from pydantic import BaseModel, Field, ValidationError

from companion_genetics.engine.random_source import RandomSource, uniform_index
from companion_genetics.exceptions import InvalidDigitError, MalformedGenomeError
from companion_genetics.model.genome import (
    BASE,
    MAX_DIGIT,
    STRAND_LENGTH,
    AppearanceTraits,
    Genome,
    PersonalityAxis,
    PersonalityScores,
    SpecialAbilities,
    Strand,
    clamp_digit,
)

logger = logging.getLogger(__name__)

AXIS_COUNT = len(PersonalityAxis)
FEATURE_COUNT = 10
POWER_COUNT = 10
AFFINITY_START = 10
AFFINITY_COUNT = 7
RARITY_DIGIT = 6
SIXES_PER_RARITY = 10

_VALID_CHARS = frozenset("0123456")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's round() uses banker's rounding, which would turn an average of
    0.5 into 0. Trait math always rounds halves up.
    """
    return math.floor(value + 0.5)


def random_digit(rng: RandomSource) -> int:
    """Draw one uniform base-7 digit."""
    return uniform_index(rng, BASE)


def generate_random_strand(rng: RandomSource) -> Strand:
    """Generate 60 independent uniform base-7 digits."""
    return [random_digit(rng) for _ in range(STRAND_LENGTH)]


def generate_random_genome(rng: RandomSource) -> Genome:
    """Generate a genome with three fully random strands."""
    return Genome(
        personality=generate_random_strand(rng),
        appearance=generate_random_strand(rng),
        abilities=generate_random_strand(rng),
    )


# ===== PERSONALITY =====


def section_bounds() -> list[tuple[int, int]]:
    """Return ``(start, length)`` for each personality axis, in axis order.

    The sections partition all 60 positions with no gaps or overlaps.
    """
    base_length, remainder = divmod(STRAND_LENGTH, AXIS_COUNT)
    bounds: list[tuple[int, int]] = []
    start = 0
    for index in range(AXIS_COUNT):
        length = base_length + (1 if index < remainder else 0)
        bounds.append((start, length))
        start += length
    return bounds


_SECTION_BOUNDS = section_bounds()


def axis_section(axis: PersonalityAxis | str) -> tuple[int, int]:
    """Return ``(start, length)`` of one axis section."""
    index = list(PersonalityAxis).index(PersonalityAxis(axis))
    return _SECTION_BOUNDS[index]


def extract_personality(strand: Strand) -> PersonalityScores:
    """Decode personality scores by averaging each axis section.

    Args:
        strand: Personality strand (60 digits).

    Returns:
        PersonalityScores with the rounded section mean for every axis.
    """
    scores: dict[str, int] = {}
    for axis, (start, length) in zip(PersonalityAxis, _SECTION_BOUNDS, strict=True):
        section = strand[start : start + length]
        mean = sum(section) / len(section)
        scores[axis.value] = clamp_digit(round_half_up(mean))
    return PersonalityScores(**scores)


def encode_personality(scores: PersonalityScores, rng: RandomSource) -> Strand:
    """Encode personality scores into a strand with per-digit jitter.

    Each position of an axis section becomes ``score + {-1, 0, +1}`` (clamped).
    The jitter gives a companion room to drift later, so decoding the result
    usually, but not always, returns the same scores.

    Args:
        scores: Scores to encode.
        rng: Random source for the jitter.

    Returns:
        A 60-digit personality strand.
    """
    strand: Strand = []
    for axis, (_, length) in zip(PersonalityAxis, _SECTION_BOUNDS, strict=True):
        score = scores[axis]
        for _ in range(length):
            variation = uniform_index(rng, 3) - 1
            strand.append(clamp_digit(score + variation))
    return strand[:STRAND_LENGTH]


def apply_drift(
    strand: Strand,
    axis: PersonalityAxis | str,
    direction: int,
    rng: RandomSource,
    amount: int = 1,
) -> Strand:
    """Nudge random positions of one axis section by one step.

    Used for gradual personality change driven by rituals. The same position
    may be picked more than once.

    Args:
        strand: Personality strand to drift. Not modified.
        axis: Axis whose section is nudged.
        direction: -1 to decrease, +1 to increase.
        rng: Random source for picking positions.
        amount: Number of positions to nudge.

    Returns:
        A new strand.

    Raises:
        ValueError: If direction is not -1/+1 or amount is negative.
    """
    if direction not in (-1, 1):
        msg = f"Drift direction must be -1 or 1, got {direction}"
        raise ValueError(msg)
    if amount < 0:
        msg = f"Drift amount must be non-negative, got {amount}"
        raise ValueError(msg)

    start, length = axis_section(axis)
    drifted = list(strand)
    for _ in range(amount):
        position = start + uniform_index(rng, length)
        drifted[position] = clamp_digit(drifted[position] + direction)

    logger.debug(
        "Applied drift to %s: direction=%d amount=%d", PersonalityAxis(axis), direction, amount
    )
    return drifted


# ===== APPEARANCE =====


def extract_appearance(strand: Strand) -> AppearanceTraits:
    """Decode appearance fields from positions 0-14."""
    return AppearanceTraits(
        body_shape=strand[0],
        size=strand[1],
        primary_color=strand[2],
        secondary_color=strand[3],
        pattern=strand[4],
        features=list(strand[5 : 5 + FEATURE_COUNT]),
    )


def encode_appearance(traits: AppearanceTraits, rng: RandomSource) -> Strand:
    """Encode appearance traits, padding positions 15-59 with random digits.

    Feature ids are reduced mod 7 and at most 10 are kept.
    """
    strand: Strand = [
        clamp_digit(traits.body_shape),
        clamp_digit(traits.size),
        clamp_digit(traits.primary_color),
        clamp_digit(traits.secondary_color),
        clamp_digit(traits.pattern),
    ]
    strand.extend(feature % BASE for feature in traits.features[:FEATURE_COUNT])
    while len(strand) < STRAND_LENGTH:
        strand.append(random_digit(rng))
    return strand[:STRAND_LENGTH]


# ===== ABILITIES =====


def extract_abilities(strand: Strand) -> SpecialAbilities:
    """Decode rarity, power ids and seasonal affinities."""
    sixes = sum(1 for digit in strand if digit == RARITY_DIGIT)
    return SpecialAbilities(
        rarity=min(MAX_DIGIT, sixes // SIXES_PER_RARITY),
        special_powers=list(strand[:POWER_COUNT]),
        affinities=list(strand[AFFINITY_START : AFFINITY_START + AFFINITY_COUNT]),
    )


# ===== GENOME UTILITIES =====


def genome_distance(genome1: Genome, genome2: Genome) -> float:
    """Mean absolute digit difference over all 180 positions.

    Returns:
        Distance in [0, 6]: 0 for identical genomes, 6 when every position
        is maximally different.
    """
    total = 0
    for strand1, strand2 in zip(genome1.strands(), genome2.strands(), strict=True):
        total += sum(abs(a - b) for a, b in zip(strand1, strand2, strict=True))
    return total / (STRAND_LENGTH * 3)


def clone_genome(genome: Genome) -> Genome:
    """Deep copy a genome so the copy shares no lists with the original."""
    return copy.deepcopy(genome)


def generate_genome_with_personality(scores: PersonalityScores, rng: RandomSource) -> Genome:
    """Create a genome with the given personality and random other strands."""
    return Genome(
        personality=encode_personality(scores, rng),
        appearance=generate_random_strand(rng),
        abilities=generate_random_strand(rng),
    )


# ===== SERIALIZATION =====


class GenomeRecord(BaseModel):
    """Transport form of a genome: one 60-character digit string per strand."""

    personality: str = Field(description="Personality strand digits")
    appearance: str = Field(description="Appearance strand digits")
    abilities: str = Field(description="Ability strand digits")

    model_config = {"extra": "forbid"}


def strand_to_string(strand: Strand) -> str:
    """Render a strand as a string of ASCII digits."""
    return "".join(str(digit) for digit in strand)


def parse_strand(text: str, name: str = "strand") -> Strand:
    """Parse a 60-character digit string into a strand.

    Raises:
        InvalidDigitError: If the string is not exactly 60 characters of 0-6.
    """
    if len(text) != STRAND_LENGTH:
        msg = f"{name} must be {STRAND_LENGTH} characters, got {len(text)}"
        raise InvalidDigitError(msg)
    for index, char in enumerate(text):
        if char not in _VALID_CHARS:
            msg = f"Invalid base-7 digit {char!r} at {name}[{index}]"
            raise InvalidDigitError(msg)
    return [ord(char) - ord("0") for char in text]


def genome_to_strings(genome: Genome) -> tuple[str, str, str]:
    """Render a genome as its (personality, appearance, abilities) string triple."""
    return (
        strand_to_string(genome.personality),
        strand_to_string(genome.appearance),
        strand_to_string(genome.abilities),
    )


def genome_from_strings(personality: str, appearance: str, abilities: str) -> Genome:
    """Parse a genome from its string triple."""
    return Genome(
        personality=parse_strand(personality, "personality"),
        appearance=parse_strand(appearance, "appearance"),
        abilities=parse_strand(abilities, "abilities"),
    )


def serialize_genome(genome: Genome) -> str:
    """Serialize a genome to JSON text."""
    personality, appearance, abilities = genome_to_strings(genome)
    record = GenomeRecord(personality=personality, appearance=appearance, abilities=abilities)
    return record.model_dump_json()


def deserialize_genome(text: str) -> Genome:
    """Parse a genome from JSON text produced by serialize_genome.

    Raises:
        MalformedGenomeError: If the text is not a valid genome record.
        InvalidDigitError: If any strand has a bad digit or length.
    """
    try:
        record = GenomeRecord.model_validate_json(text)
    except ValidationError as e:
        msg = f"Malformed genome record: {e.error_count()} validation error(s)"
        logger.warning("%s", msg)
        raise MalformedGenomeError(msg) from e
    return genome_from_strings(record.personality, record.appearance, record.abilities)

