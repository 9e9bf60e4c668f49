"""Inheritance engine: produces offspring genomes from two parents.

Two formulas exist and callers pick one deliberately:
- breed_genomes (pedigree breeding): each digit is either the rounded parent
  average (probability ``inheritance_ratio``) or a fresh uniform digit.
- blend_genomes (direct companion breeding): each digit is a weighted blend
  of the rounded parent average and a uniform digit, wrapped mod 7.

Both draw randomness per digit, never once per strand.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from companion_genetics.engine.codec import random_digit, round_half_up
from companion_genetics.engine.context import BreedingContext
from companion_genetics.engine.random_source import RandomSource, uniform_index
from companion_genetics.exceptions import IneligibleParentError
from companion_genetics.model.genome import BASE, STRAND_LENGTH, Genome, Strand, clamp_digit
from companion_genetics.model.request import BreedingCandidate

logger = logging.getLogger(__name__)

SPECIAL_ABILITIES: tuple[str, ...] = (
    "Celestial Resonance - Enhanced emotional expression",
    "Temporal Echo - Remembers past interactions longer",
    "Element Mastery - Stronger yantra affinity",
    "Shrine Blessing - Permanent +10% bond gain",
    "Seasonal Attunement - Adapts to seasonal events faster",
    "Ancient Wisdom - Unlocks rare dialogue options",
)

INHERITED_TRAITS: tuple[str, ...] = (
    "Personality blend of both parents",
    "Color combination",
    "Element affinity fusion",
)

FAILURE_REASON = (
    "Breeding was unsuccessful. Try again during a seasonal event or visit a shrine."
)


def average_digits(a: int, b: int) -> int:
    """Average two base-7 digits, rounding halves up."""
    return clamp_digit(round_half_up((a + b) / 2))


# ===== PEDIGREE BREEDING =====


def breed_strand(
    strand1: Strand, strand2: Strand, inheritance_ratio: float, rng: RandomSource
) -> Strand:
    """Breed two strands digit by digit.

    Args:
        strand1: First parent strand.
        strand2: Second parent strand.
        inheritance_ratio: Probability (0-1) that a digit is the parent average
            rather than a random digit.
        rng: Random source.

    Returns:
        Offspring strand of exactly 60 digits.
    """
    child: Strand = []
    for i in range(STRAND_LENGTH):
        if rng.next_float() < inheritance_ratio:
            child.append(average_digits(strand1[i], strand2[i]))
        else:
            child.append(random_digit(rng))
    return child


def breed_genomes(
    parent1: Genome, parent2: Genome, rng: RandomSource, inheritance_ratio: float = 0.6
) -> Genome:
    """Breed two genomes with the per-digit inherit-or-randomize rule.

    This is the formula used when completing a breeding request and recording
    the offspring in a pedigree.
    """
    return Genome(
        personality=breed_strand(parent1.personality, parent2.personality, inheritance_ratio, rng),
        appearance=breed_strand(parent1.appearance, parent2.appearance, inheritance_ratio, rng),
        abilities=breed_strand(parent1.abilities, parent2.abilities, inheritance_ratio, rng),
    )


# ===== DIRECT BREEDING =====


def blend_digit(a: int, b: int, mutation: int, parent_weight: float = 0.6) -> int:
    """Blend a parent average with a mutation digit, wrapped into base 7."""
    blended = parent_weight * average_digits(a, b) + (1 - parent_weight) * mutation
    return math.floor(blended) % BASE


def blend_strand(
    strand1: Strand, strand2: Strand, rng: RandomSource, parent_weight: float = 0.6
) -> Strand:
    """Blend two strands, drawing one mutation digit per position."""
    return [
        blend_digit(strand1[i], strand2[i], random_digit(rng), parent_weight)
        for i in range(STRAND_LENGTH)
    ]


def blend_genomes(
    parent1: Genome, parent2: Genome, rng: RandomSource, parent_weight: float = 0.6
) -> Genome:
    """Breed two genomes with the blended direct-breeding formula."""
    return Genome(
        personality=blend_strand(parent1.personality, parent2.personality, rng, parent_weight),
        appearance=blend_strand(parent1.appearance, parent2.appearance, rng, parent_weight),
        abilities=blend_strand(parent1.abilities, parent2.abilities, rng, parent_weight),
    )


def roll_special_ability(rng: RandomSource, chance: float = 0.05) -> str | None:
    """Roll for a rare special ability.

    The roll does not look at the parents' ability strands.

    Returns:
        An ability from SPECIAL_ABILITIES, or None (most of the time).
    """
    if rng.next_float() >= chance:
        return None
    return SPECIAL_ABILITIES[uniform_index(rng, len(SPECIAL_ABILITIES))]


# ===== BREEDING ATTEMPT =====


@dataclass
class Offspring:
    """A newly bred genome and what it inherited."""

    genome: Genome
    inherited_traits: list[str] = field(default_factory=list)
    special_ability: str | None = None


@dataclass
class BreedingResult:
    """Outcome of one breeding attempt.

    A failed roll is a normal result (``success=False`` with a reason), not
    an exception.
    """

    success: bool
    offspring: Offspring | None = None
    reason: str | None = None
    incubation_days: int = 0
    success_chance: float = 0.0


def success_chance(
    seasonal_bonus: float,
    shrine_blessing: bool,
    base_chance: float = 0.7,
    shrine_bonus: float = 1.0,
) -> float:
    """Total breeding success probability, clamped to [0, 1].

    Negative seasonal bonuses are ignored.
    """
    total = base_chance + max(0.0, seasonal_bonus) + (shrine_bonus if shrine_blessing else 0.0)
    return max(0.0, min(1.0, total))


def check_eligibility(
    parent1: BreedingCandidate, parent2: BreedingCandidate, context: BreedingContext
) -> None:
    """Verify both parents pass the bond gate. Draws no randomness.

    Raises:
        IneligibleParentError: If either parent is not breeding-eligible.
        ConfigurationError: If the context has no bond gate.
    """
    gate = context.require_bond_gate()
    ineligible = [
        p.companion_id for p in (parent1, parent2) if not gate.is_breeding_eligible(p.companion_id)
    ]
    if ineligible:
        msg = (
            f"Both companions must reach bond level {context.config.breeding_bond_level} "
            f"to breed; ineligible: {', '.join(ineligible)}"
        )
        logger.warning("%s", msg)
        raise IneligibleParentError(msg, companion_ids=ineligible)


def attempt_breeding(
    parent1: BreedingCandidate,
    parent2: BreedingCandidate,
    context: BreedingContext,
    shrine_blessing: bool = False,
) -> BreedingResult:
    """Attempt to breed two companions directly.

    Order of operations:
    1. Bond gate check (raises before any random draw).
    2. Seasonal bonus read once from the calendar.
    3. One success roll.
    4. On success: blended offspring genome, special ability roll, fixed
       incubation period.

    Args:
        parent1: First parent.
        parent2: Second parent.
        context: Config, random stream and collaborators.
        shrine_blessing: Whether a shrine blessing boosts the success chance.

    Returns:
        BreedingResult describing the outcome.

    Raises:
        IneligibleParentError: If either parent fails the bond gate.
        ConfigurationError: If the context lacks a bond gate or calendar.
    """
    check_eligibility(parent1, parent2, context)
    config = context.config

    seasonal_bonus = context.require_calendar().current_breeding_bonus()
    chance = success_chance(
        seasonal_bonus,
        shrine_blessing,
        base_chance=config.base_success_chance,
        shrine_bonus=config.shrine_bonus,
    )

    if context.rng.next_float() >= chance:
        logger.info(
            "Breeding %s x %s failed (chance=%.2f)",
            parent1.companion_id,
            parent2.companion_id,
            chance,
        )
        return BreedingResult(success=False, reason=FAILURE_REASON, success_chance=chance)

    genome = blend_genomes(
        parent1.genome, parent2.genome, context.rng, parent_weight=config.direct_parent_weight
    )
    ability = roll_special_ability(context.rng, config.special_ability_chance)

    logger.info(
        "Breeding %s x %s succeeded (chance=%.2f, special_ability=%s)",
        parent1.companion_id,
        parent2.companion_id,
        chance,
        ability,
    )
    return BreedingResult(
        success=True,
        offspring=Offspring(
            genome=genome,
            inherited_traits=list(INHERITED_TRAITS),
            special_ability=ability,
        ),
        incubation_days=config.incubation_days,
        success_chance=chance,
    )
