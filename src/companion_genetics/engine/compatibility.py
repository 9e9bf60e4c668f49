"""Compatibility analyzer: advisory predictions for a breeding pair.

Nothing here mutates its inputs or draws randomness, so predictions can be
shown to a player before, or instead of, an actual breeding attempt.
"""

from __future__ import annotations

from dataclasses import dataclass

from companion_genetics.engine.codec import (
    extract_abilities,
    extract_personality,
    genome_distance,
    round_half_up,
)
from companion_genetics.engine.context import BreedingContext
from companion_genetics.model.genome import (
    MAX_DIGIT,
    PersonalityAxis,
    PersonalityScores,
    SpecialAbilities,
    clamp_digit,
)
from companion_genetics.model.request import BreedingCandidate

RARITY_TIERS: tuple[str, ...] = (
    "Common",
    "Uncommon",
    "Rare",
    "Epic",
    "Legendary",
    "Mythic",
    "Eternal",
)

# Distance bands (inclusive sweet spot, exclusive extremes)
SWEET_SPOT_MIN = 2.0
SWEET_SPOT_MAX = 4.0
TOO_SIMILAR_BELOW = 1.0
TOO_DIFFERENT_ABOVE = 5.0

SWEET_SPOT_RATE = 0.8
TOO_SIMILAR_RATE = 0.3
TOO_DIFFERENT_RATE = 0.4
DEFAULT_RATE = 0.5


@dataclass(frozen=True)
class PersonalityRange:
    """Lowest and highest predicted personality per axis."""

    min: PersonalityScores
    max: PersonalityScores


@dataclass(frozen=True)
class PredictedTraits:
    personality_range: PersonalityRange
    rarity: int


@dataclass(frozen=True)
class BreedingCompatibility:
    """Advisory verdict for a candidate pair.

    Attributes:
        compatible: Whether both companions may breed at all.
        success_rate: Estimated chance of a successful breeding (0-1).
        reason: Why the pair is incompatible, if it is.
        distance: Genetic distance (0-6), None when not computed.
        predicted_traits: Predicted offspring traits for compatible pairs.
    """

    compatible: bool
    success_rate: float
    reason: str | None = None
    distance: float | None = None
    predicted_traits: PredictedTraits | None = None


def success_rate_for_distance(distance: float) -> float:
    """Map genetic distance to an estimated success rate.

    Step function, no interpolation:
        2 <= d <= 4 -> 0.8 (sweet spot)
        d < 1       -> 0.3 (too similar)
        d > 5       -> 0.4 (too different)
        otherwise   -> 0.5
    """
    if SWEET_SPOT_MIN <= distance <= SWEET_SPOT_MAX:
        return SWEET_SPOT_RATE
    if distance < TOO_SIMILAR_BELOW:
        return TOO_SIMILAR_RATE
    if distance > TOO_DIFFERENT_ABOVE:
        return TOO_DIFFERENT_RATE
    return DEFAULT_RATE


def _shifted_average(p1: PersonalityScores, p2: PersonalityScores, shift: int) -> PersonalityScores:
    scores = {
        axis.value: clamp_digit(round_half_up((p1[axis] + p2[axis]) / 2) + shift)
        for axis in PersonalityAxis
    }
    return PersonalityScores(**scores)


def predict_personality_range(p1: PersonalityScores, p2: PersonalityScores) -> PersonalityRange:
    """Predict offspring personality as parent average +/- 1 per axis."""
    return PersonalityRange(min=_shifted_average(p1, p2, -1), max=_shifted_average(p1, p2, 1))


def predict_rarity(abilities1: SpecialAbilities, abilities2: SpecialAbilities) -> int:
    """Predict offspring rarity: parent average plus one, capped at 6."""
    return min(MAX_DIGIT, round_half_up((abilities1.rarity + abilities2.rarity) / 2 + 1))


def calculate_compatibility(
    companion1: BreedingCandidate,
    companion2: BreedingCandidate,
    context: BreedingContext,
) -> BreedingCompatibility:
    """Assess a breeding pair without side effects.

    Ineligible pairs are reported as ``compatible=False`` with a reason;
    this function never raises for them. Draws nothing from the context rng.

    Args:
        companion1: First candidate.
        companion2: Second candidate.
        context: Supplies the bond gate and the configured breeding bond level.

    Returns:
        BreedingCompatibility with success rate and predicted traits.

    Raises:
        ConfigurationError: If the context has no bond gate.
    """
    bond_gate = context.require_bond_gate()
    level = context.config.breeding_bond_level
    if not (
        bond_gate.is_breeding_eligible(companion1.companion_id)
        and bond_gate.is_breeding_eligible(companion2.companion_id)
    ):
        return BreedingCompatibility(
            compatible=False,
            success_rate=0.0,
            reason=f"Both companions must reach bond level {level} to breed",
        )

    genome1, genome2 = companion1.genome, companion2.genome
    distance = genome_distance(genome1, genome2)

    personality_range = predict_personality_range(
        extract_personality(genome1.personality), extract_personality(genome2.personality)
    )
    rarity = predict_rarity(extract_abilities(genome1.abilities), extract_abilities(genome2.abilities))

    return BreedingCompatibility(
        compatible=True,
        success_rate=success_rate_for_distance(distance),
        distance=distance,
        predicted_traits=PredictedTraits(personality_range=personality_range, rarity=rarity),
    )


def rarity_tier(rarity: int) -> str:
    """Name of a rarity level; out-of-range values fall back to Common."""
    if 0 <= rarity < len(RARITY_TIERS):
        return RARITY_TIERS[rarity]
    return RARITY_TIERS[0]


def describe_success_rate(rate: float) -> str:
    if rate > 0.7:
        return "high"
    if rate > 0.4:
        return "moderate"
    return "low"


def describe_prediction(
    parent1_name: str, parent2_name: str, compatibility: BreedingCompatibility
) -> str:
    """Human-readable summary of a compatibility prediction."""
    lines = [
        f"Breeding {parent1_name} and {parent2_name}:",
        f"Success rate: {describe_success_rate(compatibility.success_rate)} "
        f"({round(compatibility.success_rate * 100)}%)",
    ]
    if compatibility.predicted_traits is not None:
        lines.append(f"Expected rarity: {rarity_tier(compatibility.predicted_traits.rarity)}")
    if compatibility.reason:
        lines.append(f"Note: {compatibility.reason}")
    return "\n".join(lines)
