"""Domain model: Genome, decoded traits, PedigreeNode, BreedingRequest."""

from companion_genetics.model.genome import (
    BASE,
    MAX_DIGIT,
    MIN_DIGIT,
    STRAND_LENGTH,
    AppearanceTraits,
    Genome,
    PersonalityAxis,
    PersonalityScores,
    SpecialAbilities,
    Strand,
    clamp_digit,
    validate_strand,
)
from companion_genetics.model.pedigree import PedigreeNode
from companion_genetics.model.request import (
    DEFAULT_INCUBATION_DAYS,
    BreedingCandidate,
    BreedingRequest,
    RequestStatus,
)

__all__ = [
    "BASE",
    "DEFAULT_INCUBATION_DAYS",
    "MAX_DIGIT",
    "MIN_DIGIT",
    "STRAND_LENGTH",
    "AppearanceTraits",
    "BreedingCandidate",
    "BreedingRequest",
    "Genome",
    "PedigreeNode",
    "PersonalityAxis",
    "PersonalityScores",
    "RequestStatus",
    "SpecialAbilities",
    "Strand",
    "clamp_digit",
    "validate_strand",
]
