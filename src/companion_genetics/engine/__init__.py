"""Breeding engine: strand codec, inheritance, compatibility, lifecycle, pedigree."""

from companion_genetics.engine.codec import (
    GenomeRecord,
    apply_drift,
    axis_section,
    clone_genome,
    deserialize_genome,
    encode_appearance,
    encode_personality,
    extract_abilities,
    extract_appearance,
    extract_personality,
    generate_genome_with_personality,
    generate_random_genome,
    generate_random_strand,
    genome_distance,
    genome_from_strings,
    genome_to_strings,
    parse_strand,
    random_digit,
    round_half_up,
    section_bounds,
    serialize_genome,
    strand_to_string,
)
from companion_genetics.engine.compatibility import (
    RARITY_TIERS,
    BreedingCompatibility,
    PersonalityRange,
    PredictedTraits,
    calculate_compatibility,
    describe_prediction,
    predict_personality_range,
    predict_rarity,
    rarity_tier,
    success_rate_for_distance,
)
from companion_genetics.engine.context import BreedingContext
from companion_genetics.engine.inheritance import (
    SPECIAL_ABILITIES,
    BreedingResult,
    Offspring,
    attempt_breeding,
    average_digits,
    blend_genomes,
    blend_strand,
    breed_genomes,
    breed_strand,
    check_eligibility,
    roll_special_ability,
    success_chance,
)
from companion_genetics.engine.lifecycle import (
    accept_request,
    can_breed_again,
    cancel_request,
    complete_breeding,
    cooldown_remaining_days,
    create_breeding_request,
    elapsed_days,
    get_breeding_progress,
    is_breeding_ready,
    ready_at,
    reject_request,
)
from companion_genetics.engine.pedigree import (
    PedigreeSnapshot,
    create_node,
    get_ancestors,
    get_pedigree_depth,
    load_pedigree_snapshot,
    pedigree_to_json,
    serialize_pedigree,
    unique_ancestors,
)
from companion_genetics.engine.random_source import (
    RandomSource,
    ScriptedRandomSource,
    SeededRandomSource,
    uniform_index,
)

__all__ = [
    "RARITY_TIERS",
    "SPECIAL_ABILITIES",
    "BreedingCompatibility",
    "BreedingContext",
    "BreedingResult",
    "GenomeRecord",
    "Offspring",
    "PedigreeSnapshot",
    "PersonalityRange",
    "PredictedTraits",
    "RandomSource",
    "ScriptedRandomSource",
    "SeededRandomSource",
    "accept_request",
    "apply_drift",
    "attempt_breeding",
    "average_digits",
    "axis_section",
    "blend_genomes",
    "blend_strand",
    "breed_genomes",
    "breed_strand",
    "calculate_compatibility",
    "can_breed_again",
    "cancel_request",
    "check_eligibility",
    "clone_genome",
    "complete_breeding",
    "cooldown_remaining_days",
    "create_breeding_request",
    "create_node",
    "describe_prediction",
    "deserialize_genome",
    "elapsed_days",
    "encode_appearance",
    "encode_personality",
    "extract_abilities",
    "extract_appearance",
    "extract_personality",
    "generate_genome_with_personality",
    "generate_random_genome",
    "generate_random_strand",
    "genome_distance",
    "genome_from_strings",
    "genome_to_strings",
    "get_ancestors",
    "get_breeding_progress",
    "get_pedigree_depth",
    "is_breeding_ready",
    "load_pedigree_snapshot",
    "parse_strand",
    "pedigree_to_json",
    "predict_personality_range",
    "predict_rarity",
    "random_digit",
    "rarity_tier",
    "ready_at",
    "reject_request",
    "roll_special_ability",
    "round_half_up",
    "section_bounds",
    "serialize_genome",
    "serialize_pedigree",
    "strand_to_string",
    "success_chance",
    "success_rate_for_distance",
    "uniform_index",
    "unique_ancestors",
]
