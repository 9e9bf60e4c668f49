"""Configuration loading for breeding rules.

This module provides Pydantic-based configuration loading from environment
variables and .env files. Every tunable ratio and duration used by the
inheritance engine and the request lifecycle lives here so
tests and callers can override them without touching module state.
"""

from __future__ import annotations

import logging

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class BreedingConfig(BaseSettings):
    """Tunable breeding rules.

    Environment Variables:
        GENETICS_INHERITANCE_RATIO: Per-digit chance of inheriting the parent
            average in pedigree breeding (default: 0.6)
        GENETICS_DIRECT_PARENT_WEIGHT: Parent weight in the blended direct
            breeding formula (default: 0.6)
        GENETICS_SPECIAL_ABILITY_CHANCE: Chance of a special ability (default: 0.05)
        GENETICS_BASE_SUCCESS_CHANCE: Breeding success chance before bonuses (default: 0.7)
        GENETICS_SHRINE_BONUS: Success bonus from a shrine blessing (default: 1.0)
        GENETICS_INCUBATION_DAYS: Incubation period in days (default: 7)
        GENETICS_BREEDING_BOND_LEVEL: Bond level that unlocks breeding (default: 7)
        GENETICS_ENFORCE_INCUBATION: Reject completion before incubation ends
            (default: true)
        GENETICS_RANDOM_SEED: Seed for the breeding random stream (default: unset)

    Example:
        >>> config = BreedingConfig()  # Loads from environment
        >>> config = BreedingConfig(inheritance_ratio=0.8)
    """

    model_config = SettingsConfigDict(
        env_prefix="GENETICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Inheritance
    inheritance_ratio: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Per-digit probability of inheriting the parent average",
    )
    direct_parent_weight: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Weight of the parent average in direct breeding",
    )
    special_ability_chance: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Probability that an offspring rolls a special ability",
    )

    # Success roll
    base_success_chance: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Breeding success probability before bonuses",
    )
    shrine_bonus: float = Field(
        default=1.0,
        ge=0.0,
        description="Success bonus granted by a shrine blessing",
    )

    # Lifecycle
    incubation_days: int = Field(
        default=7,
        gt=0,
        le=365,
        description="Days between a successful breeding and hatching",
    )
    enforce_incubation: bool = Field(
        default=True,
        description="Reject completion of a request before incubation ends",
    )
    breeding_bond_level: int = Field(
        default=7,
        ge=1,
        le=7,
        description="Bond level at which breeding unlocks",
    )

    random_seed: int | None = Field(
        default=None,
        description="Seed for the breeding random stream (unset = system entropy)",
    )

    @model_validator(mode="after")
    def warn_on_guaranteed_success(self) -> BreedingConfig:
        """Log when the base chance alone already guarantees success."""
        if self.base_success_chance >= 1.0:
            logger.warning("base_success_chance is 1.0: every breeding attempt will succeed")
        return self

    def __repr__(self) -> str:
        return (
            f"BreedingConfig("
            f"inheritance_ratio={self.inheritance_ratio}, "
            f"direct_parent_weight={self.direct_parent_weight}, "
            f"special_ability_chance={self.special_ability_chance}, "
            f"base_success_chance={self.base_success_chance}, "
            f"incubation_days={self.incubation_days}, "
            f"enforce_incubation={self.enforce_incubation}, "
            f"seeded={self.random_seed is not None}"
            f")"
        )


def load_breeding_config(**overrides: object) -> BreedingConfig:
    """Load breeding configuration from the environment.

    Each call builds a fresh config; nothing is cached at module level.

    Args:
        **overrides: Field values that take precedence over the environment.

    Returns:
        BreedingConfig instance.
    """
    config = BreedingConfig(**overrides)
    logger.info("Loaded breeding configuration: %s", config)
    return config
