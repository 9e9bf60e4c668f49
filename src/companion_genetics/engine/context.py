"""BreedingContext: the explicit dependencies of every breeding operation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from companion_genetics.collaborators import BondGate, SeasonalCalendar
from companion_genetics.config import BreedingConfig
from companion_genetics.engine.random_source import RandomSource, SeededRandomSource
from companion_genetics.exceptions import ConfigurationError


def utc_now() -> datetime:
    return datetime.now(UTC)


def require_aware(moment: datetime, name: str = "now") -> datetime:
    """Return a timestamp unchanged if it carries a timezone.

    Raises:
        ValueError: If the timestamp is naive.
    """
    if moment.tzinfo is None or moment.tzinfo.utcoffset(moment) is None:
        msg = f"{name} must be timezone-aware, got naive {moment.isoformat()}"
        raise ValueError(msg)
    return moment


@dataclass
class BreedingContext:
    """Configuration, randomness, collaborators and clock for one caller.

    Operations read everything they need from the context instead of module
    state. One context holds one random stream.

    Attributes:
        config: Breeding rules.
        rng: Random stream for all draws made through this context.
        bond_gate: Eligibility gate and cooldown policy. Required by
            attempt_breeding, calculate_compatibility and the cooldown checks.
        calendar: Seasonal bonus source. Required by attempt_breeding.
        clock: Returns the current timezone-aware time.
    """

    config: BreedingConfig = field(default_factory=BreedingConfig)
    rng: RandomSource = field(default_factory=SeededRandomSource)
    bond_gate: BondGate | None = None
    calendar: SeasonalCalendar | None = None
    clock: Callable[[], datetime] = utc_now

    @classmethod
    def from_config(
        cls,
        config: BreedingConfig | None = None,
        bond_gate: BondGate | None = None,
        calendar: SeasonalCalendar | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> BreedingContext:
        """Build a context whose random stream is seeded from the config."""
        config = config or BreedingConfig()
        return cls(
            config=config,
            rng=SeededRandomSource(config.random_seed),
            bond_gate=bond_gate,
            calendar=calendar,
            clock=clock or utc_now,
        )

    def now(self) -> datetime:
        return self.clock()

    def require_bond_gate(self) -> BondGate:
        if self.bond_gate is None:
            msg = "BreedingContext has no bond_gate configured"
            raise ConfigurationError(msg)
        return self.bond_gate

    def require_calendar(self) -> SeasonalCalendar:
        if self.calendar is None:
            msg = "BreedingContext has no calendar configured"
            raise ConfigurationError(msg)
        return self.calendar
