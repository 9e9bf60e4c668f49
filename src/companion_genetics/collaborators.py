"""Interfaces to the external collaborators of the breeding core.

The bond gate and the seasonal calendar are owned by other systems. This
module defines the protocols the core consumes, plus reference
implementations built from the game's bond tiers and season table that are
suitable for tests and offline tools.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class SubscriptionTier(StrEnum):
    """Account tiers with different breeding cooldowns."""

    FREE = "free"
    PREMIUM = "premium"
    MYTHIC = "mythic"


BREEDING_COOLDOWN_DAYS: dict[SubscriptionTier, int] = {
    SubscriptionTier.FREE: 365,  # 1 per year
    SubscriptionTier.PREMIUM: 120,  # 3 per year
    SubscriptionTier.MYTHIC: 0,  # unlimited
}


def breeding_cooldown_days(tier: SubscriptionTier | str) -> int:
    """Days a companion must wait between breedings for an account tier.

    Raises:
        ValueError: If the tier is unknown.
    """
    return BREEDING_COOLDOWN_DAYS[SubscriptionTier(tier)]


@runtime_checkable
class BondGate(Protocol):
    """Reports breeding eligibility and cooldown policy."""

    def is_breeding_eligible(self, companion_id: str) -> bool: ...

    def cooldown_days_for_tier(self, tier: SubscriptionTier | str) -> int: ...


@runtime_checkable
class SeasonalCalendar(Protocol):
    """Supplies the breeding bonus for the current date."""

    def current_breeding_bonus(self) -> float: ...


# ===== BOND TIERS =====

MAX_BOND_LEVEL = 7

# XP required to reach each bond level
BOND_LEVEL_XP: dict[int, int] = {
    1: 0,  # Found
    2: 100,  # Friend
    3: 300,  # Family
    4: 600,  # Soul-Bound
    5: 1000,  # Resonance
    6: 1500,  # Eternal
    7: 2200,  # Reincarnation: breeding unlocks
}


def bond_level_for_xp(xp: int) -> int:
    """Highest bond level whose XP threshold has been reached."""
    level = 1
    for candidate, required in sorted(BOND_LEVEL_XP.items()):
        if xp >= required:
            level = candidate
    return level


class KizunaBondGate:
    """BondGate backed by a companion_id -> bond XP lookup.

    Companions missing from the lookup are treated as level 1.

    Example:
        >>> gate = KizunaBondGate({"mochi": 2500, "yuki": 400})
        >>> gate.is_breeding_eligible("mochi")
        True
    """

    def __init__(self, bond_xp: Mapping[str, int], breeding_level: int = MAX_BOND_LEVEL) -> None:
        self._bond_xp = dict(bond_xp)
        self.breeding_level = breeding_level

    def bond_level(self, companion_id: str) -> int:
        return bond_level_for_xp(self._bond_xp.get(companion_id, 0))

    def is_breeding_eligible(self, companion_id: str) -> bool:
        return self.bond_level(companion_id) >= self.breeding_level

    def cooldown_days_for_tier(self, tier: SubscriptionTier | str) -> int:
        return breeding_cooldown_days(tier)


# ===== SEASONS =====


@dataclass(frozen=True)
class Season:
    """A season of the garden calendar and its breeding bonus."""

    id: str
    name: str
    start_month: int
    start_day: int
    breeding_bonus: float = 0.0


SEASONS: tuple[Season, ...] = (
    Season("daikan", "Great Cold", 1, 20),
    Season("risshun", "Spring Awakening", 2, 4, breeding_bonus=1.0),
    Season("shoman", "Gentle Rain", 5, 21),
    Season("tsuyu", "Plum Rains", 6, 6),
    Season("shocho", "Star Festival", 7, 7, breeding_bonus=1.5),
    Season("kanro", "Autumn Dew", 10, 8),
    Season("ritto", "Winter Arrival", 11, 7),
)


def season_for_date(day: date) -> Season:
    """Return the season a date falls in.

    Dates before the first season start of the year belong to the last
    season of the previous year.
    """
    current = SEASONS[-1]
    for season in SEASONS:
        if (day.month, day.day) >= (season.start_month, season.start_day):
            current = season
    return current


def seasonal_breeding_bonus(season_id: str) -> float:
    """Breeding bonus for a season id (0.0 for unknown or bonus-free seasons)."""
    for season in SEASONS:
        if season.id == season_id:
            return season.breeding_bonus
    return 0.0


class StaticSeasonalCalendar:
    """SeasonalCalendar that reads the built-in season table.

    Args:
        clock: Returns the current time. Defaults to UTC now.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(UTC))

    def current_season(self) -> Season:
        return season_for_date(self._clock().date())

    def current_breeding_bonus(self) -> float:
        season = self.current_season()
        logger.debug("Current season %s, breeding bonus %.2f", season.id, season.breeding_bonus)
        return season.breeding_bonus


class FixedBonusCalendar:
    """SeasonalCalendar that always reports the same bonus."""

    def __init__(self, bonus: float = 0.0) -> None:
        self.bonus = bonus

    def current_breeding_bonus(self) -> float:
        return self.bonus
