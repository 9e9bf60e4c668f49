"""Tests for the inheritance engine (companion_genetics.engine.inheritance)."""

from __future__ import annotations

import pytest

from companion_genetics.collaborators import FixedBonusCalendar, KizunaBondGate
from companion_genetics.config import BreedingConfig
from companion_genetics.engine.codec import generate_random_genome, round_half_up
from companion_genetics.engine.context import BreedingContext
from companion_genetics.engine.inheritance import (
    FAILURE_REASON,
    INHERITED_TRAITS,
    SPECIAL_ABILITIES,
    average_digits,
    attempt_breeding,
    blend_digit,
    blend_genomes,
    breed_genomes,
    breed_strand,
    roll_special_ability,
    success_chance,
)
from companion_genetics.engine.random_source import ScriptedRandomSource, SeededRandomSource
from companion_genetics.exceptions import ConfigurationError, IneligibleParentError
from companion_genetics.model.genome import STRAND_LENGTH, Genome
from companion_genetics.model.request import BreedingCandidate


def uniform_genome(digit: int) -> Genome:
    strand = [digit] * STRAND_LENGTH
    return Genome(personality=strand, appearance=strand, abilities=strand)


def assert_valid_genome(genome: Genome) -> None:
    for strand in genome.strands():
        assert len(strand) == STRAND_LENGTH
        assert all(0 <= digit <= 6 for digit in strand)


class CountingCalendar:
    """SeasonalCalendar that records how often it was asked."""

    def __init__(self, bonus: float = 0.0) -> None:
        self.bonus = bonus
        self.calls = 0

    def current_breeding_bonus(self) -> float:
        self.calls += 1
        return self.bonus


@pytest.fixture
def bond_gate() -> KizunaBondGate:
    """Gate where mochi and yuki are level 7 and kuro is level 3."""
    return KizunaBondGate({"mochi": 2200, "yuki": 3000, "kuro": 400})


@pytest.fixture
def mochi() -> BreedingCandidate:
    return BreedingCandidate("mochi", uniform_genome(2), name="Mochi")


@pytest.fixture
def yuki() -> BreedingCandidate:
    return BreedingCandidate("yuki", uniform_genome(4), name="Yuki")


@pytest.fixture
def kuro() -> BreedingCandidate:
    return BreedingCandidate("kuro", uniform_genome(5), name="Kuro")


class TestAverageDigits:
    """Tests for the parent average."""

    def test_all_pairs(self) -> None:
        """Every digit pair averages to the half-up rounded mean."""
        for a in range(7):
            for b in range(7):
                result = average_digits(a, b)
                assert result == round_half_up((a + b) / 2)
                assert 0 <= result <= 6

    def test_halves_round_up(self) -> None:
        """Odd sums round up."""
        assert average_digits(0, 1) == 1
        assert average_digits(5, 6) == 6
        assert average_digits(2, 3) == 3
        assert average_digits(0, 6) == 3


class TestBreedStrand:
    """Tests for pedigree breeding of one strand."""

    def test_ratio_one_always_inherits(self) -> None:
        """With ratio 1 every digit is the parent average, one draw each."""
        rng = SeededRandomSource(1)
        child = breed_strand([2] * 60, [4] * 60, 1.0, rng)
        assert child == [3] * STRAND_LENGTH
        assert rng.draws == STRAND_LENGTH

    def test_ratio_zero_always_randomizes(self) -> None:
        """With ratio 0 every digit costs an inherit roll plus a digit draw."""
        rng = SeededRandomSource(1)
        child = breed_strand([2] * 60, [4] * 60, 0.0, rng)
        assert len(child) == STRAND_LENGTH
        assert rng.draws == 2 * STRAND_LENGTH

    def test_decision_is_per_digit(self) -> None:
        """Inherited and random digits interleave within one strand."""
        script: list[float] = []
        for i in range(STRAND_LENGTH):
            script.extend([0.1] if i % 2 == 0 else [0.9, 0.99])
        child = breed_strand([2] * 60, [4] * 60, 0.6, ScriptedRandomSource(script))
        assert child == [3, 6] * (STRAND_LENGTH // 2)

    def test_breed_genomes_valid(self) -> None:
        """Offspring genomes are always valid."""
        rng = SeededRandomSource(5)
        for _ in range(20):
            child = breed_genomes(generate_random_genome(rng), generate_random_genome(rng), rng)
            assert_valid_genome(child)

    def test_breed_genomes_does_not_mutate_parents(self) -> None:
        """Parents are left unchanged."""
        p1, p2 = uniform_genome(1), uniform_genome(5)
        breed_genomes(p1, p2, SeededRandomSource(2))
        assert p1 == uniform_genome(1)
        assert p2 == uniform_genome(5)


class TestBlend:
    """Tests for the direct breeding blend."""

    @pytest.mark.parametrize(
        ("a", "b", "mutation", "expected"),
        [(0, 0, 0, 0), (2, 4, 0, 1), (3, 3, 5, 3), (6, 6, 0, 3)],
    )
    def test_blend_digit(self, a: int, b: int, mutation: int, expected: int) -> None:
        """floor(0.6 * average + 0.4 * mutation) mod 7."""
        assert blend_digit(a, b, mutation) == expected

    def test_blend_digit_range(self) -> None:
        """Blended digits are always base-7."""
        for a in range(7):
            for b in range(7):
                for mutation in range(7):
                    assert 0 <= blend_digit(a, b, mutation) <= 6

    def test_blend_genomes_draws_one_digit_per_position(self) -> None:
        """Blending draws exactly one mutation per position."""
        rng = SeededRandomSource(3)
        child = blend_genomes(uniform_genome(0), uniform_genome(6), rng)
        assert_valid_genome(child)
        assert rng.draws == 3 * STRAND_LENGTH

    def test_blend_with_zero_mutation(self) -> None:
        """With every mutation 0, digits are floor(0.6 * average)."""
        rng = ScriptedRandomSource([0.0] * (3 * STRAND_LENGTH))
        child = blend_genomes(uniform_genome(2), uniform_genome(4), rng)
        assert child == uniform_genome(1)


class TestSpecialAbility:
    """Tests for the special ability roll."""

    def test_roll_below_chance_grants_ability(self) -> None:
        """A roll under the chance picks an ability."""
        assert roll_special_ability(ScriptedRandomSource([0.04, 0.0])) == SPECIAL_ABILITIES[0]

    def test_roll_at_chance_grants_nothing(self) -> None:
        """The chance is exclusive and no second draw is made."""
        rng = ScriptedRandomSource([0.05])
        assert roll_special_ability(rng) is None
        assert rng.draws == 1

    def test_last_ability_reachable(self) -> None:
        """The top of the range maps to the last ability."""
        assert roll_special_ability(ScriptedRandomSource([0.0, 0.999])) == SPECIAL_ABILITIES[-1]


class TestSuccessChance:
    """Tests for the success probability."""

    def test_base_chance(self) -> None:
        assert success_chance(0.0, shrine_blessing=False) == pytest.approx(0.7)

    def test_seasonal_bonus(self) -> None:
        assert success_chance(0.2, shrine_blessing=False) == pytest.approx(0.9)

    def test_clamped_to_one(self) -> None:
        """Large bonuses never exceed certainty."""
        assert success_chance(1.5, shrine_blessing=False) == 1.0
        assert success_chance(0.0, shrine_blessing=True) == 1.0

    def test_negative_bonus_ignored(self) -> None:
        assert success_chance(-0.5, shrine_blessing=False) == pytest.approx(0.7)


class TestAttemptBreeding:
    """Tests for a full breeding attempt."""

    def test_ineligible_parent_raises_before_any_draw(
        self, bond_gate: KizunaBondGate, mochi: BreedingCandidate, kuro: BreedingCandidate
    ) -> None:
        """The bond gate is checked before the random stream is touched."""
        rng = SeededRandomSource(1)
        context = BreedingContext(rng=rng, bond_gate=bond_gate, calendar=FixedBonusCalendar())

        with pytest.raises(IneligibleParentError) as exc_info:
            attempt_breeding(mochi, kuro, context)

        assert exc_info.value.companion_ids == ["kuro"]
        assert "bond level 7" in str(exc_info.value)
        assert rng.draws == 0

    def test_failed_roll_returns_result(
        self, bond_gate: KizunaBondGate, mochi: BreedingCandidate, yuki: BreedingCandidate
    ) -> None:
        """A failed roll is a result with a reason, not an exception."""
        rng = ScriptedRandomSource([0.75])
        context = BreedingContext(rng=rng, bond_gate=bond_gate, calendar=FixedBonusCalendar())

        result = attempt_breeding(mochi, yuki, context)

        assert result.success is False
        assert result.offspring is None
        assert result.reason == FAILURE_REASON
        assert result.incubation_days == 0
        assert result.success_chance == pytest.approx(0.7)
        assert rng.draws == 1

    def test_successful_roll(
        self, bond_gate: KizunaBondGate, mochi: BreedingCandidate, yuki: BreedingCandidate
    ) -> None:
        """A successful roll yields a blended offspring and incubation period."""
        context = BreedingContext(
            rng=SeededRandomSource(4), bond_gate=bond_gate, calendar=FixedBonusCalendar()
        )

        result = attempt_breeding(mochi, yuki, context, shrine_blessing=True)

        assert result.success is True
        assert result.reason is None
        assert result.incubation_days == 7
        assert result.offspring is not None
        assert result.offspring.inherited_traits == list(INHERITED_TRAITS)
        assert_valid_genome(result.offspring.genome)
        assert result.offspring.special_ability in (None, *SPECIAL_ABILITIES)

    def test_scripted_success_is_deterministic(
        self, bond_gate: KizunaBondGate, mochi: BreedingCandidate, yuki: BreedingCandidate
    ) -> None:
        """Roll, 180 mutation digits, then the ability roll, in that order."""
        script = [0.1] + [0.0] * (3 * STRAND_LENGTH) + [0.5]
        rng = ScriptedRandomSource(script)
        context = BreedingContext(rng=rng, bond_gate=bond_gate, calendar=FixedBonusCalendar())

        result = attempt_breeding(mochi, yuki, context)

        assert result.success is True
        assert result.offspring is not None
        assert result.offspring.genome == uniform_genome(1)
        assert result.offspring.special_ability is None
        assert rng.draws == len(script)

    def test_seasonal_bonus_read_once(
        self, bond_gate: KizunaBondGate, mochi: BreedingCandidate, yuki: BreedingCandidate
    ) -> None:
        """The calendar is consulted exactly once per attempt."""
        calendar = CountingCalendar(bonus=1.5)
        context = BreedingContext(rng=SeededRandomSource(1), bond_gate=bond_gate, calendar=calendar)

        result = attempt_breeding(mochi, yuki, context)

        assert calendar.calls == 1
        assert result.success_chance == 1.0
        assert result.success is True

    def test_config_drives_incubation(
        self, bond_gate: KizunaBondGate, mochi: BreedingCandidate, yuki: BreedingCandidate
    ) -> None:
        """The incubation period comes from the config."""
        context = BreedingContext(
            config=BreedingConfig(incubation_days=3),
            rng=SeededRandomSource(1),
            bond_gate=bond_gate,
            calendar=FixedBonusCalendar(),
        )
        result = attempt_breeding(mochi, yuki, context, shrine_blessing=True)
        assert result.incubation_days == 3

    def test_missing_calendar(
        self, bond_gate: KizunaBondGate, mochi: BreedingCandidate, yuki: BreedingCandidate
    ) -> None:
        """A context without a calendar cannot attempt breeding."""
        context = BreedingContext(rng=SeededRandomSource(1), bond_gate=bond_gate)
        with pytest.raises(ConfigurationError, match="calendar"):
            attempt_breeding(mochi, yuki, context)

    def test_missing_bond_gate(self, mochi: BreedingCandidate, yuki: BreedingCandidate) -> None:
        """A context without a bond gate cannot attempt breeding."""
        context = BreedingContext(rng=SeededRandomSource(1), calendar=FixedBonusCalendar())
        with pytest.raises(ConfigurationError, match="bond_gate"):
            attempt_breeding(mochi, yuki, context)

    def test_parents_unchanged(
        self, bond_gate: KizunaBondGate, mochi: BreedingCandidate, yuki: BreedingCandidate
    ) -> None:
        """Breeding never modifies the parent genomes."""
        context = BreedingContext(
            rng=SeededRandomSource(6), bond_gate=bond_gate, calendar=FixedBonusCalendar()
        )
        attempt_breeding(mochi, yuki, context, shrine_blessing=True)
        assert mochi.genome == uniform_genome(2)
        assert yuki.genome == uniform_genome(4)
