"""Tests for error handling across the companion_genetics package."""

from __future__ import annotations

import logging

import pytest

from companion_genetics.collaborators import FixedBonusCalendar, KizunaBondGate
from companion_genetics.engine.codec import deserialize_genome
from companion_genetics.engine.context import BreedingContext
from companion_genetics.engine.inheritance import attempt_breeding
from companion_genetics.engine.lifecycle import accept_request, create_breeding_request
from companion_genetics.engine.random_source import SeededRandomSource
from companion_genetics.exceptions import (
    ConfigurationError,
    GeneticsError,
    IneligibleParentError,
    InvalidDigitError,
    InvalidRequestStateError,
    MalformedGenomeError,
)
from companion_genetics.model.genome import STRAND_LENGTH, Genome
from companion_genetics.model.request import BreedingCandidate


def candidate(companion_id: str) -> BreedingCandidate:
    strand = [3] * STRAND_LENGTH
    return BreedingCandidate(companion_id, Genome(strand, strand, strand))


class TestHierarchy:
    """Every package error can be caught as GeneticsError."""

    @pytest.mark.parametrize(
        "error_type",
        [
            MalformedGenomeError,
            InvalidDigitError,
            IneligibleParentError,
            InvalidRequestStateError,
            ConfigurationError,
        ],
    )
    def test_rooted_at_genetics_error(self, error_type: type[Exception]) -> None:
        assert issubclass(error_type, GeneticsError)

    def test_parse_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            deserialize_genome("{}")

    def test_context_attributes(self) -> None:
        error = InvalidRequestStateError("nope", request_id="breed_1", status="completed")
        assert (error.request_id, error.status, str(error)) == ("breed_1", "completed", "nope")
        assert IneligibleParentError("nope").companion_ids == []


class TestRejectedOperationsAreLogged:
    """Rejected operations log a warning before raising."""

    def test_ineligible_parents(self, caplog: pytest.LogCaptureFixture) -> None:
        context = BreedingContext(
            rng=SeededRandomSource(1),
            bond_gate=KizunaBondGate({"a": 2200}),
            calendar=FixedBonusCalendar(),
        )
        with caplog.at_level(logging.WARNING, logger="companion_genetics"):
            with pytest.raises(IneligibleParentError) as exc_info:
                attempt_breeding(candidate("a"), candidate("b"), context)
        assert exc_info.value.companion_ids == ["b"]
        assert "ineligible: b" in caplog.text

    def test_invalid_transition(self, caplog: pytest.LogCaptureFixture) -> None:
        accepted = accept_request(create_breeding_request("a", "b", "p"))
        with caplog.at_level(logging.WARNING, logger="companion_genetics"):
            with pytest.raises(InvalidRequestStateError):
                accept_request(accepted)
        assert "Cannot move breeding request" in caplog.text

    def test_malformed_genome(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="companion_genetics"):
            with pytest.raises(MalformedGenomeError) as exc_info:
                deserialize_genome("[1, 2, 3]")
        assert exc_info.value.__cause__ is not None
        assert "Malformed genome record" in caplog.text

    def test_message_is_a_format_argument(self, caplog: pytest.LogCaptureFixture) -> None:
        """Text containing '%' is logged verbatim, not used as a format string."""
        context = BreedingContext(
            rng=SeededRandomSource(1),
            bond_gate=KizunaBondGate({"a": 2200}),
            calendar=FixedBonusCalendar(),
        )
        with caplog.at_level(logging.WARNING, logger="companion_genetics"):
            with pytest.raises(IneligibleParentError):
                attempt_breeding(candidate("a"), candidate("100%s"), context)
        record = caplog.records[-1]
        assert record.msg == "%s"
        assert "ineligible: 100%s" in record.getMessage()
