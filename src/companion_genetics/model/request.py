"""BreedingRequest dataclass and request status enum."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from companion_genetics.model.genome import Genome

DEFAULT_INCUBATION_DAYS = 7


@dataclass(frozen=True)
class BreedingCandidate:
    """A companion offered for breeding: its id (for the bond gate) and genome."""

    companion_id: str
    genome: Genome = field(repr=False)
    name: str = ""


class RequestStatus(StrEnum):
    """Breeding request states."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (RequestStatus.COMPLETED, RequestStatus.REJECTED, RequestStatus.CANCELLED)

    @property
    def is_open(self) -> bool:
        return self in (RequestStatus.PENDING, RequestStatus.ACCEPTED)


@dataclass(frozen=True)
class BreedingRequest:
    """One in-flight breeding attempt between two companions.

    Transitions produce a new request; an existing request is never modified.
    """

    id: str
    companion1_id: str
    companion2_id: str
    requester_id: str  # player who initiated
    partner_id: str | None = None  # other player, for cross-player breeding
    status: RequestStatus = RequestStatus.PENDING
    incubation_days: int = DEFAULT_INCUBATION_DAYS
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None
    offspring: Genome | None = field(default=None, repr=False)

    @property
    def is_cross_player(self) -> bool:
        return self.partner_id is not None
