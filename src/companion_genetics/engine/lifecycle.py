"""Breeding request lifecycle.

State machine:

    pending --accept--> accepted --complete--> completed
    pending --complete--> completed
    pending --reject--> rejected
    pending | accepted --cancel--> cancelled

completed, rejected and cancelled are terminal. Every transition returns a
new BreedingRequest; callers must serialise access per companion pair.
"""

from __future__ import annotations

import dataclasses
import logging
import uuid
from datetime import UTC, datetime, timedelta

from companion_genetics.collaborators import SubscriptionTier
from companion_genetics.engine.context import BreedingContext, require_aware
from companion_genetics.engine.inheritance import breed_genomes
from companion_genetics.exceptions import InvalidRequestStateError
from companion_genetics.model.genome import Genome
from companion_genetics.model.request import (
    DEFAULT_INCUBATION_DAYS,
    BreedingRequest,
    RequestStatus,
)

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def generate_breeding_id() -> str:
    return f"breed_{uuid.uuid4().hex[:12]}"


def create_breeding_request(
    companion1_id: str,
    companion2_id: str,
    requester_id: str,
    partner_id: str | None = None,
    *,
    now: datetime | None = None,
    incubation_days: int = DEFAULT_INCUBATION_DAYS,
) -> BreedingRequest:
    """Create a pending breeding request.

    Args:
        companion1_id: First companion.
        companion2_id: Second companion.
        requester_id: Player who initiated the request.
        partner_id: Other player, for cross-player breeding.
        now: Creation time. Defaults to UTC now.
        incubation_days: Incubation period in days.

    Returns:
        A new request in the pending state.

    Raises:
        ValueError: If both companion ids are the same, incubation_days < 1,
            or now is naive.
    """
    if companion1_id == companion2_id:
        msg = f"A companion cannot breed with itself: {companion1_id}"
        raise ValueError(msg)
    if incubation_days < 1:
        msg = f"incubation_days must be at least 1, got {incubation_days}"
        raise ValueError(msg)

    request = BreedingRequest(
        id=generate_breeding_id(),
        companion1_id=companion1_id,
        companion2_id=companion2_id,
        requester_id=requester_id,
        partner_id=partner_id,
        status=RequestStatus.PENDING,
        incubation_days=incubation_days,
        created_at=require_aware(now, "now") if now is not None else datetime.now(UTC),
    )
    logger.info(
        "Created breeding request %s for %s x %s", request.id, companion1_id, companion2_id
    )
    return request


def _transition(
    request: BreedingRequest,
    allowed_from: tuple[RequestStatus, ...],
    target: RequestStatus,
) -> BreedingRequest:
    if request.status not in allowed_from:
        msg = f"Cannot move breeding request {request.id} from {request.status} to {target}"
        logger.warning("%s", msg)
        raise InvalidRequestStateError(msg, request_id=request.id, status=request.status.value)
    logger.debug("Breeding request %s: %s -> %s", request.id, request.status, target)
    return dataclasses.replace(request, status=target)


def accept_request(request: BreedingRequest) -> BreedingRequest:
    """Partner accepts a pending request."""
    return _transition(request, (RequestStatus.PENDING,), RequestStatus.ACCEPTED)


def reject_request(request: BreedingRequest) -> BreedingRequest:
    """Partner rejects a pending request."""
    return _transition(request, (RequestStatus.PENDING,), RequestStatus.REJECTED)


def cancel_request(request: BreedingRequest) -> BreedingRequest:
    """Requester withdraws a request that has not completed."""
    return _transition(
        request, (RequestStatus.PENDING, RequestStatus.ACCEPTED), RequestStatus.CANCELLED
    )


def elapsed_days(request: BreedingRequest, now: datetime | None = None) -> float:
    """Days elapsed since the request was created (never negative)."""
    now = require_aware(now, "now") if now is not None else datetime.now(UTC)
    return max(0.0, (now - request.created_at).total_seconds() / SECONDS_PER_DAY)


def ready_at(request: BreedingRequest) -> datetime:
    """When the incubation period of a request ends."""
    return request.created_at + timedelta(days=request.incubation_days)


def is_breeding_ready(request: BreedingRequest, now: datetime | None = None) -> bool:
    """Whether an open request has finished incubating."""
    if not request.status.is_open:
        return False
    now = require_aware(now, "now") if now is not None else datetime.now(UTC)
    return now >= ready_at(request)


def get_breeding_progress(request: BreedingRequest, now: datetime | None = None) -> float:
    """Incubation progress in [0, 1], reported before readiness for display."""
    if request.status == RequestStatus.COMPLETED:
        return 1.0
    if not request.status.is_open:
        return 0.0
    return min(1.0, elapsed_days(request, now) / request.incubation_days)


def complete_breeding(
    request: BreedingRequest,
    parent1_genome: Genome,
    parent2_genome: Genome,
    context: BreedingContext,
    now: datetime | None = None,
) -> BreedingRequest:
    """Complete an open request by breeding its offspring.

    Uses the pedigree breeding formula with the configured inheritance ratio.
    Whether completion before the end of incubation is allowed is decided by
    ``context.config.enforce_incubation`` alone.

    Args:
        request: Request to complete.
        parent1_genome: Genome of companion1.
        parent2_genome: Genome of companion2.
        context: Config, random stream and clock.
        now: Completion time. Defaults to the context clock.

    Returns:
        The completed request, carrying the offspring genome.

    Raises:
        InvalidRequestStateError: If the request is not open, or incubation
            has not finished while enforce_incubation is on.
        ValueError: If now is naive.
    """
    now = require_aware(now, "now") if now is not None else context.now()

    if not request.status.is_open:
        msg = f"Breeding request {request.id} cannot be completed from {request.status}"
        logger.warning("%s", msg)
        raise InvalidRequestStateError(msg, request_id=request.id, status=request.status.value)

    if context.config.enforce_incubation and not is_breeding_ready(request, now):
        msg = (
            f"Breeding request {request.id} is still incubating "
            f"({get_breeding_progress(request, now):.0%} complete)"
        )
        logger.warning("%s", msg)
        raise InvalidRequestStateError(msg, request_id=request.id, status=request.status.value)

    offspring = breed_genomes(
        parent1_genome,
        parent2_genome,
        context.rng,
        inheritance_ratio=context.config.inheritance_ratio,
    )
    completed = dataclasses.replace(
        request, status=RequestStatus.COMPLETED, completed_at=now, offspring=offspring
    )
    logger.info("Completed breeding request %s", request.id)
    return completed


# ===== COOLDOWN =====


def cooldown_remaining_days(
    last_bred_at: datetime | None,
    tier: SubscriptionTier | str,
    context: BreedingContext,
    now: datetime | None = None,
) -> float:
    """Days left before a companion may breed again (0 when free to breed).

    The cooldown length comes from the context's bond gate.

    Args:
        last_bred_at: When the companion last bred, or None if it never has.
        tier: Account tier of the companion's owner.
        context: Supplies the bond gate and clock.
        now: Reference time. Defaults to the context clock.

    Raises:
        ConfigurationError: If the context has no bond gate.
        ValueError: If a timestamp is naive.
    """
    if last_bred_at is None:
        return 0.0
    require_aware(last_bred_at, "last_bred_at")
    cooldown = context.require_bond_gate().cooldown_days_for_tier(tier)
    now = require_aware(now, "now") if now is not None else context.now()
    since = (now - last_bred_at).total_seconds() / SECONDS_PER_DAY
    return max(0.0, cooldown - since)


def can_breed_again(
    last_bred_at: datetime | None,
    tier: SubscriptionTier | str,
    context: BreedingContext,
    now: datetime | None = None,
) -> bool:
    return cooldown_remaining_days(last_bred_at, tier, context, now) == 0.0
