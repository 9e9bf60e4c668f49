"""Exception hierarchy for the companion genetics core.

Expected simulation outcomes (a failed breeding roll, an incompatible pair)
are returned as result values. Only caller mistakes and invalid data are
raised.
"""

from __future__ import annotations


class GeneticsError(Exception):
    """Root of all companion genetics exceptions."""


class MalformedGenomeError(GeneticsError, ValueError):
    """Serialized genome text could not be parsed into a Genome."""


class InvalidDigitError(MalformedGenomeError):
    """A strand holds a digit outside 0-6 or is not exactly 60 digits long."""


class IneligibleParentError(GeneticsError):
    """One or both parents have not reached the breeding bond level."""

    def __init__(self, message: str, companion_ids: list[str] | None = None) -> None:
        super().__init__(message)
        self.companion_ids = companion_ids or []


class InvalidRequestStateError(GeneticsError):
    """A breeding request operation is not allowed in the request's state."""

    def __init__(self, message: str, request_id: str = "", status: str = "") -> None:
        super().__init__(message)
        self.request_id = request_id
        self.status = status


class ConfigurationError(GeneticsError):
    """A breeding context is missing a collaborator it needs."""
