"""Errors raised by election operations.

Every failed precondition aborts the whole operation; the election state is
left exactly as it was before the call.
"""


class ElectionError(Exception):
    """Base class for all election errors."""
    kind = "ElectionError"


class Unauthorized(ElectionError):
    """The caller does not hold the role the operation requires."""
    kind = "Unauthorized"


class WrongPhase(ElectionError):
    """The operation is not legal in the current phase."""
    kind = "WrongPhase"


class AlreadyVoted(ElectionError):
    """The participant has already cast their ballot."""
    kind = "AlreadyVoted"


class ProposalNotFound(ElectionError):
    """No proposal exists at the requested index."""
    kind = "ProposalNotFound"


class NoUniqueWinner(ElectionError):
    """The tally did not produce a single proposal with the most votes."""
    kind = "NoUniqueWinner"


class WorkflowComplete(ElectionError):
    """The election is tallied; the phase cannot advance any further."""
    kind = "WorkflowComplete"


class ElectionTooLarge(ElectionError):
    """The operation would exceed a configured election size limit."""
    kind = "ElectionTooLarge"
