"""Tally: converts recorded ballots into per-proposal vote counts."""

import logging

from election.ledger import ElectionState
from election.models import Phase
from election.workflow import on_enter

logger = logging.getLogger(__name__)


def count_ballots(state: ElectionState) -> list[int]:
    """Count ballots per proposal by walking the roster in registration order."""
    counts = [0] * len(state.proposals)
    for participant in state.participants.values():
        if participant.registered and participant.has_voted:
            counts[participant.chosen_proposal_id] += 1
    return counts


@on_enter(Phase.TALLIED)
def run_tally(state: ElectionState) -> None:
    """Write the ballot counts onto the proposals.

    Bound to the VotingClosed -> Tallied transition, so it runs once per
    election. Counts are rebuilt from the ballots rather than added to the
    stored ones, so running it again on the same ballots changes nothing.
    """
    counts = count_ballots(state)
    for proposal, count in zip(state.proposals, counts):
        proposal.vote_count = count

    logger.info(
        "Tallied %d ballots across %d proposals: %s",
        sum(counts), len(counts), counts,
    )
