"""Shared test helpers."""

from election.access import SingleAdmin
from election.models import Phase
from election.service import Election

ADMIN = "chair"


def make_election(participants: list[str] | None = None, **kwargs) -> Election:
    """Build an Election administered by ADMIN, optionally registering participants."""
    election = Election(SingleAdmin(ADMIN), **kwargs)
    if participants is not None:
        election.register_participants(ADMIN, participants)
    return election


def advance_to(election: Election, phase: Phase) -> Election:
    """Advance `election` until it reaches `phase`."""
    while election.phase is not phase:
        election.advance(ADMIN)
    return election


def run_ballots(proposals: list[str], ballots: dict[str, int | None]) -> Election:
    """Run an election through to Tallied.

    Args:
        proposals: Proposal texts, submitted in order by the first participant
        ballots: {participant: proposal_id}, or None for a participant who
            does not vote. Participants are registered in dict order.

    Returns:
        The tallied Election.
    """
    participants = list(ballots)
    election = make_election(participants)
    advance_to(election, Phase.PROPOSALS_OPEN)
    for text in proposals:
        election.submit_proposal(participants[0], text)
    advance_to(election, Phase.VOTING_OPEN)
    for participant, proposal_id in ballots.items():
        if proposal_id is not None:
            election.cast_vote(participant, proposal_id)
    return advance_to(election, Phase.TALLIED)


def ranking_ids(election: Election) -> list[int]:
    """Extract proposal ids from the standings, in order."""
    return [p.proposal_id for p in election.standings()]
