"""Ballot box: records each participant's single vote."""

import logging

from election.access import AccessControl, Role
from election.errors import AlreadyVoted, ProposalNotFound
from election.events import VoteCast
from election.ledger import Ledger
from election.models import Phase
from election.proposals import is_valid_proposal_id
from election.workflow import require

logger = logging.getLogger(__name__)


class BallotBox:
    """Records ballots while voting is open.

    Casting a vote only marks the participant's choice. Vote counts are
    left alone until the tally runs on the transition into Tallied.
    """

    def __init__(self, ledger: Ledger, access: AccessControl):
        self.ledger = ledger
        self.access = access

    def cast_vote(self, caller: str, proposal_id: int) -> None:
        """Record `caller`'s vote for `proposal_id`.

        Raises:
            Unauthorized: If the caller is not a registered participant.
            AlreadyVoted: If the caller has voted before (checked in every phase).
            WrongPhase: If voting is not open.
            ProposalNotFound: If no proposal has this id.
        """
        with self.ledger.transaction() as state:
            require(state, self.access, caller, Role.PARTICIPANT)
            participant = state.participants[caller]
            if participant.has_voted:
                raise AlreadyVoted(
                    f"{caller!r} already voted for proposal {participant.chosen_proposal_id}"
                )
            require(state, self.access, caller, phase=Phase.VOTING_OPEN)
            if not is_valid_proposal_id(proposal_id, len(state.proposals)):
                raise ProposalNotFound(
                    f"No proposal with id {proposal_id!r} "
                    f"({len(state.proposals)} proposals submitted)"
                )
            participant.has_voted = True
            participant.chosen_proposal_id = proposal_id
            state.events.append(VoteCast(participant=caller, proposal_id=proposal_id))

        logger.debug("Participant %r voted for proposal %d", caller, proposal_id)
