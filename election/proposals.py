"""Proposal registry: the append-only list of submitted proposals."""

import logging
from dataclasses import replace

from election import config
from election.access import AccessControl, Role
from election.errors import ElectionTooLarge, ProposalNotFound
from election.events import ProposalRegistered
from election.ledger import Ledger
from election.models import Phase, Proposal
from election.workflow import require

logger = logging.getLogger(__name__)


def is_valid_proposal_id(proposal_id: object, num_proposals: int) -> bool:
    """Whether `proposal_id` indexes an existing proposal.

    Compares against the length itself, so an empty list has no valid ids.
    """
    if isinstance(proposal_id, bool) or not isinstance(proposal_id, int):
        return False
    return 0 <= proposal_id < num_proposals


class ProposalRegistry:
    """Collects proposals from registered participants while proposals are open."""

    def __init__(self, ledger: Ledger, access: AccessControl, max_proposals: int | None = None):
        self.ledger = ledger
        self.access = access
        self.max_proposals = config.MAX_PROPOSALS if max_proposals is None else max_proposals

    def submit_proposal(self, caller: str, text: str) -> int:
        """Append a proposal and return its id.

        Any text is accepted, including empty and duplicate text.
        """
        with self.ledger.transaction() as state:
            require(state, self.access, caller, Role.PARTICIPANT, Phase.PROPOSALS_OPEN)
            if self.max_proposals and len(state.proposals) >= self.max_proposals:
                raise ElectionTooLarge(
                    f"The election already has the maximum of {self.max_proposals} proposals"
                )
            state.proposals.append(Proposal(text=text))
            proposal_id = len(state.proposals) - 1
            state.events.append(ProposalRegistered(proposal_id=proposal_id))

        logger.debug("Participant %r submitted proposal %d", caller, proposal_id)
        return proposal_id

    def proposal(self, proposal_id: int) -> Proposal:
        proposals = self.ledger.state.proposals
        if not is_valid_proposal_id(proposal_id, len(proposals)):
            raise ProposalNotFound(f"No proposal with id {proposal_id!r}")
        return replace(proposals[proposal_id])

    @property
    def proposals(self) -> list[Proposal]:
        return [replace(proposal) for proposal in self.ledger.state.proposals]
