"""Winner resolution over tallied proposals."""

from dataclasses import replace

from election.access import AccessControl, Role
from election.errors import NoUniqueWinner
from election.ledger import Ledger
from election.models import Phase, Placement, Proposal
from election.workflow import require


class WinnerResolver:
    """Read-only queries over the tally result. Legal only once Tallied.

    Winner algorithm:
    1. Start from an empty sentinel proposal with zero votes and no ties
    2. Scan proposals in id order
    3. A proposal with strictly more votes than the best so far becomes the
       best, and the tie counter resets
    4. A proposal with exactly as many votes increments the tie counter
    5. Any remaining tie means there is no unique winner

    When nobody voted, every proposal ties the zero-vote sentinel, so an
    election without votes (or without proposals) has no winner.
    """

    def __init__(self, ledger: Ledger, access: AccessControl):
        self.ledger = ledger
        self.access = access

    def get_winner(self) -> Proposal:
        """Return the proposal with the most votes.

        Raises:
            WrongPhase: If the election is not tallied yet.
            NoUniqueWinner: If the highest count is shared, or no votes were cast.
        """
        state = self.ledger.state
        require(state, self.access, "", Role.ANYONE, Phase.TALLIED)

        sentinel = Proposal(text="")
        best = sentinel
        max_votes = 0
        ties = 0
        for proposal in state.proposals:
            if proposal.vote_count > max_votes:
                best = proposal
                max_votes = proposal.vote_count
                ties = 0
            elif proposal.vote_count == max_votes:
                ties += 1

        if ties:
            raise NoUniqueWinner(
                f"{ties + (best is not sentinel)} proposals tie with {max_votes} votes"
            )
        if best is sentinel:
            raise NoUniqueWinner("No proposal received any votes")
        return replace(best)

    def standings(self) -> list[Placement]:
        """Return all proposals ranked by vote count, highest first.

        Tied proposals share a rank and are listed in id order.
        """
        state = self.ledger.state
        require(state, self.access, "", Role.ANYONE, Phase.TALLIED)

        # Group by vote count
        count_groups: dict[int, list[int]] = {}
        for proposal_id, proposal in enumerate(state.proposals):
            count_groups.setdefault(proposal.vote_count, []).append(proposal_id)

        ordered: list[int | list[int]] = []
        for count in sorted(count_groups, reverse=True):
            group = count_groups[count]
            ordered.append(group[0] if len(group) == 1 else group)

        return Placement.build_ranking(state.proposals, ordered)
