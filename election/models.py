"""Core data models for an election: phases, participants and proposals."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Self


class Phase(Enum):
    """Stages of an election, declared in the only order they can occur."""
    REGISTERING_VOTERS = "RegisteringVoters"
    PROPOSALS_OPEN = "ProposalsOpen"
    PROPOSALS_CLOSED = "ProposalsClosed"
    VOTING_OPEN = "VotingOpen"
    VOTING_CLOSED = "VotingClosed"
    TALLIED = "Tallied"

    def __str__(self) -> str:
        return self.value


@dataclass
class Participant:
    """Voting state of one identity.

    Attributes:
        registered: Whether the identity is currently on the roster
        has_voted: Set once the participant's ballot has been recorded
        chosen_proposal_id: Index of the proposal voted for, or None before voting
    """
    registered: bool = False
    has_voted: bool = False
    chosen_proposal_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "registered": self.registered,
            "has_voted": self.has_voted,
            "chosen_proposal_id": self.chosen_proposal_id,
        }


@dataclass
class Proposal:
    """A submitted option. Its identifier is its position in the proposal list.

    Attributes:
        text: Proposal text exactly as submitted (may be empty or duplicated)
        vote_count: Number of ballots for this proposal; zero until tallied
    """
    text: str
    vote_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "vote_count": self.vote_count}


@dataclass
class Placement:
    """A proposal's place in the post-tally standings.

    Attributes:
        proposal_id: Index of the proposal
        text: Proposal text
        vote_count: Tallied votes
        rank: 1-indexed placement (tied proposals share the same rank)
        tied: Whether this proposal shares its rank with others
    """
    proposal_id: int
    text: str
    vote_count: int
    rank: int
    tied: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "proposal_id": self.proposal_id,
            "text": self.text,
            "vote_count": self.vote_count,
            "rank": self.rank,
            "tied": self.tied,
        }

    @classmethod
    def build_ranking(
        cls, proposals: list[Proposal], ordered: list[int | list[int]]
    ) -> list[Self]:
        """Build a list of Placements from an ordered list of proposal ids.

        Args:
            proposals: All proposals, indexed by id.
            ordered: Proposal ids from 1st to last place. Each element is
                either a single id or a list of ids for tied proposals.

        Returns:
            List of Placement objects with correct ranks and tied flags.
        """
        placements = []
        rank = 1
        for entry in ordered:
            group = entry if isinstance(entry, list) else [entry]
            tied = isinstance(entry, list) and len(entry) > 1
            for proposal_id in group:
                proposal = proposals[proposal_id]
                placements.append(cls(
                    proposal_id=proposal_id,
                    text=proposal.text,
                    vote_count=proposal.vote_count,
                    rank=rank,
                    tied=tied,
                ))
            rank += len(group)

        return placements
