"""Election facade: wires the components of one election around a shared ledger."""

from collections.abc import Callable, Iterable
from typing import Any

from election.access import AccessControl, SingleAdmin
from election.ballot_box import BallotBox
from election.events import Event
from election.ledger import Ledger
from election.models import Participant, Phase, Placement, Proposal
from election.proposals import ProposalRegistry
from election.voters import VoterRegistry
from election.winner import WinnerResolver
from election.workflow import WorkflowStateMachine

# Import transition actions to register them
from election import tally  # noqa: F401


class Election:
    """A single election, from voter registration to the tallied result.

    Example:
        >>> election = Election(SingleAdmin("chair"))
        >>> election.register_participants("chair", ["A", "B"])
        ['A', 'B']
        >>> election.advance("chair")
        <Phase.PROPOSALS_OPEN: 'ProposalsOpen'>
        >>> election.submit_proposal("A", "Build a park")
        0
    """

    def __init__(
        self,
        access: AccessControl | None = None,
        max_participants: int | None = None,
        max_proposals: int | None = None,
    ):
        self.access = access if access is not None else SingleAdmin()
        self.ledger = Ledger()
        self.workflow = WorkflowStateMachine(self.ledger, self.access)
        self.voters = VoterRegistry(self.ledger, self.access, max_participants)
        self.proposal_registry = ProposalRegistry(self.ledger, self.access, max_proposals)
        self.ballot_box = BallotBox(self.ledger, self.access)
        self.winner = WinnerResolver(self.ledger, self.access)

    # --- operations ---

    def register_participants(self, caller: str, identities: Iterable[str]) -> list[str]:
        return self.voters.register_participants(caller, identities)

    def merge_participants(self, caller: str, identities: Iterable[str]) -> list[str]:
        return self.voters.merge_participants(caller, identities)

    def submit_proposal(self, caller: str, text: str) -> int:
        return self.proposal_registry.submit_proposal(caller, text)

    def cast_vote(self, caller: str, proposal_id: int) -> None:
        self.ballot_box.cast_vote(caller, proposal_id)

    def advance(self, caller: str) -> Phase:
        return self.workflow.advance(caller)

    def get_winner(self) -> Proposal:
        return self.winner.get_winner()

    def standings(self) -> list[Placement]:
        return self.winner.standings()

    # --- readable state ---

    @property
    def phase(self) -> Phase:
        return self.workflow.phase

    def participant(self, identity: str) -> Participant:
        return self.voters.participant(identity)

    @property
    def roster(self) -> list[str]:
        return self.voters.roster

    def proposal(self, proposal_id: int) -> Proposal:
        return self.proposal_registry.proposal(proposal_id)

    @property
    def proposals(self) -> list[Proposal]:
        return self.proposal_registry.proposals

    @property
    def events(self) -> list[Event]:
        return list(self.ledger.state.events)

    def events_of_kind(self, event_type: type[Event]) -> list[Event]:
        """Return committed events of one type, in log order."""
        return self.ledger.state.events.of_kind(event_type)

    def subscribe(self, callback: Callable[[Event], None]) -> None:
        """Call `callback` with every event committed from now on."""
        self.ledger.state.events.subscribe(callback)

    def snapshot(self) -> dict[str, Any]:
        """Return the whole election state as a JSON-serializable dictionary."""
        return self.ledger.read().to_dict()
