"""The election ledger: one explicit state object plus its transaction boundary.

All election state lives in a single `ElectionState`. Components never keep
their own copies; they read and write through the `Ledger` that owns it.
Mutations happen inside `Ledger.transaction()`, which serialises callers
and makes each operation commit all of its effects or none of them.
"""

import copy
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from election.events import EventLog
from election.models import Participant, Phase, Proposal

logger = logging.getLogger(__name__)


@dataclass
class ElectionState:
    """Everything an election knows.

    Attributes:
        phase: Current workflow phase
        participants: Every identity ever registered, mapped to its voting
            state, in registration order. Records are never deleted; an
            identity dropped by a later registration stays here with
            `registered=False`.
        proposals: Submitted proposals; a proposal's id is its index
        events: Public event log
    """
    phase: Phase = Phase.REGISTERING_VOTERS
    participants: dict[str, Participant] = field(default_factory=dict)
    proposals: list[Proposal] = field(default_factory=list)
    events: EventLog = field(default_factory=EventLog)

    @property
    def roster(self) -> list[str]:
        """Registered identities, in registration order."""
        return [
            identity for identity, participant in self.participants.items()
            if participant.registered
        ]

    def is_registered(self, identity: str) -> bool:
        participant = self.participants.get(identity)
        return participant is not None and participant.registered

    def participant(self, identity: str) -> Participant:
        """Return the record for `identity`; unknown identities read as unregistered."""
        return self.participants.get(identity, Participant())

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": str(self.phase),
            "roster": self.roster,
            "participants": {
                identity: participant.to_dict()
                for identity, participant in self.participants.items()
            },
            "proposals": [
                dict(proposal.to_dict(), proposal_id=index)
                for index, proposal in enumerate(self.proposals)
            ],
            "events": [event.to_dict() for event in self.events],
        }


class Ledger:
    """Owns an `ElectionState` and serialises access to it."""

    def __init__(self, state: ElectionState | None = None):
        self.state = state if state is not None else ElectionState()
        self._lock = threading.RLock()
        self._depth = 0

    @contextmanager
    def transaction(self, snapshot: bool = False) -> Iterator[ElectionState]:
        """Run a block atomically against the election state.

        Operations check every precondition before they change anything, so
        by default a failed block only has its pending events discarded.
        Blocks that can fail after changing state pass `snapshot=True`; the
        whole state is then copied up front and restored on failure.

        Nested transactions join the outermost one; only the outermost
        commits (publishing pending events) or rolls back.
        """
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield self.state
                finally:
                    self._depth -= 1
                return

            saved = copy.deepcopy(self.state) if snapshot else None
            self._depth = 1
            try:
                yield self.state
            except BaseException:
                logger.debug("Rolling back transaction")
                if saved is not None:
                    self.state = saved
                self.state.events.discard_pending()
                raise
            finally:
                self._depth = 0

            self.state.events.publish_pending()

    def read(self) -> ElectionState:
        """Return a deep copy of the committed state for callers to inspect."""
        with self._lock:
            return copy.deepcopy(self.state)
