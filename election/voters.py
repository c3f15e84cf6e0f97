"""Voter registry: the roster of eligible participants."""

import logging
from collections.abc import Iterable
from dataclasses import replace

from election import config
from election.access import AccessControl, Role
from election.errors import ElectionTooLarge
from election.events import ParticipantRegistered
from election.ledger import ElectionState, Ledger
from election.models import Participant, Phase
from election.workflow import require

logger = logging.getLogger(__name__)


class VoterRegistry:
    """Registers participants while the election is in RegisteringVoters.

    Participant records live in one insertion-ordered mapping, so registration
    order and uniqueness are kept by the same structure. The roster is the
    registered subset of it.
    """

    def __init__(self, ledger: Ledger, access: AccessControl, max_participants: int | None = None):
        self.ledger = ledger
        self.access = access
        self.max_participants = (
            config.MAX_PARTICIPANTS if max_participants is None else max_participants
        )

    def register_participants(self, caller: str, identities: Iterable[str]) -> list[str]:
        """Replace the roster with `identities`.

        Every listed identity gets a fresh record, so re-registering resets
        any earlier voting state. Identities missing from the new list keep
        their record, marked as no longer registered. Returns the new roster.
        """
        identities = list(identities)
        with self.ledger.transaction() as state:
            require(state, self.access, caller, Role.ADMIN, Phase.REGISTERING_VOTERS)
            listed = dict.fromkeys(identities)
            self._check_size(len(listed))
            participants = {identity: Participant(registered=True) for identity in listed}
            for identity, participant in state.participants.items():
                if identity not in listed:
                    participants[identity] = replace(participant, registered=False)
            state.participants = participants
            for identity in identities:
                self._record(state, identity)

        logger.info("Registered %d participants (roster replaced)", len(listed))
        return list(listed)

    def merge_participants(self, caller: str, identities: Iterable[str]) -> list[str]:
        """Add `identities` to the roster, keeping registered participants as they are.

        Returns the identities that were newly registered.
        """
        identities = list(identities)
        with self.ledger.transaction() as state:
            require(state, self.access, caller, Role.ADMIN, Phase.REGISTERING_VOTERS)
            added = [
                identity for identity in dict.fromkeys(identities)
                if not state.is_registered(identity)
            ]
            self._check_size(len(state.roster) + len(added))
            for identity in added:
                # Re-inserting moves a dropped identity to the end of the roster
                state.participants.pop(identity, None)
                state.participants[identity] = Participant(registered=True)
                self._record(state, identity)

        logger.info("Merged %d new participants into the roster", len(added))
        return added

    def participant(self, identity: str) -> Participant:
        return replace(self.ledger.state.participant(identity))

    @property
    def roster(self) -> list[str]:
        return self.ledger.state.roster

    def _check_size(self, size: int) -> None:
        if self.max_participants and size > self.max_participants:
            raise ElectionTooLarge(
                f"Roster of {size} exceeds the limit of {self.max_participants} participants"
            )

    @staticmethod
    def _record(state: ElectionState, identity: str) -> None:
        logger.debug("Registered participant %r", identity)
        state.events.append(ParticipantRegistered(participant=identity))
