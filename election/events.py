"""Append-only public log of election events.

Entries are observer-visible only; no election logic reads them back.
"""

import logging
from collections.abc import Callable, Iterator
from dataclasses import asdict, dataclass, field
from typing import Any

from election.models import Phase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event:
    """Base class for log entries. `sequence` is assigned by the log."""
    sequence: int = field(default=0, init=False, compare=False)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        data = {"kind": self.kind}
        for key, value in asdict(self).items():
            data[key] = str(value) if isinstance(value, Phase) else value
        return data


@dataclass(frozen=True)
class ParticipantRegistered(Event):
    participant: str = ""


@dataclass(frozen=True)
class ProposalRegistered(Event):
    proposal_id: int = 0


@dataclass(frozen=True)
class VoteCast(Event):
    participant: str = ""
    proposal_id: int = 0


@dataclass(frozen=True)
class PhaseChanged(Event):
    previous: Phase = Phase.REGISTERING_VOTERS
    next: Phase = Phase.REGISTERING_VOTERS


class EventLog:
    """Ordered, append-only sequence of events.

    Events appended during a transaction are held as pending until the
    transaction commits; only then are they visible to subscribers.
    """

    def __init__(self) -> None:
        self._entries: list[Event] = []
        self._published = 0
        self._subscribers: list[Callable[[Event], None]] = []

    def __iter__(self) -> Iterator[Event]:
        return iter(self._entries[:self._published])

    def __len__(self) -> int:
        return self._published

    def __deepcopy__(self, memo: dict) -> "EventLog":
        # Subscribers are observers, not state; share them with the copy.
        clone = EventLog()
        clone._entries = list(self._entries)
        clone._published = self._published
        clone._subscribers = self._subscribers
        return clone

    def append(self, event: Event) -> Event:
        object.__setattr__(event, "sequence", len(self._entries) + 1)
        self._entries.append(event)
        return event

    def subscribe(self, callback: Callable[[Event], None]) -> None:
        """Register a callable to receive each event once it is committed."""
        self._subscribers.append(callback)

    def publish_pending(self) -> list[Event]:
        """Mark pending events as committed and notify subscribers.

        The events are committed before any subscriber runs. A subscriber that
        raises is logged and skipped; the remaining subscribers and events are
        still delivered.
        """
        pending = self._entries[self._published:]
        self._published = len(self._entries)
        for event in pending:
            logger.debug("Event %d: %s", event.sequence, event.kind)
            for callback in self._subscribers:
                try:
                    callback(event)
                except Exception:
                    logger.exception("Subscriber %r failed on event %d", callback, event.sequence)
        return pending

    def discard_pending(self) -> None:
        """Drop events appended since the last commit."""
        del self._entries[self._published:]

    def of_kind(self, event_type: type[Event]) -> list[Event]:
        """Return committed events of the given type, in log order."""
        return [event for event in self if isinstance(event, event_type)]
