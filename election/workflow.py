"""Workflow state machine: the election's phase order and its guards.

The phase order declared by `Phase` is the single source of truth for which
operations are legal when. Other components state the one phase (and role)
they need through `require`; only `WorkflowStateMachine.advance` moves the
phase, one step at a time, running any actions bound to the phase entered.
"""

import logging
from collections.abc import Callable

from election.access import AccessControl, Role
from election.errors import Unauthorized, WorkflowComplete, WrongPhase
from election.events import PhaseChanged
from election.ledger import ElectionState, Ledger
from election.models import Phase

logger = logging.getLogger(__name__)

PHASE_ORDER: tuple[Phase, ...] = tuple(Phase)

TransitionAction = Callable[[ElectionState], None]

# Transition action registry - import modules that define actions to register them
_transition_actions: dict[Phase, list[TransitionAction]] = {}


def on_enter(phase: Phase) -> Callable[[TransitionAction], TransitionAction]:
    """Decorator to bind an action to the transition that enters `phase`.

    Each phase after the first is entered by exactly one transition, so an
    action bound here runs at most once per election.
    """
    if phase is PHASE_ORDER[0]:
        raise ValueError(f"{phase} is the initial phase and is never entered")

    def decorator(action: TransitionAction) -> TransitionAction:
        _transition_actions.setdefault(phase, []).append(action)
        return action

    return decorator


def get_transition_actions(phase: Phase) -> list[TransitionAction]:
    """Return the actions run when entering `phase`."""
    return list(_transition_actions.get(phase, []))


def next_phase(phase: Phase) -> Phase:
    """Return the phase that follows `phase`.

    Raises:
        WorkflowComplete: If `phase` is the terminal phase.
    """
    position = PHASE_ORDER.index(phase)
    if position + 1 >= len(PHASE_ORDER):
        raise WorkflowComplete(f"The election is already {phase}; nothing follows it")
    return PHASE_ORDER[position + 1]


def require(
    state: ElectionState,
    access: AccessControl,
    caller: str,
    role: Role = Role.ANYONE,
    phase: Phase | None = None,
) -> None:
    """Check that `caller` holds `role` and, if given, that the election is in `phase`.

    The role is checked before the phase.

    Raises:
        Unauthorized: If the caller lacks the role.
        WrongPhase: If the current phase is not `phase`.
    """
    if role is Role.ADMIN and not access.is_admin(caller):
        logger.warning("Rejected privileged operation from %r", caller)
        raise Unauthorized(f"{caller!r} is not the election administrator")
    if role is Role.PARTICIPANT and not state.is_registered(caller):
        raise Unauthorized(f"{caller!r} is not a registered participant")
    if phase is not None and state.phase is not phase:
        raise WrongPhase(f"Operation requires phase {phase}, but the election is {state.phase}")


class WorkflowStateMachine:
    """Owns phase progression for one election."""

    def __init__(self, ledger: Ledger, access: AccessControl):
        self.ledger = ledger
        self.access = access

    @property
    def phase(self) -> Phase:
        return self.ledger.state.phase

    def advance(self, caller: str) -> Phase:
        """Move to the next phase and return it.

        Actions bound to the phase being entered run before the phase
        change is committed; if one fails, the phase does not change.

        Raises:
            Unauthorized: If the caller is not the administrator.
            WorkflowComplete: If the election is already tallied.
        """
        with self.ledger.transaction(snapshot=True) as state:
            require(state, self.access, caller, Role.ADMIN)
            previous = state.phase
            target = next_phase(previous)
            for action in get_transition_actions(target):
                action(state)
            state.phase = target
            state.events.append(PhaseChanged(previous=previous, next=target))

        logger.info("Phase changed: %s -> %s", previous, target)
        return target
