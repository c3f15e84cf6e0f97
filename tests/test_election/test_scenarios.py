"""End-to-end election scenarios."""

import pytest
from tests.conftest import ADMIN, make_election

from election.errors import NoUniqueWinner, WrongPhase
from election.models import Phase, Proposal


def _run_to_voting(election):
    election.advance(ADMIN)
    assert election.phase is Phase.PROPOSALS_OPEN
    assert election.submit_proposal("A", "Proposal1") == 0
    assert election.submit_proposal("B", "Proposal2") == 1
    election.advance(ADMIN)
    election.advance(ADMIN)
    assert election.phase is Phase.VOTING_OPEN


class TestScenarios:
    def test_three_voters_clear_winner(self):
        election = make_election(["A", "B", "C"])
        _run_to_voting(election)
        election.cast_vote("A", 0)
        election.cast_vote("B", 1)
        election.cast_vote("C", 0)
        election.advance(ADMIN)
        with pytest.raises(WrongPhase):
            election.get_winner()
        election.advance(ADMIN)

        assert election.phase is Phase.TALLIED
        assert election.proposal(0) == Proposal(text="Proposal1", vote_count=2)
        assert election.proposal(1) == Proposal(text="Proposal2", vote_count=1)
        assert election.get_winner() == Proposal(text="Proposal1", vote_count=2)

    def test_abstention_leaves_a_tie(self):
        election = make_election(["A", "B", "C"])
        _run_to_voting(election)
        election.cast_vote("A", 0)
        election.cast_vote("B", 1)
        election.advance(ADMIN)
        election.advance(ADMIN)

        assert [p.vote_count for p in election.proposals] == [1, 1]
        with pytest.raises(NoUniqueWinner):
            election.get_winner()

    def test_event_log_tells_the_story(self):
        election = make_election(["A", "B", "C"])
        _run_to_voting(election)
        election.cast_vote("C", 1)
        election.advance(ADMIN)
        election.advance(ADMIN)

        kinds = [e.kind for e in election.events]
        assert kinds == (
            ["ParticipantRegistered"] * 3
            + ["PhaseChanged"]
            + ["ProposalRegistered"] * 2
            + ["PhaseChanged"] * 2
            + ["VoteCast"]
            + ["PhaseChanged"] * 2
        )
        assert [e.sequence for e in election.events] == list(range(1, len(kinds) + 1))

    def test_merge_then_vote(self):
        election = make_election(["A", "B"])
        election.merge_participants(ADMIN, ["C"])
        _run_to_voting(election)
        election.cast_vote("C", 1)
        election.cast_vote("A", 1)
        election.advance(ADMIN)
        election.advance(ADMIN)
        assert election.get_winner().text == "Proposal2"
