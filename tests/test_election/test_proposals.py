"""Tests for proposal submission."""

import pytest
from tests.conftest import ADMIN, advance_to, make_election

from election.errors import ElectionTooLarge, ProposalNotFound, Unauthorized, WrongPhase
from election.events import ProposalRegistered
from election.models import Phase, Proposal
from election.proposals import is_valid_proposal_id


class TestSubmitProposal:
    def test_returns_sequential_ids(self, proposals_open):
        assert proposals_open.submit_proposal("A", "First") == 0
        assert proposals_open.submit_proposal("B", "Second") == 1
        assert proposals_open.submit_proposal("A", "Third") == 2

    def test_read_back_exact_text(self, proposals_open):
        text = "  Fund the library, then the park!  "
        proposal_id = proposals_open.submit_proposal("C", text)
        assert proposals_open.proposal(proposal_id) == Proposal(text=text, vote_count=0)

    def test_empty_and_duplicate_text_accepted(self, proposals_open):
        proposals_open.submit_proposal("A", "")
        proposals_open.submit_proposal("B", "")
        assert [p.text for p in proposals_open.proposals] == ["", ""]

    def test_emits_proposal_id(self, proposals_open):
        proposals_open.submit_proposal("A", "First")
        proposals_open.submit_proposal("A", "Second")
        events = proposals_open.events_of_kind(ProposalRegistered)
        assert [e.proposal_id for e in events] == [0, 1]

    def test_unregistered_rejected(self, proposals_open):
        with pytest.raises(Unauthorized):
            proposals_open.submit_proposal("Z", "Sneaky")
        assert proposals_open.proposals == []

    def test_admin_is_not_a_participant(self, proposals_open):
        with pytest.raises(Unauthorized):
            proposals_open.submit_proposal(ADMIN, "Chair's choice")

    @pytest.mark.parametrize("phase", [
        Phase.PROPOSALS_CLOSED, Phase.VOTING_OPEN, Phase.VOTING_CLOSED, Phase.TALLIED,
    ])
    def test_closed_outside_proposals_open(self, phase):
        election = advance_to(make_election(["A"]), phase)
        with pytest.raises(WrongPhase):
            election.submit_proposal("A", "Late")

    def test_closed_while_registering(self, registered):
        with pytest.raises(WrongPhase):
            registered.submit_proposal("A", "Early")

    def test_unregistered_rejected_in_every_phase(self):
        election = make_election(["A"])
        while True:
            with pytest.raises(Unauthorized):
                election.submit_proposal("Z", "Sneaky")
            if election.phase is Phase.TALLIED:
                break
            election.advance(ADMIN)

    def test_replaced_participant_cannot_submit(self):
        election = make_election(["A", "B"])
        election.register_participants(ADMIN, ["B"])
        advance_to(election, Phase.PROPOSALS_OPEN)
        with pytest.raises(Unauthorized):
            election.submit_proposal("A", "Still here?")

    def test_proposal_limit(self):
        election = advance_to(make_election(["A"], max_proposals=2), Phase.PROPOSALS_OPEN)
        election.submit_proposal("A", "One")
        election.submit_proposal("A", "Two")
        with pytest.raises(ElectionTooLarge):
            election.submit_proposal("A", "Three")
        assert len(election.proposals) == 2


class TestReadProposal:
    def test_missing_proposal(self, proposals_open):
        with pytest.raises(ProposalNotFound):
            proposals_open.proposal(0)

    def test_returned_proposal_is_a_copy(self, voting_open):
        voting_open.proposal(0).vote_count = 99
        assert voting_open.proposal(0).vote_count == 0


class TestIsValidProposalId:
    def test_empty_list_has_no_ids(self):
        assert not is_valid_proposal_id(0, 0)

    def test_bounds(self):
        assert is_valid_proposal_id(0, 2)
        assert is_valid_proposal_id(1, 2)
        assert not is_valid_proposal_id(2, 2)
        assert not is_valid_proposal_id(-1, 2)

    def test_rejects_non_integers(self):
        assert not is_valid_proposal_id("0", 2)
        assert not is_valid_proposal_id(0.0, 2)
        assert not is_valid_proposal_id(True, 2)
        assert not is_valid_proposal_id(None, 2)
