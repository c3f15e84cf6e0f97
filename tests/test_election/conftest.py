"""Shared fixtures for election workflow tests."""

import pytest
from tests.conftest import advance_to, make_election, run_ballots

from election.models import Phase


@pytest.fixture
def registered():
    """Participants A, B, C registered; still in RegisteringVoters."""
    return make_election(["A", "B", "C"])


@pytest.fixture
def proposals_open(registered):
    """A, B, C registered and proposals open, none submitted yet."""
    return advance_to(registered, Phase.PROPOSALS_OPEN)


@pytest.fixture
def voting_open(proposals_open):
    """A submitted "Proposal1" (id 0), B submitted "Proposal2" (id 1); voting open."""
    proposals_open.submit_proposal("A", "Proposal1")
    proposals_open.submit_proposal("B", "Proposal2")
    return advance_to(proposals_open, Phase.VOTING_OPEN)


@pytest.fixture
def clear_winner():
    """A and C vote for proposal 0, B votes for proposal 1.

                 votes
    Proposal1      2
    Proposal2      1

    Proposal1 wins.
    """
    return run_ballots(["Proposal1", "Proposal2"], {"A": 0, "B": 1, "C": 0})


@pytest.fixture
def two_way_tie():
    """A votes for proposal 0, B votes for proposal 1, C abstains.

                 votes
    Proposal1      1
    Proposal2      1

    No unique winner.
    """
    return run_ballots(["Proposal1", "Proposal2"], {"A": 0, "B": 1, "C": None})


@pytest.fixture
def no_votes():
    """Three proposals, nobody votes. Every proposal ties at zero."""
    return run_ballots(["X", "Y", "Z"], {"A": None, "B": None})
