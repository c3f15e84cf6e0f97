"""Run a simulated election end to end.

Generates participant names and proposal texts using faker with a fixed
seed, lets each participant vote at random (some abstain), then prints the
standings and the winner, or reports that there is no unique winner.

Usage:
    python scripts/simulate_election.py
    python scripts/simulate_election.py --participants 50 --proposals 4 --seed 7
    python scripts/simulate_election.py --events
"""

import argparse
import logging
import random
import sys
from pathlib import Path

from faker import Faker

sys.path.insert(0, str(Path(__file__).parent.parent))

from election import config
from election.access import SingleAdmin
from election.errors import NoUniqueWinner
from election.models import Phase
from election.service import Election

SEED = 20260201
ADMIN = "chair"


def generate_participants(fake: Faker, count: int) -> list[str]:
    """Generate `count` distinct participant names."""
    names: list[str] = []
    seen: set[str] = set()
    while len(names) < count:
        name = fake.name()
        if name.lower() not in seen:
            seen.add(name.lower())
            names.append(name)
    return names


def run_election(
    participants: list[str],
    proposals: list[str],
    rng: random.Random,
    abstain_rate: float,
) -> Election:
    """Run every phase of an election and return it in the Tallied phase."""
    election = Election(SingleAdmin(ADMIN))
    election.register_participants(ADMIN, participants)
    election.advance(ADMIN)

    # Proposals come from randomly chosen participants
    for text in proposals:
        election.submit_proposal(rng.choice(participants), text)

    election.advance(ADMIN)
    election.advance(ADMIN)

    for participant in participants:
        if rng.random() >= abstain_rate:
            election.cast_vote(participant, rng.randrange(len(proposals)))

    while election.phase is not Phase.TALLIED:
        election.advance(ADMIN)
    return election


def main():
    parser = argparse.ArgumentParser(description="Simulate a single election")
    parser.add_argument("--participants", type=int, default=25, help="Number of participants")
    parser.add_argument("--proposals", type=int, default=3, help="Number of proposals")
    parser.add_argument("--abstain", type=float, default=0.1,
                        help="Probability that a participant does not vote")
    parser.add_argument("--seed", type=int, default=SEED, help="Random seed")
    parser.add_argument("--events", action="store_true", help="Print the public event log")
    args = parser.parse_args()

    if args.participants < 1 or args.proposals < 1:
        parser.error("Need at least one participant and one proposal")

    logging.basicConfig(level=config.LOG_LEVEL)

    fake = Faker()
    Faker.seed(args.seed)
    rng = random.Random(args.seed)

    participants = generate_participants(fake, args.participants)
    proposals = [fake.sentence(nb_words=4).rstrip(".") for _ in range(args.proposals)]
    print(f"Generated {len(participants)} participants and {len(proposals)} proposals")

    election = run_election(participants, proposals, rng, args.abstain)

    print("Standings:")
    for placement in election.standings():
        marker = " (tied)" if placement.tied else ""
        print(f"  {placement.rank}. [{placement.proposal_id}] {placement.text}: "
              f"{placement.vote_count} votes{marker}")

    try:
        winner = election.get_winner()
        print(f"Winner: {winner.text} with {winner.vote_count} votes")
    except NoUniqueWinner as e:
        print(f"No unique winner: {e}")

    if args.events:
        print("Events:")
        for event in election.events:
            print(f"  {event.to_dict()}")


if __name__ == "__main__":
    main()
