"""Single-election workflow: registration, proposals, ballots, tally and winner."""
