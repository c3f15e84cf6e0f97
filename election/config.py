"""Election settings, read from the environment."""

import os

# Identity allowed to run privileged operations
ADMIN_IDENTITY = os.environ.get("ELECTION_ADMIN", "admin")

# Size limits (0 = unbounded). Tallying and winner resolution are linear in these.
MAX_PARTICIPANTS = int(os.environ.get("ELECTION_MAX_PARTICIPANTS", "0"))
MAX_PROPOSALS = int(os.environ.get("ELECTION_MAX_PROPOSALS", "0"))

LOG_LEVEL = os.environ.get("ELECTION_LOG_LEVEL", "INFO").upper()

# Seconds to wait when fetching a roster from a URL
ROSTER_TIMEOUT = float(os.environ.get("ELECTION_ROSTER_TIMEOUT", "30.0"))
