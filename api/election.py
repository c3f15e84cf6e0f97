"""Serverless function exposing one election over JSON POST requests."""

import json
import logging
import sys
from pathlib import Path
from urllib.parse import urlparse

import httpx

# Add the project root to the path so we can import election modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from election import config
from election.errors import (
    AlreadyVoted,
    ElectionError,
    ElectionTooLarge,
    NoUniqueWinner,
    ProposalNotFound,
    Unauthorized,
    WorkflowComplete,
    WrongPhase,
)
from election.roster import RosterError, parse_roster
from election.service import Election

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    Unauthorized: 403,
    WrongPhase: 409,
    WorkflowComplete: 409,
    AlreadyVoted: 409,
    NoUniqueWinner: 409,
    ProposalNotFound: 404,
    ElectionTooLarge: 413,
}

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

_election = Election()


class RequestError(Exception):
    """Malformed request from the client."""
    pass


def get_election() -> Election:
    return _election


def reset_election(election: Election | None = None) -> Election:
    """Replace the served election, e.g. to start a new one."""
    global _election
    _election = election if election is not None else Election()
    return _election


def handler(request):
    """Handle an election request.

    Accepts POST with JSON body {"action": ..., "caller": ..., ...}:
    - register / merge: "participants": [...] or "roster_url": "https://..."
    - submit: "text": "..."
    - vote: "proposal_id": 0
    - advance, winner, standings, state: no extra fields

    Returns JSON with the outcome, or {"error", "kind"} on failure.
    """
    if request.method == "OPTIONS":
        return create_response("", status=204, headers=PREFLIGHT_HEADERS)

    if request.method != "POST":
        return error_response("Method not allowed. Use POST.", 405)

    try:
        content_type = request.headers.get("content-type", "")
        if "application/json" not in content_type:
            raise RequestError(f"Unsupported content type: {content_type}")

        data = json.loads(request.body.decode("utf-8"))
        if not isinstance(data, dict):
            raise RequestError("Request body must be a JSON object")

        return create_response(dispatch(get_election(), data))

    except ElectionError as e:
        return error_response(str(e), ERROR_STATUS.get(type(e), 400), kind=e.kind)
    except (RequestError, RosterError) as e:
        return error_response(str(e), 400)
    except json.JSONDecodeError as e:
        return error_response(f"Invalid JSON: {e}", 400)
    except Exception as e:
        logger.exception("Unhandled error in election handler")
        return error_response(f"Internal error: {e}", 500)


def dispatch(election: Election, data: dict) -> dict:
    """Run the requested action against `election` and return the response body."""
    action = data.get("action")
    caller = data.get("caller", "")
    if not isinstance(caller, str):
        raise RequestError("'caller' must be a string")

    if action in ("register", "merge"):
        identities = get_identities(data)
        if action == "register":
            roster = election.register_participants(caller, identities)
            return {"roster": roster}
        added = election.merge_participants(caller, identities)
        return {"added": added, "roster": election.roster}

    if action == "submit":
        text = data.get("text")
        if not isinstance(text, str):
            raise RequestError("Missing 'text' in request body")
        return {"proposal_id": election.submit_proposal(caller, text)}

    if action == "vote":
        proposal_id = data.get("proposal_id")
        if not isinstance(proposal_id, int) or isinstance(proposal_id, bool):
            raise RequestError("Missing integer 'proposal_id' in request body")
        election.cast_vote(caller, proposal_id)
        return {"participant": caller, "proposal_id": proposal_id}

    if action == "advance":
        return {"phase": str(election.advance(caller))}

    if action == "winner":
        winner = election.get_winner()
        return {"winner": winner.to_dict()}

    if action == "standings":
        return {"standings": [p.to_dict() for p in election.standings()]}

    if action == "state":
        return election.snapshot()

    raise RequestError(f"Unknown action: {action!r}")


def get_identities(data: dict) -> list[str]:
    """Read identities from the request, fetching the roster URL if given."""
    if "roster_url" in data:
        return fetch_roster(data["roster_url"])

    participants = data.get("participants")
    if not isinstance(participants, list) or not all(isinstance(p, str) for p in participants):
        raise RequestError("Missing 'participants' list or 'roster_url' in request body")
    return participants


def fetch_roster(url) -> list[str]:
    """Download a roster document and parse it by its served content type."""
    if not isinstance(url, str) or urlparse(url).scheme not in ("http", "https"):
        raise RequestError(f"Roster URL must be http or https: {url!r}")

    try:
        with httpx.Client(follow_redirects=True, timeout=config.ROSTER_TIMEOUT) as client:
            response = client.get(url)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise RequestError(f"Roster server answered {e.response.status_code}")
    except httpx.RequestError as e:
        raise RequestError(f"Could not fetch roster: {e}")

    content_type = response.headers.get("content-type", "")
    logger.info("Fetched roster from %s (%s)", url, content_type or "no content type")
    return parse_roster(response.content, content_type)


def create_response(body, status: int = 200, headers: dict = None):
    """Wrap a JSON body in the response shape the serverless runtime expects."""
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json", **CORS_HEADERS, **(headers or {})},
        "body": json.dumps(body) if body != "" else body,
    }


def error_response(message: str, status: int, kind: str | None = None):
    body = {"error": message}
    if kind is not None:
        body["kind"] = kind
    return create_response(body, status=status)
