"""Parse participant rosters supplied as files or fetched documents."""

import json


class RosterError(ValueError):
    """Raised when roster content cannot be read as a list of identities."""
    pass


def parse_roster(content: bytes | str, content_type: str = "") -> list[str]:
    """Parse roster content into a list of identities.

    `content_type` is the media type the roster was served with, if known. A
    JSON type forces JSON parsing and `text/plain` forces line parsing;
    anything else is sniffed from the first non-blank character.

    Accepted formats:
    - JSON array of strings: ["alice", "bob"]
    - JSON object with a "participants" array of strings
    - Plain text, one identity per line; blank lines and lines starting
      with '#' are ignored, surrounding whitespace is stripped

    Order is preserved and duplicates are kept; the registry decides what to
    do with them.

    Raises:
        RosterError: If the content is not valid UTF-8 or has the wrong shape.
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise RosterError(f"Roster is not valid UTF-8: {e}") from e

    stripped = content.strip()
    media_type = content_type.split(";")[0].strip().lower()
    if media_type == "text/plain":
        as_json = False
    elif "json" in media_type:
        as_json = True
    else:
        as_json = stripped.startswith(("[", "{"))

    if as_json:
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise RosterError(f"Invalid JSON roster: {e}") from e
        return _identities_from_json(data)

    identities = []
    for line in content.splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            identities.append(line)
    return identities


def _identities_from_json(data: object) -> list[str]:
    if isinstance(data, dict):
        if "participants" not in data:
            raise RosterError("JSON roster object has no 'participants' key")
        data = data["participants"]
    if not isinstance(data, list):
        raise RosterError("Roster participants must be a JSON array")
    if not all(isinstance(identity, str) for identity in data):
        raise RosterError("Every roster entry must be a string")
    return list(data)
