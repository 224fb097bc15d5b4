from __future__ import annotations

import requests

_session: requests.Session | None = None


def build_session() -> requests.Session:
    """
    Create a requests session for the messaging API.

    The session carries the standard JSON headers; the Authorization header is
    added per request because each invocation resolves its own token.

    Returns:
        requests.Session: A configured session ready for API calls.
    """
    session = requests.Session()
    session.headers.update({
        "Content-Type": "application/json",
        "Accept": "application/json",
    })
    return session


def get_session() -> requests.Session:
    """Return the process-wide session, creating it on first use."""
    global _session
    if _session is None:
        _session = build_session()
    return _session
