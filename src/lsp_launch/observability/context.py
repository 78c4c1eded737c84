"""Edit-session identifier attached to logged events."""

import uuid
from contextvars import ContextVar

_current_session: ContextVar[str | None] = ContextVar("lsp_launch_session", default=None)


def start_session() -> str:
    """Begin a new edit session and return its id."""
    sid = uuid.uuid4().hex[:12]
    _current_session.set(sid)
    return sid


def end_session() -> None:
    _current_session.set(None)


def current_session() -> str | None:
    return _current_session.get()
