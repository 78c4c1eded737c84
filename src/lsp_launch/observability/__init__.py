from .context import current_session, end_session, start_session
from .events import log_event

__all__ = [
    "current_session",
    "end_session",
    "log_event",
    "start_session",
]
