from lsp_launch.editing.entries import Entry, EntryList
from lsp_launch.editing.session import (
    RESTART_NOTICE,
    Notifier,
    SessionState,
    SettingsSession,
)

__all__ = [
    "Entry",
    "EntryList",
    "Notifier",
    "RESTART_NOTICE",
    "SessionState",
    "SettingsSession",
]
