"""Append-only JSON-lines log of definition edits and store failures.

Enabled with ``LSP_LAUNCH_LOGGING``. In safe mode, string values under keys that
can carry command lines or local paths are replaced with a length-only marker.
The file is rotated to ``<name>.1``, ``<name>.2``, ... once it outgrows
``MAX_LOG_SIZE_BYTES``.
"""

import json
import logging
import os
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..config import settings
from .context import current_session

logger = logging.getLogger(__name__)

_write_lock = threading.Lock()

LEVELS = ("debug", "info", "warning", "error")

# Event keys whose values can hold command lines or local paths.
REDACTED_KEYS: frozenset[str] = frozenset({"args", "command", "path", "package", "values", "error"})


def _redact(value: Any) -> Any:
    if isinstance(value, str):
        return f"[REDACTED len={len(value)}]" if value else value
    if isinstance(value, list | tuple):
        return [_redact(item) for item in value]
    return value


def _prepare(event: dict[str, Any]) -> dict[str, Any]:
    record: dict[str, Any] = {"timestamp": datetime.now(UTC).isoformat()}
    sid = current_session()
    if sid is not None:
        record["session_id"] = sid
    record.update(event)

    kind = str(record.get("kind", ""))
    level = str(record.get("level") or ("error" if kind.endswith("_error") else "info")).lower()
    record["level"] = level if level in LEVELS else "info"

    if settings.LSP_LAUNCH_LOG_REDACT:
        for key in REDACTED_KEYS.intersection(record):
            record[key] = _redact(record[key])
    return record


def _rotate(log_path: Path) -> None:
    """Shift ``log_path`` to ``.1``, ``.1`` to ``.2`` and so on, keeping LOG_BACKUP_COUNT files."""
    backups = settings.LOG_BACKUP_COUNT
    if backups <= 0:
        log_path.unlink()
        return
    for n in range(backups - 1, 0, -1):
        older = log_path.with_name(f"{log_path.name}.{n}")
        if older.exists():
            os.replace(older, log_path.with_name(f"{log_path.name}.{n + 1}"))
    os.replace(log_path, log_path.with_name(f"{log_path.name}.1"))
    logger.debug("Rotated event log %s", log_path)


def log_event(event: dict[str, Any]) -> None:
    """Append one event to LOG_PATH.

    Never raises: write failures are reported through ``logging`` and the event
    is dropped.
    """
    if not settings.LSP_LAUNCH_LOGGING:
        return
    try:
        line = json.dumps(_prepare(event), ensure_ascii=False, default=str)
        log_path = settings.LOG_PATH
        with _write_lock:
            if log_path.is_dir():
                logger.warning("Event log path %s is a directory; event dropped", log_path)
                return
            log_path.parent.mkdir(parents=True, exist_ok=True)
            if log_path.exists() and log_path.stat().st_size > settings.MAX_LOG_SIZE_BYTES:
                _rotate(log_path)
            with log_path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("Failed to write event log: %s", exc)
