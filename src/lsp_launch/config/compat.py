import logging
import os

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset(("1", "true", "yes", "y", "on"))
_FALSE_VALUES = frozenset(("0", "false", "no", "n", "off"))


def env_bool(name: str, *, default: bool) -> bool:
    """Read a boolean flag from the environment.

    Unrecognized values fall back to ``default`` and are logged.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    if value:
        logger.warning("Ignoring unrecognized value for %s: %r", name, raw)
    return default


def env_int(name: str, *, default: int, minimum: int = 0) -> int:
    """Read a non-negative integer from the environment.

    Non-integer values and values below ``minimum`` fall back to ``default``.
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer value for %s: %r", name, raw)
        return default
    if value < minimum:
        logger.warning("Ignoring %s=%d (must be at least %d)", name, value, minimum)
        return default
    return value
