import logging
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_state_dir

from .compat import env_bool, env_int

logger = logging.getLogger(__name__)

__all__ = [
    "CONFIG_DIR",
    "LOG_PATH",
    "LSP_LAUNCH_LOGGING",
    "STORE_FILENAME",
    "StoreConfig",
]

APP_NAME = "lsp-launch"

# Persisted definitions live next to other per-user configuration:
# - Linux: ~/.config/lsp-launch
# - macOS: ~/Library/Application Support/lsp-launch
# - Windows: %LOCALAPPDATA%\lsp-launch
DEFAULT_CONFIG_DIR = Path(user_config_dir(APP_NAME, appauthor=False))
CONFIG_DIR = Path(os.getenv("LSP_LAUNCH_CONFIG_DIR", "").strip() or DEFAULT_CONFIG_DIR)
STORE_FILENAME = "servers.yaml"

# Local event logging mode (default: off)
# Options: off (disabled), safe (enabled with redaction), full (enabled without redaction)
_LOGGING_RAW = os.getenv("LSP_LAUNCH_LOGGING", "off").strip().lower()
LSP_LAUNCH_LOGGING = _LOGGING_RAW in ("safe", "full", "1", "true", "yes")
# Explicit LSP_LAUNCH_LOG_REDACT overrides the mode
LSP_LAUNCH_LOG_REDACT = env_bool("LSP_LAUNCH_LOG_REDACT", default=_LOGGING_RAW != "full")

# Created on the first event write
LOG_DIR = Path(user_state_dir(APP_NAME, appauthor=False))
LOG_PATH = LOG_DIR / "lsp-launch.log"
MAX_LOG_SIZE_BYTES = 10 * 1024 * 1024
# Number of rotated files (lsp-launch.log.1, .2, ...) kept next to the active log
LOG_BACKUP_COUNT = env_int("LSP_LAUNCH_LOG_BACKUPS", default=5)


@dataclass(frozen=True)
class StoreConfig:
    config_dir: Path
    filename: str = STORE_FILENAME

    @property
    def store_path(self) -> Path:
        return self.config_dir / self.filename

    @classmethod
    def from_env(cls) -> "StoreConfig":
        config_dir = CONFIG_DIR
        if config_dir.exists() and not config_dir.is_dir():
            raise RuntimeError(
                f"LSP_LAUNCH_CONFIG_DIR exists but is not a directory: {config_dir}"
            )
        if config_dir != DEFAULT_CONFIG_DIR:
            logger.debug("Using LSP_LAUNCH_CONFIG_DIR: %s", config_dir)
        return cls(config_dir=config_dir)
