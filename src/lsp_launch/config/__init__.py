"""Configuration module for lsp-launch."""

from .settings import (
    CONFIG_DIR,
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_PATH,
    LSP_LAUNCH_LOG_REDACT,
    LSP_LAUNCH_LOGGING,
    MAX_LOG_SIZE_BYTES,
    STORE_FILENAME,
    StoreConfig,
)

__all__ = [
    "CONFIG_DIR",
    "LOG_BACKUP_COUNT",
    "LOG_DIR",
    "LOG_PATH",
    "LSP_LAUNCH_LOG_REDACT",
    "LSP_LAUNCH_LOGGING",
    "MAX_LOG_SIZE_BYTES",
    "STORE_FILENAME",
    "StoreConfig",
]
