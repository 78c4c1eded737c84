import logging
import os
from pathlib import Path
from typing import Any

import yaml

from lsp_launch.config import StoreConfig
from lsp_launch.definitions import DefinitionRegistry, from_record, to_record
from lsp_launch.definitions.logging import log_store_error

logger = logging.getLogger(__name__)

SERVERS_KEY = "servers"


class StoreError(RuntimeError):
    """The definition store could not be read or written.

    Attributes:
        path: Store file involved.
        kind: Error category ("read", "parse", "format", "write").
    """

    def __init__(self, *, path: Path, kind: str, message: str):
        super().__init__(message)
        self.path = path
        self.kind = kind


def atomic_write(path: Path, content: str) -> None:
    """Write a file through a temporary sibling and os.replace.

    Raises:
        OSError: When the write fails.
    """
    temp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        temp_path.write_text(content, encoding="utf-8")
        os.replace(temp_path, path)
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise


class DefinitionStore:
    """YAML file holding the persisted extension -> definition mapping.

    File layout::

        servers:
          py:
            type: Executable
            path: /usr/bin/pylsp
            args: [--stdio]
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def from_config(cls, config: StoreConfig | None = None) -> "DefinitionStore":
        config = config or StoreConfig.from_env()
        return cls(config.store_path)

    def _fail(self, kind: str, message: str, exc: Exception) -> StoreError:
        log_store_error(str(self.path), message, type(exc).__name__)
        return StoreError(path=self.path, kind=kind, message=message)

    def _read_servers(self) -> dict[Any, Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise self._fail("read", f"Failed to read {self.path}: {e}", e) from e

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise self._fail("parse", f"Invalid YAML in {self.path}: {e}", e) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            error = TypeError(type(data).__name__)
            raise self._fail("format", f"Expected a mapping at the top of {self.path}", error)

        servers = data.get(SERVERS_KEY) or {}
        if not isinstance(servers, dict):
            error = TypeError(type(servers).__name__)
            raise self._fail("format", f"'{SERVERS_KEY}' in {self.path} must be a mapping", error)
        return servers

    def load(self) -> DefinitionRegistry:
        """Load the persisted definitions.

        A missing file is an empty registry. Records that cannot be turned into
        a definition are skipped with a warning.
        """
        registry = DefinitionRegistry()
        if not self.path.exists():
            return registry

        for extension, record in self._read_servers().items():
            if not isinstance(record, dict):
                logger.warning("Skipping malformed record for %r in %s", extension, self.path)
                continue
            definition = from_record(str(extension), record)
            if definition is None:
                logger.warning("Skipping invalid record for %r in %s", extension, self.path)
                continue
            registry.add(definition)
        logger.debug("Loaded %d definitions from %s", len(registry), self.path)
        return registry

    def save(self, registry: DefinitionRegistry) -> None:
        servers = {extension: to_record(definition) for extension, definition in registry.items()}
        content = yaml.safe_dump(
            {SERVERS_KEY: servers},
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            atomic_write(self.path, content)
        except OSError as e:
            raise self._fail("write", f"Failed to write {self.path}: {e}", e) from e
        logger.debug("Saved %d definitions to %s", len(registry), self.path)
