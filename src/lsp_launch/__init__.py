__version__ = "0.1.0.dev0"

from .definitions import (
    ArtifactDefinition,
    DefinitionRegistry,
    ExecutableDefinition,
    LaunchDefinition,
    RawCommandDefinition,
    VariantTag,
    compose,
    decompose,
)
from .editing import EntryList, SessionState, SettingsSession
from .storage import DefinitionStore, StoreError

__all__ = [
    "__version__",
    "ArtifactDefinition",
    "DefinitionRegistry",
    "DefinitionStore",
    "EntryList",
    "ExecutableDefinition",
    "LaunchDefinition",
    "RawCommandDefinition",
    "SessionState",
    "SettingsSession",
    "StoreError",
    "VariantTag",
    "compose",
    "decompose",
]
