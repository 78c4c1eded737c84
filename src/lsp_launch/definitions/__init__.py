from lsp_launch.definitions.base import (
    ARGS,
    COMMAND,
    DEFINITION_TYPES,
    EXTENSION,
    FIELD_SCHEMAS,
    LIST_FIELDS,
    MAIN_CLASS,
    PACKAGE,
    PATH,
    ArtifactDefinition,
    ExecutableDefinition,
    LaunchDefinition,
    RawCommandDefinition,
    VariantTag,
    normalize_extension,
    parse_tag,
)
from lsp_launch.definitions.codec import (
    compose,
    decompose,
    from_array,
    from_record,
    to_array,
    to_record,
)
from lsp_launch.definitions.registry import DefinitionRegistry

__all__ = [
    # Variants
    "LaunchDefinition",
    "ArtifactDefinition",
    "ExecutableDefinition",
    "RawCommandDefinition",
    "VariantTag",
    # Schema
    "ARGS",
    "COMMAND",
    "EXTENSION",
    "MAIN_CLASS",
    "PACKAGE",
    "PATH",
    "DEFINITION_TYPES",
    "FIELD_SCHEMAS",
    "LIST_FIELDS",
    "normalize_extension",
    "parse_tag",
    # Codec
    "compose",
    "decompose",
    "from_array",
    "from_record",
    "to_array",
    "to_record",
    # Registry
    "DefinitionRegistry",
]
