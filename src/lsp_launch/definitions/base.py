from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import PurePath
from typing import ClassVar


class VariantTag(StrEnum):
    """Launch strategy of a server definition."""

    ARTIFACT = "Artifact"
    EXECUTABLE = "Executable"
    RAW_COMMAND = "RawCommand"


EXTENSION = "extension"
PACKAGE = "package"
MAIN_CLASS = "main_class"
PATH = "path"
ARGS = "args"
COMMAND = "command"

# Ordered field names per launch strategy.
FIELD_SCHEMAS: dict[VariantTag, tuple[str, ...]] = {
    VariantTag.ARTIFACT: (EXTENSION, PACKAGE, MAIN_CLASS, ARGS),
    VariantTag.EXECUTABLE: (EXTENSION, PATH, ARGS),
    VariantTag.RAW_COMMAND: (EXTENSION, COMMAND),
}

# Fields holding a token list rather than a single string.
LIST_FIELDS: frozenset[str] = frozenset({ARGS, COMMAND})


def parse_tag(tag: "str | VariantTag") -> VariantTag | None:
    """Resolve a tag name, or return None if it names no known strategy."""
    if isinstance(tag, VariantTag):
        return tag
    try:
        return VariantTag(tag)
    except ValueError:
        return None


def normalize_extension(extension: str) -> str:
    """Normalize an extension token: strip whitespace and leading dots, lower-case."""
    return extension.strip().lstrip(".").lower()


@dataclass(frozen=True)
class LaunchDefinition:
    """How to start the language server for one file extension.

    Instances are immutable values; two definitions are equal iff they have the
    same launch strategy and all fields are equal.
    """

    tag: ClassVar[VariantTag]

    extension: str
    """File extension this server handles, without the leading dot (e.g. "py")."""

    def __post_init__(self) -> None:
        normalized = normalize_extension(self.extension)
        if not normalized:
            raise ValueError("extension must not be empty")
        object.__setattr__(self, "extension", normalized)
        for name in LIST_FIELDS:
            if not hasattr(self, name):
                continue
            value = getattr(self, name)
            if value is None:
                object.__setattr__(self, name, ())
            elif not isinstance(value, tuple):
                object.__setattr__(self, name, _as_tokens(value))

    @property
    def schema(self) -> tuple[str, ...]:
        return FIELD_SCHEMAS[self.tag]

    def fields(self) -> dict[str, str | tuple[str, ...]]:
        """Return field values keyed by name, in schema order."""
        return {name: getattr(self, name) for name in self.schema}

    def matches_file(self, path: str) -> bool:
        """Check if this definition handles the given file path."""
        suffix = PurePath(path).suffix
        return bool(suffix) and normalize_extension(suffix) == self.extension


def _as_tokens(value: Iterable[str]) -> tuple[str, ...]:
    if isinstance(value, str):
        raise TypeError("token lists must be a sequence of strings, not a single string")
    return tuple(value)


@dataclass(frozen=True)
class ArtifactDefinition(LaunchDefinition):
    """Server shipped as a package artifact, started through its main class."""

    tag: ClassVar[VariantTag] = VariantTag.ARTIFACT

    package: str = ""
    """Artifact coordinate (e.g. "ch.epfl.lamp:dotty-language-server_0.3:0.3.0-RC2")."""

    main_class: str = ""
    """Entry point inside the artifact (e.g. "dotty.tools.languageserver.Main")."""

    args: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ExecutableDefinition(LaunchDefinition):
    """Server started by running an executable directly."""

    tag: ClassVar[VariantTag] = VariantTag.EXECUTABLE

    path: str = ""
    args: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RawCommandDefinition(LaunchDefinition):
    """Server started from a pre-tokenized command line."""

    tag: ClassVar[VariantTag] = VariantTag.RAW_COMMAND

    command: tuple[str, ...] = field(default_factory=tuple)


DEFINITION_TYPES: dict[VariantTag, type[LaunchDefinition]] = {
    VariantTag.ARTIFACT: ArtifactDefinition,
    VariantTag.EXECUTABLE: ExecutableDefinition,
    VariantTag.RAW_COMMAND: RawCommandDefinition,
}
