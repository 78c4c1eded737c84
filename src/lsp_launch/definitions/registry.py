from collections.abc import Iterable, Iterator

from .base import LaunchDefinition, normalize_extension


class DefinitionRegistry:
    """Committed mapping of file extension to launch definition.

    Keys are normalized extensions and are unique; adding a definition for an
    extension that is already present replaces it (last write wins) while keeping
    its original position. Iteration follows insertion order.
    """

    def __init__(self, definitions: Iterable[LaunchDefinition] = ()) -> None:
        self._definitions: dict[str, LaunchDefinition] = {}
        for definition in definitions:
            self.add(definition)

    def add(self, definition: LaunchDefinition) -> None:
        self._definitions[definition.extension] = definition

    def get(self, extension: str) -> LaunchDefinition | None:
        return self._definitions.get(normalize_extension(extension))

    def get_for_file(self, path: str) -> LaunchDefinition | None:
        """Get the definition whose extension matches a file path."""
        for definition in self._definitions.values():
            if definition.matches_file(path):
                return definition
        return None

    def remove(self, extension: str) -> bool:
        return self._definitions.pop(normalize_extension(extension), None) is not None

    def replace_all(self, definitions: Iterable[LaunchDefinition]) -> None:
        """Replace the whole contents in one step.

        The replacement is built completely before it is swapped in, so a failure
        while iterating ``definitions`` leaves the registry untouched.
        """
        replacement: dict[str, LaunchDefinition] = {}
        for definition in definitions:
            replacement[definition.extension] = definition
        self._definitions = replacement

    def extensions(self) -> list[str]:
        return list(self._definitions)

    def values(self) -> list[LaunchDefinition]:
        return list(self._definitions.values())

    def items(self) -> list[tuple[str, LaunchDefinition]]:
        return list(self._definitions.items())

    def copy(self) -> "DefinitionRegistry":
        return DefinitionRegistry(self._definitions.values())

    def __contains__(self, extension: object) -> bool:
        if not isinstance(extension, str):
            return False
        return normalize_extension(extension) in self._definitions

    def __iter__(self) -> Iterator[LaunchDefinition]:
        return iter(list(self._definitions.values()))

    def __len__(self) -> int:
        return len(self._definitions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DefinitionRegistry):
            return NotImplemented
        return self._definitions == other._definitions

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DefinitionRegistry({list(self._definitions.values())!r})"
