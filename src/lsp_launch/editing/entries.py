import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field

from lsp_launch.definitions import (
    FIELD_SCHEMAS,
    DefinitionRegistry,
    LaunchDefinition,
    VariantTag,
    compose,
    decompose,
    normalize_extension,
    parse_tag,
)
from lsp_launch.definitions.logging import log_unknown_variant

logger = logging.getLogger(__name__)


@dataclass
class Entry:
    """One row being edited: a launch strategy and its raw field values."""

    tag: VariantTag
    values: dict[str, str] = field(default_factory=dict)

    @property
    def schema(self) -> tuple[str, ...]:
        return FIELD_SCHEMAS[self.tag]

    def raw_values(self) -> list[str]:
        return [self.values.get(name, "") for name in self.schema]

    def compose(self) -> LaunchDefinition | None:
        return compose(self.tag, self.raw_values(), source="entry")


def _build_values(
    tag: VariantTag, values: Sequence[str] | Mapping[str, str] | None
) -> dict[str, str]:
    schema = FIELD_SCHEMAS[tag]
    if values is None:
        return {name: "" for name in schema}
    if isinstance(values, Mapping):
        return {name: values.get(name, "") for name in schema}
    padded = list(values[: len(schema)]) + [""] * (len(schema) - len(values))
    return dict(zip(schema, padded, strict=True))


class EntryList:
    """Ordered, mutable list of entries for one edit session.

    Index-based operations never raise for a stale or out-of-range index; they
    report it through their return value instead. Keeping at least one row on
    screen is up to the presentation layer, not this list.
    """

    def __init__(self) -> None:
        self._entries: list[Entry] = []

    def _resolve_tag(self, tag: str | VariantTag) -> VariantTag | None:
        variant = parse_tag(tag)
        if variant is None:
            logger.warning("Unknown launch definition type: %r", tag)
            log_unknown_variant(str(tag), "entry_list")
        return variant

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def seed(self, registry: DefinitionRegistry) -> None:
        """Replace all entries with one entry per definition, in registry order."""
        self.clear()
        for definition in registry:
            tag, values = decompose(definition)
            self.append(tag, values)

    def append(
        self,
        tag: str | VariantTag,
        values: Sequence[str] | Mapping[str, str] | None = None,
    ) -> int | None:
        """Add an entry at the end and return its index.

        ``values`` may be given in schema order or by field name; missing fields
        are empty. Returns None without adding anything if the tag is unknown or
        ``values`` is a bare string.
        """
        variant = self._resolve_tag(tag)
        if variant is None:
            return None
        if isinstance(values, str):
            logger.warning(
                "Field values for %s must be a sequence or mapping, got %r", variant.value, values
            )
            return None
        self._entries.append(Entry(variant, _build_values(variant, values)))
        return len(self._entries) - 1

    def remove_at(self, index: int) -> bool:
        if not self._in_range(index):
            return False
        del self._entries[index]
        return True

    def retype(self, index: int, tag: str | VariantTag) -> bool:
        """Switch the entry at ``index`` to another launch strategy, in place.

        Values of fields that exist in both schemas are kept (matched by name);
        the others are dropped, and fields new to the entry start empty.
        """
        if not self._in_range(index):
            return False
        variant = self._resolve_tag(tag)
        if variant is None:
            return False
        old = self._entries[index]
        self._entries[index] = Entry(variant, _build_values(variant, old.values))
        return True

    def set_field(self, index: int, name: str, value: str) -> bool:
        if not self._in_range(index):
            return False
        entry = self._entries[index]
        if name not in entry.schema:
            return False
        entry.values[name] = value
        return True

    def move(self, index: int, new_index: int) -> bool:
        if not (self._in_range(index) and self._in_range(new_index)):
            return False
        entry = self._entries.pop(index)
        self._entries.insert(new_index, entry)
        return True

    def to_raw_array(self, index: int) -> list[str] | None:
        if not self._in_range(index):
            return None
        return self._entries[index].raw_values()

    def tag_at(self, index: int) -> VariantTag | None:
        if not self._in_range(index):
            return None
        return self._entries[index].tag

    def index_of(self, extension: str) -> int | None:
        """Index of the last entry whose raw extension matches, if any."""
        wanted = normalize_extension(extension)
        for index in range(len(self._entries) - 1, -1, -1):
            if normalize_extension(self._entries[index].values.get("extension", "")) == wanted:
                return index
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries))

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]
