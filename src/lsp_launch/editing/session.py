import logging
from collections.abc import Callable, Mapping, Sequence
from enum import Enum

from lsp_launch.definitions import DefinitionRegistry, VariantTag
from lsp_launch.definitions.logging import log_definitions_committed, log_entry_dropped
from lsp_launch.observability import end_session, start_session

from .entries import EntryList

logger = logging.getLogger(__name__)

RESTART_NOTICE = "The changes will be applied after restarting the IDE."

Notifier = Callable[[str], None]


class SessionState(Enum):
    EMPTY = "empty"
    SEEDED = "seeded"
    EDITING = "editing"
    COMMITTED = "committed"
    DISCARDED = "discarded"


class SettingsSession:
    """Edit session over a baseline registry of launch definitions.

    The session owns its entry list and is the only writer of the baseline:
    ``commit`` replaces the baseline contents as a whole, nothing else touches
    it. Callers must not mutate the session from more than one thread.

    Args:
        baseline: Last persisted definitions. Read to seed entries, replaced on commit.
        notify: Optional sink for user-facing messages (e.g. the restart notice).
    """

    def __init__(
        self,
        baseline: DefinitionRegistry,
        notify: Notifier | None = None,
    ) -> None:
        self.baseline = baseline
        self.entries = EntryList()
        self.state = SessionState.EMPTY
        self._notify = notify

    # --- Lifecycle ---

    def reset(self) -> None:
        """Discard pending edits and re-seed entries from the baseline."""
        start_session()
        self.entries.seed(self.baseline)
        self.state = SessionState.SEEDED

    def discard(self) -> None:
        self.entries.clear()
        end_session()
        self.state = SessionState.DISCARDED

    def clear(self) -> None:
        self.entries.clear()
        end_session()
        self.state = SessionState.EMPTY

    # --- Editing ---

    def _touched(self, changed: bool) -> bool:
        if changed:
            self.state = SessionState.EDITING
        return changed

    def append(
        self,
        tag: str | VariantTag,
        values: Sequence[str] | Mapping[str, str] | None = None,
    ) -> int | None:
        index = self.entries.append(tag, values)
        self._touched(index is not None)
        return index

    def remove_at(self, index: int) -> bool:
        return self._touched(self.entries.remove_at(index))

    def retype(self, index: int, tag: str | VariantTag) -> bool:
        return self._touched(self.entries.retype(index, tag))

    def set_field(self, index: int, name: str, value: str) -> bool:
        return self._touched(self.entries.set_field(index, name, value))

    def move(self, index: int, new_index: int) -> bool:
        return self._touched(self.entries.move(index, new_index))

    def to_raw_array(self, index: int) -> list[str] | None:
        return self.entries.to_raw_array(index)

    # --- Change detection ---

    def _compose_entries(self, *, report: bool = False) -> tuple[DefinitionRegistry, int]:
        candidate = DefinitionRegistry()
        dropped = 0
        for index, entry in enumerate(self.entries):
            definition = entry.compose()
            if definition is None:
                dropped += 1
                if report:
                    logger.debug("Dropping invalid entry %d (%s)", index, entry.tag.value)
                    log_entry_dropped(index, entry.tag.value, entry.raw_values())
                continue
            candidate.add(definition)
        return candidate, dropped

    def materialize(self) -> DefinitionRegistry:
        """Compose every entry into a registry, skipping entries that are not valid."""
        candidate, _ = self._compose_entries()
        return candidate

    def is_modified(self, baseline: DefinitionRegistry | None = None) -> bool:
        """Whether the edited entries differ from the baseline.

        Invalid entries are left out on both sides of the comparison, and the
        order of entries does not matter.
        """
        reference = self.baseline if baseline is None else baseline
        candidate = self.materialize()
        if len(candidate) != len(reference):
            return True
        for extension, definition in candidate.items():
            if reference.get(extension) != definition:
                return True
        return False

    def commit(self, baseline: DefinitionRegistry | None = None) -> DefinitionRegistry:
        """Replace the baseline contents with the materialized entries.

        Returns the registry that was committed.
        """
        target = self.baseline if baseline is None else baseline
        candidate, dropped = self._compose_entries(report=True)
        previous_count = len(target)
        target.replace_all(candidate)
        self.state = SessionState.COMMITTED
        log_definitions_committed(previous_count, len(candidate), dropped)
        if self._notify is not None:
            self._notify(RESTART_NOTICE)
        return candidate
