import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from lsp_launch.definitions import (
    ArtifactDefinition,
    DefinitionRegistry,
    ExecutableDefinition,
    RawCommandDefinition,
)
from lsp_launch.editing import RESTART_NOTICE, SessionState, SettingsSession
from lsp_launch.observability import current_session


@pytest.fixture
def session(baseline: DefinitionRegistry) -> SettingsSession:
    settings_session = SettingsSession(baseline)
    settings_session.reset()
    return settings_session


class TestLifecycle:
    def test_new_session_is_empty(self, baseline: DefinitionRegistry) -> None:
        settings_session = SettingsSession(baseline)
        assert settings_session.state is SessionState.EMPTY
        assert len(settings_session.entries) == 0

    def test_reset_seeds_from_baseline(self, session: SettingsSession) -> None:
        assert session.state is SessionState.SEEDED
        assert len(session.entries) == 3
        assert session.is_modified() is False

    def test_edits_move_to_editing(self, session: SettingsSession) -> None:
        session.set_field(0, "main_class", "other.Main")
        assert session.state is SessionState.EDITING

    def test_rejected_edit_keeps_state(self, session: SettingsSession) -> None:
        assert session.remove_at(99) is False
        assert session.state is SessionState.SEEDED

    def test_discard_then_reset(self, session: SettingsSession) -> None:
        session.remove_at(0)
        session.discard()
        assert session.state is SessionState.DISCARDED
        assert len(session.entries) == 0
        session.reset()
        assert len(session.entries) == 3
        assert session.is_modified() is False

    def test_clear(self, session: SettingsSession) -> None:
        session.clear()
        assert session.state is SessionState.EMPTY
        assert len(session.entries) == 0

    def test_session_id_follows_lifecycle(self, session: SettingsSession) -> None:
        first = current_session()
        assert first is not None
        session.reset()
        assert current_session() not in (None, first)
        session.discard()
        assert current_session() is None


class TestIsModified:
    def test_reordering_is_not_a_change(self, session: SettingsSession) -> None:
        assert session.move(0, 2) is True
        assert session.is_modified() is False

    def test_single_field_edit_is_a_change(self, session: SettingsSession) -> None:
        session.set_field(1, "args", "--cli --verbose")
        assert session.is_modified() is True

    def test_retype_is_a_change(self, session: SettingsSession) -> None:
        session.retype(1, "RawCommand")
        assert session.is_modified() is True

    def test_append_valid_entry_is_a_change(self, session: SettingsSession) -> None:
        session.append("Executable", ["go", "/usr/bin/gopls", ""])
        assert session.is_modified() is True

    def test_remove_is_a_change(self, session: SettingsSession) -> None:
        session.remove_at(0)
        assert session.is_modified() is True

    def test_invalid_entries_are_not_counted(self, session: SettingsSession) -> None:
        index = session.append("Artifact")
        assert session.is_modified() is False
        session.remove_at(index)
        assert session.is_modified() is False

    def test_polling_does_not_log_dropped_entries(
        self, session: SettingsSession, mock_log_path: Path
    ) -> None:
        session.append("Artifact")
        assert session.is_modified() is False
        session.materialize()
        text = mock_log_path.read_text(encoding="utf-8") if mock_log_path.exists() else ""
        assert "entry_dropped" not in text

    def test_extension_case_is_not_a_change(self, session: SettingsSession) -> None:
        session.set_field(2, "extension", "PY")
        assert session.is_modified() is False

    def test_edit_then_revert(self, session: SettingsSession) -> None:
        session.set_field(2, "command", "pylsp")
        assert session.is_modified() is True
        session.set_field(2, "command", "python -m pyls")
        assert session.is_modified() is False

    def test_compares_against_given_baseline(self, session: SettingsSession) -> None:
        other = DefinitionRegistry([RawCommandDefinition(extension="py", command=("pyls",))])
        assert session.is_modified(other) is True

    def test_entry_renamed_to_other_extension(self, session: SettingsSession) -> None:
        session.set_field(2, "extension", "pyi")
        assert session.is_modified() is True


class TestMaterialize:
    def test_drops_invalid_entries(self, session: SettingsSession) -> None:
        session.append("RawCommand", ["", "pyls"])
        session.append("Executable", ["c", "clangd", "'unterminated"])
        candidate = session.materialize()
        assert len(candidate) == 3
        assert "c" not in candidate

    def test_later_duplicate_wins(self, session: SettingsSession) -> None:
        session.append("RawCommand", ["py", "pylsp"])
        candidate = session.materialize()
        assert len(candidate) == 3
        assert candidate.get("py") == RawCommandDefinition(extension="py", command=("pylsp",))

    def test_does_not_touch_baseline(
        self, session: SettingsSession, baseline: DefinitionRegistry
    ) -> None:
        before = baseline.copy()
        session.remove_at(0)
        session.materialize()
        assert baseline == before


class TestCommit:
    def test_commit_replaces_baseline(self) -> None:
        a0 = ExecutableDefinition(extension="a", path="/bin/a0")
        b0 = ExecutableDefinition(extension="b", path="/bin/b0")
        baseline = DefinitionRegistry([a0, b0])
        settings_session = SettingsSession(baseline)
        settings_session.reset()

        settings_session.set_field(0, "path", "/bin/a1")
        settings_session.remove_at(1)
        committed = settings_session.commit()

        expected = DefinitionRegistry([ExecutableDefinition(extension="a", path="/bin/a1")])
        assert baseline == expected
        assert committed == expected
        assert "b" not in baseline
        assert settings_session.state is SessionState.COMMITTED
        assert settings_session.is_modified() is False

    def test_commit_excludes_invalid_entries(
        self, session: SettingsSession, baseline: DefinitionRegistry, mock_log_path: Path
    ) -> None:
        session.append("Artifact", ["", "g:a:1", "Main", ""])
        session.commit()
        assert len(baseline) == 3
        assert all(definition.extension for definition in baseline)

        events = [json.loads(line) for line in mock_log_path.read_text().splitlines()]
        committed = [e for e in events if e["kind"] == "definitions_committed"]
        assert committed[-1]["dropped_count"] == 1
        assert committed[-1]["committed_count"] == 3
        assert any(e["kind"] == "entry_dropped" for e in events)

    def test_commit_notifies_restart(self, baseline: DefinitionRegistry) -> None:
        notify = MagicMock()
        settings_session = SettingsSession(baseline, notify=notify)
        settings_session.reset()
        settings_session.commit()
        notify.assert_called_once_with(RESTART_NOTICE)

    def test_commit_into_given_baseline(self, session: SettingsSession) -> None:
        target = DefinitionRegistry([ArtifactDefinition(extension="java")])
        session.commit(target)
        assert target.extensions() == ["scala", "rs", "py"]
        assert "java" not in target

    def test_commit_empty_list_clears_baseline(
        self, session: SettingsSession, baseline: DefinitionRegistry
    ) -> None:
        while len(session.entries):
            session.remove_at(0)
        session.commit()
        assert len(baseline) == 0
