from lsp_launch.definitions import (
    ArtifactDefinition,
    DefinitionRegistry,
    ExecutableDefinition,
    RawCommandDefinition,
)


class TestDefinitionRegistry:
    def test_iterates_in_insertion_order(self, baseline: DefinitionRegistry) -> None:
        assert baseline.extensions() == ["scala", "rs", "py"]

    def test_last_write_wins_for_duplicate_extension(self) -> None:
        first = RawCommandDefinition(extension="py", command=("pyls",))
        second = ExecutableDefinition(extension="PY", path="/usr/bin/pylsp")
        registry = DefinitionRegistry([first, second])
        assert len(registry) == 1
        assert registry.get("py") == second

    def test_lookup_is_case_insensitive(self, baseline: DefinitionRegistry) -> None:
        assert baseline.get(".RS") is not None
        assert "Scala" in baseline
        assert "go" not in baseline
        assert 3 not in baseline

    def test_get_for_file(
        self, baseline: DefinitionRegistry, raw_def: RawCommandDefinition
    ) -> None:
        assert baseline.get_for_file("pkg/module.py") == raw_def
        assert baseline.get_for_file("main.go") is None

    def test_remove(self, baseline: DefinitionRegistry) -> None:
        assert baseline.remove("rs") is True
        assert baseline.remove("rs") is False
        assert baseline.extensions() == ["scala", "py"]

    def test_replace_all_is_destructive(self, baseline: DefinitionRegistry) -> None:
        replacement = ArtifactDefinition(extension="java", package="g:a:1")
        baseline.replace_all([replacement])
        assert baseline.values() == [replacement]

    def test_replace_all_keeps_contents_when_iteration_fails(
        self, baseline: DefinitionRegistry
    ) -> None:
        def broken():
            yield ArtifactDefinition(extension="java")
            raise RuntimeError("boom")

        before = baseline.copy()
        try:
            baseline.replace_all(broken())
        except RuntimeError:
            pass
        assert baseline == before

    def test_equality_ignores_order(
        self,
        artifact_def: ArtifactDefinition,
        exe_def: ExecutableDefinition,
    ) -> None:
        assert DefinitionRegistry([artifact_def, exe_def]) == DefinitionRegistry(
            [exe_def, artifact_def]
        )
        assert DefinitionRegistry([artifact_def]) != DefinitionRegistry([exe_def])

    def test_copy_is_independent(self, baseline: DefinitionRegistry) -> None:
        clone = baseline.copy()
        clone.remove("py")
        assert "py" in baseline
        assert len(clone) == 2
