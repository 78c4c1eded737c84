from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from lsp_launch.definitions import (
    ArtifactDefinition,
    DefinitionRegistry,
    ExecutableDefinition,
    RawCommandDefinition,
)


@pytest.fixture
def artifact_def() -> ArtifactDefinition:
    return ArtifactDefinition(
        extension="scala",
        package="ch.epfl.lamp:dotty-language-server_0.3:0.3.0-RC2",
        main_class="dotty.tools.languageserver.Main",
        args=("-stdio",),
    )


@pytest.fixture
def exe_def() -> ExecutableDefinition:
    return ExecutableDefinition(extension="rs", path="/opt/rls/rls", args=("--cli",))


@pytest.fixture
def raw_def() -> RawCommandDefinition:
    return RawCommandDefinition(extension="py", command=("python", "-m", "pyls"))


@pytest.fixture
def baseline(
    artifact_def: ArtifactDefinition,
    exe_def: ExecutableDefinition,
    raw_def: RawCommandDefinition,
) -> DefinitionRegistry:
    return DefinitionRegistry([artifact_def, exe_def, raw_def])


@pytest.fixture(autouse=True)
def mock_log_path(tmp_path: Path) -> Generator[Path, None, None]:
    """Auto-mock LOG_PATH and enable event logging for all tests."""
    log_file = tmp_path / "test.log"
    with (
        patch("lsp_launch.config.settings.LSP_LAUNCH_LOGGING", True),
        patch("lsp_launch.config.settings.LOG_PATH", log_file),
    ):
        yield log_file
