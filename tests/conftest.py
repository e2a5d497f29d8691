from typing import Callable, List, Optional

import pytest

from mongomigrate.mongo.runner import ProcessResult
from mongomigrate.options import Connection, MigrationOptions


class FakeRunner:
    """Stands in for ProcessRunner; records every command instead of spawning it."""

    def __init__(self,
                 fail_when: Optional[Callable[[str], bool]] = None,
                 stdout: str = "") -> None:
        self.fail_when = fail_when
        self.stdout = stdout
        self.commands: List[str] = []

    def run(self, command: str) -> ProcessResult:
        self.commands.append(command)
        if self.fail_when is not None and self.fail_when(command):
            return ProcessResult(command, stderr="failed", returncode=1, error="Exit status 1: failed")
        return ProcessResult(command, stdout=self.stdout, returncode=0)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def connection() -> Connection:
    return Connection(database="shop", host="localhost", port="27017")


@pytest.fixture
def export_options(connection, tmp_path) -> MigrationOptions:
    return MigrationOptions.build("export", connection,
                                  collections=["users", "orders", "items"],
                                  output=str(tmp_path / "dump"))
