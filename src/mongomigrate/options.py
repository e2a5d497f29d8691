from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .exceptions import UnknownActionError


class Action(str, enum.Enum):
    EXPORT = "export"
    IMPORT = "import"

    @classmethod
    def parse(cls, value: Union[str, "Action"]) -> "Action":
        if isinstance(value, cls):
            return value
        text = (value or "").strip().lower()
        for member in cls:
            if member.value == text:
                return member
        raise UnknownActionError(text)


@dataclass(frozen=True)
class Connection:
    database: str = ""
    host: str = "localhost"
    port: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None

    @property
    def address(self) -> str:
        host = self.host or "localhost"
        return f"{host}:{self.port}" if self.port else host


@dataclass(frozen=True)
class ExportOptions:
    output: str = ""
    collections: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ImportOptions:
    source: str = ""


@dataclass(frozen=True)
class ToolConfig:
    """Names of the external MongoDB executables and how long to wait for them."""

    export_bin: str = "mongoexport"
    import_bin: str = "mongoimport"
    shell_bin: str = "mongo"
    bin_dir: Optional[str] = None
    timeout: Optional[float] = None

    def executable(self, name: str) -> str:
        if self.bin_dir:
            return os.path.join(self.bin_dir, name)
        return name

    def for_action(self, action: Action) -> str:
        return self.executable(self.export_bin if action is Action.EXPORT else self.import_bin)

    @property
    def shell(self) -> str:
        return self.executable(self.shell_bin)


@dataclass(frozen=True)
class MigrationOptions:
    connection: Connection
    mode: Union[ExportOptions, ImportOptions]

    @property
    def action(self) -> Action:
        return Action.EXPORT if isinstance(self.mode, ExportOptions) else Action.IMPORT

    @property
    def output(self) -> Optional[str]:
        return self.mode.output if isinstance(self.mode, ExportOptions) else None

    @property
    def source(self) -> Optional[str]:
        return self.mode.source if isinstance(self.mode, ImportOptions) else None

    @property
    def collections(self) -> List[str]:
        return list(self.mode.collections) if isinstance(self.mode, ExportOptions) else []

    @property
    def location(self) -> str:
        return (self.output if self.action is Action.EXPORT else self.source) or ""

    def validation_errors(self) -> List[str]:
        """Every problem that prevents the run, collected rather than stopping at the first."""
        errors: List[str] = []
        if not self.connection.database:
            errors.append("No database specified")

        if self.action is Action.EXPORT:
            if not self.output:
                errors.append("No output directory specified")
        elif not self.source:
            errors.append("No directory specified")
        elif not Path(self.source).exists():
            errors.append("Directory specified does not exists")
        return errors

    @classmethod
    def build(cls,
              action: Union[str, Action],
              connection: Connection,
              collections: Optional[List[str]] = None,
              output: Optional[str] = None,
              source: Optional[str] = None) -> "MigrationOptions":
        act = Action.parse(action)
        if act is Action.EXPORT:
            cleaned = [c.strip() for c in (collections or []) if c and c.strip()]
            return cls(connection, ExportOptions(output=output or "", collections=cleaned))
        return cls(connection, ImportOptions(source=source or ""))
