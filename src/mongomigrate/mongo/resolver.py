import logging
import os
import shlex
from pathlib import Path
from typing import List, Optional

from ..options import Action, Connection, MigrationOptions, ToolConfig
from ..exceptions import ResolutionError
from .commands import JSON_SUFFIX
from .runner import ProcessRunner

logger = logging.getLogger(__name__)

LIST_COLLECTIONS_JS = "db.getCollectionNames().join()"


def collection_name(filename: str) -> str:
    """Collection encoded in an artifact file name: the base name up to the first dot."""
    return os.path.basename(filename).split(".")[0]


def introspection_command(conn: Connection, tools: Optional[ToolConfig] = None) -> str:
    tools = tools or ToolConfig()
    argv = [tools.shell, f"{conn.address}/{conn.database}"]
    if conn.user:
        argv += ["-u", conn.user]
        if conn.password:
            argv += ["-p", conn.password]
    argv += ["--quiet", "--eval", LIST_COLLECTIONS_JS]
    return shlex.join(argv)


def parse_collection_names(stdout: str) -> List[str]:
    """
    Pull the comma-joined names out of the shell's output.

    The result is printed on the last line; anything before it is banner
    text (connection URL with the database name, versions) from shells that
    ignore ``--quiet``. Collection names may contain the database name, so
    the output is never cut at it.
    """
    lines = [ln.strip() for ln in stdout.replace("\r\n", "\n").split("\n") if ln.strip()]
    if not lines:
        return []
    return [name.strip() for name in lines[-1].split(",") if name.strip()]


class CollectionResolver:
    def __init__(self,
                 runner: Optional[ProcessRunner] = None,
                 tools: Optional[ToolConfig] = None) -> None:
        self._runner = runner or ProcessRunner()
        self._tools = tools or ToolConfig()

    def resolve(self, options: MigrationOptions) -> List[str]:
        if options.action is Action.EXPORT:
            if options.collections:
                return list(options.collections)
            return self.from_database(options.connection)

        source = options.source or ""
        if source.endswith(JSON_SUFFIX):
            return [collection_name(source)]
        return self.from_directory(Path(source))

    def from_database(self, conn: Connection) -> List[str]:
        command = introspection_command(conn, self._tools)
        result = self._runner.run(command)
        if not result.ok:
            raise ResolutionError("Cannot get collection names from database", result.error)

        names = parse_collection_names(result.stdout)
        logger.info("Found %d collection(s) in database %r", len(names), conn.database)
        return names

    def from_directory(self, directory: Path) -> List[str]:
        try:
            entries = sorted(p for p in directory.iterdir() if p.is_file())
        except OSError as e:
            raise ResolutionError(f"Cannot list directory {directory}", str(e)) from e

        names = [collection_name(p.name) for p in entries if p.name.endswith(JSON_SUFFIX)]
        names = [n for n in names if n]
        logger.info("Found %d collection file(s) in %s", len(names), directory)
        return names
