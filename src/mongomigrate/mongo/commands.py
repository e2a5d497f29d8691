import shlex
from typing import List, Optional, Union

from ..options import Action, MigrationOptions, ToolConfig
from ..exceptions import UnknownActionError

JSON_SUFFIX = ".json"
MASK = "****"


def export_path(output: str, collection: str) -> str:
    """Destination file for one collection.

    A directory output becomes ``<output>/<collection>.json``; a single
    ``.json`` file is fanned out into ``<name>_<collection>.json``.
    """
    if not output.endswith(JSON_SUFFIX):
        return f"{output.rstrip('/') or output}/{collection}{JSON_SUFFIX}"
    return f"{output[:-len(JSON_SUFFIX)]}_{collection}{JSON_SUFFIX}"


def import_path(source: str, collection: str) -> str:
    if source.endswith(JSON_SUFFIX):
        return source
    return f"{source.rstrip('/') or source}/{collection}{JSON_SUFFIX}"


def connection_args(host: Optional[str], port: Optional[str],
                    user: Optional[str], password: Optional[str]) -> List[str]:
    address = host or "localhost"
    if port:
        address += f":{port}"

    args = ["--host", address]
    if user:
        args += ["-u", user]
        if password:
            args += ["-p", password]
    return args


def build_command(action: Union[str, Action],
                  host: Optional[str],
                  port: Optional[str],
                  user: Optional[str],
                  password: Optional[str],
                  database: str,
                  collection: str,
                  output: Optional[str] = None,
                  source: Optional[str] = None,
                  tools: Optional[ToolConfig] = None) -> str:
    """Return the mongoexport/mongoimport command line for one collection.

    An unrecognized action yields an empty string. Every value is quoted for
    the shell, so the result can be safely split back with ``shlex.split``.
    """
    try:
        act = Action.parse(action)
    except UnknownActionError:
        return ""
    tools = tools or ToolConfig()

    argv = [tools.for_action(act)]
    argv += connection_args(host, port, user, password)
    argv += ["-d", database, "-c", collection]

    if act is Action.EXPORT:
        argv += ["-o", export_path(output or "", collection)]
    else:
        argv.append(import_path(source or "", collection))
    return shlex.join(argv)


def command_for(options: MigrationOptions, collection: str,
                tools: Optional[ToolConfig] = None) -> str:
    conn = options.connection
    return build_command(
        options.action,
        conn.host, conn.port, conn.user, conn.password,
        conn.database, collection,
        output=options.output, source=options.source,
        tools=tools,
    )


def mask_command(command: str) -> str:
    """Hide the value following ``-p`` so commands can be logged."""
    try:
        parts = shlex.split(command)
    except ValueError:
        return command
    masked = list(parts)
    for i, token in enumerate(parts[:-1]):
        if token == "-p":
            masked[i + 1] = MASK
    return shlex.join(masked)
