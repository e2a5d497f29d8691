"""Sequential MongoDB collection export/import driven by the mongo command-line tools."""

from .core import MigrationCoordinator, RunSummary, report
from .options import Action, Connection, ExportOptions, ImportOptions, MigrationOptions, ToolConfig

__version__ = "0.1.0"

__all__ = [
    "Action",
    "Connection",
    "ExportOptions",
    "ImportOptions",
    "MigrationCoordinator",
    "MigrationOptions",
    "RunSummary",
    "ToolConfig",
    "report",
]
