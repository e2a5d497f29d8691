"""
Core package: orchestration of migration runs.
This package exposes the MigrationCoordinator class which ties together
the collection resolver, the command builder and the process runner.
"""

from .coordinator import MigrationCoordinator
from .summary import CommandRecord, RunSummary, report, write_report

__all__ = [
    "MigrationCoordinator",
    "CommandRecord",
    "RunSummary",
    "report",
    "write_report",
]
