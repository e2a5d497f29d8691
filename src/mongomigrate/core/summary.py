import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import pandas as pd

from ..mongo.commands import mask_command
from ..options import Action

logger = logging.getLogger(__name__)

REPORT_COLUMNS = ["collection", "status", "command", "error"]


@dataclass(frozen=True)
class CommandRecord:
    collection: str
    command: str
    succeeded: bool
    error: Optional[str] = None


@dataclass
class RunSummary:
    action: Action
    database: str
    location: str
    processed: List[CommandRecord] = field(default_factory=list)
    failed: List[CommandRecord] = field(default_factory=list)

    @property
    def processed_count(self) -> int:
        return len(self.processed)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    def records(self) -> List[CommandRecord]:
        return [*self.processed, *self.failed]


def report(summary: RunSummary, log: Optional[logging.Logger] = None) -> None:
    log = log or logger
    log.info("%s collections processed", summary.processed_count)
    log.info("%s errors", summary.failed_count)

    if not summary.processed:
        return
    if summary.action is Action.EXPORT:
        log.info("Database '%s' successfully exported to '%s'",
                 summary.database, summary.location)
    else:
        log.info("Imported collections from '%s' successfully to database '%s'",
                 summary.location, summary.database)


def to_frame(summary: RunSummary) -> pd.DataFrame:
    rows = [
        {
            "collection": rec.collection,
            "status": "processed" if rec.succeeded else "failed",
            "command": mask_command(rec.command),
            "error": rec.error or "",
        }
        for rec in summary.records()
    ]
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def write_report(summary: RunSummary, path: Path) -> Path:
    """Write one row per attempted collection; the format follows the file suffix."""
    suffix = path.suffix.lower()
    if suffix not in (".csv", ".json"):
        raise ValueError(f"Unsupported report format {path.suffix!r} (use .csv or .json)")

    df = to_frame(summary)
    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".csv":
        df.to_csv(path, index=False)
    else:
        df.to_json(path, orient="records", indent=2)
    logger.info("Wrote run report with %d row(s) to %s", len(df), path)
    return path
