import logging
import sys
from typing import Iterable, List, Optional, Tuple

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from ..exceptions import ValidationError
from ..mongo.commands import command_for, mask_command
from ..mongo.resolver import CollectionResolver
from ..mongo.runner import ProcessRunner
from ..options import Action, MigrationOptions, ToolConfig
from .summary import CommandRecord, RunSummary

logger = logging.getLogger(__name__)


class MigrationCoordinator:
    """
    Migrates every collection of the working set, one external command at a time.

    A failing collection is recorded and the run moves on to the next one;
    only an invalid configuration or an unresolvable working set stops the
    whole run.
    """

    def __init__(self,
                 options: MigrationOptions,
                 runner: Optional[ProcessRunner] = None,
                 resolver: Optional[CollectionResolver] = None,
                 tools: Optional[ToolConfig] = None,
                 progress: Optional[bool] = None) -> None:
        self._options = options
        self._tools = tools or ToolConfig()
        self._runner = runner or ProcessRunner(timeout=self._tools.timeout)
        self._resolver = resolver or CollectionResolver(self._runner, self._tools)
        self._progress = progress
        self.logger = logger

    @property
    def options(self) -> MigrationOptions:
        return self._options

    def validate(self) -> bool:
        errors = self._options.validation_errors()
        if errors:
            self.logger.error("error: ")
            for err in errors:
                self.logger.error("\t- %s", err)
            return False
        return True

    def _show_progress(self, collections: List[str]) -> bool:
        if not collections:
            return False
        if self._progress is None:
            return sys.stderr.isatty()
        return self._progress

    def run(self) -> RunSummary:
        errors = self._options.validation_errors()
        if errors:
            raise ValidationError(errors)

        opts = self._options
        collections = self._resolver.resolve(opts)
        self.logger.info("%s %d collection(s) of database %r",
                         "Exporting" if opts.action is Action.EXPORT else "Importing",
                         len(collections), opts.connection.database)

        if self._show_progress(collections):
            # Log records go through tqdm.write so they do not tear the bar.
            with logging_redirect_tqdm():
                bar = tqdm(collections, desc=opts.action.value.capitalize(), unit="coll")
                processed, failed = self._migrate(bar)
        else:
            processed, failed = self._migrate(collections)

        return RunSummary(
            action=opts.action,
            database=opts.connection.database,
            location=opts.location,
            processed=processed,
            failed=failed,
        )

    def _migrate(self, collections: Iterable[str]) -> Tuple[List[CommandRecord], List[CommandRecord]]:
        opts = self._options
        processed: List[CommandRecord] = []
        failed: List[CommandRecord] = []

        for collection in collections:
            command = command_for(opts, collection, self._tools)
            if not command:
                self.logger.debug("No command for collection %r, skipping", collection)
                continue

            result = self._runner.run(command)
            if result.ok:
                processed.append(CommandRecord(collection, command, True))
                self.logger.info("%s processed", mask_command(command))
            else:
                failed.append(CommandRecord(collection, command, False, result.error))
                self.logger.warning("Error during executing command: %s. Omitted (%s)",
                                    mask_command(command), result.error)
        return processed, failed
