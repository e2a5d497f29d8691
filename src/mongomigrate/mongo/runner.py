import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    command: str
    stdout: str = ""
    stderr: str = ""
    returncode: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ProcessRunner:
    """
    Runs one external command to completion and captures its streams.

    Failures are reported through ``ProcessResult.error``; ``run`` never
    raises because a command could not be spawned, exited non-zero or
    timed out.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout

    def run(self, command: str) -> ProcessResult:
        try:
            argv = shlex.split(command)
        except ValueError as e:
            return ProcessResult(command, error=f"Cannot parse command: {e}")
        if not argv:
            return ProcessResult(command, error="Empty command")

        logger.debug("Running: %s", argv[0])
        try:
            proc = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            return ProcessResult(
                command,
                stdout=_text(e.stdout),
                stderr=_text(e.stderr),
                error=f"Timed out after {self.timeout}s",
            )
        except OSError as e:
            return ProcessResult(command, error=f"Cannot start {argv[0]!r}: {e}")

        error = None
        if proc.returncode != 0:
            detail = (proc.stderr or "").strip().splitlines()
            error = f"Exit status {proc.returncode}"
            if detail:
                error += f": {detail[-1]}"
        return ProcessResult(command, proc.stdout or "", proc.stderr or "", proc.returncode, error)


def _text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
