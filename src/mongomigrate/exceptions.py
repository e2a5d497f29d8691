from typing import List, Optional


class MigrationError(Exception):
    """Base class for errors that abort a whole migration run."""


class UnknownActionError(MigrationError):
    def __init__(self, action: str) -> None:
        super().__init__(f"Unrecognized action: {action!r}")
        self.action = action


class ValidationError(MigrationError):
    def __init__(self, errors: List[str]) -> None:
        super().__init__("Invalid options: " + "; ".join(errors))
        self.errors = list(errors)


class ResolutionError(MigrationError):
    """The working set of collections could not be determined."""

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message if not detail else f"{message}. ERROR: {detail}")
        self.detail = detail
