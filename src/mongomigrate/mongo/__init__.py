"""Interaction with the MongoDB command-line tools."""

from .commands import build_command, command_for, mask_command
from .resolver import CollectionResolver
from .runner import ProcessResult, ProcessRunner

__all__ = [
    "build_command",
    "command_for",
    "mask_command",
    "CollectionResolver",
    "ProcessResult",
    "ProcessRunner",
]
