"""Error types raised or reported by the named manager."""

from __future__ import annotations

from enum import Enum, auto
from pathlib import Path


class ErrorKind(Enum):
    """Coarse classification attached to every manager error."""

    INVALID_ARGUMENT = auto()
    NOT_FOUND = auto()
    SYSTEM = auto()


class PublishStep(Enum):
    """The file operation that failed while publishing resolv.conf."""

    OPEN = "open"
    WRITE = "write"
    CLOSE = "close"
    RENAME = "replace"


class NamedManagerError(Exception):
    kind: ErrorKind = ErrorKind.SYSTEM


class InvalidArgumentError(NamedManagerError, ValueError):
    kind = ErrorKind.INVALID_ARGUMENT


class SourceNotFoundError(NamedManagerError, LookupError):
    kind = ErrorKind.NOT_FOUND


class PublishError(NamedManagerError):
    """An OS level failure while installing the resolver configuration.

    Attributes
    ----------
    step:
        Which part of the temp-file/rename sequence failed.
    path:
        The file the failing operation was applied to.
    strerror:
        The underlying OS error text.
    """

    kind = ErrorKind.SYSTEM

    def __init__(self, step: PublishStep, path: Path, strerror: str) -> None:
        self.step = step
        self.path = path
        self.strerror = strerror
        super().__init__(f"Could not {step.value} {path}: {strerror}")

    @classmethod
    def from_os_error(cls, step: PublishStep, path: Path, exc: Exception) -> "PublishError":
        return cls(step, path, getattr(exc, "strerror", None) or str(exc))
