"""Storage models: write retry policy and tagged file operation results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Literal


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Configuration for retrying comparison file writes.

    Covers transient OS errors (file briefly locked by another process).
    """

    max_attempts: int = 3
    """Maximum attempts (1 = no retry)."""

    backoff: Literal["none", "linear", "exponential"] = "exponential"
    """Backoff strategy between retries."""

    base_delay: float = 0.05
    """Base delay in seconds for backoff calculation."""


class FileStatus(Enum):
    """Outcome tag of a save/load operation."""

    OK = auto()
    SKIPPED = auto()
    """Refused by policy (e.g. saving without both triggers). Nothing touched."""

    IO_ERROR = auto()
    DECODE_ERROR = auto()


@dataclass(frozen=True, slots=True)
class FileOpResult:
    """Tagged result of a comparison save or load."""

    status: FileStatus
    path: str
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is FileStatus.OK

    @classmethod
    def success(cls, path: str) -> FileOpResult:
        return cls(FileStatus.OK, path)

    @classmethod
    def skipped(cls, path: str, reason: str) -> FileOpResult:
        return cls(FileStatus.SKIPPED, path, reason)
