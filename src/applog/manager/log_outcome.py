from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional

from src.applog.targets.target_exceptions import WriteError

class LogOutcome(Enum):
    WRITTEN = auto()
    NO_TARGET = auto()
    SUSPENDED = auto()
    TYPE_DISABLED = auto()
    EMPTY_AFTER_SANITIZE = auto()
    FAILED = auto()

@dataclass(frozen=True)
class LogResult:
    """
    Result of a single log() call.

    Everything except FAILED counts as success: skipped records
    are silent by design.
    """
    outcome: LogOutcome
    error: Optional[WriteError] = None

    @property
    def ok(self) -> bool:
        return self.outcome != LogOutcome.FAILED

    def __bool__(self) -> bool:
        return self.ok

    @property
    def written(self) -> bool:
        return self.outcome == LogOutcome.WRITTEN
