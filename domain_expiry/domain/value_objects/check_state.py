"""Per-domain check state value object."""

from enum import StrEnum, auto


class CheckState(StrEnum):
    """Where a single domain stands within one check pass."""

    UNVERIFIED = auto()
    CACHED_FRESH = auto()
    STALE_RECHECK = auto()
    QUERIED = auto()
    RESOLVED = auto()
    CLASSIFIED = auto()
    LOOKUP_FAILED = auto()
    EXTRACT_FAILED = auto()

    @property
    def is_terminal(self) -> bool:
        """Check if no further transition happens in this pass."""
        return self in {
            CheckState.CACHED_FRESH,
            CheckState.CLASSIFIED,
            CheckState.LOOKUP_FAILED,
            CheckState.EXTRACT_FAILED,
        }

    @property
    def is_failure(self) -> bool:
        """Check if this state ends in a failure record."""
        return self in {CheckState.LOOKUP_FAILED, CheckState.EXTRACT_FAILED}

    def __str__(self) -> str:
        return self.value
