"""Failure record entity."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FailureRecord:
    """A domain for which no usable expiry could be obtained."""

    domain: str
    source: str
    # Left empty by the check pipeline; the cause is only logged.
    reason: str = ""
