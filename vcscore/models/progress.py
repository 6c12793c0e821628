"""Progress events parsed from git's stderr."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProgressPercentage:
    phase: str
    percent: int


@dataclass(frozen=True)
class ProgressPhase:
    name: str


@dataclass(frozen=True)
class ProgressMessage:
    message: str


ProgressEvent = ProgressPercentage | ProgressPhase | ProgressMessage
