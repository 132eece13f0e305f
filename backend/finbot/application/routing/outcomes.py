"""Invocation outcomes and lifecycle states."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class InvocationState(str, Enum):
    RECEIVED = "received"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    RESOLUTION_FAILED = "resolution_failed"
    INVOKING = "invoking"
    COMPLETED = "completed"


class Outcome:
    """Base class for the result of one invocation. Exactly one reply per outcome."""

    kind: str = "outcome"

    @property
    def cause(self) -> BaseException | None:
        return None


@dataclass(frozen=True)
class Success(Outcome):
    value: Any
    kind = "success"


@dataclass(frozen=True)
class UnknownCommand(Outcome):
    command_name: str
    kind = "unknown_command"


@dataclass(frozen=True)
class UnsupportedOperation(Outcome):
    command_name: str | None
    # None when the command needs an operation and none was given
    operation_name: str | None
    kind = "unsupported_operation"


@dataclass(frozen=True)
class ResolutionFailure(Outcome):
    capability: type
    error: BaseException
    kind = "resolution_failure"

    @property
    def cause(self) -> BaseException:
        return self.error


@dataclass(frozen=True)
class InvocationFailure(Outcome):
    operation_name: str
    error: BaseException
    kind = "invocation_failure"

    @property
    def cause(self) -> BaseException:
        return self.error
