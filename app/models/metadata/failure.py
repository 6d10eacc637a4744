"""Failure values exchanged between the fetcher and the classifier.

``FetchFailure`` is produced by the transport with an explicit ``kind``
discriminant; ``ClassifiedFailure`` is the caller-facing outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    UPSTREAM_RESPONSE = "upstream-response"
    NETWORK = "network"
    ABORTED = "aborted"
    OTHER = "other"


class NetworkCode(str, Enum):
    HOST_UNRESOLVABLE = "host-unresolvable"
    CONNECTION_REFUSED = "connection-refused"
    TIMED_OUT = "timed-out"


class FailureCategory(str, Enum):
    NOT_FOUND = "not-found"
    CLIENT_ERROR = "client-error"
    SERVER_ERROR = "server-error"
    NETWORK_ERROR = "network-error"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FetchFailure:
    kind: FailureKind
    message: str = ""
    status: Optional[int] = None
    code: Optional[NetworkCode] = None

    @classmethod
    def upstream(cls, status: int, message: str = "") -> FetchFailure:
        return cls(FailureKind.UPSTREAM_RESPONSE, message=message, status=status)

    @classmethod
    def network(cls, code: NetworkCode, message: str = "") -> FetchFailure:
        return cls(FailureKind.NETWORK, message=message, code=code)

    @classmethod
    def aborted(cls, message: str = "") -> FetchFailure:
        return cls(FailureKind.ABORTED, message=message)

    @classmethod
    def other(cls, message: str) -> FetchFailure:
        return cls(FailureKind.OTHER, message=message)


@dataclass(frozen=True)
class ClassifiedFailure:
    category: FailureCategory
    message: str
    status: Optional[int] = None
    error: Optional[str] = None
