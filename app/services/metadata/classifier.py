from __future__ import annotations

from app.models.metadata.failure import (
    ClassifiedFailure,
    FailureCategory,
    FailureKind,
    FetchFailure,
)


def _classify_status(status: int) -> ClassifiedFailure | None:
    if status == 404:
        return ClassifiedFailure(
            FailureCategory.NOT_FOUND,
            "Page not found - the requested URL does not exist",
            status=404,
        )
    if 400 <= status < 500:
        return ClassifiedFailure(
            FailureCategory.CLIENT_ERROR,
            f"Client error - the server returned status {status}",
            status=status,
        )
    if status >= 500:
        return ClassifiedFailure(
            FailureCategory.SERVER_ERROR,
            f"Server error - the target server returned status {status}",
            status=status,
        )
    return None


def classify_failure(failure: FetchFailure) -> ClassifiedFailure:
    """Map a transport failure onto the caller-facing outcome taxonomy.

    First match wins:

    1. upstream response: 404, other 4xx, 5xx
    2. network code (unresolvable host, refused, connect timeout)
    3. aborted request
    4. anything else, including upstream statuses below 400
    """
    if failure.kind is FailureKind.UPSTREAM_RESPONSE and failure.status is not None:
        classified = _classify_status(failure.status)
        if classified is not None:
            return classified

    if failure.kind is FailureKind.NETWORK and failure.code is not None:
        return ClassifiedFailure(
            FailureCategory.NETWORK_ERROR,
            "Network error - unable to reach the requested URL",
            error=failure.code.value,
        )

    if failure.kind is FailureKind.ABORTED:
        return ClassifiedFailure(
            FailureCategory.TIMEOUT,
            "Request timeout - the server took too long to respond",
        )

    return ClassifiedFailure(
        FailureCategory.UNKNOWN,
        "Unable to fetch metadata from the requested URL",
        error=failure.message,
    )
