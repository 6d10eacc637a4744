from __future__ import annotations

from typing import Any

from pydantic import AnyUrl, ValidationError


def is_valid_url(value: Any) -> bool:
    """Return ``True`` if *value* is an absolute URL with a scheme and a host.

    Purely syntactic; no DNS lookup or connection is attempted.
    """
    if not isinstance(value, str):
        return False
    try:
        parsed = AnyUrl(value)
    except ValidationError:
        return False
    return bool(parsed.scheme) and bool(parsed.host)
