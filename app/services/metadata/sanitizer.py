"""Content-prefix rules for untrusted tag values.

Two rule sets exist and they intentionally differ:

* the primary ``image`` field only keeps relative / locally hosted references;
* Open Graph and Twitter Card values drop anything that looks like an absolute
  link or inline payload, but keep protocol-relative (``//``) references.
"""

from __future__ import annotations

IMAGE_REJECTED_PREFIXES: tuple[str, ...] = (
    "http",
    "//",
    "data:image/",
    "blob:",
    "file:",
    "mailto:",
)

SOCIAL_REJECTED_PREFIXES: tuple[str, ...] = (
    "http",
    "blob:",
    "image:",
    "data:",
)


def is_rejected_image(value: str) -> bool:
    """Return ``True`` if the resolved ``image`` value must be dropped."""
    return value.startswith(IMAGE_REJECTED_PREFIXES)


def is_rejected_social_value(value: str) -> bool:
    """Return ``True`` if an ``og:*`` / ``twitter:*`` value must be skipped."""
    return value.startswith(SOCIAL_REJECTED_PREFIXES)


def sanitize_image(value: str) -> str:
    """Return *value* unchanged, or ``""`` when the image rule rejects it.

    Expects the already-stripped value produced by the resolver, so leading
    whitespace never hides a rejected prefix and a kept value carries no
    surrounding whitespace.
    """
    return "" if is_rejected_image(value) else value
