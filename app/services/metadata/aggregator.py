from __future__ import annotations

from bs4 import BeautifulSoup

from app.services.metadata.resolver import attr_text
from app.services.metadata.sanitizer import is_rejected_social_value


def collect_all_meta_tags(soup: BeautifulSoup) -> dict[str, str]:
    """Map every ``<meta>`` identifier to its content.

    The identifier is the first non-empty of ``name``, ``property`` and
    ``http-equiv``.  Later elements overwrite earlier ones.
    """
    tags: dict[str, str] = {}
    for meta in soup.find_all("meta"):
        identifier = (
            attr_text(meta, "name")
            or attr_text(meta, "property")
            or attr_text(meta, "http-equiv")
        )
        content = attr_text(meta, "content")
        if identifier and content:
            tags[identifier] = content
    return tags


def _collect_prefixed(soup: BeautifulSoup, attribute: str, prefix: str) -> dict[str, str]:
    collected: dict[str, str] = {}
    for meta in soup.select(f'meta[{attribute}^="{prefix}"]'):
        key = attr_text(meta, attribute)
        content = attr_text(meta, "content")
        if not (key and content):
            continue
        if is_rejected_social_value(content):
            continue
        collected[key] = content
    return collected


def collect_open_graph(soup: BeautifulSoup) -> dict[str, str]:
    """``og:*`` properties, minus values rejected by the social rule."""
    return _collect_prefixed(soup, "property", "og:")


def collect_twitter_card(soup: BeautifulSoup) -> dict[str, str]:
    """``twitter:*`` names, minus values rejected by the social rule."""
    return _collect_prefixed(soup, "name", "twitter:")
