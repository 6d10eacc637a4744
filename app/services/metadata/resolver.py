"""Ordered-fallback resolution of scalar metadata fields.

Every field owns a tuple of lookups.  Lookups are evaluated lazily in order
and the first one yielding a non-blank (after ``strip()``) value wins; a field
whose lookups all come back blank resolves to ``""``.

Meta lookups read the ``content`` of the *first* element matching the
selector, even when a later duplicate would have a non-empty value.
"""

from __future__ import annotations

from typing import Callable

from bs4 import BeautifulSoup, Tag

Lookup = Callable[[BeautifulSoup], str]


def attr_text(tag: Tag | None, name: str) -> str:
    """String value of attribute *name* on *tag*, or ``""`` when absent."""
    if tag is None:
        return ""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        # multi-valued attributes (e.g. rel) come back as lists
        return " ".join(value)
    return value


def first_attr(selector: str, attribute: str) -> Lookup:
    """Lookup reading *attribute* from the first element matching *selector*."""

    def lookup(soup: BeautifulSoup) -> str:
        return attr_text(soup.select_one(selector), attribute)

    lookup.__name__ = f"{selector}@{attribute}"
    return lookup


def meta_name(name: str) -> Lookup:
    return first_attr(f'meta[name="{name}"]', "content")


def meta_property(prop: str) -> Lookup:
    return first_attr(f'meta[property="{prop}"]', "content")


def meta_http_equiv(value: str) -> Lookup:
    return first_attr(f'meta[http-equiv="{value}" i]', "content")


def link_href(rel: str) -> Lookup:
    return first_attr(f'link[rel="{rel}" i]', "href")


def all_text(selector: str) -> Lookup:
    """Lookup concatenating the text of every element matching *selector*."""

    def lookup(soup: BeautifulSoup) -> str:
        return "".join(tag.get_text() for tag in soup.select(selector))

    lookup.__name__ = f"{selector}@text"
    return lookup


def first_text(selector: str) -> Lookup:
    def lookup(soup: BeautifulSoup) -> str:
        tag = soup.select_one(selector)
        return tag.get_text() if tag is not None else ""

    lookup.__name__ = f"{selector}@first-text"
    return lookup


FIELD_CANDIDATES: dict[str, tuple[Lookup, ...]] = {
    "title": (
        all_text("title"),
        first_text("h1"),
    ),
    "description": (
        meta_name("description"),
        meta_property("og:description"),
        meta_name("twitter:description"),
        meta_name("summary"),
    ),
    "author": (
        meta_name("author"),
        meta_property("article:author"),
        meta_name("twitter:creator"),
        link_href("author"),
    ),
    "pub_date": (
        meta_property("article:published_time"),
        meta_name("date"),
        meta_name("pubdate"),
        meta_name("DC.date.issued"),
        first_attr("time[datetime]", "datetime"),
    ),
    "image": (
        meta_property("og:image"),
        meta_name("twitter:image"),
        meta_name("image"),
        first_attr("img", "src"),
    ),
    "robots": (meta_name("robots"),),
    "keywords": (meta_name("keywords"),),
    "language": (
        first_attr("html", "lang"),
        meta_http_equiv("content-language"),
        meta_name("language"),
    ),
    "viewport": (meta_name("viewport"),),
    "charset": (
        first_attr("meta[charset]", "charset"),
        meta_http_equiv("content-type"),
    ),
    "theme_color": (meta_name("theme-color"),),
    "favicon": (
        link_href("icon"),
        link_href("shortcut icon"),
        link_href("favicon"),
    ),
}


def resolve_field(soup: BeautifulSoup, candidates: tuple[Lookup, ...]) -> str:
    """Return the first non-blank candidate value, stripped, or ``""``."""
    for lookup in candidates:
        value = lookup(soup).strip()
        if value:
            return value
    return ""


def resolve_fields(soup: BeautifulSoup) -> dict[str, str]:
    """Resolve every scalar field.  Values are raw, i.e. not yet sanitized."""
    return {
        field: resolve_field(soup, candidates)
        for field, candidates in FIELD_CANDIDATES.items()
    }
