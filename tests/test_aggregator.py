from __future__ import annotations

from app.services.metadata.aggregator import (
    collect_all_meta_tags,
    collect_open_graph,
    collect_twitter_card,
)
from app.services.metadata.resolver import attr_text


class TestAllMetaTags:
    def test_identifier_priority(self, soup):
        doc = soup(
            '<meta name="n" property="p" content="by-name">'
            '<meta property="og:type" http-equiv="x" content="by-property">'
            '<meta http-equiv="refresh" content="30">'
        )
        assert collect_all_meta_tags(doc) == {
            "n": "by-name",
            "og:type": "by-property",
            "refresh": "30",
        }

    def test_last_occurrence_wins(self, soup):
        doc = soup(
            '<meta name="keywords" content="first">'
            '<meta name="keywords" content="second">'
        )
        assert collect_all_meta_tags(doc) == {"keywords": "second"}

    def test_requires_identifier_and_content(self, soup):
        doc = soup(
            '<meta charset="utf-8">'
            '<meta name="empty" content="">'
            '<meta content="orphan">'
        )
        assert collect_all_meta_tags(doc) == {}

    def test_unsanitized_values_kept(self, soup):
        doc = soup('<meta property="og:image" content="https://cdn/x.png">')
        assert collect_all_meta_tags(doc) == {"og:image": "https://cdn/x.png"}


class TestOpenGraph:
    def test_collects_og_properties(self, soup):
        doc = soup(
            '<meta property="og:title" content="Title">'
            '<meta property="og:type" content="article">'
            '<meta name="og:ignored" content="name attribute is not used">'
        )
        assert collect_open_graph(doc) == {"og:title": "Title", "og:type": "article"}

    def test_rejected_prefixes_skipped(self, soup):
        doc = soup(
            '<meta property="og:url" content="https://example.com/">'
            '<meta property="og:image" content="data:image/png;base64,AAA">'
            '<meta property="og:video" content="blob:https://x/1">'
            '<meta property="og:audio" content="image:foo">'
            '<meta property="og:image:alt" content="//cdn/relative.png">'
        )
        assert collect_open_graph(doc) == {"og:image:alt": "//cdn/relative.png"}

    def test_rejected_value_does_not_clear_earlier_entry(self, soup):
        doc = soup(
            '<meta property="og:image" content="/a.png">'
            '<meta property="og:image" content="http://b/b.png">'
        )
        assert collect_open_graph(doc) == {"og:image": "/a.png"}

    def test_last_accepted_value_wins(self, soup):
        doc = soup(
            '<meta property="og:title" content="one">'
            '<meta property="og:title" content="two">'
        )
        assert collect_open_graph(doc) == {"og:title": "two"}


class TestTwitterCard:
    def test_collects_twitter_names(self, soup):
        doc = soup(
            '<meta name="twitter:card" content="summary_large_image">'
            '<meta name="twitter:site" content="@example">'
            '<meta property="twitter:title" content="property attribute is not used">'
        )
        assert collect_twitter_card(doc) == {
            "twitter:card": "summary_large_image",
            "twitter:site": "@example",
        }

    def test_rejected_prefixes_skipped(self, soup):
        doc = soup(
            '<meta name="twitter:image" content="http://x/y.png">'
            '<meta name="twitter:player" content="file:///tmp/x">'
        )
        # file: is only rejected for the primary image field
        assert collect_twitter_card(doc) == {"twitter:player": "file:///tmp/x"}

    def test_maps_are_independent(self, soup):
        doc = soup('<meta name="twitter:title" property="og:title" content="Both">')
        assert collect_open_graph(doc) == {"og:title": "Both"}
        assert collect_twitter_card(doc) == {"twitter:title": "Both"}
        assert collect_all_meta_tags(doc) == {"twitter:title": "Both"}


class TestAttrText:
    def test_multi_valued_attribute_is_joined(self, soup):
        link = soup('<link rel="shortcut icon" href="/s.ico">').find("link")
        assert attr_text(link, "rel") == "shortcut icon"

    def test_missing_attribute_or_tag(self, soup):
        meta = soup('<meta name="x">').find("meta")
        assert attr_text(meta, "content") == ""
        assert attr_text(None, "content") == ""
