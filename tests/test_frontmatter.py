"""Tests for frontmatter parsing."""

import datetime

import pytest

from notes_publisher.core.frontmatter import (
    Frontmatter,
    derive_slug,
    parse_frontmatter,
    split_frontmatter,
)


VALID_NOTE = """---
title: hello world
slug: hello-world
status: publish
tags:
  - hello
  - world
created_at: 2023-01-01 12:00
last_modified_at: 2023-01-01 18:00
---
Hello world
This wiki link does no exist [[fake link]]"""


class TestSplitFrontmatter:
    """Tests for delimiter handling."""

    def test_splits_block_and_body(self):
        block, body = split_frontmatter("---\ntitle: A\n---\nBody\n")
        assert block == "title: A\n"
        assert body == "Body\n"

    def test_no_block(self):
        raw = "# Heading\n\nText"
        block, body = split_frontmatter(raw)
        assert block is None
        assert body == raw

    def test_block_must_start_the_file(self):
        raw = "\n---\ntitle: A\n---\nBody"
        assert split_frontmatter(raw) == (None, raw)

    def test_unclosed_block(self):
        raw = "---\ntitle: A\n\nBody without closing delimiter"
        assert split_frontmatter(raw) == (None, raw)

    def test_closing_delimiter_at_end_of_file(self):
        block, body = split_frontmatter("---\ntitle: A\n---")
        assert block == "title: A\n"
        assert body == ""

    def test_horizontal_rule_in_body_is_kept(self):
        block, body = split_frontmatter("---\ntitle: A\n---\nOne\n---\nTwo")
        assert block == "title: A\n"
        assert body == "One\n---\nTwo"

    def test_crlf_line_endings(self):
        block, body = split_frontmatter("---\r\ntitle: A\r\n---\r\nBody")
        assert "title: A" in block
        assert body == "Body"


class TestParseFrontmatter:
    """Tests for schema validation."""

    def test_valid_frontmatter(self):
        frontmatter, body = parse_frontmatter(VALID_NOTE)

        assert frontmatter == Frontmatter(
            title="hello world",
            slug="hello-world",
            status="publish",
            tags=["hello", "world"],
            created_at=datetime.datetime(2023, 1, 1, 12, 0),
            last_modified_at=datetime.datetime(2023, 1, 1, 18, 0),
        )
        assert body == "Hello world\nThis wiki link does no exist [[fake link]]"

    def test_slug_derived_from_title(self):
        frontmatter, _ = parse_frontmatter('---\ntitle: "Hello   Big\\tWorld"\n---\n')
        assert frontmatter.slug == "hello-big-world"

    def test_slug_keeps_edge_whitespace_of_quoted_title(self):
        frontmatter, _ = parse_frontmatter('---\ntitle: " Hello  World "\n---\n')
        assert frontmatter.title == " Hello  World "
        assert frontmatter.slug == "-hello-world-"

    def test_missing_title(self):
        raw = "---\nslug: nothing\nstatus: publish\n---\nBody"
        assert parse_frontmatter(raw) == (None, raw)

    def test_non_string_title(self):
        raw = "---\ntitle: 2023\n---\nBody"
        assert parse_frontmatter(raw) == (None, raw)

    def test_malformed_yaml(self):
        raw = "---\ntitle: Bad YAML\ntags: [unclosed bracket\n---\nContent."
        assert parse_frontmatter(raw) == (None, raw)

    def test_non_mapping_yaml(self):
        raw = "---\n- a\n- b\n---\nContent."
        assert parse_frontmatter(raw) == (None, raw)

    def test_no_frontmatter(self):
        raw = "# No Frontmatter\n\nJust plain content.\n"
        assert parse_frontmatter(raw) == (None, raw)

    def test_string_tag(self):
        frontmatter, _ = parse_frontmatter("---\ntitle: A\ntags: evergreen\n---\n")
        assert frontmatter.tags == ["evergreen"]

    def test_numeric_tags_are_stringified(self):
        frontmatter, _ = parse_frontmatter("---\ntitle: A\ntags:\n  - 2024\n  - cs\n---\n")
        assert frontmatter.tags == ["2024", "cs"]

    def test_invalid_tags(self):
        raw = "---\ntitle: A\ntags:\n  key: value\n---\n"
        assert parse_frontmatter(raw) == (None, raw)

    def test_missing_optional_fields(self):
        frontmatter, body = parse_frontmatter("---\ntitle: Only Title\n---\nText")

        assert frontmatter.status is None
        assert frontmatter.tags == []
        assert frontmatter.created_at is None
        assert frontmatter.last_modified_at is None
        assert not frontmatter.is_published
        assert body == "Text"

    def test_yaml_date_values(self):
        frontmatter, _ = parse_frontmatter(
            "---\ntitle: A\ncreated_at: 2024-01-15\nlast_modified_at: 2024-02-01 10:30:00\n---\n"
        )
        assert frontmatter.created_at == datetime.datetime(2024, 1, 15)
        assert frontmatter.last_modified_at == datetime.datetime(2024, 2, 1, 10, 30)

    def test_invalid_timestamp(self):
        raw = "---\ntitle: A\ncreated_at: yesterday\n---\n"
        assert parse_frontmatter(raw) == (None, raw)

    def test_non_string_status(self):
        raw = "---\ntitle: A\nstatus: [publish]\n---\n"
        assert parse_frontmatter(raw) == (None, raw)

    def test_unknown_status_is_accepted(self):
        frontmatter, _ = parse_frontmatter("---\ntitle: A\nstatus: archived\n---\n")
        assert frontmatter.status == "archived"
        assert not frontmatter.is_published

    def test_extra_keys_preserved(self):
        frontmatter, _ = parse_frontmatter("---\ntitle: A\ndescription: About A\n---\n")
        assert frontmatter.extra == {"description": "About A"}
        assert frontmatter.to_dict()["description"] == "About A"


class TestDeriveSlug:
    @pytest.mark.parametrize("title,expected", [
        ("Hello World", "hello-world"),
        ("  Leading and trailing  ", "-leading-and-trailing-"),
        ("Tabs\tand\nnewlines", "tabs-and-newlines"),
        ("Already-slugged", "already-slugged"),
    ])
    def test_derive_slug(self, title, expected):
        assert derive_slug(title) == expected
