"""Unit tests for header extraction and policy validation."""

import pytest

from deckhand.contexts.intake import (
    ALLOWED_FORMATS,
    Header,
    MalformedHeaderError,
    MissingEmbedResourcesError,
    MissingHeaderBlockError,
    UnsupportedFormatError,
    validate_header,
)
from deckhand.contexts.intake.header import extract_header_block, split_document

VALID_DOCUMENT = """---
title: "Intro"
author: "Alice"
format: revealjs
embed-resources: true
---

## Slide One

Hello.

## Slide Two

Bye.
"""


def make_document(header: str, body: str = "## Slide\n") -> str:
    return f"---\n{header}\n---\n\n{body}"


@pytest.mark.unit
def test_valid_document_returns_header():
    header = validate_header(VALID_DOCUMENT)

    assert isinstance(header, Header)
    assert header.title == "Intro"
    assert header.author == "Alice"
    assert header.format == "revealjs"
    assert header.embed_resources is True


@pytest.mark.unit
@pytest.mark.parametrize("fmt", ALLOWED_FORMATS)
def test_every_allowed_format_passes(fmt):
    document = make_document(f"title: T\nauthor: A\nformat: {fmt}\nembed-resources: true")
    assert validate_header(document).format == fmt


@pytest.mark.unit
def test_validation_is_idempotent():
    assert validate_header(VALID_DOCUMENT) == validate_header(VALID_DOCUMENT)


@pytest.mark.unit
@pytest.mark.parametrize(
    "document",
    [
        "",
        "title: Intro\n---\n",
        "\n---\ntitle: Intro\n---\n",
        "# Heading\n---\ntitle: Intro\n---\n",
    ],
)
def test_missing_opening_delimiter(document):
    with pytest.raises(MissingHeaderBlockError):
        validate_header(document)


@pytest.mark.unit
def test_missing_closing_delimiter():
    with pytest.raises(MissingHeaderBlockError, match="closing"):
        validate_header("---\ntitle: Intro\nauthor: Alice\n")


@pytest.mark.unit
def test_delimiters_are_matched_after_trimming():
    document = "  ---  \ntitle: T\nauthor: A\nformat: pptx\nembed-resources: true\n---\t\nbody"
    assert validate_header(document).format == "pptx"


@pytest.mark.unit
def test_split_document_separates_header_and_body():
    block, body = split_document(VALID_DOCUMENT)

    assert block.startswith('title: "Intro"')
    assert "embed-resources: true" in block
    assert "## Slide One" in body
    assert "---" not in block


@pytest.mark.unit
def test_extract_header_block_stops_at_first_closing_delimiter():
    document = "---\ntitle: T\n---\n\n## A\n\n---\n\n## B\n"
    assert extract_header_block(document) == "title: T"


@pytest.mark.unit
@pytest.mark.parametrize("fmt", ["html", "docx", "RevealJS"])
def test_unsupported_format(fmt):
    document = make_document(f"title: T\nauthor: A\nformat: {fmt}\nembed-resources: true")

    with pytest.raises(UnsupportedFormatError) as exc_info:
        validate_header(document)

    assert exc_info.value.value == fmt
    assert fmt in str(exc_info.value)
    assert "revealjs" in str(exc_info.value)


@pytest.mark.unit
def test_format_is_trimmed():
    document = make_document('title: T\nauthor: A\nformat: "  beamer "\nembed-resources: true')
    validate_header(document)


@pytest.mark.unit
@pytest.mark.parametrize(
    "header",
    [
        "title: T\nauthor: A\nformat: revealjs",
        "title: T\nauthor: A\nformat: revealjs\nembed-resources: false",
    ],
)
def test_missing_embed_resources(header):
    with pytest.raises(MissingEmbedResourcesError, match="embed-resources: true"):
        validate_header(make_document(header))


@pytest.mark.unit
def test_format_checked_before_embed_resources():
    with pytest.raises(UnsupportedFormatError):
        validate_header(make_document("title: T\nauthor: A\nformat: html"))


@pytest.mark.unit
def test_malformed_yaml():
    with pytest.raises(MalformedHeaderError) as exc_info:
        validate_header(make_document("title: [unclosed\nauthor: A"))

    assert exc_info.value.original_error is not None


@pytest.mark.unit
@pytest.mark.parametrize("header", ["- one\n- two", "just a sentence", ""])
def test_header_must_be_a_mapping(header):
    with pytest.raises(MalformedHeaderError, match="mapping"):
        validate_header(make_document(header))


@pytest.mark.unit
@pytest.mark.parametrize("missing", ["title", "author", "format"])
def test_missing_required_field(missing):
    fields = {"title": "T", "author": "A", "format": "revealjs"}
    del fields[missing]
    header = "\n".join(f"{key}: {value}" for key, value in fields.items())

    with pytest.raises(MalformedHeaderError, match=missing):
        validate_header(make_document(header + "\nembed-resources: true"))


@pytest.mark.unit
def test_wrong_value_type_is_malformed():
    header = "title:\n  nested: mapping\nauthor: A\nformat: revealjs\nembed-resources: true"

    with pytest.raises(MalformedHeaderError):
        validate_header(make_document(header))


@pytest.mark.unit
def test_unknown_header_keys_are_ignored():
    header = (
        "title: T\nauthor: A\nformat: revealjs\nembed-resources: true\n"
        "slide-number: true\ntheme: dark"
    )
    assert validate_header(make_document(header)).title == "T"


@pytest.mark.unit
@pytest.mark.parametrize("value", ["1", '"yes"', '"true"', '"on"', "null"])
def test_embed_resources_must_be_literal_true(value):
    header = f"title: T\nauthor: A\nformat: revealjs\nembed-resources: {value}"

    with pytest.raises(MissingEmbedResourcesError):
        validate_header(make_document(header))


@pytest.mark.unit
@pytest.mark.parametrize(
    "field, value",
    [("title", "123"), ("author", "true"), ("title", "null"), ("format", "[revealjs]")],
)
def test_text_fields_are_not_coerced(field, value):
    fields = {"title": "T", "author": "A", "format": "revealjs"}
    fields[field] = value
    header = "\n".join(f"{key}: {val}" for key, val in fields.items())

    with pytest.raises(MalformedHeaderError, match=f"'{field}' must be text"):
        validate_header(make_document(header + "\nembed-resources: true"))
