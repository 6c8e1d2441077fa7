"""
Header extraction and policy validation.

A document starts with a YAML header between two delimiter lines:

    ---
    title: "Intro"
    author: "Alice"
    format: revealjs
    embed-resources: true
    ---

The block is decoded against the Header schema with OmegaConf, then checked
against the rendering policy. Everything here is a pure function of the input text.
"""

from dataclasses import dataclass
from typing import Tuple

import yaml
from omegaconf import MISSING, OmegaConf
from omegaconf.errors import MissingMandatoryValue, OmegaConfBaseException

from deckhand.contexts.intake.exceptions import (
    MalformedHeaderError,
    MissingEmbedResourcesError,
    MissingHeaderBlockError,
    UnsupportedFormatError,
)

HEADER_DELIMITER = "---"

ALLOWED_FORMATS: Tuple[str, ...] = ("revealjs", "pptx", "beamer")

# YAML key -> Header field
HEADER_KEYS = {
    "title": "title",
    "author": "author",
    "format": "format",
    "embed-resources": "embed_resources",
}

REQUIRED_FIELDS = ("title", "author", "format")


@dataclass
class Header:
    """
    Rendering metadata decoded from a document header.

    Attributes:
        title: Document title (required)
        author: Document author (required)
        format: Requested Quarto output format (required)
        embed_resources: Whether output must be self-contained (default: False)
    """

    title: str = MISSING
    author: str = MISSING
    format: str = MISSING
    embed_resources: bool = False


def split_document(document: str) -> Tuple[str, str]:
    """
    Split a document into its header block and its body.

    Args:
        document: Full document text

    Returns:
        Tuple of (header block text without delimiters, body text)

    Raises:
        MissingHeaderBlockError: If the first line is not the delimiter or no
            closing delimiter follows
    """
    lines = document.splitlines()

    if not lines or lines[0].strip() != HEADER_DELIMITER:
        raise MissingHeaderBlockError("the first line is not the header delimiter")

    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == HEADER_DELIMITER:
            return "\n".join(lines[1:index]), "\n".join(lines[index + 1 :])

    raise MissingHeaderBlockError("no closing header delimiter was found")


def extract_header_block(document: str) -> str:
    """Return the raw text between the opening and closing delimiter lines."""
    block, _ = split_document(document)
    return block


def parse_header(block: str) -> Header:
    """
    Decode a header block into a Header.

    Only the known keys are read; other Quarto options in the header are ignored.

    Raises:
        MalformedHeaderError: If the YAML is invalid, is not a mapping, is missing
            a mandatory field, or holds a value of the wrong type
    """
    try:
        mapping = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise MalformedHeaderError("header is not valid YAML", original_error=e) from e

    if not isinstance(mapping, dict):
        raise MalformedHeaderError(
            f"header must be a key/value mapping, got {type(mapping).__name__}"
        )

    fields = {
        field_name: mapping[key] for key, field_name in HEADER_KEYS.items() if key in mapping
    }

    # Values keep their YAML types; only a literal true enables embedded resources
    for name in REQUIRED_FIELDS:
        if name in fields and not isinstance(fields[name], str):
            raise MalformedHeaderError(
                f"field '{name}' must be text, got {type(fields[name]).__name__}"
            )
    if "embed_resources" in fields:
        fields["embed_resources"] = fields["embed_resources"] is True

    try:
        merged = OmegaConf.merge(OmegaConf.structured(Header), fields)
        return OmegaConf.to_object(merged)
    except MissingMandatoryValue as e:
        missing = [name for name in REQUIRED_FIELDS if name not in fields]
        raise MalformedHeaderError(
            f"missing required field(s): {', '.join(missing)}", original_error=e
        ) from e
    except OmegaConfBaseException as e:
        raise MalformedHeaderError("header field has an invalid value", original_error=e) from e


def check_policy(header: Header) -> Header:
    """
    Enforce the rendering policy. First failure wins.

    Raises:
        UnsupportedFormatError: If the trimmed format is not in ALLOWED_FORMATS
        MissingEmbedResourcesError: If embed_resources is not true
    """
    fmt = header.format.strip()
    if fmt not in ALLOWED_FORMATS:
        raise UnsupportedFormatError(fmt, ALLOWED_FORMATS)

    if header.embed_resources is not True:
        raise MissingEmbedResourcesError()

    return header


def validate_header(document: str) -> Header:
    """
    Extract, decode, and policy-check the header of a document.

    Args:
        document: Full document text (header and body)

    Returns:
        The validated Header

    Raises:
        HeaderValidationError: One of its subclasses, describing the first problem found

    Example:
        >>> header = validate_header(open("talk.qmd").read())
        >>> header.format
        'revealjs'
    """
    block = extract_header_block(document)
    header = parse_header(block)
    return check_policy(header)

