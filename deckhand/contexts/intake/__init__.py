"""
Intake Context

Responsibilities:
- Extracts the YAML header block from the top of a document
- Decodes it into a typed Header
- Enforces the rendering policy (allowed formats, embedded resources)

Owns: Header extraction, header policy
Never: Touches the filesystem or runs external tools
"""

from deckhand.contexts.intake.exceptions import (
    HeaderValidationError,
    MalformedHeaderError,
    MissingEmbedResourcesError,
    MissingHeaderBlockError,
    UnsupportedFormatError,
)
from deckhand.contexts.intake.header import ALLOWED_FORMATS, Header, validate_header

__all__ = [
    "ALLOWED_FORMATS",
    "Header",
    "HeaderValidationError",
    "MalformedHeaderError",
    "MissingEmbedResourcesError",
    "MissingHeaderBlockError",
    "UnsupportedFormatError",
    "validate_header",
]
