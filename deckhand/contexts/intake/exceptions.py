"""Custom exceptions for header validation."""

from typing import Iterable, Optional


class HeaderValidationError(ValueError):
    """Base class for documents rejected before any side effect happens."""

    pass


class MissingHeaderBlockError(HeaderValidationError):
    """
    Exception raised when the document does not start with a delimited header block.

    Attributes:
        reason: What was wrong with the opening or closing delimiter
    """

    def __init__(self, reason: str, delimiter: str = "---"):
        self.reason = reason
        self.delimiter = delimiter
        super().__init__(
            f"Missing header block: {reason}. "
            f"The document must start with a '{delimiter}' line, followed by the YAML header "
            f"and a closing '{delimiter}' line."
        )


class MalformedHeaderError(HeaderValidationError):
    """
    Exception raised when the header block cannot be decoded into a Header.

    Attributes:
        detail: Diagnostic from the YAML parser or the schema merge
        original_error: The underlying exception, if any
    """

    def __init__(self, detail: str, original_error: Optional[Exception] = None):
        self.detail = detail
        self.original_error = original_error

        parts = [f"Malformed header: {detail}"]
        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class UnsupportedFormatError(HeaderValidationError):
    """
    Exception raised when the header asks for a format outside the allow-list.

    Attributes:
        value: The format value found in the header
        allowed: The permitted format values
    """

    def __init__(self, value: str, allowed: Iterable[str]):
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"Unsupported format '{value}'. Allowed formats: {', '.join(self.allowed)}"
        )


class MissingEmbedResourcesError(HeaderValidationError):
    """Exception raised when the header does not set embed-resources: true."""

    def __init__(self):
        super().__init__(
            "The header must contain 'embed-resources: true' so the rendered output "
            "is a single self-contained file. Add that line to the header and try again."
        )
