"""Custom exceptions for the rendering context."""

from pathlib import Path
from typing import Iterable, List, Optional


class RenderError(RuntimeError):
    """Base class for failures after the document passed header validation."""

    pass


class TempWriteError(RenderError):
    """
    Exception raised when the temporary input file cannot be written.

    Attributes:
        path: The temporary path that was being written
        original_error: The underlying OSError
    """

    def __init__(self, path: Path, original_error: Optional[Exception] = None):
        self.path = path
        self.original_error = original_error

        parts = [f"Failed to write temporary file: {path}"]
        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class RunnerExhaustedError(RenderError):
    """
    Exception raised when no candidate executable could complete the run.

    Attributes:
        attempts: One diagnostic per candidate tried, in the order tried
    """

    SEPARATOR = " | "

    def __init__(self, attempts: List[str], action: str = "render the document"):
        self.attempts = list(attempts)
        self.action = action

        tried = self.SEPARATOR.join(self.attempts) if self.attempts else "no candidates"
        super().__init__(
            f"Quarto could not {action} with any of {len(self.attempts)} candidate(s). "
            f"Tried: {tried}"
        )


class OutputNotFoundError(RenderError):
    """
    Exception raised when Quarto reported success but produced no known artifact.

    Usually means the installed Quarto writes a different output than expected.

    Attributes:
        expected_prefix: Path of the expected artifact without extension
        extensions: Extensions that were probed
    """

    def __init__(self, expected_prefix: Path, extensions: Iterable[str]):
        self.expected_prefix = expected_prefix
        self.extensions = tuple(extensions)
        super().__init__(
            f"Quarto finished without errors, but no output was found at "
            f"{expected_prefix}.{{{','.join(self.extensions)}}}. "
            "Check that the installed Quarto version supports the requested format."
        )
