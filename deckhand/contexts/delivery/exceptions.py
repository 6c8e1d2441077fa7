"""Custom exceptions for artifact delivery."""

from pathlib import Path
from typing import Optional


class DeliveryError(RuntimeError):
    """Base class for failures while handing a rendered artifact to the user."""

    pass


class ArtifactReadError(DeliveryError):
    """
    Exception raised when a rendered artifact cannot be read.

    Attributes:
        path: The artifact path
        original_error: The underlying OSError
    """

    def __init__(self, path: Path, original_error: Optional[Exception] = None):
        self.path = path
        self.original_error = original_error

        parts = [f"Failed to read artifact: {path}"]
        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class SaveCancelledError(DeliveryError):
    """Exception raised when the user dismisses the destination picker."""

    def __init__(self):
        super().__init__("Save was cancelled.")


class ArtifactWriteError(DeliveryError):
    """
    Exception raised when the artifact cannot be written to the chosen destination.

    Attributes:
        destination: The path chosen by the user
        original_error: The underlying OSError
    """

    def __init__(self, destination: Path, original_error: Optional[Exception] = None):
        self.destination = destination
        self.original_error = original_error

        parts = [f"Failed to save artifact to: {destination}"]
        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
