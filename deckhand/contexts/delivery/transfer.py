"""
Artifact export and save.

Export hands the artifact to a display layer as a file name plus base64 text.
Save copies the artifact to a destination chosen through an injected picker,
so any front end (terminal prompt, native dialog) can supply the destination.
"""

import base64
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from deckhand.contexts.delivery.exceptions import (
    ArtifactReadError,
    ArtifactWriteError,
    SaveCancelledError,
)
from deckhand.contexts.delivery.logger import _log_info, _log_success, _log_warning
from deckhand.utils.timestamp import strip_timestamp_suffix

FileFilter = Tuple[str, List[str]]

# (suggested file name, filters) -> chosen destination, or None when cancelled
DestinationPicker = Callable[[str, List[FileFilter]], Optional[Path]]


@dataclass
class ExportedArtifact:
    """
    Artifact prepared for transfer to a display layer.

    Attributes:
        file_name: Display name with the temporary timestamp removed
        content_base64: File bytes, base64-encoded
    """

    file_name: str
    content_base64: str


def display_name(path: Path) -> str:
    """
    File name of an artifact without the temporary "_<timestamp>" token.

    Example:
        display_name(Path("/tmp/Intro_1712345678901.html"))
        # "Intro.html"
    """
    path = Path(path)
    return f"{strip_timestamp_suffix(path.stem)}{path.suffix}"


def _read_bytes(path: Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise ArtifactReadError(Path(path), original_error=e) from e


def export_artifact(path: Path) -> ExportedArtifact:
    """
    Read an artifact and encode it for transfer.

    Raises:
        ArtifactReadError: If the file cannot be read
    """
    content = _read_bytes(path)
    return ExportedArtifact(
        file_name=display_name(path),
        content_base64=base64.b64encode(content).decode("ascii"),
    )


def file_filters(suggested_name: str) -> List[FileFilter]:
    """Picker filters: the suggested name's extension first, then all files."""
    extension = Path(suggested_name).suffix.lstrip(".")
    filters = []
    if extension:
        filters.append((extension.upper(), [extension]))
    filters.append(("All Files", ["*"]))
    return filters


def save_artifact(
    source: Path,
    suggested_name: str,
    choose_destination: DestinationPicker,
) -> Path:
    """
    Copy an artifact to a user-chosen destination.

    Args:
        source: Rendered artifact path
        suggested_name: File name proposed to the picker
        choose_destination: Picker returning the destination, or None on cancel

    Returns:
        The destination written

    Raises:
        ArtifactReadError: If the source cannot be read
        SaveCancelledError: If the picker returned no destination
        ArtifactWriteError: If the destination cannot be written
    """
    content = _read_bytes(source)

    destination = choose_destination(suggested_name, file_filters(suggested_name))
    if destination is None:
        _log_warning("Save cancelled by user")
        raise SaveCancelledError()

    destination = Path(destination)
    _log_info(f"Saving {display_name(source)} to {destination}")
    try:
        destination.write_bytes(content)
    except OSError as e:
        raise ArtifactWriteError(destination, original_error=e) from e

    _log_success(f"Saved: {destination}")
    return destination
