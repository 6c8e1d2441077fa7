"""
Delivery Context

Responsibilities:
- Exports rendered artifacts as name + base64 content for display layers
- Saves rendered artifacts to a user-chosen destination

Owns: Artifact transfer and save
Never: Renders documents or deletes artifacts
"""

from deckhand.contexts.delivery.exceptions import (
    ArtifactReadError,
    ArtifactWriteError,
    DeliveryError,
    SaveCancelledError,
)
from deckhand.contexts.delivery.transfer import (
    ExportedArtifact,
    display_name,
    export_artifact,
    save_artifact,
)

__all__ = [
    "ArtifactReadError",
    "ArtifactWriteError",
    "DeliveryError",
    "ExportedArtifact",
    "SaveCancelledError",
    "display_name",
    "export_artifact",
    "save_artifact",
]
