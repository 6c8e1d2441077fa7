"""
Rendering Context

Responsibilities:
- Resolves where Quarto is installed
- Writes documents to uniquely named temporary files
- Runs Quarto and collects per-candidate diagnostics
- Locates the rendered artifact

Owns: Quarto invocation, temporary input files, output discovery
Never: Modifies document content or deletes temporary files
"""

from deckhand.contexts.rendering.exceptions import (
    OutputNotFoundError,
    RenderError,
    RunnerExhaustedError,
    TempWriteError,
)
from deckhand.contexts.rendering.orchestrator import (
    OUTPUT_EXTENSIONS,
    RenderOutcome,
    RenderRequest,
    TemporaryArtifact,
    render_document,
    try_render,
)
from deckhand.contexts.rendering.resolver import ExecutableResolver
from deckhand.contexts.rendering.runners import QuartoRunner, RenderRunner, StubRunner

__all__ = [
    "ExecutableResolver",
    "OUTPUT_EXTENSIONS",
    "OutputNotFoundError",
    "QuartoRunner",
    "RenderError",
    "RenderOutcome",
    "RenderRequest",
    "RenderRunner",
    "RunnerExhaustedError",
    "StubRunner",
    "TempWriteError",
    "TemporaryArtifact",
    "render_document",
    "try_render",
]
