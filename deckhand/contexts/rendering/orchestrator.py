"""
Render orchestration.

Validates the header, writes the document to a uniquely named temporary file,
runs it through a RenderRunner, and finds the artifact the run produced.
"""

import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Mapping, Optional

from deckhand.contexts.intake.exceptions import HeaderValidationError
from deckhand.contexts.intake.header import validate_header
from deckhand.contexts.rendering.exceptions import (
    OutputNotFoundError,
    RenderError,
    TempWriteError,
)
from deckhand.contexts.rendering.logger import (
    _log_debug,
    _log_warning,
    log_render_result,
    log_render_start,
)
from deckhand.contexts.rendering.resolver import ExecutableResolver
from deckhand.contexts.rendering.runners import QuartoRunner, RenderRunner
from deckhand.utils.timestamp import now_millis

DEFAULT_STEM = "temp_quarto"
DEFAULT_EXTENSION = "md"
INPUT_EXTENSIONS = ("md", "qmd")

# Probed in this order; the first existing file wins
OUTPUT_EXTENSIONS = ("html", "pdf", "pptx")


@dataclass
class RenderRequest:
    """
    A single render call.

    Attributes:
        content: Full document text, header included
        original_name: Name of the uploaded file, used only to name the temp file
    """

    content: str
    original_name: Optional[str] = None


@dataclass
class TemporaryArtifact:
    """
    Temporary input file and the directory Quarto runs in.

    Attributes:
        input_path: Absolute path of the document written for Quarto
        working_dir: Directory holding input_path and the rendered output
    """

    input_path: Path
    working_dir: Path

    @property
    def stem(self) -> str:
        return self.input_path.stem

    @property
    def output_prefix(self) -> Path:
        """Expected artifact path without its extension."""
        return self.working_dir / self.stem

    def output_candidates(self) -> List[Path]:
        return [self.working_dir / f"{self.stem}.{ext}" for ext in OUTPUT_EXTENSIONS]


@dataclass
class RenderOutcome:
    """
    Result of a render. Exactly one of artifact_path and error is set.

    Attributes:
        success: Whether an artifact was produced
        artifact_path: Absolute path of the artifact (None if failed)
        error: The header or render error (None if succeeded)
    """

    success: bool
    artifact_path: Optional[Path] = None
    error: Optional[Exception] = None

    @property
    def message(self) -> str:
        return str(self.error) if self.error else str(self.artifact_path)


def build_temporary_artifact(
    original_name: Optional[str], working_dir: Path, timestamp_ms: int
) -> TemporaryArtifact:
    """
    Choose a unique input path for this call.

    The stem is the original stem (or "temp_quarto") plus "_<timestamp_ms>".
    The extension is kept when it is md or qmd, and forced to md otherwise.
    A relative working_dir is made absolute against the current directory.

    Example:
        build_temporary_artifact("talk.QMD", Path("/tmp"), 1712345678901)
        # input_path=/tmp/talk_1712345678901.qmd
    """
    working_dir = Path(working_dir).absolute()
    stem = DEFAULT_STEM
    extension = DEFAULT_EXTENSION

    if original_name:
        name = Path(original_name)
        stem = name.stem or DEFAULT_STEM
        supplied = name.suffix.lstrip(".").lower()
        if supplied in INPUT_EXTENSIONS:
            extension = supplied

    input_path = working_dir / f"{stem}_{timestamp_ms}.{extension}"
    return TemporaryArtifact(input_path=input_path, working_dir=working_dir)


def write_input(artifact: TemporaryArtifact, content: str) -> None:
    """Write the document to the temporary input path."""
    try:
        artifact.input_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise TempWriteError(artifact.input_path, original_error=e) from e


def discover_output(artifact: TemporaryArtifact) -> Path:
    """
    Find the artifact produced for this stem.

    Returns:
        Canonical path of the first existing candidate, or the plain path if it
        cannot be canonicalized

    Raises:
        OutputNotFoundError: If none of the candidates exist
    """
    for candidate in artifact.output_candidates():
        if not candidate.is_file():
            continue
        try:
            return candidate.resolve(strict=True)
        except OSError as e:
            _log_warning(f"Could not canonicalize {candidate}: {e}")
            return candidate

    raise OutputNotFoundError(artifact.output_prefix, OUTPUT_EXTENSIONS)


def render_document(
    request: RenderRequest,
    runner: Optional[RenderRunner] = None,
    resolver: Optional[ExecutableResolver] = None,
    temp_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    clock: Callable[[], int] = now_millis,
) -> Path:
    """
    Render a document and return the absolute path of the produced artifact.

    Steps (each one aborts the rest on failure):
    1. Validate the header
    2. Pick a unique temporary input path
    3. Write the document there
    4. Run the runner in the temp directory with the augmented search path
    5. Probe for <stem>.html, <stem>.pdf, <stem>.pptx

    Args:
        request: Document text and optional original file name
        runner: Render runner (default: QuartoRunner using resolver)
        resolver: Executable resolver (default: ExecutableResolver())
        temp_dir: Working directory (default: system temp directory)
        environ: Environment for search-path resolution (default: os.environ)
        clock: Millisecond clock used to make the temp file name unique

    Returns:
        Absolute path of the artifact

    Raises:
        HeaderValidationError: If the header is missing, malformed, or against policy
        TempWriteError: If the temporary file cannot be written
        RunnerExhaustedError: If no candidate executable rendered the document
        OutputNotFoundError: If the run succeeded but left no known artifact
    """
    header = validate_header(request.content)

    resolver = resolver or ExecutableResolver()
    runner = runner or QuartoRunner(resolver=resolver, environ=environ)
    working_dir = Path(temp_dir) if temp_dir is not None else Path(tempfile.gettempdir())

    artifact = build_temporary_artifact(request.original_name, working_dir, clock())
    write_input(artifact, request.content)

    log_render_start(artifact.input_path, artifact.working_dir, header.format.strip())

    search_path = resolver.augmented_search_path(environ)
    _log_debug(f"  Search path: {search_path}")
    runner.render(artifact.input_path, artifact.working_dir, search_path)

    return discover_output(artifact)


def try_render(request: RenderRequest, verbose: bool = False, **kwargs) -> RenderOutcome:
    """
    render_document() wrapped in a RenderOutcome, with the result logged.

    Args:
        request: Document text and optional original file name
        verbose: Log every candidate diagnostic at INFO instead of DEBUG
        **kwargs: Passed through to render_document()
    """
    start_time = time.time()

    try:
        artifact_path = render_document(request, **kwargs)
        outcome = RenderOutcome(success=True, artifact_path=artifact_path)
    except (HeaderValidationError, RenderError) as e:
        outcome = RenderOutcome(success=False, error=e)

    log_render_result(outcome, elapsed_time=time.time() - start_time, verbose=verbose)

    return outcome
