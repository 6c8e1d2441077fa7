"""
Render runners.

A RenderRunner turns a document on disk into a rendered artifact next to it.
QuartoRunner shells out to Quarto, trying each resolved candidate in turn.
StubRunner stands in for Quarto so orchestration can be exercised without it.
"""

import html
import os
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Mapping, Optional

from deckhand.contexts.intake.exceptions import MissingHeaderBlockError
from deckhand.contexts.intake.header import HEADER_DELIMITER, split_document
from deckhand.contexts.rendering.exceptions import RunnerExhaustedError
from deckhand.contexts.rendering.logger import _log_debug, _log_info, log_candidate_failure
from deckhand.contexts.rendering.resolver import ExecutableResolver


class RenderRunner(ABC):
    """Contract for rendering a document file inside a working directory."""

    @abstractmethod
    def render(
        self, input_path: Path, working_dir: Path, search_path: Optional[str] = None
    ) -> None:
        """
        Render input_path, leaving the artifact in working_dir.

        Args:
            input_path: Absolute path of the document to render
            working_dir: Directory the tool runs in and writes output to
            search_path: Replacement PATH for the child process, if any

        Raises:
            RunnerExhaustedError: If the document could not be rendered
        """
        ...


class QuartoRunner(RenderRunner):
    """
    Runs `quarto render <input>` through the first candidate that works.

    Args:
        resolver: Source of candidate executables (default: ExecutableResolver())
        environ: Base environment for child processes (default: os.environ)
    """

    def __init__(
        self,
        resolver: Optional[ExecutableResolver] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.resolver = resolver or ExecutableResolver()
        self.environ = environ

    def render(
        self, input_path: Path, working_dir: Path, search_path: Optional[str] = None
    ) -> None:
        attempts = []

        for candidate in self.resolver.candidates():
            _log_debug(f"Trying {candidate} render {input_path}")
            try:
                result = self._run(candidate, ["render", str(input_path)], working_dir, search_path)
            except OSError as e:
                diagnostic = f"{candidate} -> err={e}"
                attempts.append(diagnostic)
                log_candidate_failure(candidate, diagnostic)
                continue

            if result.returncode == 0:
                _log_info(f"Rendered with {candidate}")
                return

            stderr = result.stderr.strip()
            diagnostic = f"{candidate} -> exit={result.returncode}, stderr={stderr}"
            attempts.append(diagnostic)
            log_candidate_failure(candidate, diagnostic, stderr)

        raise RunnerExhaustedError(attempts)

    def check_installation(self, search_path: Optional[str] = None) -> str:
        """
        Report the version of the first candidate that runs.

        Args:
            search_path: Replacement PATH for the child process, if any

        Returns:
            Output of `quarto --version`, trimmed

        Raises:
            RunnerExhaustedError: If no candidate reports a version
        """
        attempts = []

        for candidate in self.resolver.candidates():
            try:
                result = self._run(candidate, ["--version"], None, search_path)
            except OSError as e:
                attempts.append(f"{candidate} -> err={e}")
                continue

            if result.returncode == 0:
                return result.stdout.strip()

            attempts.append(
                f"{candidate} -> exit={result.returncode}, stderr={result.stderr.strip()}"
            )

        raise RunnerExhaustedError(attempts, action="report its version")

    def _run(
        self,
        candidate: str,
        args: List[str],
        cwd: Optional[Path],
        search_path: Optional[str],
    ) -> subprocess.CompletedProcess:
        env = None
        if search_path is not None:
            env = dict(os.environ if self.environ is None else self.environ)
            env["PATH"] = search_path
        elif self.environ is not None:
            env = dict(self.environ)

        return subprocess.run(
            [_executable(candidate), *args],
            cwd=cwd,
            env=env,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",  # Quarto output may mix encodings on Windows
        )


class StubRunner(RenderRunner):
    """
    Quarto stand-in for tests and dry runs.

    On success it optionally writes <stem>.<output_extension> into the working
    directory, containing a bare HTML preview of the document body. On failure
    it raises RunnerExhaustedError carrying error_message.

    Args:
        succeed: Whether render() succeeds
        error_message: Diagnostic reported on failure
        output_extension: Extension of the artifact written on success
        write_output: Whether to write an artifact on success
    """

    def __init__(
        self,
        succeed: bool = True,
        error_message: str = "render failed",
        output_extension: str = "html",
        write_output: bool = True,
    ):
        self.succeed = succeed
        self.error_message = error_message
        self.output_extension = output_extension
        self.write_output = write_output

    def render(
        self, input_path: Path, working_dir: Path, search_path: Optional[str] = None
    ) -> None:
        if not self.succeed:
            raise RunnerExhaustedError([self.error_message])

        if self.write_output:
            output_path = Path(working_dir) / f"{input_path.stem}.{self.output_extension}"
            document = input_path.read_text(encoding="utf-8")
            output_path.write_text(preview_html(document), encoding="utf-8")


def preview_html(document: str) -> str:
    """
    Minimal HTML preview of a document body: headings become sections, other lines paragraphs.

    The header block, if present, is skipped.
    """
    try:
        _, body = split_document(document)
    except MissingHeaderBlockError:
        body = document

    parts = ["<!DOCTYPE html>", "<html>", "<body>"]
    for line in body.splitlines():
        text = line.strip()
        if not text or text == HEADER_DELIMITER:
            continue
        if text.startswith("#"):
            level = min(len(text) - len(text.lstrip("#")), 6)
            heading = html.escape(text[level:].strip())
            parts.append(f"<section><h{level}>{heading}</h{level}></section>")
        else:
            parts.append(f"<p>{html.escape(text)}</p>")
    parts.extend(["</body>", "</html>"])

    return "\n".join(parts) + "\n"


def _executable(candidate: str) -> str:
    """Absolute path for candidates with a directory part, bare name otherwise."""
    if "/" in candidate or "\\" in candidate:
        return str(Path(candidate).absolute())
    return candidate
