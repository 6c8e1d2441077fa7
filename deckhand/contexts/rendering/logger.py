"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from deckhand.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, verbose: bool = False) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        verbose: Echo DEBUG messages (candidate stderr, search path) to the console

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={
            "Quarto bundle": os.getenv("QUARTO_BUNDLE_DIR", "quarto/quarto-1.4.550/bin"),
            "Search path override": os.getenv("QUARTO_SEARCH_PATH", "<none>"),
        },
        console_level="DEBUG" if verbose else "INFO",
    )


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(input_path: Path, working_dir: Path, header_format: str) -> None:
    """Log start of a render with context."""
    _log_info(f"Starting render: {input_path.name} ({header_format})")
    _log_debug(f"  Source: {input_path}")
    _log_debug(f"  Working directory: {working_dir}")


def log_candidate_failure(candidate: str, diagnostic: str, stderr: str = "") -> None:
    """Log a failed candidate, with its full stderr at debug level."""
    _log_warning(f"Candidate failed: {diagnostic}")
    if stderr:
        # raw=True keeps multi-line tool output readable
        logger.opt(raw=True).debug(
            f"\n{'=' * 80}\n{candidate} STDERR:\n{'=' * 80}\n{stderr}\n"
        )


def log_render_result(outcome, elapsed_time: float, verbose: bool = False) -> None:
    """
    Log the outcome of a render.

    Args:
        outcome: RenderOutcome from try_render()
        elapsed_time: Time taken to render
        verbose: Log every candidate diagnostic at INFO (default: DEBUG)
    """
    if outcome.success:
        _log_success(f"Render succeeded ({elapsed_time:.2f}s)")
        (_log_info if verbose else _log_debug)(f"  Artifact: {outcome.artifact_path}")
        return

    _log_error(f"Render failed ({elapsed_time:.2f}s)")

    attempts = getattr(outcome.error, "attempts", None)
    if not attempts:
        for line in str(outcome.error).splitlines():
            _log_error(f"  {line}")
        return

    _log_error(f"  {len(attempts)} candidate(s) failed")
    log_attempt = _log_info if verbose else _log_debug
    for i, attempt in enumerate(attempts, 1):
        log_attempt(f"  Attempt {i}: {attempt}")
