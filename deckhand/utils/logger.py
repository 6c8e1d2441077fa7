"""
Generic loguru setup shared by the contexts.

Each CLI session gets its own log directory holding one DEBUG-level file per
context, plus a console sink. Context-specific wrappers live in
contexts/{context}/logger.py.
"""

import platform
import sys
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from deckhand import __version__

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {message}"
CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>"
)

LEVEL_COLORS = {
    "DEBUG": "<dim>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, str]] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Point loguru at a session log file and the console.

    Replaces any sinks configured earlier, so calling it twice in one process
    starts a fresh session.

    Args:
        context_name: Context identifier, used as the log file name (e.g., "render")
        log_dir: Directory for this session (created if missing)
        extra_provenance: Context-specific settings recorded in the session header
        console_level: Lowest level echoed to the console ("DEBUG" for verbose runs)

    Returns:
        Path to the session log file

    Example:
        log_file = setup_logger(
            context_name="render",
            log_dir=Path("outs/logs/render_20251114_123456"),
            extra_provenance={"Search path override": "<none>"},
            console_level="DEBUG",
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(context_name, extra_provenance)

    return log_file


def log_provenance(context_name: str, extra_context: Optional[Dict[str, str]] = None) -> None:
    """
    Write the session header: what ran, where, and with which settings.

    The header goes to DEBUG so the console stays quiet unless verbose.
    """
    lines = {
        "Session": context_name,
        "Deckhand": __version__,
        "Command": " ".join(sys.argv),
        "Working directory": str(Path.cwd()),
        "Python": sys.version.split()[0],
        "Platform": platform.platform(),
        **(extra_context or {}),
    }

    logger.debug("=" * 80)
    for key, value in lines.items():
        logger.debug(f"{key}: {value}")
    logger.debug("=" * 80)
