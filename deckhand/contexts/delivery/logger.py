"""
Delivery context logger.

Provides logging interface for delivery context with automatic [deliver] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[deliver]"


def _log_info(message: str) -> None:
    """Log info message with [deliver] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [deliver] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [deliver] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")
