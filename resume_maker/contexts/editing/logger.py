"""
Editing context logger.

Provides logging interface for the editing context with automatic [edit] prefix.
All editing modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[edit]"


def _log_info(message: str) -> None:
    """Log info message with [edit] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [edit] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [edit] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [edit] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [edit] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_session_start(source: str, active_tab: str) -> None:
    """Log where the session's document came from."""
    _log_info(f"Session started from {source} document")
    _log_debug(f"  Active tab: {active_tab}")


def log_mutation(operation: str, path: str) -> None:
    _log_debug(f"{operation} {path}")
