"""
Persistence context logger.

Provides logging interface for the persistence context with automatic [store] prefix.
All persistence modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[store]"


def _log_info(message: str) -> None:
    """Log info message with [store] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [store] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [store] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [store] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [store] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_save_transition(old_state: str, new_state: str, slug: str = None) -> None:
    """Log a change of the remote save status."""
    suffix = f" (slug: {slug})" if slug else ""
    _log_debug(f"Save status {old_state} -> {new_state}{suffix}")
