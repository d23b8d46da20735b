"""Timestamps for naming log and result directories."""

from datetime import datetime


def now() -> str:
    """Compact timestamp for directory names (e.g., "20261019_134501")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def today() -> str:
    """Date stamp for dated output directories (e.g., "2026-10-19")."""
    return datetime.now().strftime("%Y-%m-%d")
