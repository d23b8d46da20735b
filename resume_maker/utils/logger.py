"""
Loguru configuration for Resume Maker.

Two setups share one loguru logger:
- setup_logger(): an export session. DEBUG goes to {log_dir}/{context}.log,
  INFO is echoed to stdout, and the log opens with a provenance header.
- configure_console(): an interactive command. Only stderr, at one level.

Context prefixes ([edit], [store], [template], [export]) are added by the
wrappers in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Any, Dict

from loguru import logger

from resume_maker import __version__

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
STDOUT_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"
CONSOLE_FORMAT = "<level>{level: <7}</level> | {message}"

HEADER_RULE = "=" * 80


def setup_logger(context_name: str, log_dir: Path, extra_provenance: Dict[str, Any] = None) -> Path:
    """
    Start a logging session in log_dir, replacing any earlier handlers.

    Args:
        context_name: Names the log file (e.g., "export" -> export.log)
        log_dir: Session directory, created if missing
        extra_provenance: Session settings to record in the header (e.g., raster scale)

    Returns:
        Path to log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=STDOUT_FORMAT, level="INFO", colorize=True)

    log_provenance(extra_provenance)

    return log_file


def configure_console(level: str = "WARNING") -> None:
    """Replace all handlers with a single stderr handler at the given level."""
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)


def log_provenance(extra_context: Dict[str, Any] = None) -> None:
    """Log which Resume Maker build ran, how it was invoked, and the session settings."""
    logger.info(HEADER_RULE)
    logger.info(f"Resume Maker {__version__} (Python {sys.version.split()[0]})")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info(HEADER_RULE)
