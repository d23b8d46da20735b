"""
Shared utilities for Resume Maker.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamps for log and output directories
- PDF inspection
"""

from resume_maker.utils.timestamp import now, today

__all__ = ["now", "today"]
