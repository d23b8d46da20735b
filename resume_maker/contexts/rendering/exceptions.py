"""Custom exceptions for the rendering context."""

from typing import Optional


class ExportError(Exception):
    """
    Exception raised when a surface cannot be turned into a document.

    Attributes:
        message: Error description
        stage: Pipeline stage that failed ("capture" or "assemble")
        original_error: The underlying error, if any
    """

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.stage = stage
        self.original_error = original_error

        parts = [message]

        if stage:
            parts.append(f"Stage: {stage}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
